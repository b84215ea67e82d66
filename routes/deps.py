from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from database import get_db
from models.User import User


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """
    Resolve the caller from the X-User-Id header set by the auth gateway.
    Unknown or missing ids resolve to None; services reject them as Unauthenticated.
    """
    if not x_user_id:
        return None
    return db.query(User).filter(User.id == x_user_id).first()
