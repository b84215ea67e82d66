import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from services.errors import Internal

logger = logging.getLogger("tripplanner.db")


def commit_or_rollback(db: Session, *refresh) -> None:
    """
    Commit the pending unit of work (primary rows and their activity entries
    together). On failure nothing is kept and the caller gets Internal.
    """
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Commit failed, transaction rolled back: %s", exc)
        raise Internal("Could not save changes, please retry") from exc
    for instance in refresh:
        db.refresh(instance)
