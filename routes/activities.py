from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from schemas import ActivityRead
from database import get_db
from routes.deps import get_current_user
from services.activity_log import list_activities

router = APIRouter(prefix="/trips/{trip_id}/activities", tags=["Activities"])


@router.get("/", response_model=List[ActivityRead])
def get_activities(
    trip_id: int,
    limit: Optional[int] = Query(None, description="Maximum entries, newest first"),
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return [
        {
            "id": a.id,
            "trip_id": a.trip_id,
            "user_id": a.user_id,
            "username": a.user.username if a.user else None,
            "type": a.type.value,
            "metadata": a.details,
            "created_at": a.created_at,
        }
        for a in list_activities(db, trip_id, current_user, limit)
    ]
