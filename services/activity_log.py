import json

from sqlalchemy.orm import Session, joinedload

from config import ACTIVITY_FEED_LIMIT
from models.Activity import Activity, ActivityType
from services.participation import get_trip_or_404, require_actor, require_member

MAX_FEED_LIMIT = 200


def record_activity(db: Session, trip_id: int, user_id: str, type: ActivityType, **metadata) -> Activity:
    """Stage an activity entry in the caller's transaction (no commit here)."""
    entry = Activity(
        trip_id=trip_id,
        user_id=user_id,
        type=type,
        metadata_json=json.dumps(metadata, default=str) if metadata else None,
    )
    db.add(entry)
    return entry


def list_activities(db: Session, trip_id: int, actor, limit: int | None = None) -> list[Activity]:
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    require_member(db, trip, actor)

    limit = ACTIVITY_FEED_LIMIT if limit is None else max(1, min(limit, MAX_FEED_LIMIT))
    return (
        db.query(Activity)
        .options(joinedload(Activity.user))
        .filter(Activity.trip_id == trip_id)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
        .limit(limit)
        .all()
    )
