from sqlalchemy.orm import Session, joinedload

from models.Activity import ActivityType
from models.TravelConfirmation import TravelConfirmation
from models.Trip import TripPhase
from services.activity_log import record_activity
from services.errors import InvalidPhase
from services.participation import get_trip_or_404, require_actor, require_going, require_member
from services.transactions import commit_or_rollback


def confirm_travel(db: Session, trip_id: int, is_booked: bool, notes: str | None, actor) -> TravelConfirmation:
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    if trip.phase != TripPhase.TRAVEL_CONFIRMATION:
        raise InvalidPhase("Travel can only be confirmed during the TRAVEL_CONFIRMATION phase")
    require_going(db, trip, actor)

    confirmation = db.query(TravelConfirmation).filter_by(trip_id=trip.id, user_id=actor.id).first()
    if confirmation is None:
        confirmation = TravelConfirmation(trip_id=trip.id, user_id=actor.id)
        db.add(confirmation)
    confirmation.is_booked = is_booked
    confirmation.notes = notes or None
    record_activity(db, trip.id, actor.id, ActivityType.TRAVEL_CONFIRMED, is_booked=is_booked)
    commit_or_rollback(db, confirmation)
    return confirmation


def list_travel_confirmations(db: Session, trip_id: int, actor) -> list[TravelConfirmation]:
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    require_member(db, trip, actor)
    return (
        db.query(TravelConfirmation)
        .options(joinedload(TravelConfirmation.user))
        .filter(TravelConfirmation.trip_id == trip_id)
        .order_by(TravelConfirmation.created_at, TravelConfirmation.id)
        .all()
    )
