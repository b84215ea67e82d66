"""
Who may do what on a trip.

Organizers and every participant may read; only GOING participants may
pitch, vote or confirm travel; settings and phase changes are organizer-only.
"""
from sqlalchemy.orm import Session

from models.Trip import Trip
from models.TripParticipant import TripParticipant, RsvpStatus
from services.errors import Forbidden, InvalidRsvpStatus, NotFound, Unauthenticated


def require_actor(actor):
    if actor is None:
        raise Unauthenticated()
    return actor


def get_trip_or_404(db: Session, trip_id: int) -> Trip:
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise NotFound("Trip not found")
    return trip


def get_participant(db: Session, trip_id: int, user_id: str) -> TripParticipant | None:
    return db.query(TripParticipant).filter_by(trip_id=trip_id, user_id=user_id).first()


def can_participate(rsvp_status) -> bool:
    return rsvp_status == RsvpStatus.GOING


def is_organizer(trip: Trip, user) -> bool:
    return trip.organizer_id == user.id


def require_organizer(trip: Trip, actor) -> None:
    if not is_organizer(trip, actor):
        raise Forbidden("Only the trip organizer can do this")


def require_member(db: Session, trip: Trip, actor) -> TripParticipant | None:
    """Organizer or a participant with any RSVP status."""
    participant = get_participant(db, trip.id, actor.id)
    if participant is None and not is_organizer(trip, actor):
        raise Forbidden("You are not a participant of this trip")
    return participant


def require_going(db: Session, trip: Trip, actor) -> TripParticipant:
    participant = get_participant(db, trip.id, actor.id)
    if participant is None or not can_participate(participant.rsvp_status):
        raise Forbidden("Only participants who are going can do this")
    return participant


def parse_rsvp_status(value) -> RsvpStatus:
    try:
        return RsvpStatus(value)
    except ValueError:
        raise InvalidRsvpStatus()
