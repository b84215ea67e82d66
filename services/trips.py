import logging
import secrets
import string

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from config import DEFAULT_VOTING_DURATION_DAYS, JOIN_TOKEN_LENGTH
from models.Activity import ActivityType
from models.Trip import Trip, TripPhase, PHASE_SEQUENCE
from models.TripParticipant import TripParticipant, RsvpStatus, ParticipantRole
from services.activity_log import record_activity
from services.errors import Forbidden, Internal, InvalidPhase, NotFound
from services.participation import (
    get_participant,
    get_trip_or_404,
    parse_rsvp_status,
    require_actor,
    require_member,
    require_organizer,
)
from services.transactions import commit_or_rollback

logger = logging.getLogger("tripplanner.trips")

TOKEN_ALPHABET = string.ascii_letters + string.digits
MAX_TOKEN_ATTEMPTS = 10


def generate_join_token(length: int = JOIN_TOKEN_LENGTH) -> str:
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def _unique_join_token(db: Session) -> str:
    for _ in range(MAX_TOKEN_ATTEMPTS):
        token = generate_join_token()
        if not db.query(Trip.id).filter(Trip.join_token == token).first():
            return token
    raise Internal("Failed to generate unique join token")


def create_trip(db: Session, title: str, description: str | None, actor) -> Trip:
    """Create the trip, its organizer participant and the TRIP_CREATED entry in one commit."""
    require_actor(actor)

    trip = Trip(
        title=title,
        description=description or None,
        organizer_id=actor.id,
        phase=TripPhase.DATES,
        voting_deadline_duration_days=DEFAULT_VOTING_DURATION_DAYS,
        join_token=_unique_join_token(db),
    )
    db.add(trip)
    db.flush()

    db.add(TripParticipant(
        trip_id=trip.id,
        user_id=actor.id,
        rsvp_status=RsvpStatus.GOING,
        role=ParticipantRole.ORGANIZER,
    ))
    record_activity(db, trip.id, actor.id, ActivityType.TRIP_CREATED, trip_title=title)
    commit_or_rollback(db, trip)

    logger.info("Trip created: %s by user %s", trip.id, actor.id)
    return trip


def update_trip(db: Session, trip_id: int, actor, title: str | None = None, description: str | None = None) -> Trip:
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    require_organizer(trip, actor)

    if title is not None:
        trip.title = title
    if description is not None:
        trip.description = description or None
    commit_or_rollback(db, trip)
    return trip


def list_trips(db: Session, actor) -> list[Trip]:
    """Trips the actor organizes or participates in, newest first."""
    require_actor(actor)
    return (
        db.query(Trip)
        .options(selectinload(Trip.participants).joinedload(TripParticipant.user))
        .outerjoin(TripParticipant, Trip.id == TripParticipant.trip_id)
        .filter(or_(Trip.organizer_id == actor.id, TripParticipant.user_id == actor.id))
        .distinct()
        .order_by(Trip.created_at.desc(), Trip.id.desc())
        .all()
    )


def get_trip(db: Session, trip_id: int, actor) -> Trip:
    require_actor(actor)
    trip = (
        db.query(Trip)
        .options(selectinload(Trip.participants).joinedload(TripParticipant.user))
        .filter(Trip.id == trip_id)
        .first()
    )
    if not trip:
        raise NotFound("Trip not found")
    require_member(db, trip, actor)
    return trip


def get_trip_by_join_token(db: Session, token: str, actor) -> Trip:
    require_actor(actor)
    trip = (
        db.query(Trip)
        .options(selectinload(Trip.participants).joinedload(TripParticipant.user))
        .filter(Trip.join_token == token)
        .first()
    )
    if not trip:
        raise NotFound("No trip matches this join link")
    return trip


def join_trip(db: Session, token: str, rsvp_status, actor) -> TripParticipant:
    """First join creates the participant; joining again only updates the RSVP."""
    require_actor(actor)
    status = parse_rsvp_status(rsvp_status)
    trip = db.query(Trip).filter(Trip.join_token == token).first()
    if not trip:
        raise NotFound("No trip matches this join link")

    participant = get_participant(db, trip.id, actor.id)
    if participant is None:
        participant = TripParticipant(
            trip_id=trip.id,
            user_id=actor.id,
            rsvp_status=status,
            role=ParticipantRole.PARTICIPANT,
        )
        db.add(participant)
        record_activity(db, trip.id, actor.id, ActivityType.USER_JOINED, rsvp_status=status.value)
        logger.info("User %s joined trip %s as %s", actor.id, trip.id, status.value)
    elif participant.rsvp_status != status:
        previous = participant.rsvp_status
        participant.rsvp_status = status
        record_activity(
            db, trip.id, actor.id, ActivityType.RSVP_CHANGED,
            previous=previous.value, rsvp_status=status.value,
        )
    commit_or_rollback(db, participant)
    return participant


def update_rsvp(db: Session, trip_id: int, rsvp_status, actor) -> TripParticipant:
    require_actor(actor)
    status = parse_rsvp_status(rsvp_status)
    trip = get_trip_or_404(db, trip_id)
    participant = get_participant(db, trip.id, actor.id)
    if participant is None:
        raise Forbidden("You are not a participant of this trip")
    if participant.rsvp_status != status:
        previous = participant.rsvp_status
        participant.rsvp_status = status
        record_activity(
            db, trip.id, actor.id, ActivityType.RSVP_CHANGED,
            previous=previous.value, rsvp_status=status.value,
        )
    commit_or_rollback(db, participant)
    return participant


def list_participants(db: Session, trip_id: int, actor) -> list[TripParticipant]:
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    require_member(db, trip, actor)
    return (
        db.query(TripParticipant)
        .options(joinedload(TripParticipant.user))
        .filter(TripParticipant.trip_id == trip_id)
        .order_by(TripParticipant.joined_at, TripParticipant.id)
        .all()
    )


def next_phase(phase: TripPhase) -> TripPhase | None:
    index = PHASE_SEQUENCE.index(phase)
    if index + 1 >= len(PHASE_SEQUENCE):
        return None
    return PHASE_SEQUENCE[index + 1]


def advance_phase(db: Session, trip_id: int, actor) -> Trip:
    """Move the trip one step forward; phases never go back."""
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    require_organizer(trip, actor)

    target = next_phase(trip.phase)
    if target is None:
        raise InvalidPhase("The trip is already completed")

    previous = trip.phase
    trip.phase = target
    record_activity(db, trip.id, actor.id, ActivityType.PHASE_CHANGED, previous=previous.value, phase=target.value)
    commit_or_rollback(db, trip)

    logger.info("Trip %s moved from %s to %s", trip.id, previous.value, target.value)
    return trip
