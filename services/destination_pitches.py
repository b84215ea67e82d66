"""
Destination pitches and ranked-choice ballots (DESTINATION phase).
"""
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session, joinedload

from models.Activity import ActivityType
from models.DestinationPitch import DestinationPitch
from models.DestinationVote import DestinationVote
from models.Trip import TripPhase
from services.activity_log import record_activity
from services.errors import InvalidPhase, InvalidRanking, NotFound
from services.participation import get_trip_or_404, require_actor, require_going, require_member
from services.ranked_choice import RunoffResult, build_ballots, instant_runoff
from services.transactions import commit_or_rollback

logger = logging.getLogger("tripplanner.pitches")


@dataclass
class DestinationBoard:
    pitches: list
    results: RunoffResult


def require_destination_phase(trip) -> None:
    if trip.phase != TripPhase.DESTINATION:
        raise InvalidPhase("Destinations are only handled during the DESTINATION phase")


def create_destination_pitch(db: Session, trip_id: int, location: str, description: str | None, actor) -> DestinationPitch:
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    require_destination_phase(trip)
    require_going(db, trip, actor)

    pitch = DestinationPitch(
        trip_id=trip.id,
        pitched_by_id=actor.id,
        location=location,
        description=description or None,
    )
    db.add(pitch)
    db.flush()
    record_activity(db, trip.id, actor.id, ActivityType.DESTINATION_PITCH_CREATED, pitch_id=pitch.id, location=location)
    commit_or_rollback(db, pitch)

    logger.info("Destination pitch %s created on trip %s by %s", pitch.id, trip.id, actor.id)
    return pitch


def attach_coordinates(db: Session, pitch: DestinationPitch, lat: float, lng: float) -> DestinationPitch:
    pitch.lat = lat
    pitch.lng = lng
    commit_or_rollback(db, pitch)
    return pitch


def cast_destination_vote(db: Session, pitch_id: int, ranking: int, actor) -> DestinationVote:
    """Insert or replace the actor's ranking for one pitch."""
    require_actor(actor)
    pitch = (
        db.query(DestinationPitch)
        .options(joinedload(DestinationPitch.trip))
        .filter(DestinationPitch.id == pitch_id)
        .first()
    )
    if not pitch:
        raise NotFound("Destination pitch not found")
    trip = pitch.trip
    require_destination_phase(trip)
    require_going(db, trip, actor)

    if ranking is None or ranking < 1:
        raise InvalidRanking()
    clash = (
        db.query(DestinationVote)
        .join(DestinationPitch, DestinationVote.pitch_id == DestinationPitch.id)
        .filter(
            DestinationPitch.trip_id == trip.id,
            DestinationVote.user_id == actor.id,
            DestinationVote.ranking == ranking,
            DestinationVote.pitch_id != pitch.id,
        )
        .first()
    )
    if clash:
        raise InvalidRanking(f"Ranking {ranking} is already used on another destination")

    vote = db.query(DestinationVote).filter_by(pitch_id=pitch.id, user_id=actor.id).first()
    if vote is None:
        vote = DestinationVote(pitch_id=pitch.id, user_id=actor.id)
        db.add(vote)
    vote.ranking = ranking
    record_activity(db, trip.id, actor.id, ActivityType.DESTINATION_VOTE_CAST, pitch_id=pitch.id, ranking=ranking)
    commit_or_rollback(db, vote)
    return vote


def tally_destinations(pitches) -> RunoffResult:
    """`pitches` must be in creation order; that order breaks elimination ties."""
    votes = [(vote.user_id, pitch.id, vote.ranking) for pitch in pitches for vote in pitch.votes]
    return instant_runoff([pitch.id for pitch in pitches], build_ballots(votes))


def destination_board(db: Session, trip_id: int, actor) -> DestinationBoard:
    """Pitches newest first plus the runoff over all of them."""
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    require_member(db, trip, actor)

    pitches = (
        db.query(DestinationPitch)
        .options(
            joinedload(DestinationPitch.pitched_by),
            joinedload(DestinationPitch.votes).joinedload(DestinationVote.user),
        )
        .filter(DestinationPitch.trip_id == trip_id)
        .order_by(DestinationPitch.created_at, DestinationPitch.id)
        .all()
    )
    results = tally_destinations(pitches)
    return DestinationBoard(pitches=list(reversed(pitches)), results=results)
