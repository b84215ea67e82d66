"""
Date pitch ledger: deadline settings, pitch creation and the read side with
per-pitch tallies.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from config import MAX_PITCH_RANGE_DAYS, MAX_VOTING_DURATION_DAYS

from models.Activity import ActivityType
from models.DatePitch import DatePitch
from models.DateVote import DateVote
from models.Trip import TripPhase
from services.activity_log import record_activity
from services.clock import as_utc
from services.date_tally import BestDateRange, DateBallot, best_date_range
from services.deadline_clock import (
    Deadlines,
    PitchWindowState,
    effective_deadlines,
    trip_deadlines,
    voting_deadline_for,
    window_state,
)
from services.errors import (
    DeadlineMissing,
    DeadlinePassed,
    InvalidDeadline,
    InvalidDuration,
    InvalidPhase,
    InvalidRange,
    NotFound,
)
from services.participation import (
    get_trip_or_404,
    require_actor,
    require_going,
    require_member,
    require_organizer,
)
from services.transactions import commit_or_rollback

logger = logging.getLogger("tripplanner.pitches")


@dataclass
class DatePitchSummary:
    pitch: DatePitch
    deadlines: Deadlines
    state: PitchWindowState
    results: Optional[BestDateRange]


def require_dates_phase(trip) -> None:
    if trip.phase != TripPhase.DATES:
        raise InvalidPhase("Date pitches are only handled during the DATES phase")


def set_date_pitch_deadline(
    db: Session, trip_id: int, pitch_deadline: datetime, duration_days: int | None, actor, now: datetime
):
    """
    Organizer-only. Validates everything before touching the trip so a
    rejected call leaves the settings unchanged. A new deadline also re-opens
    a window that had already closed.
    """
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    require_organizer(trip, actor)
    require_dates_phase(trip)

    pitch_deadline = as_utc(pitch_deadline)
    if pitch_deadline is None or pitch_deadline <= as_utc(now):
        raise InvalidDeadline()
    if duration_days is None:
        duration_days = trip.voting_deadline_duration_days
    if duration_days < 1 or duration_days > MAX_VOTING_DURATION_DAYS:
        raise InvalidDuration(f"Voting must last between 1 and {MAX_VOTING_DURATION_DAYS} days")
    try:
        voting_deadline_for(pitch_deadline, duration_days)
    except OverflowError:
        raise InvalidDeadline("The voting deadline would fall outside the supported calendar")

    trip.date_pitch_deadline = pitch_deadline
    trip.voting_deadline_duration_days = duration_days
    record_activity(
        db, trip.id, actor.id, ActivityType.DEADLINE_SET,
        pitch_deadline=pitch_deadline.isoformat(), voting_duration_days=duration_days,
    )
    commit_or_rollback(db, trip)

    logger.info("Trip %s pitch deadline set to %s (+%s days voting)", trip.id, pitch_deadline, duration_days)
    return trip


def create_date_pitch(
    db: Session,
    trip_id: int,
    start_date: date,
    end_date: date,
    description: str | None,
    actor,
    now: datetime,
) -> DatePitch:
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    require_dates_phase(trip)
    require_going(db, trip, actor)
    if end_date <= start_date:
        raise InvalidRange()
    if (end_date - start_date).days + 1 > MAX_PITCH_RANGE_DAYS:
        raise InvalidRange(f"A pitch can span at most {MAX_PITCH_RANGE_DAYS} days")

    deadlines = trip_deadlines(trip)
    if deadlines.pitch_deadline is None:
        raise DeadlineMissing()
    if as_utc(now) >= deadlines.pitch_deadline:
        raise DeadlinePassed()

    pitch = DatePitch(
        trip_id=trip.id,
        pitched_by_id=actor.id,
        start_date=start_date,
        end_date=end_date,
        description=description or None,
        pitch_deadline=deadlines.pitch_deadline,
        voting_deadline=deadlines.voting_deadline,
    )
    db.add(pitch)
    db.flush()
    record_activity(
        db, trip.id, actor.id, ActivityType.DATE_PITCH_CREATED,
        pitch_id=pitch.id, start_date=start_date.isoformat(), end_date=end_date.isoformat(),
    )
    commit_or_rollback(db, pitch)

    logger.info("Date pitch %s created on trip %s by %s", pitch.id, trip.id, actor.id)
    return pitch


def ballots_for(pitch: DatePitch) -> list[DateBallot]:
    ballots = []
    for vote in pitch.votes:
        ballots.append(DateBallot(
            voter_id=vote.user_id,
            vote_type=vote.vote_type,
            selected_dates=vote.selected_date_list,
        ))
    return ballots


def tally_pitch(pitch: DatePitch) -> Optional[BestDateRange]:
    return best_date_range(pitch.start_date, pitch.end_date, ballots_for(pitch))


def summarize(pitch: DatePitch, now: datetime) -> DatePitchSummary:
    deadlines = effective_deadlines(pitch.trip, pitch)
    return DatePitchSummary(
        pitch=pitch,
        deadlines=deadlines,
        state=window_state(now, deadlines),
        results=tally_pitch(pitch),
    )


def _pitch_query(db: Session):
    return db.query(DatePitch).options(
        joinedload(DatePitch.trip),
        joinedload(DatePitch.pitched_by),
        joinedload(DatePitch.votes).joinedload(DateVote.user),
    )


def list_date_pitches(db: Session, trip_id: int, actor, now: datetime) -> list[DatePitchSummary]:
    """Newest first, with votes and voters loaded in the same query."""
    require_actor(actor)
    trip = get_trip_or_404(db, trip_id)
    require_member(db, trip, actor)

    pitches = (
        _pitch_query(db)
        .filter(DatePitch.trip_id == trip_id)
        .order_by(DatePitch.created_at.desc(), DatePitch.id.desc())
        .all()
    )
    return [summarize(pitch, now) for pitch in pitches]


def get_date_pitch_summary(db: Session, pitch_id: int, actor, now: datetime) -> DatePitchSummary:
    require_actor(actor)
    pitch = _pitch_query(db).filter(DatePitch.id == pitch_id).first()
    if not pitch:
        raise NotFound("Date pitch not found")
    require_member(db, pitch.trip, actor)
    return summarize(pitch, now)
