import logging
from datetime import date, datetime

from sqlalchemy.orm import Session, joinedload

from models.Activity import ActivityType
from models.DatePitch import DatePitch
from models.DateVote import DateVote, DateVoteType
from services.activity_log import record_activity
from services.date_pitches import require_dates_phase
from services.deadline_clock import PitchWindowState, effective_deadlines, window_state
from services.errors import (
    InvalidSelectedDates,
    InvalidVoteType,
    NotFound,
    VotingClosed,
    VotingNotOpen,
)
from services.participation import require_actor, require_going
from services.transactions import commit_or_rollback

logger = logging.getLogger("tripplanner.votes")


def parse_vote_type(value) -> DateVoteType:
    try:
        return DateVoteType(value)
    except ValueError:
        raise InvalidVoteType()


def parse_selected_dates(values, pitch: DatePitch) -> list[date]:
    """ISO strings (or dates) -> calendar dates, all inside the pitched range."""
    if not values:
        raise InvalidSelectedDates()
    dates = []
    for value in values:
        if isinstance(value, date):
            day = value
        else:
            try:
                day = date.fromisoformat(str(value))
            except ValueError:
                raise InvalidSelectedDates(f"Not a calendar date: {value}")
        if day < pitch.start_date or day > pitch.end_date:
            raise InvalidSelectedDates(f"{day.isoformat()} is outside the pitched range")
        dates.append(day)
    return dates


def cast_date_vote(db: Session, pitch_id: int, vote_type, selected_dates, actor, now: datetime) -> DateVote:
    """
    Insert or replace the actor's vote on a pitch. A new vote overwrites the
    previous one entirely, including its selected dates.
    """
    require_actor(actor)
    pitch = (
        db.query(DatePitch)
        .options(joinedload(DatePitch.trip))
        .filter(DatePitch.id == pitch_id)
        .first()
    )
    if not pitch:
        raise NotFound("Date pitch not found")
    trip = pitch.trip
    require_dates_phase(trip)

    state = window_state(now, effective_deadlines(trip, pitch))
    if state == PitchWindowState.PROPOSALS_OPEN:
        raise VotingNotOpen()
    if state == PitchWindowState.VOTING_CLOSED:
        raise VotingClosed()

    require_going(db, trip, actor)
    kind = parse_vote_type(vote_type)
    dates = parse_selected_dates(selected_dates, pitch) if kind == DateVoteType.PARTIAL else None

    vote = db.query(DateVote).filter_by(pitch_id=pitch.id, user_id=actor.id).first()
    if vote is None:
        vote = DateVote(pitch_id=pitch.id, user_id=actor.id)
        db.add(vote)
    vote.vote_type = kind
    vote.set_selected_dates(dates)
    record_activity(
        db, trip.id, actor.id, ActivityType.DATE_VOTE_CAST,
        pitch_id=pitch.id, vote_type=kind.value,
    )
    commit_or_rollback(db, vote)

    logger.info("Date vote on pitch %s by %s: %s", pitch.id, actor.id, kind.value)
    return vote
