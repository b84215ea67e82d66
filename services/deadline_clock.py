"""
Phase state of a trip's date pitching window, computed from wall-clock time.

No state is kept here: every request recomputes the state from `now` and the
trip settings, so changing the deadline takes effect immediately (including
re-opening a window that had already closed).
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
import enum

from services.clock import as_utc


class PitchWindowState(str, enum.Enum):
    PROPOSALS_OPEN = "PROPOSALS_OPEN"
    VOTING_OPEN = "VOTING_OPEN"
    VOTING_CLOSED = "VOTING_CLOSED"


@dataclass(frozen=True)
class Deadlines:
    pitch_deadline: datetime | None
    voting_deadline: datetime | None


def voting_deadline_for(pitch_deadline: datetime | None, duration_days: int) -> datetime | None:
    if pitch_deadline is None:
        return None
    return as_utc(pitch_deadline) + timedelta(days=duration_days)


def trip_deadlines(trip) -> Deadlines:
    pitch_deadline = as_utc(trip.date_pitch_deadline)
    return Deadlines(pitch_deadline, voting_deadline_for(pitch_deadline, trip.voting_deadline_duration_days))


def effective_deadlines(trip, pitch) -> Deadlines:
    """Live trip settings win; the pitch snapshot is used when the trip has none."""
    if trip.date_pitch_deadline is not None:
        return trip_deadlines(trip)
    return Deadlines(as_utc(pitch.pitch_deadline), as_utc(pitch.voting_deadline))


def window_state(now: datetime, deadlines: Deadlines) -> PitchWindowState:
    now = as_utc(now)
    if deadlines.pitch_deadline is None or now < deadlines.pitch_deadline:
        return PitchWindowState.PROPOSALS_OPEN
    if deadlines.voting_deadline is not None and now >= deadlines.voting_deadline:
        return PitchWindowState.VOTING_CLOSED
    return PitchWindowState.VOTING_OPEN
