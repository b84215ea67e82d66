from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from services.deadline_clock import (
    Deadlines,
    PitchWindowState,
    effective_deadlines,
    trip_deadlines,
    voting_deadline_for,
    window_state,
)

DEADLINE = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)
VOTING_END = DEADLINE + timedelta(days=7)
WINDOW = Deadlines(DEADLINE, VOTING_END)


def test_unset_deadline_keeps_proposals_open_forever():
    far_future = datetime(2100, 1, 1, tzinfo=timezone.utc)
    assert window_state(far_future, Deadlines(None, None)) == PitchWindowState.PROPOSALS_OPEN


def test_proposals_open_strictly_before_deadline():
    just_before = DEADLINE - timedelta(microseconds=1)
    assert window_state(just_before, WINDOW) == PitchWindowState.PROPOSALS_OPEN


def test_voting_opens_exactly_at_pitch_deadline():
    assert window_state(DEADLINE, WINDOW) == PitchWindowState.VOTING_OPEN


def test_voting_closes_exactly_at_voting_deadline():
    assert window_state(VOTING_END - timedelta(microseconds=1), WINDOW) == PitchWindowState.VOTING_OPEN
    assert window_state(VOTING_END, WINDOW) == PitchWindowState.VOTING_CLOSED


def test_voting_deadline_is_pitch_deadline_plus_duration():
    assert voting_deadline_for(DEADLINE, 3) == DEADLINE + timedelta(days=3)
    assert voting_deadline_for(None, 3) is None


def test_naive_values_are_read_as_utc():
    naive_now = datetime(2026, 6, 1, 12, 0)
    assert window_state(naive_now, WINDOW) == PitchWindowState.VOTING_OPEN


def test_trip_settings_win_over_pitch_snapshot():
    trip = SimpleNamespace(date_pitch_deadline=DEADLINE, voting_deadline_duration_days=2)
    pitch = SimpleNamespace(
        pitch_deadline=DEADLINE - timedelta(days=10),
        voting_deadline=DEADLINE - timedelta(days=3),
    )
    deadlines = effective_deadlines(trip, pitch)
    assert deadlines == trip_deadlines(trip)
    assert deadlines.voting_deadline == DEADLINE + timedelta(days=2)


def test_pitch_snapshot_used_when_trip_has_no_deadline():
    trip = SimpleNamespace(date_pitch_deadline=None, voting_deadline_duration_days=7)
    pitch = SimpleNamespace(pitch_deadline=datetime(2026, 6, 1, 12, 0), voting_deadline=datetime(2026, 6, 8, 12, 0))
    deadlines = effective_deadlines(trip, pitch)
    assert deadlines.pitch_deadline == DEADLINE
    assert deadlines.voting_deadline == VOTING_END


def test_moving_the_deadline_reopens_a_closed_window():
    now = VOTING_END + timedelta(days=1)
    assert window_state(now, WINDOW) == PitchWindowState.VOTING_CLOSED
    moved = Deadlines(now + timedelta(hours=1), now + timedelta(days=7, hours=1))
    assert window_state(now, moved) == PitchWindowState.PROPOSALS_OPEN
    moved = Deadlines(now - timedelta(hours=1), now + timedelta(days=6))
    assert window_state(now, moved) == PitchWindowState.VOTING_OPEN
