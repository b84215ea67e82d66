"""
Injectable source of the current instant
"""
from datetime import datetime, timezone


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops the offset on read)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Clock:
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock pinned to one instant; `advance` moves it forward."""

    def __init__(self, instant: datetime):
        self.instant = as_utc(instant)

    def now(self) -> datetime:
        return self.instant

    def set(self, instant: datetime) -> None:
        self.instant = as_utc(instant)

    def advance(self, delta) -> None:
        self.instant = self.instant + delta


_system_clock = SystemClock()


def get_clock() -> Clock:
    """
    Dependency that provides the clock
    Usage: clock: Clock = Depends(get_clock)
    """
    return _system_clock
