"""
Best-range tally for date pitches.

Every contiguous sub-range [i, j] of the pitched dates is scored as

    1000 * (voters available on every date of the range) + range length

so headcount always dominates and length only breaks ties between ranges with
the same headcount. The first maximum in (i ascending, j ascending) order wins.
Availability checks use a per-voter prefix count of unavailable days, which
keeps each (i, j, voter) test O(1).
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, List, Optional

from models.DateVote import DateVoteType

HEADCOUNT_WEIGHT = 1000


@dataclass(frozen=True)
class DateBallot:
    voter_id: str
    vote_type: str
    # None for ALL_WORK / NONE_WORK, or for an unreadable PARTIAL selection
    selected_dates: Optional[List[date]] = None


@dataclass
class DateAvailability:
    date: date
    available: List[str] = field(default_factory=list)
    unavailable: List[str] = field(default_factory=list)


@dataclass
class BestDateRange:
    start_date: date
    end_date: date
    score: int
    available_count: int
    dates: List[DateAvailability]
    fully_available: List[str]
    partially_available: List[str]
    unavailable: List[str]


def enumerate_dates(start_date: date, end_date: date) -> List[date]:
    """Calendar dates from start to end, both inclusive."""
    days = (end_date - start_date).days
    return [start_date + timedelta(days=offset) for offset in range(days + 1)]


def availability_row(ballot: DateBallot, dates: List[date]) -> List[bool]:
    if ballot.vote_type == DateVoteType.ALL_WORK:
        return [True] * len(dates)
    if ballot.vote_type == DateVoteType.PARTIAL and ballot.selected_dates is not None:
        selected = set(ballot.selected_dates)
        return [d in selected for d in dates]
    # NONE_WORK, unreadable PARTIAL selections and unknown types
    return [False] * len(dates)


def range_score(available_count: int, length: int) -> int:
    return HEADCOUNT_WEIGHT * available_count + length


def best_date_range(start_date: date, end_date: date, ballots: Iterable[DateBallot]) -> Optional[BestDateRange]:
    """Return the best contiguous range, or None when nobody has voted."""
    ballots = list(ballots)
    if not ballots:
        return None

    dates = enumerate_dates(start_date, end_date)
    n = len(dates)
    rows = [availability_row(ballot, dates) for ballot in ballots]

    # gaps[v][k] = unavailable days of voter v among dates[0:k]
    gaps = []
    for row in rows:
        prefix = [0] * (n + 1)
        for k, available in enumerate(row):
            prefix[k + 1] = prefix[k] + (0 if available else 1)
        gaps.append(prefix)

    best_score = None
    best_i = best_j = 0
    best_count = 0
    for i in range(n):
        for j in range(i, n):
            count = sum(1 for prefix in gaps if prefix[j + 1] - prefix[i] == 0)
            score = range_score(count, j - i + 1)
            if best_score is None or score > best_score:
                best_score, best_i, best_j, best_count = score, i, j, count

    per_date = []
    for k in range(best_i, best_j + 1):
        entry = DateAvailability(date=dates[k])
        for ballot, row in zip(ballots, rows):
            (entry.available if row[k] else entry.unavailable).append(ballot.voter_id)
        per_date.append(entry)

    fully, partially, none = [], [], []
    for ballot, row in zip(ballots, rows):
        window = row[best_i:best_j + 1]
        if all(window):
            fully.append(ballot.voter_id)
        elif any(window):
            partially.append(ballot.voter_id)
        else:
            none.append(ballot.voter_id)

    return BestDateRange(
        start_date=dates[best_i],
        end_date=dates[best_j],
        score=best_score,
        available_count=best_count,
        dates=per_date,
        fully_available=fully,
        partially_available=partially,
        unavailable=none,
    )
