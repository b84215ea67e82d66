"""
Instant-runoff tally for destination pitches.

Each round counts every ballot for its highest-ranked pitch that is still
standing. A pitch with a strict majority of the ballots still in play wins.
Otherwise one pitch is eliminated: the one with the fewest first choices,
and among equals the one pitched first (creation order). Ballots whose
choices have all been eliminated drop out of later rounds.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence


@dataclass
class RunoffRound:
    counts: Dict[int, int]
    active_ballots: int
    eliminated: Optional[int] = None


@dataclass
class RunoffResult:
    winner: Optional[int]
    rounds: List[RunoffRound] = field(default_factory=list)
    total_ballots: int = 0


def build_ballots(votes) -> List[List[int]]:
    """Group (user_id, pitch_id, ranking) votes into ordered ballots, one per user."""
    by_user: Dict[str, List[tuple]] = {}
    for user_id, pitch_id, ranking in votes:
        by_user.setdefault(user_id, []).append((ranking, pitch_id))
    ballots = []
    for user_id in sorted(by_user):
        ballots.append([pitch_id for _, pitch_id in sorted(by_user[user_id])])
    return ballots


def _first_standing(ballot: Sequence[int], standing: set) -> Optional[int]:
    for pitch_id in ballot:
        if pitch_id in standing:
            return pitch_id
    return None


def instant_runoff(pitch_order: Sequence[int], ballots: Sequence[Sequence[int]]) -> RunoffResult:
    """
    Run the elimination rounds.

    `pitch_order` lists every candidate pitch id in creation order; it drives
    the elimination tie-break. Pitch ids on ballots that are not candidates
    are ignored.
    """
    candidates = list(pitch_order)
    known = set(candidates)
    ballots = [[p for p in ballot if p in known] for ballot in ballots]
    ballots = [ballot for ballot in ballots if ballot]
    result = RunoffResult(winner=None, total_ballots=len(ballots))
    if not ballots or not candidates:
        return result

    standing = list(candidates)
    while standing:
        standing_set = set(standing)
        counts = {pitch_id: 0 for pitch_id in standing}
        active = 0
        for ballot in ballots:
            choice = _first_standing(ballot, standing_set)
            if choice is not None:
                counts[choice] += 1
                active += 1

        current = RunoffRound(counts=counts, active_ballots=active)
        result.rounds.append(current)

        if active == 0:
            return result

        leader = max(standing, key=lambda pitch_id: counts[pitch_id])
        if counts[leader] * 2 > active or len(standing) == 1:
            result.winner = leader
            return result

        fewest = min(counts[pitch_id] for pitch_id in standing)
        # standing keeps creation order, so the first match is the oldest pitch
        loser = next(pitch_id for pitch_id in standing if counts[pitch_id] == fewest)
        current.eliminated = loser
        standing.remove(loser)

    return result
