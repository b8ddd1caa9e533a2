"""Stroke allocation: which holes a higher-handicap player gets strokes on.

Strokes go to the hardest holes first (lowest stroke index, ties by hole
number). Once a player has more strokes than holes, every hole gets one and
the remainder goes round again from the hardest hole.
"""

import logging
from enum import Enum
from typing import Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel

from models import (
    CourseHoleDifficulty,
    GameSession,
    HoleSelection,
    SessionParticipant,
    StrokeAllocation,
)
from handicap.course_handicap import round_half_up, rounded_difference

logger = logging.getLogger(__name__)

HOLES_PER_ROUND = 18


class AllocationFormat(str, Enum):
    """USGA: the low player plays scratch and everyone else gets the difference.
    MODIFIED: everyone gets their full course handicap."""
    USGA = "usga"
    MODIFIED = "modified"


class PlayerHandicap(BaseModel):
    player_id: str
    handicap_value: float


class MatchAllocation(BaseModel):
    """Strokes given in a two-sided match. `receiving_side` is "A", "B" or "none"."""
    receiving_side: Literal["A", "B", "none"]
    stroke_difference: int
    strokes_by_hole: Dict[int, int]


# ================================================================
# Distribution
# ================================================================

def distribute_strokes(strokes: int, difficulty: CourseHoleDifficulty) -> Dict[int, int]:
    """Spread `strokes` over holes 1-18, hardest first.

    Every full 18 strokes puts one more stroke on every hole; the remainder
    lands on the hardest holes.
    """
    by_hole = {number: 0 for number in range(1, HOLES_PER_ROUND + 1)}
    if strokes <= 0:
        return by_hole

    full_rounds, remainder = divmod(strokes, HOLES_PER_ROUND)
    for number in by_hole:
        by_hole[number] = full_rounds
    for number in difficulty.hardest(remainder):
        by_hole[number] += 1
    return by_hole


def strokes_received(handicap_value: float, baseline: float) -> int:
    """Strokes for a player relative to the group's low handicap. Never negative."""
    return max(0, rounded_difference(handicap_value, baseline))


def allocate_strokes(
    players: Sequence[PlayerHandicap],
    difficulty: CourseHoleDifficulty,
    allocation_format: AllocationFormat = AllocationFormat.USGA,
) -> List[StrokeAllocation]:
    """Stroke allocation for every player in a group, in input order."""
    if not players:
        return []

    if allocation_format == AllocationFormat.MODIFIED:
        received = {p.player_id: max(0, round_half_up(p.handicap_value)) for p in players}
    else:
        baseline = min(p.handicap_value for p in players)
        received = {p.player_id: strokes_received(p.handicap_value, baseline) for p in players}

    return [
        StrokeAllocation(
            player_id=p.player_id,
            strokes_received=received[p.player_id],
            strokes_by_hole=distribute_strokes(received[p.player_id], difficulty),
        )
        for p in players
    ]


# ================================================================
# Matches
# ================================================================

def match_stroke_allocation(
    handicap_a: float, handicap_b: float, difficulty: CourseHoleDifficulty
) -> MatchAllocation:
    """Strokes the higher-handicap side receives from the other in a match."""
    if handicap_a == handicap_b:
        return MatchAllocation(
            receiving_side="none",
            stroke_difference=0,
            strokes_by_hole=distribute_strokes(0, difficulty),
        )

    receiving = "A" if handicap_a > handicap_b else "B"
    diff = rounded_difference(max(handicap_a, handicap_b), min(handicap_a, handicap_b))
    return MatchAllocation(
        receiving_side=receiving if diff > 0 else "none",
        stroke_difference=diff,
        strokes_by_hole=distribute_strokes(diff, difficulty),
    )


def team_match_stroke_allocation(
    team_a: Sequence[float], team_b: Sequence[float], difficulty: CourseHoleDifficulty
) -> MatchAllocation:
    """2 vs 2: compare combined team handicaps."""
    return match_stroke_allocation(sum(team_a), sum(team_b), difficulty)


def filter_strokes_for_selection(
    strokes_by_hole: Dict[int, int], selection: HoleSelection
) -> Dict[int, int]:
    """Restrict a per-hole map to the holes being played."""
    holes = set(selection.hole_numbers())
    return {number: n for number, n in strokes_by_hole.items() if number in holes}


# ================================================================
# Sessions
# ================================================================

def resolve_handicap_value(participant: SessionParticipant) -> float:
    """Course handicap if set, else handicap index, else scratch."""
    if participant.course_handicap is not None:
        return participant.course_handicap
    if participant.handicap_index is not None:
        return participant.handicap_index
    logger.warning("No handicap for %s; allocating as scratch", participant.name)
    return 0.0


def allocations_for_session(
    session: GameSession,
    allocation_format: AllocationFormat = AllocationFormat.USGA,
    difficulty: Optional[CourseHoleDifficulty] = None,
) -> List[StrokeAllocation]:
    """Recompute every participant's allocation from the session's current state."""
    if difficulty is None:
        difficulty = CourseHoleDifficulty.from_course(session.course)
    if difficulty.is_estimated:
        logger.warning(
            "Stroke index missing for holes %s; using hole number as difficulty",
            difficulty.estimated_holes,
        )
    players = [
        PlayerHandicap(player_id=p.player_id, handicap_value=resolve_handicap_value(p))
        for p in session.player_details
    ]
    return allocate_strokes(players, difficulty, allocation_format)
