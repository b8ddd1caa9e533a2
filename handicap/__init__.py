from .course_handicap import (
    calculate_course_handicap,
    calculate_course_handicap_9,
    course_handicap_for_round,
    round_half_up,
    rounded_difference,
)
from .strokes import (
    AllocationFormat,
    MatchAllocation,
    PlayerHandicap,
    allocate_strokes,
    allocations_for_session,
    distribute_strokes,
    filter_strokes_for_selection,
    match_stroke_allocation,
    resolve_handicap_value,
    strokes_received,
    team_match_stroke_allocation,
)

__all__ = [
    "calculate_course_handicap",
    "calculate_course_handicap_9",
    "course_handicap_for_round",
    "round_half_up",
    "rounded_difference",
    "AllocationFormat",
    "MatchAllocation",
    "PlayerHandicap",
    "allocate_strokes",
    "allocations_for_session",
    "distribute_strokes",
    "filter_strokes_for_selection",
    "match_stroke_allocation",
    "resolve_handicap_value",
    "strokes_received",
    "team_match_stroke_allocation",
]
