from .names import NameMatch, best_name_match, name_distance, normalize_name, participant_distance
from .reconciliation import (
    AliasCandidate,
    Assignment,
    ParticipantMatch,
    ReconciliationResult,
    alias_candidates,
    assign_entry,
    build_distance_matrix,
    cycle_assignment,
    reconcile,
    solve_assignment,
)

__all__ = [
    "NameMatch",
    "best_name_match",
    "name_distance",
    "normalize_name",
    "participant_distance",
    "AliasCandidate",
    "Assignment",
    "ParticipantMatch",
    "ReconciliationResult",
    "alias_candidates",
    "assign_entry",
    "build_distance_matrix",
    "cycle_assignment",
    "reconcile",
    "solve_assignment",
]
