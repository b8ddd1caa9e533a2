"""Match scanned scorecard rows to the participants of a session.

Assignment is global best-first: every (participant, scanned row) pair is
ranked by name distance and committed in that order, so a participant whose
only good match is contested is not starved by a worse-fitting rival that
happened to be looked at first. Anyone left over gets no scores and is
flagged for manual assignment.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, computed_field

from models import ScannedPlayerEntry, ScannedScore, SessionParticipant
from matching.names import best_name_match

logger = logging.getLogger(__name__)


# --- Result models ---

class Assignment(BaseModel):
    participant_index: int
    scanned_index: int          # ScannedPlayerEntry.index
    distance: int = Field(..., ge=0)
    matched_name: str           # stored name or alias that scored best


class AliasCandidate(BaseModel):
    """A name variant the caller may persist with `add_alias`."""
    player_id: str
    alias: str


class ParticipantMatch(BaseModel):
    participant_index: int
    player_id: str
    name: str
    assignment: Optional[Assignment] = None
    scanned_name: Optional[str] = None
    scores: List[ScannedScore] = Field(default_factory=list)

    @computed_field
    @property
    def needs_manual_assignment(self) -> bool:
        return self.assignment is None


class ReconciliationResult(BaseModel):
    matches: List[ParticipantMatch]
    alias_candidates: List[AliasCandidate] = Field(default_factory=list)
    unused_scanned_indices: List[int] = Field(default_factory=list)

    @property
    def unassigned(self) -> List[ParticipantMatch]:
        return [m for m in self.matches if m.assignment is None]

    @property
    def total_distance(self) -> int:
        return sum(m.assignment.distance for m in self.matches if m.assignment)

    def assignment_map(self) -> Dict[int, int]:
        """participant_index -> scanned_index for assigned participants."""
        return {
            m.participant_index: m.assignment.scanned_index
            for m in self.matches if m.assignment is not None
        }


# --- Core algorithm ---

def build_distance_matrix(
    participants: Sequence[SessionParticipant],
    entries: Sequence[ScannedPlayerEntry],
) -> List[List[int]]:
    """N x M matrix of effective distances (minimum over name and aliases)."""
    return [
        [best_name_match(p.name, p.aliases, e.name).distance for e in entries]
        for p in participants
    ]


def solve_assignment(matrix: Sequence[Sequence[int]]) -> Dict[int, Tuple[int, int]]:
    """Best-first greedy assignment over a distance matrix.

    Returns {row: (column, distance)}. Ties are broken by row order, then
    column order. Rows left unmatched are absent from the result.
    """
    triples = [
        (distance, row, col)
        for row, distances in enumerate(matrix)
        for col, distance in enumerate(distances)
    ]
    triples.sort()

    assigned: Dict[int, Tuple[int, int]] = {}
    claimed_cols = set()
    for distance, row, col in triples:
        if row in assigned or col in claimed_cols:
            continue
        assigned[row] = (col, distance)
        claimed_cols.add(col)
    return assigned


def alias_candidates(
    participants: Sequence[SessionParticipant],
    entries: Sequence[ScannedPlayerEntry],
    assignments: Dict[int, int],
) -> List[AliasCandidate]:
    """Scanned names worth remembering for their participant.

    `assignments` maps participant position -> entry position. A candidate is
    emitted when the scanned name differs from every stored name.
    """
    candidates: List[AliasCandidate] = []
    for p_pos, e_pos in sorted(assignments.items()):
        participant = participants[p_pos]
        scanned = entries[e_pos].name.strip()
        if not scanned:
            continue
        # Distance 0 means the scanned name equals the name or an alias once normalized
        if best_name_match(participant.name, participant.aliases, scanned).distance == 0:
            continue
        candidates.append(AliasCandidate(player_id=participant.player_id, alias=scanned))
    return candidates


def _build_result(
    participants: Sequence[SessionParticipant],
    entries: Sequence[ScannedPlayerEntry],
    positions: Dict[int, int],
) -> ReconciliationResult:
    """Assemble a result from participant position -> entry position."""
    matches = []
    for p_pos, participant in enumerate(participants):
        e_pos = positions.get(p_pos)
        if e_pos is None:
            matches.append(ParticipantMatch(
                participant_index=p_pos,
                player_id=participant.player_id,
                name=participant.name,
            ))
            continue
        entry = entries[e_pos]
        best = best_name_match(participant.name, participant.aliases, entry.name)
        matches.append(ParticipantMatch(
            participant_index=p_pos,
            player_id=participant.player_id,
            name=participant.name,
            assignment=Assignment(
                participant_index=p_pos,
                scanned_index=entry.index,
                distance=best.distance,
                matched_name=best.matched_name,
            ),
            scanned_name=entry.name,
            scores=list(entry.scores),
        ))

    used = set(positions.values())
    return ReconciliationResult(
        matches=matches,
        alias_candidates=alias_candidates(participants, entries, positions),
        unused_scanned_indices=[e.index for pos, e in enumerate(entries) if pos not in used],
    )


def reconcile(
    participants: Sequence[SessionParticipant],
    entries: Sequence[ScannedPlayerEntry],
) -> ReconciliationResult:
    """Assign scanned rows to participants (one row per participant, none reused)."""
    matrix = build_distance_matrix(participants, entries)
    solved = solve_assignment(matrix)
    positions = {row: col for row, (col, _) in solved.items()}

    result = _build_result(participants, entries, positions)
    for m in result.unassigned:
        logger.info("No scanned row left for %s; needs manual assignment", m.name)
    return result


# --- Manual correction ---

def _positions_from_result(
    result: ReconciliationResult, entries: Sequence[ScannedPlayerEntry]
) -> Dict[int, int]:
    pos_by_index = {e.index: pos for pos, e in enumerate(entries)}
    positions = {}
    for p_pos, scanned_index in result.assignment_map().items():
        if scanned_index not in pos_by_index:
            raise ValueError(f"Scanned entry {scanned_index} is not part of this scan")
        positions[p_pos] = pos_by_index[scanned_index]
    return positions


def assign_entry(
    participants: Sequence[SessionParticipant],
    entries: Sequence[ScannedPlayerEntry],
    result: ReconciliationResult,
    participant_index: int,
    target_position: int,
) -> ReconciliationResult:
    """Give a participant a specific scanned row.

    If another participant holds that row, the two swap: the holder takes
    whatever the participant had before.
    """
    if not 0 <= participant_index < len(participants):
        raise IndexError(f"Participant {participant_index} out of range")
    if not 0 <= target_position < len(entries):
        raise IndexError(f"Scanned entry position {target_position} out of range")

    positions = _positions_from_result(result, entries)
    previous = positions.get(participant_index)
    holder = next((p for p, e in positions.items() if e == target_position), None)

    positions[participant_index] = target_position
    if holder is not None and holder != participant_index:
        if previous is None:
            del positions[holder]
        else:
            positions[holder] = previous

    return _build_result(participants, entries, positions)


def cycle_assignment(
    participants: Sequence[SessionParticipant],
    entries: Sequence[ScannedPlayerEntry],
    result: ReconciliationResult,
    participant_index: int,
) -> ReconciliationResult:
    """Move a participant to the next scanned row in rotation order.

    Rotation is by scan order, wrapping around; an unassigned participant
    starts at the first row.
    """
    if not entries:
        return result
    positions = _positions_from_result(result, entries)
    current = positions.get(participant_index)
    target = 0 if current is None else (current + 1) % len(entries)
    return assign_entry(participants, entries, result, participant_index, target)
