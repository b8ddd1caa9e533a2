"""Controller layer: composes reconciliation, stroke allocation and format checks.

Everything here recomputes from its inputs. The only side effect is the
best-effort alias write, which never fails the caller.
"""

import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from games.formats import GameFormatError, normalize_bet_unit, select_format
from handicap.course_handicap import course_handicap_for_round
from handicap.strokes import AllocationFormat, allocations_for_session
from matching.reconciliation import (
    AliasCandidate,
    ReconciliationResult,
    assign_entry,
    cycle_assignment,
    reconcile,
)
from models import (
    BetSettings,
    BetUnit,
    Course,
    CourseHoleDifficulty,
    FormatSelection,
    GameMode,
    GameSession,
    GameType,
    HoleSelection,
    PayoutMode,
    ScanResult,
    SessionParticipant,
    Side,
    StrokeAllocation,
)
from scan.confidence import ScanConfidence
from scan.normalize import normalize_scan
from scan.strategies import PlayerAliasWriter, ScanService

logger = logging.getLogger(__name__)

HANDICAP_FIELDS = {"handicap_index", "course_handicap"}


class ScanReconciliation(BaseModel):
    """Everything the review screen needs after a scan lands in a session."""
    session_id: Optional[str] = None
    course_name: Optional[str] = None
    reconciliation: ReconciliationResult
    allocations: List[StrokeAllocation] = Field(default_factory=list)
    confidence: ScanConfidence
    hole_difficulty_estimated: bool = False
    estimated_holes: List[int] = Field(default_factory=list)
    aliases_saved: List[AliasCandidate] = Field(default_factory=list)


class SessionSetup(BaseModel):
    session: GameSession
    format: FormatSelection
    allocations: List[StrokeAllocation]


# ================================================================
# Scan reconciliation
# ================================================================

def reconcile_scan(
    session: GameSession,
    scan: ScanResult,
    allocation_format: AllocationFormat = AllocationFormat.USGA,
) -> ScanReconciliation:
    """Match scanned rows to participants and compute everyone's strokes."""
    entries, confidence = normalize_scan(scan)
    result = reconcile(session.player_details, entries)

    difficulty = CourseHoleDifficulty.from_course(session.course)
    allocations = allocations_for_session(session, allocation_format, difficulty)

    return ScanReconciliation(
        session_id=session.id,
        course_name=scan.course_name,
        reconciliation=result,
        allocations=allocations,
        confidence=confidence,
        hole_difficulty_estimated=difficulty.is_estimated,
        estimated_holes=difficulty.estimated_holes,
    )


def reassign_participant(
    session: GameSession,
    scan: ScanResult,
    current: ReconciliationResult,
    participant_index: int,
    target_position: Optional[int] = None,
) -> ReconciliationResult:
    """Manual correction. Without a target the participant cycles to the next row."""
    entries, _ = normalize_scan(scan)
    if target_position is None:
        return cycle_assignment(session.player_details, entries, current, participant_index)
    return assign_entry(session.player_details, entries, current, participant_index, target_position)


async def persist_aliases(
    writer: PlayerAliasWriter, candidates: Sequence[AliasCandidate]
) -> List[AliasCandidate]:
    """Write alias candidates one by one. Failures are logged and skipped."""
    saved = []
    for candidate in candidates:
        try:
            added = await writer.add_alias(candidate.player_id, candidate.alias)
        except Exception as e:
            logger.warning(
                "Could not save alias %r for player %s: %s",
                candidate.alias, candidate.player_id, e,
            )
            continue
        if added:
            saved.append(candidate)
    return saved


async def apply_scan(
    session: GameSession,
    scan: ScanResult,
    writer: PlayerAliasWriter,
    allocation_format: AllocationFormat = AllocationFormat.USGA,
) -> ScanReconciliation:
    """reconcile_scan, then remember any new name variants."""
    outcome = reconcile_scan(session, scan, allocation_format)
    outcome.aliases_saved = await persist_aliases(writer, outcome.reconciliation.alias_candidates)
    return outcome


async def scan_scorecard(
    session: GameSession,
    image_path: str,
    scanner: ScanService,
    writer: PlayerAliasWriter,
    allocation_format: AllocationFormat = AllocationFormat.USGA,
) -> ScanReconciliation:
    """Read a scorecard image and apply it to the session."""
    scan = scanner.scan(image_path)
    logger.info("Scanned %d rows from %s", len(scan.players), image_path)
    return await apply_scan(session, scan, writer, allocation_format)


# ================================================================
# Edits before play
# ================================================================

def update_participant_handicap(
    participant: SessionParticipant, field_name: str, value: Optional[float]
) -> Optional[str]:
    """Apply a handicap edit. Out-of-range values are rejected and the old value kept."""
    if field_name not in HANDICAP_FIELDS:
        return f"'{field_name}' is not a handicap field"
    return participant.update_field(field_name, value)


def update_participant_tee(
    participant: SessionParticipant,
    course: Optional[Course],
    hole_selection: HoleSelection,
    tee_name: Optional[str],
    tee_gender: Optional[str] = None,
) -> Optional[str]:
    """Change a participant's tee and recompute their course handicap for it."""
    error = participant.update_field("tee_gender", tee_gender)
    if error:
        return error
    participant.tee_name = tee_name
    course_handicap = course_handicap_for_round(
        participant.handicap_index, course, hole_selection.hole_numbers(), tee_name, tee_gender
    )
    return participant.update_field("course_handicap", course_handicap)


# ================================================================
# Session creation
# ================================================================

def create_session(
    course: Optional[Course],
    participants: Sequence[SessionParticipant],
    game_type: GameType,
    *,
    session_id: Optional[str] = None,
    game_mode: Optional[GameMode] = None,
    hole_selection: HoleSelection = HoleSelection.FULL,
    payout_mode: PayoutMode = PayoutMode.WAR,
    bet_settings: Optional[BetSettings] = None,
    sides: Optional[Sequence[Side]] = None,
    allocation_format: AllocationFormat = AllocationFormat.USGA,
) -> SessionSetup:
    """Validate the game setup and build the session with its initial strokes.

    Raises GameFormatError when the format cannot be played by this group.
    """
    if course is None:
        raise GameFormatError("Select a course to start a game")
    player_ids = [p.player_id for p in participants]
    bet_unit: Optional[BetUnit] = bet_settings.bet_unit if bet_settings else None
    selection = select_format(
        game_type,
        player_ids,
        game_mode=game_mode,
        bet_unit=bet_unit,
        payout_mode=payout_mode,
        sides=sides,
    )

    holes = hole_selection.hole_numbers()
    details = []
    for p in participants:
        p = p.model_copy(deep=True)
        if p.course_handicap is None:
            p.course_handicap = course_handicap_for_round(
                p.handicap_index, course, holes, p.tee_name, p.tee_gender
            )
        details.append(p)

    if bet_settings is not None:
        bet_settings = _normalize_bet_settings(game_type, bet_settings, selection.bet_unit)

    session = GameSession(
        id=session_id,
        course=course,
        hole_selection=hole_selection,
        game_type=game_type,
        game_mode=selection.game_mode,
        payout_mode=selection.payout_mode,
        player_details=details,
        sides=selection.side_assignments,
        bet_settings=bet_settings,
    )
    return SessionSetup(
        session=session,
        format=selection,
        allocations=allocations_for_session(session, allocation_format),
    )


def _normalize_bet_settings(
    game_type: GameType, settings: BetSettings, bet_unit: Optional[BetUnit]
) -> BetSettings:
    """Drop options that do not apply to the game type."""
    game_type = GameType(game_type)
    unit, _ = normalize_bet_unit(game_type, bet_unit)
    return settings.model_copy(update={
        "bet_unit": unit,
        "carryover": settings.carryover if game_type == GameType.SKINS else None,
        "press_enabled": settings.press_enabled if game_type == GameType.NASSAU else None,
        "nassau_amounts": settings.nassau_amounts if game_type == GameType.NASSAU else None,
        "side_bets": settings.side_bets if settings.side_bets and settings.side_bets.any_enabled else None,
    })
