"""API-specific request and response models."""

from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID

from handicap.strokes import AllocationFormat, PlayerHandicap
from matching.reconciliation import ReconciliationResult
from models import (
    BetSettings,
    BetUnit,
    Course,
    GameMode,
    GameType,
    Hole,
    HoleSelection,
    PayoutMode,
    ScanResult,
    SessionParticipant,
    Side,
)


class AvailableModesResponse(BaseModel):
    game_type: GameType
    player_count: int
    modes: List[GameMode]
    requires_choice: bool
    message: Optional[str] = None  # set when no mode is legal


class NormalizeBetRequest(BaseModel):
    game_type: GameType
    bet_unit: Optional[BetUnit] = None
    payout_mode: PayoutMode = PayoutMode.WAR


class NormalizeBetResponse(BaseModel):
    bet_unit: Optional[BetUnit] = None
    payout_mode: PayoutMode


class AllocateStrokesRequest(BaseModel):
    """Ad-hoc allocation for a group on a course ranking."""
    players: List[PlayerHandicap] = Field(..., min_length=1)
    holes: List[Hole] = Field(default_factory=list)
    allocation_format: AllocationFormat = AllocationFormat.USGA


class CreateSessionRequest(BaseModel):
    owner_id: UUID
    course: Course
    participants: List[SessionParticipant] = Field(..., min_length=1)
    game_type: GameType
    game_mode: Optional[GameMode] = None
    hole_selection: HoleSelection = HoleSelection.FULL
    payout_mode: PayoutMode = PayoutMode.WAR
    bet_settings: Optional[BetSettings] = None
    sides: Optional[List[Side]] = None


class ReassignRequest(BaseModel):
    """Manual correction of one participant's scanned row.

    Without `target_position` the participant cycles to the next row.
    """
    scan: ScanResult
    current: ReconciliationResult
    participant_index: int = Field(..., ge=0)
    target_position: Optional[int] = Field(None, ge=0)


class AddAliasRequest(BaseModel):
    alias: str = Field(..., min_length=1)


class HandicapEditRequest(BaseModel):
    handicap_index: Optional[float] = None
