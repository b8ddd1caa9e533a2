from enum import Enum
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional

from .base import BaseGolfModel
from .course import Course
from .player import SessionParticipant


class GameType(str, Enum):
    STROKE_PLAY = "stroke_play"
    MATCH_PLAY = "match_play"
    NASSAU = "nassau"
    SKINS = "skins"


class GameMode(str, Enum):
    INDIVIDUAL = "individual"      # everyone vs everyone
    HEAD_TO_HEAD = "head_to_head"  # 1 vs 1
    TEAMS = "teams"                # 2 vs 2


class BetUnit(str, Enum):
    MATCH = "match"
    HOLE = "hole"
    WINNER = "winner"
    STROKE_MARGIN = "stroke_margin"
    SKIN = "skin"


class PayoutMode(str, Enum):
    WAR = "war"  # players settle with each other
    POT = "pot"  # winner collects a fixed pot


class HoleSelection(str, Enum):
    FULL = "18"
    FRONT_9 = "front_9"
    BACK_9 = "back_9"

    def hole_numbers(self) -> List[int]:
        if self is HoleSelection.FRONT_9:
            return list(range(1, 10))
        if self is HoleSelection.BACK_9:
            return list(range(10, 19))
        return list(range(1, 19))


class Side(BaseModel):
    """A player or team competing as a unit."""
    side_id: str
    player_ids: List[str]


class NassauAmounts(BaseModel):
    front_cents: int = Field(..., ge=0)
    back_cents: int = Field(..., ge=0)
    overall_cents: int = Field(..., ge=0)


class SideBets(BaseModel):
    """Optional "junk" bets paid per occurrence."""
    greenies: bool = False
    sandies: bool = False
    birdies: bool = False
    amount_cents: int = Field(0, ge=0)

    @property
    def any_enabled(self) -> bool:
        return self.greenies or self.sandies or self.birdies


class BetSettings(BaseGolfModel):
    enabled: bool = False
    bet_per_unit_cents: int = Field(0, ge=0)
    bet_unit: Optional[BetUnit] = None
    carryover: Optional[bool] = None       # skins only
    press_enabled: Optional[bool] = None   # nassau only
    nassau_amounts: Optional[NassauAmounts] = None
    side_bets: Optional[SideBets] = None


class FormatSelection(BaseModel):
    """What settlement consumes: `{game_mode, bet_unit, payout_mode, side_assignments}`."""
    game_mode: GameMode
    bet_unit: Optional[BetUnit] = None
    payout_mode: PayoutMode = PayoutMode.WAR
    side_assignments: List[Side] = Field(default_factory=list)


class GameSession(BaseGolfModel):
    """A configured round: course, participants, handicaps and bet rules."""
    id: Optional[str] = None
    course: Optional[Course] = None
    hole_selection: HoleSelection = HoleSelection.FULL
    game_type: GameType = GameType.STROKE_PLAY
    game_mode: GameMode = GameMode.INDIVIDUAL
    payout_mode: PayoutMode = PayoutMode.WAR
    player_details: List[SessionParticipant] = Field(default_factory=list)
    sides: List[Side] = Field(default_factory=list)
    bet_settings: Optional[BetSettings] = None

    @model_validator(mode='after')
    def validate_sides_reference_participants(self):
        known = {p.player_id for p in self.player_details}
        for side in self.sides:
            unknown = [pid for pid in side.player_ids if pid not in known]
            if unknown:
                raise ValueError(f"Side '{side.side_id}' references unknown players: {unknown}")
        return self

    def get_participant(self, player_id: str) -> Optional[SessionParticipant]:
        for p in self.player_details:
            if p.player_id == player_id:
                return p
        return None
