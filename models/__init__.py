from .base import BaseGolfModel
from .allocation import StrokeAllocation
from .course import Course, CourseHoleDifficulty, Hole, HoleDifficulty, TeeSet
from .player import Player, SessionParticipant
from .scan import ScannedHoleValue, ScannedPlayerEntry, ScannedPlayerRow, ScannedScore, ScanResult
from .session import (
    BetSettings,
    BetUnit,
    FormatSelection,
    GameMode,
    GameSession,
    GameType,
    HoleSelection,
    NassauAmounts,
    PayoutMode,
    Side,
    SideBets,
)

__all__ = [
    "BaseGolfModel",
    "StrokeAllocation",
    "Course",
    "CourseHoleDifficulty",
    "Hole",
    "HoleDifficulty",
    "TeeSet",
    "Player",
    "SessionParticipant",
    "ScannedHoleValue",
    "ScannedPlayerEntry",
    "ScannedPlayerRow",
    "ScannedScore",
    "ScanResult",
    "BetSettings",
    "BetUnit",
    "FormatSelection",
    "GameMode",
    "GameSession",
    "GameType",
    "HoleSelection",
    "NassauAmounts",
    "PayoutMode",
    "Side",
    "SideBets",
]
