from enum import Enum
from pydantic import Field
from typing import List

from models.base import BaseGolfModel


class ConfidenceLevel(str, Enum):
    """Human-readable confidence buckets."""
    HIGH = "high"          # >= 0.85
    MEDIUM = "medium"      # >= 0.60
    LOW = "low"            # >= 0.30
    VERY_LOW = "very_low"  # < 0.30


def to_level(score: float) -> ConfidenceLevel:
    if score >= 0.85:
        return ConfidenceLevel.HIGH
    elif score >= 0.60:
        return ConfidenceLevel.MEDIUM
    elif score >= 0.30:
        return ConfidenceLevel.LOW
    return ConfidenceLevel.VERY_LOW


class NameConfidence(BaseGolfModel):
    """How sure the scan service was about one player name."""
    scanned_index: int = Field(..., ge=0)
    name: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    level: ConfidenceLevel
    needs_review: bool = False


class ScanConfidence(BaseGolfModel):
    """Name confidence for a whole scan plus the holes that were dropped as unreadable."""
    names: List[NameConfidence] = Field(default_factory=list)
    unreadable_cells: int = 0
    fields_needing_review: List[str] = Field(default_factory=list)
