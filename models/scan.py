from pydantic import BaseModel, Field
from typing import List, Optional


# --- OCR collaborator payload ---

class ScannedHoleValue(BaseModel):
    """One cell read off the card. `score` is None when the cell was unreadable or blank."""
    hole: int
    score: Optional[int] = None
    confidence: float = Field(1.0, ge=0.0, le=1.0)


class ScannedPlayerRow(BaseModel):
    """One player row as returned by the scan service."""
    name: str = ""
    name_confidence: float = Field(1.0, ge=0.0, le=1.0)
    scores: List[ScannedHoleValue] = Field(default_factory=list)


class ScanResult(BaseModel):
    """Raw scan payload: `{course_name, date, players: [...]}`."""
    course_name: Optional[str] = None
    date: Optional[str] = None
    players: List[ScannedPlayerRow] = Field(default_factory=list)


# --- Engine input ---

class ScannedScore(BaseModel):
    hole_number: int = Field(..., ge=1, le=18)
    strokes: int = Field(..., ge=1, le=20)


class ScannedPlayerEntry(BaseModel):
    """A cleaned scanned row, indexed in scan order. Discarded after reconciliation."""
    index: int = Field(..., ge=0)
    name: str
    name_confidence: float = Field(1.0, ge=0.0, le=1.0)
    scores: List[ScannedScore] = Field(default_factory=list)

    def total_strokes(self) -> Optional[int]:
        if not self.scores:
            return None
        return sum(s.strokes for s in self.scores)

    def strokes_for_hole(self, hole_number: int) -> Optional[int]:
        for s in self.scores:
            if s.hole_number == hole_number:
                return s.strokes
        return None
