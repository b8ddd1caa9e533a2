from pydantic import BaseModel, Field, model_validator
from typing import Dict, List, Optional

from .base import BaseGolfModel


class Hole(BaseGolfModel):
    """A single hole. `hcp` is the stroke index (1 = hardest)."""
    number: int = Field(..., ge=1, le=18)
    par: Optional[int] = Field(None, ge=3, le=6)
    hcp: Optional[int] = Field(None, ge=1, le=18)
    yardage: Optional[int] = Field(None, ge=0)

    @model_validator(mode='before')
    @classmethod
    def accept_handicap_alias(cls, data):
        # Stored course records use either "hcp" or "handicap" for the stroke index
        if isinstance(data, dict) and data.get("hcp") is None and data.get("handicap") is not None:
            data = {**data, "hcp": data["handicap"]}
        return data


class TeeSet(BaseGolfModel):
    """Tee box ratings. Front/back values are used for 9-hole rounds when present."""
    name: str
    gender: Optional[str] = None
    rating: Optional[float] = Field(None, ge=55.0, le=85.0)
    slope: Optional[float] = Field(None, ge=55, le=155)
    front_rating: Optional[float] = Field(None, ge=25.0, le=45.0)
    front_slope: Optional[float] = Field(None, ge=55, le=155)
    back_rating: Optional[float] = Field(None, ge=25.0, le=45.0)
    back_slope: Optional[float] = Field(None, ge=55, le=155)


class Course(BaseGolfModel):
    """Golf course with its holes and tee sets."""
    id: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = None
    rating: Optional[float] = Field(None, ge=55.0, le=85.0)
    slope: Optional[float] = Field(None, ge=55, le=155)
    holes: List[Hole] = Field(default_factory=list)
    tee_sets: List[TeeSet] = Field(default_factory=list)

    def get_hole(self, number: int) -> Optional[Hole]:
        """Get a hole by its number (1-18)."""
        for hole in self.holes:
            if hole.number == number:
                return hole
        return None

    def get_tee_set(self, name: Optional[str], gender: Optional[str] = None) -> Optional[TeeSet]:
        """Find a tee set by name (case-insensitive), preferring a gender match."""
        if not name:
            return None
        candidates = [t for t in self.tee_sets if t.name.lower() == name.lower()]
        if not candidates:
            return None
        if gender:
            for tee in candidates:
                if tee.gender == gender:
                    return tee
        return candidates[0]

    def par_for_holes(self, hole_numbers: List[int]) -> int:
        """Sum par over the given holes, defaulting to par 4 where unknown."""
        total = 0
        for n in hole_numbers:
            hole = self.get_hole(n)
            total += hole.par if hole and hole.par is not None else 4
        return total

    @property
    def par(self) -> int:
        return self.par_for_holes(list(range(1, 19)))


class HoleDifficulty(BaseModel):
    """One entry of a course's difficulty ranking."""
    hole_number: int = Field(..., ge=1, le=18)
    hcp: int = Field(..., ge=1)
    estimated: bool = False  # hcp fell back to the hole number


class CourseHoleDifficulty(BaseModel):
    """18 holes sorted hardest first (ascending hcp, ties by hole number)."""
    holes: List[HoleDifficulty]

    @model_validator(mode='after')
    def validate_ranking(self):
        numbers = [h.hole_number for h in self.holes]
        if len(numbers) != 18:
            raise ValueError(f"Difficulty ranking needs 18 holes, got {len(numbers)}")
        if len(numbers) != len(set(numbers)):
            raise ValueError("Hole numbers in a difficulty ranking must be unique")
        self.holes = sorted(self.holes, key=lambda h: (h.hcp, h.hole_number))
        return self

    @property
    def is_estimated(self) -> bool:
        """True when any hole's difficulty came from the hole-number fallback."""
        return any(h.estimated for h in self.holes)

    @property
    def estimated_holes(self) -> List[int]:
        return sorted(h.hole_number for h in self.holes if h.estimated)

    def hardest(self, count: int) -> List[int]:
        """Hole numbers of the `count` hardest holes, in difficulty order."""
        return [h.hole_number for h in self.holes[:count]]

    def as_dict(self) -> Dict[int, int]:
        return {h.hole_number: h.hcp for h in self.holes}

    @classmethod
    def from_course(cls, course: Optional[Course]) -> "CourseHoleDifficulty":
        """Build the ranking for holes 1-18, falling back to hcp = hole number."""
        entries = []
        for number in range(1, 19):
            hole = course.get_hole(number) if course else None
            if hole is not None and hole.hcp is not None:
                entries.append(HoleDifficulty(hole_number=number, hcp=hole.hcp))
            else:
                entries.append(HoleDifficulty(hole_number=number, hcp=number, estimated=True))
        return cls(holes=entries)
