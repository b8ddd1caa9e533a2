from pydantic import BaseModel, Field, computed_field
from typing import Dict, List


class StrokeAllocation(BaseModel):
    """Derived view of where a player receives strokes. Never a source of truth.

    The hole lists are layered: a hole with three strokes appears in
    `double_stroke_holes` and `triple_stroke_holes`. Past 54 strokes only
    `strokes_per_hole` carries every stroke.
    """
    player_id: str
    strokes_received: int = Field(0, ge=0)
    strokes_by_hole: Dict[int, int] = Field(default_factory=dict)  # {1: 0, 2: 1, ...}

    @computed_field
    @property
    def gets_stroke_on_all_holes(self) -> bool:
        return self.strokes_received > 18

    @computed_field
    @property
    def single_stroke_holes(self) -> List[int]:
        """Holes flagged for one stroke. Empty once the player strokes every hole."""
        if self.gets_stroke_on_all_holes:
            return []
        return sorted(h for h, n in self.strokes_by_hole.items() if n == 1)

    @computed_field
    @property
    def double_stroke_holes(self) -> List[int]:
        return sorted(h for h, n in self.strokes_by_hole.items() if n >= 2)

    @computed_field
    @property
    def triple_stroke_holes(self) -> List[int]:
        return sorted(h for h, n in self.strokes_by_hole.items() if n >= 3)

    @computed_field
    @property
    def strokes_per_hole(self) -> List[int]:
        return self.as_list()

    @property
    def total_strokes(self) -> int:
        return sum(self.strokes_by_hole.values())

    def strokes_on(self, hole_number: int) -> int:
        return self.strokes_by_hole.get(hole_number, 0)

    def as_list(self) -> List[int]:
        """Strokes per hole as an 18-element list (index = hole - 1)."""
        return [self.strokes_by_hole.get(n, 0) for n in range(1, 19)]
