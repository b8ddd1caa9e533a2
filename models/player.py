from pydantic import Field, field_validator
from typing import List, Optional

from .base import BaseGolfModel

HANDICAP_MIN = -10
HANDICAP_MAX = 54
COURSE_HANDICAP_MIN = -20
COURSE_HANDICAP_MAX = 80


class Player(BaseGolfModel):
    """A golfer known to the owner. Aliases accumulate as scans discover name variants."""
    id: str
    name: str
    aliases: List[str] = Field(default_factory=list)
    handicap_index: Optional[float] = Field(None, ge=HANDICAP_MIN, le=HANDICAP_MAX)
    is_self: bool = False

    def known_names(self) -> List[str]:
        """Primary name followed by aliases."""
        return [self.name, *self.aliases]

    def has_name(self, candidate: str) -> bool:
        """Case-insensitive check against the name and every alias."""
        needle = candidate.strip().casefold()
        return any(n.strip().casefold() == needle for n in self.known_names())


class SessionParticipant(BaseGolfModel):
    """A player as configured for one session (tee, handicaps)."""
    player_id: str
    name: str
    aliases: List[str] = Field(default_factory=list)
    handicap_index: Optional[float] = Field(None, ge=HANDICAP_MIN, le=HANDICAP_MAX)
    course_handicap: Optional[float] = Field(None, ge=COURSE_HANDICAP_MIN, le=COURSE_HANDICAP_MAX)
    tee_name: Optional[str] = None
    tee_gender: Optional[str] = None  # "M" / "F"

    @field_validator('tee_gender')
    @classmethod
    def validate_tee_gender(cls, v):
        if v is not None and v not in ("M", "F"):
            raise ValueError(f"Tee gender '{v}' must be 'M' or 'F'")
        return v

    def known_names(self) -> List[str]:
        return [self.name, *self.aliases]

    @classmethod
    def from_player(
        cls,
        player: Player,
        *,
        course_handicap: Optional[float] = None,
        tee_name: Optional[str] = None,
        tee_gender: Optional[str] = None,
    ) -> "SessionParticipant":
        return cls(
            player_id=player.id,
            name=player.name,
            aliases=list(player.aliases),
            handicap_index=player.handicap_index,
            course_handicap=course_handicap,
            tee_name=tee_name,
            tee_gender=tee_gender,
        )
