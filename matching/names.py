"""Edit-distance closeness between stored player names and scanned names."""

from dataclasses import dataclass
from typing import Iterable, Optional

from rapidfuzz.distance import Levenshtein


def normalize_name(name: Optional[str]) -> str:
    """Case-fold and trim. None is treated as an empty name."""
    return (name or "").strip().casefold()


def name_distance(a: Optional[str], b: Optional[str]) -> int:
    """Levenshtein distance over normalized names. 0 means identical."""
    return Levenshtein.distance(normalize_name(a), normalize_name(b))


@dataclass(frozen=True)
class NameMatch:
    """Best stored name for a scanned name."""
    distance: int
    matched_name: str
    is_primary: bool


def best_name_match(primary: str, aliases: Iterable[str], scanned_name: str) -> NameMatch:
    """Minimum distance over `{primary} ∪ aliases`.

    Ties keep the primary name, then alias order.
    """
    best = NameMatch(name_distance(primary, scanned_name), primary, True)
    for alias in aliases:
        if best.distance == 0:
            break
        d = name_distance(alias, scanned_name)
        if d < best.distance:
            best = NameMatch(d, alias, False)
    return best


def participant_distance(participant, scanned_name: str) -> int:
    """Effective distance from a participant (name + aliases) to a scanned name."""
    return best_name_match(participant.name, participant.aliases, scanned_name).distance
