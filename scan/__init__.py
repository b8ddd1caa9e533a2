from .confidence import ConfidenceLevel, NameConfidence, ScanConfidence, to_level
from .normalize import assess_scan, entries_from_scan, normalize_scan
from .strategies import PlayerAliasWriter, ScanService

__all__ = [
    "ConfidenceLevel",
    "NameConfidence",
    "ScanConfidence",
    "to_level",
    "assess_scan",
    "entries_from_scan",
    "normalize_scan",
    "PlayerAliasWriter",
    "ScanService",
]
