"""Turn the scan service's payload into entries the reconciler can use."""

from typing import List, Optional, Tuple

from config import Config
from models import ScannedPlayerEntry, ScannedScore, ScanResult
from scan.confidence import NameConfidence, ScanConfidence, to_level

MAX_STROKES = 20


def entries_from_scan(scan: ScanResult) -> List[ScannedPlayerEntry]:
    """One entry per scanned row, indexed in scan order.

    Unreadable cells (`score: None`), holes outside 1-18 and impossible stroke
    counts are dropped. A hole read twice keeps its first value.
    """
    entries = []
    for index, row in enumerate(scan.players):
        scores: List[ScannedScore] = []
        seen = set()
        for cell in row.scores:
            if cell.score is None or not 1 <= cell.hole <= 18:
                continue
            if not 1 <= cell.score <= MAX_STROKES or cell.hole in seen:
                continue
            seen.add(cell.hole)
            scores.append(ScannedScore(hole_number=cell.hole, strokes=cell.score))
        scores.sort(key=lambda s: s.hole_number)
        entries.append(ScannedPlayerEntry(
            index=index,
            name=row.name.strip(),
            name_confidence=row.name_confidence,
            scores=scores,
        ))
    return entries


def assess_scan(scan: ScanResult, review_threshold: Optional[float] = None) -> ScanConfidence:
    """Flag low-confidence names and count cells the service could not read."""
    threshold = Config.NAME_REVIEW_CONFIDENCE if review_threshold is None else review_threshold
    names = []
    review: List[str] = []
    unreadable = 0
    for index, row in enumerate(scan.players):
        needs_review = row.name_confidence < threshold or not row.name.strip()
        names.append(NameConfidence(
            scanned_index=index,
            name=row.name.strip(),
            confidence=row.name_confidence,
            level=to_level(row.name_confidence),
            needs_review=needs_review,
        ))
        if needs_review:
            review.append(f"players[{index}].name")
        unreadable += sum(1 for cell in row.scores if cell.score is None)
    return ScanConfidence(names=names, unreadable_cells=unreadable, fields_needing_review=review)


def normalize_scan(scan: ScanResult) -> Tuple[List[ScannedPlayerEntry], ScanConfidence]:
    return entries_from_scan(scan), assess_scan(scan)
