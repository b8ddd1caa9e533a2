from typing import Protocol

from models import ScanResult


class ScanService(Protocol):
    """Interface for the OCR/vision collaborator that reads a scorecard image.

    Any class with a matching method signature satisfies this protocol.
    """

    def scan(self, image_path: str) -> ScanResult:
        """Return player names and hole-by-hole scores read from the image."""
        ...


class PlayerAliasWriter(Protocol):
    """Persistence side channel for name variants discovered while reconciling."""

    async def add_alias(self, player_id: str, alias: str) -> bool:
        """Store `alias` for the player. Returns True if it was new."""
        ...
