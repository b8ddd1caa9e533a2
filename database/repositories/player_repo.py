"""Reads and alias writes for the players.players table."""

import asyncpg
from typing import List, Optional
from uuid import UUID

from models import Player
from database.converters import merge_alias, player_from_row
from database.exceptions import NotFoundError


class PlayerRepositoryDB:
    """Async access to players. Also the alias writer used while reconciling scans."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_player(self, player_id: str) -> Optional[Player]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM players.players WHERE id = $1", UUID(player_id)
            )
            return player_from_row(row) if row else None

    async def list_players(self, owner_id: str) -> List[Player]:
        """An owner's players, self first, then by name."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM players.players
                   WHERE owner_id = $1
                   ORDER BY is_self DESC, name""",
                UUID(owner_id),
            )
            return [player_from_row(r) for r in rows]

    # ================================================================
    # Update
    # ================================================================

    async def add_alias(self, player_id: str, alias: str) -> bool:
        """Append an alias unless it matches the name or an existing alias.

        Returns True if the alias was stored.
        """
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                row = await conn.fetchrow(
                    "SELECT * FROM players.players WHERE id = $1 FOR UPDATE",
                    UUID(player_id),
                )
                if not row:
                    raise NotFoundError("Player", player_id)

                aliases = merge_alias(player_from_row(row), alias)
                if aliases is None:
                    return False

                await conn.execute(
                    """UPDATE players.players
                       SET aliases = $2, updated_at = NOW()
                       WHERE id = $1""",
                    UUID(player_id), aliases,
                )
                return True

    async def update_handicap(self, player_id: str, handicap_index: Optional[float]) -> None:
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                """UPDATE players.players
                   SET handicap_index = $2, updated_at = NOW()
                   WHERE id = $1""",
                UUID(player_id), handicap_index,
            )
            if result == "UPDATE 0":
                raise NotFoundError("Player", player_id)
