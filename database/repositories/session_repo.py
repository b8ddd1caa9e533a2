"""Game sessions with their participants and course."""

import json
import asyncpg
from typing import Optional
from uuid import UUID

from models import Course, GameSession
from database.converters import (
    course_from_rows,
    participant_to_row,
    session_from_rows,
    session_to_row,
)
from database.exceptions import DuplicateError, IntegrityError


class SessionRepositoryDB:
    """Async access to games.sessions and games.session_participants."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    async def _load_course(self, conn, course_id) -> Optional[Course]:
        if course_id is None:
            return None
        course_row = await conn.fetchrow(
            "SELECT * FROM courses.courses WHERE id = $1", course_id
        )
        if not course_row:
            return None
        hole_rows = await conn.fetch(
            "SELECT * FROM courses.holes WHERE course_id = $1 ORDER BY hole_number",
            course_id,
        )
        tee_rows = await conn.fetch(
            "SELECT * FROM courses.tee_sets WHERE course_id = $1 ORDER BY name",
            course_id,
        )
        return course_from_rows(course_row, hole_rows, tee_rows)

    # ================================================================
    # Read
    # ================================================================

    async def get_course(self, course_id: str) -> Optional[Course]:
        async with self._pool.acquire() as conn:
            return await self._load_course(conn, UUID(course_id))

    async def get_session(self, session_id: str) -> Optional[GameSession]:
        """Session with participants (name and aliases from players) and course holes."""
        async with self._pool.acquire() as conn:
            session_row = await conn.fetchrow(
                "SELECT * FROM games.sessions WHERE id = $1", UUID(session_id)
            )
            if not session_row:
                return None
            participant_rows = await conn.fetch(
                """SELECT sp.*, p.name, p.aliases
                   FROM games.session_participants sp
                   JOIN players.players p ON p.id = sp.player_id
                   WHERE sp.session_id = $1
                   ORDER BY sp.position""",
                session_row["id"],
            )
            course = await self._load_course(conn, session_row["course_id"])
            return session_from_rows(session_row, participant_rows, course)

    # ================================================================
    # Create
    # ================================================================

    async def create_session(self, session: GameSession, owner_id: str) -> GameSession:
        """Insert a session and its participants. Returns the session with its new id."""
        data = session_to_row(session)
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    row = await conn.fetchrow(
                        """INSERT INTO games.sessions
                           (owner_id, course_id, hole_selection, game_type, game_mode,
                            payout_mode, bet_settings, sides)
                           VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                           RETURNING id""",
                        UUID(owner_id),
                        UUID(data["course_id"]) if data["course_id"] else None,
                        data["hole_selection"], data["game_type"], data["game_mode"],
                        data["payout_mode"],
                        json.dumps(data["bet_settings"]) if data["bet_settings"] else None,
                        json.dumps(data["sides"]),
                    )
                    rows = []
                    for position, p in enumerate(session.player_details):
                        player_id, *rest = participant_to_row(p, position)
                        rows.append((row["id"], UUID(player_id), *rest))
                    await conn.executemany(
                        """INSERT INTO games.session_participants
                           (session_id, player_id, position, handicap_index,
                            course_handicap, tee_name, tee_gender)
                           VALUES ($1, $2, $3, $4, $5, $6, $7)""",
                        rows,
                    )
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(f"A player appears twice in the session: {e}") from e
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(f"Session references a missing player or course: {e}") from e

        return session.model_copy(update={"id": str(row["id"])})
