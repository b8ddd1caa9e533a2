import asyncpg

from database.repositories import PlayerRepositoryDB, SessionRepositoryDB


class DatabaseManager:
    """Groups the repositories that share one asyncpg pool."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool
        self.players = PlayerRepositoryDB(pool)
        self.sessions = SessionRepositoryDB(pool)
