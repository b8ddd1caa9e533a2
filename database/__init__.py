from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.repositories import PlayerRepositoryDB, SessionRepositoryDB
from database.exceptions import DatabaseError, NotFoundError, DuplicateError, IntegrityError

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "PlayerRepositoryDB",
    "SessionRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "DuplicateError",
    "IntegrityError",
]
