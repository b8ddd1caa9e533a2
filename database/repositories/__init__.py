from .player_repo import PlayerRepositoryDB
from .session_repo import SessionRepositoryDB

__all__ = ["PlayerRepositoryDB", "SessionRepositoryDB"]
