from fastapi import HTTPException, Request

from database.db_manager import DatabaseManager


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager.

    Answers 503 when the app started without a database pool.
    """
    db_manager = getattr(request.app.state, "db_manager", None)
    if db_manager is None:
        raise HTTPException(503, "Database is not available")
    return db_manager
