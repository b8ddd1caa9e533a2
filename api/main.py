"""FastAPI application for the Scandicap session engine."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Config
from database.connection import db
from database.db_manager import DatabaseManager
from games.formats import GameFormatError
from utils.logger import setup_app_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool on startup, close on shutdown."""
    await db.initialize(dsn=Config.DATABASE_URL)
    app.state.db_manager = DatabaseManager(db.pool)
    yield
    await db.close()


def create_app() -> FastAPI:
    setup_app_logging()

    app = FastAPI(
        title="Scandicap Session API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GameFormatError)
    async def game_format_error(request: Request, exc: GameFormatError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    from api.routers import formats, players, sessions, strokes
    app.include_router(formats.router, prefix="/api/formats", tags=["formats"])
    app.include_router(strokes.router, prefix="/api/strokes", tags=["strokes"])
    app.include_router(players.router, prefix="/api/players", tags=["players"])
    app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
