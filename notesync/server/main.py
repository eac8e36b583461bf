"""Notes API — FastAPI application factory for the reference notes service.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map NotesError → structured JSON responses
    - app.state.db and app.state.settings are set before the first request
    - Tables created on startup via lifespan context manager

Design Decisions:
    - create_app() factory: tests inject an in-memory database manager
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from notesync.config import Settings, get_settings
from notesync.infrastructure.database import DatabaseSessionManager
from notesync.infrastructure.observability import setup_logging
from notesync.server.error_handlers import register_error_handlers
from notesync.server.routes import auth, health, notes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    await app.state.db.create_all()
    logger.info("Notes API started")
    yield
    await app.state.db.dispose()
    logger.info("Notes API shutting down")


def create_app(
    settings: Settings | None = None,
    db: DatabaseSessionManager | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Notes API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = db or DatabaseSessionManager(settings.server_database_url)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(notes.router)
    register_error_handlers(app)
    return app
