"""Scouting API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ScoutingError to the {status, message, error} envelope
    - CORS configured from settings (FRONTEND_URL + CORS_ORIGINS)
    - Both database engines created on startup and disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Legacy statistics engine is optional; the app starts without it
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scouting.api.error_handlers import register_error_handlers
from scouting.api.routes import (
    clubs, health, internal, matches, players, profiles, statistics, users,
)
from scouting.config import get_settings
from scouting.infrastructure.database import close_db, init_db
from scouting.infrastructure.observability import setup_logging
from scouting.infrastructure.statistics_source import (
    close_statistics_source, init_statistics_source,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_statistics_source(settings.legacy_database_url)
    logger.info("Scouting API started")
    yield
    logger.info("Scouting API shutting down")
    await close_statistics_source()
    await close_db()


app = FastAPI(title="Scouting API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "x-api-key"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(matches.router)
app.include_router(internal.router)
app.include_router(clubs.router)
app.include_router(players.router)
app.include_router(profiles.router)
app.include_router(statistics.router)
