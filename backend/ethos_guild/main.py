"""Ethos Guild API — FastAPI application entry point.

Invariants:
    - Every router carries its own /api/v1 prefix and is included explicitly
    - GuildError subclasses become structured JSON bodies with their own status codes
    - Logging is configured and tables exist before the first request is served

Design Decisions:
    - Startup and engine disposal run in a lifespan context
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ethos_guild.api.error_handlers import register_error_handlers
from ethos_guild.api.routes import (
    artifacts, collabs, discover, events, health, orders, qr, reviews, venues,
    webhooks,
)
from ethos_guild.config import get_settings
from ethos_guild.infrastructure import database
from ethos_guild.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Ethos Guild API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Ethos Guild API shutting down")


app = FastAPI(
    title="Ethos Guild API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(artifacts.router)
app.include_router(reviews.router)
app.include_router(collabs.router)
app.include_router(orders.router)
app.include_router(webhooks.router)
app.include_router(events.router)
app.include_router(venues.router)
app.include_router(qr.router)
app.include_router(discover.router)

register_error_handlers(app)
