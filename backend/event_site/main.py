"""Event Site API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EventSiteError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Uploaded files are served by the front-end host, not mounted here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from event_site.api.error_handlers import register_error_handlers
from event_site.api.routes import (
    album, auth, background_images, content, gifts, health, purchase, rsvp,
    sales, site_config, story_events,
)
from event_site.config import get_settings
from event_site.infrastructure import database
from event_site.infrastructure.observability import setup_logging

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
    logger.info("Event Site API started")
    yield
    logger.info("Event Site API shutting down")
    if database.db_manager is not None:
        await database.db_manager.dispose()


app = FastAPI(
    title="Event Site API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(purchase.router)
app.include_router(gifts.router)
app.include_router(album.router)
app.include_router(story_events.router)
app.include_router(content.router)
app.include_router(rsvp.router)
app.include_router(background_images.router)
app.include_router(site_config.router)
app.include_router(sales.router)
