"""lifegraph API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LifeGraphError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - Error handlers live in api/error_handlers.py, registered once here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lifegraph.api.error_handlers import register_error_handlers
from lifegraph.api.routes import boards, health
from lifegraph.config import get_settings
from lifegraph.infrastructure.observability import setup_logging
from lifegraph.infrastructure.storage import close_storage, init_storage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    await init_storage(settings)
    logger.info("lifegraph API started")
    yield
    await close_storage()
    logger.info("lifegraph API shutting down")


app = FastAPI(
    title="lifegraph API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(boards.router)

register_error_handlers(app)
