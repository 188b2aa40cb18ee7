"""Task Tracker API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskTrackerError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The lifespan owns process resources (DB manager, token maker) and hands
      them to requests through app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Importing tasktracker.schemas.* declares every record schema, so a
      malformed requirements tag stops the process before it serves traffic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasktracker.api.error_handlers import register_error_handlers
from tasktracker.api.routes import health, tasks, users
from tasktracker.config import get_settings
from tasktracker.infrastructure.database import DatabaseSessionManager
from tasktracker.infrastructure.observability import setup_logging
from tasktracker.infrastructure.token_maker import JWTTokenMaker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.token_maker = JWTTokenMaker(settings.token_symmetric_key)
    logger.info("Task Tracker API started")
    yield
    await app.state.db_manager.dispose()
    logger.info("Task Tracker API shutting down")


app = FastAPI(
    title="Task Tracker API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(tasks.router)

register_error_handlers(app)
