"""Knowledge Base API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map KnowledgeBaseError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Group store initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py and are registered here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from knowledge_base.api.error_handlers import register_error_handlers
from knowledge_base.api.routes import health, url_groups
from knowledge_base.config import get_settings
from knowledge_base.infrastructure.observability import setup_logging
from knowledge_base.infrastructure.store import init_group_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_group_store(settings)
    logger.info("Knowledge base API started")
    yield
    logger.info("Knowledge base API shutting down")


app = FastAPI(
    title="Knowledge Base API", version="1.0.0", lifespan=lifespan,
)

# CORS - configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes - explicit registration
app.include_router(health.router)
app.include_router(url_groups.router)

register_error_handlers(app)
