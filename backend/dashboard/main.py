"""Main FastAPI application for the Deadlock stats dashboard."""

from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.core.config import get_global_settings
from dashboard.core.dependencies import close_core_container, get_core_container
from dashboard.core.http_errors import register_exception_handlers
from dashboard.core.logging import setup_logging
from dashboard.features.leaderboard.router import router as leaderboard_router
from dashboard.features.meta.router import router as meta_router
from dashboard.features.players.router import router as players_router

settings = get_global_settings()
setup_logging(settings.log_level, json_logs=not settings.debug)
logger = structlog.get_logger(__name__)

API_PREFIX = "/api/deadlock"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    container = get_core_container()
    logger.info(
        "Starting up Deadlock stats dashboard",
        environment=container.settings.environment,
        allow_mock_fallback=container.settings.allow_mock_fallback,
        api_key_configured=container.settings.deadlock_api_key is not None,
    )
    yield
    logger.info("Shutting down Deadlock stats dashboard")
    await close_core_container()


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "players",
        "description": "Player profile, recent matches and aggregates.",
    },
    {
        "name": "meta",
        "description": "Hero pick, win and ban rates and per-hero item statistics.",
    },
    {
        "name": "leaderboard",
        "description": "Regional leaderboards, optionally filtered by hero.",
    },
    {
        "name": "health",
        "description": "Health check endpoint.",
    },
]

# Create FastAPI application
app = FastAPI(
    title="Deadlock Stats Dashboard",
    description="""
    Player statistics, match history and meta data for Deadlock.

    Data comes from the public Deadlock API. When the live source fails and
    fallback is enabled, deterministic synthetic demo data is served instead;
    every payload reports its `source`.
    """,
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

register_exception_handlers(app)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(players_router, prefix=API_PREFIX)
app.include_router(meta_router, prefix=API_PREFIX)
app.include_router(leaderboard_router, prefix=API_PREFIX)


@app.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Reports whether the process is up and which data policy it runs with;
    it does not call the upstream API.
    """
    return {
        "status": "healthy",
        "message": "Application is running",
        "version": VERSION,
        "environment": settings.environment,
        "allowMockFallback": settings.allow_mock_fallback,
    }
