"""
FastAPI Application Entry Point.

Assembles the meeting notes API: request context middleware, optional
CORS, error envelopes, health probes and the /notes router.

    uvicorn meeting_notes.backend.main:app
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meeting_notes.backend.api import health
from meeting_notes.backend.api.v1 import router as api_v1_router
from meeting_notes.backend.core.config import get_app_config
from meeting_notes.backend.core.database import dispose_engine
from meeting_notes.backend.core.exception_handlers import register_exception_handlers
from meeting_notes.backend.core.logging import get_logger, setup_logging
from meeting_notes.backend.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None

# Response headers set by RequestContextMiddleware that browsers may read
EXPOSED_HEADERS = ["X-Request-ID", "X-Response-Time"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging on startup and release pooled connections on shutdown."""
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    logger.info(
        "Application starting",
        app_name=app_config.application.name,
        env=app_config.application.environment,
        version=app_config.application.version,
    )
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Application shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = get_app_config().application
    docs = app_settings.docs_enabled

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        debug=app_settings.debug,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)

    if app_settings.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors.origins,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["Content-Type", "X-Request-ID"],
            expose_headers=EXPOSED_HEADERS,
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    return app


def get_app() -> FastAPI:
    """Create the application on first use and cache it."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    """Resolve `app` lazily so importing this module never reads configuration."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
