"""FastAPI application factory.

Creates and configures the FastAPI application with routers and exception
handlers. Authentication endpoints live under ``/api/auth``; the health
check is at ``/health``.

Run with uvicorn in factory mode::

    uvicorn warden.presentation.api.app:create_app --factory
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from warden import __version__
from warden.presentation.api.dependencies import (
    create_engine,
    create_session_maker,
    create_token_signer,
)
from warden.presentation.api.exception_handlers import setup_exception_handlers
from warden.presentation.api.routers import auth_router
from warden_config.settings import Settings, get_settings
from warden_identity.infrastructure.persistence.sqlalchemy import IdentityBase

logger = logging.getLogger(__name__)

API_AUTH_PREFIX = "/api/auth"


@lru_cache(maxsize=1)
def _configure_logging(log_level_str: str = "INFO") -> None:
    """Configure application logging.

    Sets up logging for the warden packages with:
    - Console output with timestamps and module names
    - Configurable log level for warden modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    for name in ("warden", "warden_identity", "warden_config"):
        logging.getLogger(name).setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Warden API v%s...", __version__)
    engine: AsyncEngine = app.state.engine
    await _init_database_schema(engine)
    yield

    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down Warden API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    logger.info("Initializing database schema...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(IdentityBase.metadata.create_all)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    logger.info("Database schema initialized successfully")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Configure logging on first app creation (not on module import)
    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Password and federated authentication with short-lived "
        "access tokens and revocable refresh tokens.",
        version=__version__,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
    )

    # The signing key is fixed here for the lifetime of the process
    app.state.settings = settings
    app.state.token_signer = create_token_signer(settings)
    app.state.engine = create_engine(settings)
    app.state.session_maker = create_session_maker(app.state.engine)

    setup_exception_handlers(app)

    app.include_router(auth_router, prefix=API_AUTH_PREFIX, tags=["Authentication"])

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
        }

    return app
