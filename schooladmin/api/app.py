# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the school admin API.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from schooladmin import __version__
from schooladmin.api.routes import health
from schooladmin.api.v1 import router as v1_router
from schooladmin.core.config import get_settings
from schooladmin.infrastructure.database import close_database, init_database
from schooladmin.infrastructure.identity import IdentityProviderClient
from schooladmin.utils.logging import bind_context, clear_context, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Initializes and cleans up:
    - Logging
    - Database engine and session factory
    - Identity provider HTTP client

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(
        "Starting school admin API",
        extra={"environment": settings.environment, "debug": settings.debug},
    )

    # =========================================================================
    # Startup
    # =========================================================================

    try:
        await init_database(settings)
        logger.info("Database connection initialized")
    except Exception as e:
        logger.warning("Failed to initialize database connection: %s", str(e))

    app.state.identity_client = IdentityProviderClient.from_settings(settings.identity)
    logger.info("Identity provider client initialized: %s", settings.identity.api_url)

    yield

    # =========================================================================
    # Shutdown
    # =========================================================================

    try:
        await app.state.identity_client.close()
        logger.info("Identity provider client closed")
    except Exception as e:
        logger.warning("Error closing identity provider client: %s", str(e))

    try:
        await close_database()
        logger.info("Database connection closed")
    except Exception as e:
        logger.warning("Error closing database connection: %s", str(e))

    logger.info("Shutting down school admin API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="School Admin API",
        description="Administration backend for school records and identity-backed accounts",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # =========================================================================
    # Middleware
    # =========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        """Attach request id and actor to every log line of the request."""
        clear_context()
        bind_context(
            request_id=request.headers.get("X-Request-Id") or uuid4().hex,
            actor_id=request.headers.get("X-Actor-Id"),
        )
        return await call_next(request)

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app
