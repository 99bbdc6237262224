"""FastAPI application factory."""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qrhunt.api.router import api_router
from qrhunt.config import settings
from qrhunt.core.errors import register_exception_handlers
from qrhunt.core.logging import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)
from qrhunt.core.rate_limit import rate_limiter
from qrhunt.core.tenancy import TenantResolutionMiddleware


configure_logging()

logger = structlog.get_logger()


async def _prune_rate_limits(interval: float) -> None:
    """Drop expired rate-limit windows every ``interval`` seconds."""
    while True:
        await asyncio.sleep(interval)
        removed = rate_limiter.prune()
        if removed:
            logger.debug("rate_limits_pruned", removed=removed)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
    )
    pruner = asyncio.create_task(_prune_rate_limits(settings.rate_limit_prune_interval))

    yield

    # Shutdown
    pruner.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await pruner
    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant QR scavenger hunt backend",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
        # Disable docs in production
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )

    cors_origins = settings.cors_origins
    if settings.is_development and not cors_origins:
        cors_origins = ["http://localhost:3000", "http://localhost:5173"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "X-Request-ID",
            settings.tenant_header,
        ],
    )

    # Middleware added last runs first: request ID, then logging, then tenant
    app.add_middleware(TenantResolutionMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    # Register exception handlers for RFC 7807 error responses
    register_exception_handlers(app)

    app.include_router(api_router)

    return app


app = create_app()
