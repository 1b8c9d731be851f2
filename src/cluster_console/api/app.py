"""FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from cluster_console.api.middleware.correlation import CorrelationIdMiddleware
from cluster_console.api.routes import health_routes, session_routes
from cluster_console.config import get_settings, Settings


logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        "application_starting",
        environment=settings.environment.value,
        ambari_url=settings.ambari.base_url,
        simulate=settings.console.simulate,
    )

    yield

    logger.info("application_shutdown_complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Cluster Console",
        description="Blueprint-driven cluster provisioning sessions",
        version="1.0.0",
        docs_url=f"{settings.api.prefix}/docs",
        openapi_url=f"{settings.api.prefix}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(CorrelationIdMiddleware)

    # Routes
    app.include_router(health_routes.router)
    if settings.observability.metrics_enabled:
        app.include_router(health_routes.metrics_router)
    app.include_router(session_routes.router, prefix=settings.api.prefix)

    return app
