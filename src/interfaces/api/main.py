"""
Main FastAPI application module for The Good Corner API.

The API layer is the inbound HTTP adapter: routers translate requests
into use case calls and the registered handlers translate domain errors
back into HTTP responses.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from src.infrastructure.monitoring import setup_telemetry
from src.interfaces.api.exception_handlers import register_exception_handlers
from src.interfaces.api.v1.routers import ads, catalog, health, metrics, users
from src.shared.config.settings import get_settings
from src.shared.utils import configure_logging

logger = structlog.get_logger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """
    Manages application lifecycle events.

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    settings = get_settings()
    configure_logging(settings.monitoring.log_level)
    setup_telemetry(settings)
    # Database and cache connections are opened lazily on first use
    logger.info("application_started", environment=settings.environment)

    yield

    from src.interfaces.api.dependencies import shutdown_dependencies

    await shutdown_dependencies()


def create_application() -> FastAPI:
    """
    Creates and configures the FastAPI application instance.

    Returns:
        FastAPI: Configured FastAPI application
    """
    settings = get_settings()
    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "Classified ads backend. Publish, browse and search ads, "
            "and manage the categories, tags and users they refer to."
        ),
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(ads.router, prefix=f"{API_PREFIX}/ads", tags=["Ads"])
    app.include_router(
        catalog.categories_router,
        prefix=f"{API_PREFIX}/categories",
        tags=["Categories"],
    )
    app.include_router(
        catalog.tags_router, prefix=f"{API_PREFIX}/tags", tags=["Tags"]
    )
    app.include_router(users.router, prefix=f"{API_PREFIX}/users", tags=["Users"])
    app.include_router(
        metrics.router, prefix=f"{API_PREFIX}/metrics", tags=["Metrics"]
    )

    register_exception_handlers(app)

    return app


# Create the application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "src.interfaces.api.main:app",
        host=_settings.api.api_host,
        port=_settings.api.api_port,
        reload=_settings.api.api_reload,
        log_level="info",
    )
