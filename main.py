# ============================================================================
# WEBCHAT API - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: Bootstrap, dependency wiring and HTTP middleware
# ============================================================================
"""
Webchat API Main Application

FastAPI application that:
1. Validates the environment before serving
2. Opens the PostgreSQL pool and the Redis cache client
3. Exposes health, liveness and readiness endpoints

Usage:
    uvicorn main:create_app --factory --host 0.0.0.0 --port 3000
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from __version__ import __version__, BUILD_DATE, CODENAME, SERVICE_NAME
from api.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from core.config import (
    AppDefaults,
    get_defaults,
    get_env,
    get_env_bool,
    get_env_int,
    reset_defaults,
    validate_environment,
)
from core.logging import configure_logging, get_logger, ComponentType
from infrastructure.cache import CacheService, RedisStore
from infrastructure.database import init_database, close_database

# Health check system
from health import HealthAggregator, HealthCheckRegistry, health_router, set_health_services
from health.checks import CacheCheck, DatabaseCheck

logger = get_logger(__name__, ComponentType.BOOTSTRAP)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Initializes services on startup, cleans up on shutdown.
    """
    logger.info(f"Starting {CODENAME} v{__version__} (Build {BUILD_DATE})")

    reset_defaults()
    defaults = get_defaults()

    # Pool connections are established in the background; an unreachable
    # database shows up as an unhealthy probe rather than a failed start.
    database = await init_database(defaults.database)

    store = RedisStore.from_config(defaults.cache)
    cache = CacheService(store, defaults.cache)
    app.state.cache = cache

    registry = HealthCheckRegistry([
        DatabaseCheck(database),
        CacheCheck(cache, defaults.health),
    ])
    set_health_services(HealthAggregator(registry, config=defaults.health))
    logger.info(f"Health checks initialized ({len(registry)} checks registered)")

    yield

    logger.info(f"Shutting down {CODENAME}...")

    set_health_services(None)
    await store.close()
    await close_database()

    logger.info(f"{CODENAME} stopped")


# Root endpoint
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": __version__,
        "build_date": BUILD_DATE,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
    }


def load_app_config() -> AppDefaults:
    """
    Validate the environment, then read the application settings.

    Logging is configured from the raw env first so validation warnings
    and errors are formatted like every other record.

    Raises:
        EnvironmentValidationError: On missing or malformed variables
    """
    configure_logging(
        level=get_env("LOG_LEVEL", "INFO"),
        json_output=get_env("LOG_FORMAT", "text").lower() == "json",
    )
    validate_environment()
    return AppDefaults.from_env()


def create_app(app_config: Optional[AppDefaults] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_config: Application settings (validated from the env if None)
    """
    if app_config is None:
        app_config = load_app_config()

    app = FastAPI(
        title=CODENAME,
        description="REST backend for the web-chat application",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware (last added runs first)
    app.add_middleware(SecurityHeadersMiddleware, hsts=app_config.is_production)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_config.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    # Health check routes (/health, /health/live, /health/ready, ...)
    app.include_router(health_router)
    app.add_api_route("/", root, methods=["GET"])

    return app


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    # Settings are validated inside the factory
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=get_env("HOST", "0.0.0.0"),
        port=get_env_int("PORT", 3000),
        reload=get_env_bool("RELOAD", default=False),
    )
