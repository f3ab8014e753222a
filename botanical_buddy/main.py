# 📄 File: botanical_buddy/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts Botanical Buddy, connects the database, the plant
# encyclopedia and the weather service, and makes everything ready to answer the app.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory. The lifespan owns every process-wide resource (database
# engine and sessions, lookup cache, external API clients) and stores it on app.state;
# create_app wires middleware, exception handlers, the rate limiter and routers.
#
# 🔗 Dependencies:
# - FastAPI framework
# - slowapi rate limiter
# - botanical_buddy.shared (config, database, cache, external clients, logging)
# - botanical_buddy.api (routers, middleware)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - tests (create_app with TestClient)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from botanical_buddy.api.middleware.error_handling import (
    ErrorHandlingMiddleware,
    register_exception_handlers,
)
from botanical_buddy.api.middleware.logging import REQUEST_ID_HEADER, RequestLoggingMiddleware
from botanical_buddy.api.v1.health import health_router
from botanical_buddy.api.v1.router import api_v1_router
from botanical_buddy.modules.plant_library.infrastructure.external.trefle_client import TrefleClient
from botanical_buddy.modules.weather_environmental.infrastructure.external.openweather_client import (
    OpenWeatherClient,
)
from botanical_buddy.shared.config.settings import get_settings
from botanical_buddy.shared.core.dependencies import limiter
from botanical_buddy.shared.infrastructure.cache.memory_cache import TTLCache
from botanical_buddy.shared.infrastructure.database.connection import DatabaseConnectionManager
from botanical_buddy.shared.infrastructure.database.session import DatabaseSessionManager
from botanical_buddy.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Creates the database managers, the lookup cache and the external API clients on
    startup and releases them on shutdown.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(f"🌱 {settings.APP_NAME} starting up ({settings.ENVIRONMENT})...")

    connection_manager = DatabaseConnectionManager(settings)
    await connection_manager.initialize()
    app.state.connection_manager = connection_manager
    app.state.session_manager = DatabaseSessionManager(connection_manager)
    logger.info("✅ Database connection initialized")

    app.state.cache = TTLCache()

    trefle_client = TrefleClient(
        base_url=settings.TREFLE_API_URL,
        api_token=settings.TREFLE_API_TOKEN,
        timeout=settings.EXTERNAL_API_TIMEOUT,
    )
    weather_client = OpenWeatherClient(
        base_url=settings.OPENWEATHER_API_URL,
        api_key=settings.OPENWEATHER_API_KEY,
        timeout=settings.EXTERNAL_API_TIMEOUT,
    )
    app.state.trefle_client = trefle_client
    app.state.weather_client = weather_client
    logger.info("✅ External API clients initialized")

    try:
        yield
    finally:
        logger.info(f"🔄 {settings.APP_NAME} shutting down...")
        await trefle_client.close()
        await weather_client.close()
        app.state.cache.clear()
        await connection_manager.close()
        logger.info("✅ Shutdown complete")


def create_app() -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    # Last added runs outermost
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    # =========================================================================
    # EXCEPTION HANDLERS AND RATE LIMITING
    # =========================================================================

    app.state.limiter = limiter
    register_exception_handlers(app)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(health_router)
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "health_check": "/health",
            "api_base": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_app()


def main():
    """Run the development server."""
    settings = get_settings()
    uvicorn.run(
        "botanical_buddy.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
