"""
Health check endpoint.

Reports database connectivity for load balancers; answers 503 when the database is
unreachable.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from botanical_buddy.shared.config.settings import get_settings
from botanical_buddy.shared.utils.helpers import utcnow

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get(
    "/health",
    summary="Basic Health Check",
    description="Service status and database connectivity",
    tags=["Health Check"],
)
async def health_check(request: Request) -> JSONResponse:
    db_health = await request.app.state.connection_manager.health_check()
    database_status = db_health["status"]
    healthy = database_status == "connected"

    if not healthy:
        logger.warning(f"Health check failed: database {database_status}")

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": utcnow().isoformat(),
            "database": database_status,
            "version": get_settings().APP_VERSION,
        },
    )
