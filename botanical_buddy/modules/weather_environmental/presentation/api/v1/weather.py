# 📄 File: botanical_buddy/modules/weather_environmental/presentation/api/v1/weather.py
#
# 🧭 Purpose (Layman Explanation):
# Shows today's weather and the recent daily weather record for one of the user's
# addresses.
#
# 🧪 Purpose (Technical Summary):
# Address-scoped weather endpoints mounted under /api/v1/addresses. Ownership of the
# address is enforced by WeatherService before the cache, database or provider are read.
#
# 🔗 Dependencies:
# - FastAPI router
# - weather_environmental WeatherService, OpenWeatherClient
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.api.v1.router (mounted at /api/v1/addresses)

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.weather_environmental.domain.services.weather_service import WeatherService
from botanical_buddy.modules.weather_environmental.infrastructure.external.openweather_client import (
    OpenWeatherClient,
)
from botanical_buddy.modules.weather_environmental.domain.models.daily_weather import (
    DailyWeather,
)
from botanical_buddy.shared.config.settings import get_settings
from botanical_buddy.shared.core.dependencies import CurrentUser, get_cache, get_current_user
from botanical_buddy.shared.core.exceptions import ExternalAPIError
from botanical_buddy.shared.core.responses import ApiResponse
from botanical_buddy.shared.infrastructure.cache.memory_cache import TTLCache
from botanical_buddy.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)

WEATHER_UNAVAILABLE = "The weather service is currently unavailable. Please try again later."

weather_router = APIRouter()


def get_weather_client(request: Request) -> OpenWeatherClient:
    return request.app.state.weather_client


def get_weather_service(
    session: AsyncSession = Depends(get_db_session),
    client: OpenWeatherClient = Depends(get_weather_client),
    cache: TTLCache = Depends(get_cache),
) -> WeatherService:
    return WeatherService(session, client, cache, ttl=get_settings().CACHE_WEATHER_TTL)


@weather_router.get(
    "/{address_id}/weather",
    response_model=ApiResponse[DailyWeather],
    summary="Current weather at an address",
    responses={
        400: {"description": "Address has no coordinates"},
        404: {"description": "Address not found"},
        502: {"description": "Weather service unavailable"},
    },
)
async def get_current_weather(
    address_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[DailyWeather]:
    try:
        weather = await service.current_weather(address_id, current_user.user_id)
    except ExternalAPIError as e:
        logger.error(f"Failed to retrieve weather for address {address_id}: {e.message}")
        raise ExternalAPIError(
            e.api_name,
            message="Failed to retrieve weather",
            api_status_code=e.api_status_code,
            details=WEATHER_UNAVAILABLE,
        ) from e
    return ApiResponse(data=weather)


@weather_router.get(
    "/{address_id}/weather/history",
    response_model=ApiResponse[List[DailyWeather]],
    summary="Daily weather history at an address",
    responses={404: {"description": "Address not found"}},
)
async def get_weather_history(
    address_id: UUID,
    days: int = Query(7, ge=1, le=90, description="Number of days to include, today included"),
    current_user: CurrentUser = Depends(get_current_user),
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[List[DailyWeather]]:
    history = await service.history(address_id, current_user.user_id, days)
    return ApiResponse(data=history, count=len(history))
