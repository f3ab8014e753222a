# 📄 File: botanical_buddy/modules/weather_environmental/domain/services/weather_service.py
#
# 🧭 Purpose (Layman Explanation):
# Tells users today's weather at each of their addresses, checking the weather service
# at most once per address per day and keeping a daily record for plant-care history.
#
# 🧪 Purpose (Technical Summary):
# Three-level read-through lookup: in-process TTLCache (1h), then the persisted
# weather_data row for today (UTC), then OpenWeather. Provider results are stored with a
# conflict-ignoring insert and re-read, so racing first fetches share one row. Address
# ownership is checked before any level is consulted.
#
# 🔗 Dependencies:
# - weather_environmental OpenWeatherClient and WeatherDataRepositoryImpl
# - plant_management AddressRepository (ownership)
# - botanical_buddy.shared.infrastructure.cache.memory_cache.TTLCache
#
# 🔄 Connected Modules / Calls From:
# - weather_environmental presentation weather router

import logging
from datetime import date, timedelta
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.plant_management.infrastructure.database.models import AddressModel
from botanical_buddy.modules.plant_management.infrastructure.database.repositories import (
    AddressRepository,
)
from botanical_buddy.modules.weather_environmental.infrastructure.database.weather_repository_impl import (
    WeatherDataRepositoryImpl,
)
from botanical_buddy.modules.weather_environmental.infrastructure.external.openweather_client import (
    OpenWeatherClient,
)
from botanical_buddy.modules.weather_environmental.domain.models.daily_weather import (
    DailyWeather,
)
from botanical_buddy.shared.core.exceptions import BadRequestError
from botanical_buddy.shared.infrastructure.cache.memory_cache import TTLCache
from botanical_buddy.shared.utils.helpers import utc_today

logger = logging.getLogger(__name__)

DEFAULT_WEATHER_TTL = 60 * 60
NO_COORDINATES_MESSAGE = "Address has no coordinates"


class WeatherService:
    """Daily weather per owned address."""

    def __init__(
        self,
        session: AsyncSession,
        client: OpenWeatherClient,
        cache: TTLCache,
        ttl: float = DEFAULT_WEATHER_TTL,
    ):
        self.addresses = AddressRepository(session)
        self.weather = WeatherDataRepositoryImpl(session)
        self.client = client
        self.cache = cache
        self.ttl = ttl

    async def current_weather(self, address_id: UUID, user_id: UUID) -> DailyWeather:
        """
        Today's weather for an address the caller owns.

        Raises:
            NotFoundError: Address missing or not owned
            BadRequestError: Address has no coordinates
            ExternalAPIError: Provider call failed (nothing is stored or cached)
        """
        address = await self.addresses.get_owned_or_404(address_id, user_id)
        if address.latitude is None or address.longitude is None:
            raise BadRequestError(NO_COORDINATES_MESSAGE)

        today = utc_today()
        cache_key = ("weather", address_id, today)

        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        row = await self.weather.get_for_day(address_id, today)
        if row is None:
            row = await self._fetch_and_store(address, today)
        else:
            logger.debug(f"Weather for address {address_id} on {today} served from database")

        weather = DailyWeather.model_validate(row)
        self.cache.set(cache_key, weather, self.ttl)
        return weather

    async def history(self, address_id: UUID, user_id: UUID, days: int = 7) -> List[DailyWeather]:
        """Persisted daily rows for the last ``days`` days, newest first."""
        await self.addresses.get_owned_or_404(address_id, user_id)
        since = utc_today() - timedelta(days=days - 1)
        rows = await self.weather.list_since(address_id, since)
        return [DailyWeather.model_validate(row) for row in rows]

    async def _fetch_and_store(self, address: AddressModel, day: date):
        logger.info(f"Fetching weather from OpenWeather for address {address.id}")
        current = await self.client.current_weather(address.latitude, address.longitude)
        return await self.weather.insert_if_absent(
            address.id,
            day,
            {
                "temperature": current.temperature,
                "humidity": current.humidity,
                "precipitation": current.precipitation,
                "conditions": current.conditions,
            },
        )
