"""
OpenWeatherMap client.

Only the current-conditions endpoint is used. Precipitation is not part of
that payload and is reported as zero.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from botanical_buddy.shared.core.exceptions import ExternalAPIError
from botanical_buddy.shared.infrastructure.external_apis.api_client import APIClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentWeather:
    temperature: Optional[float]
    humidity: Optional[int]
    conditions: Optional[str]
    precipitation: float = 0.0


class OpenWeatherClient(APIClient):
    """Client for OpenWeatherMap current weather."""

    secret_params = ("appid",)

    def __init__(self, base_url: str, api_key: Optional[str], timeout: int = 30):
        super().__init__(base_url=base_url, api_name="OpenWeather", timeout=timeout)
        self.api_key = api_key

    def _auth_params(self) -> Dict[str, str]:
        if not self.api_key:
            return {}
        return {"appid": self.api_key}

    async def current_weather(self, latitude: Decimal, longitude: Decimal) -> CurrentWeather:
        """
        Current conditions at a coordinate, in metric units.

        Raises:
            ExternalAPIError: Request failed or the payload is not usable
        """
        payload = await self.get(
            "/weather",
            {"lat": str(latitude), "lon": str(longitude), "units": "metric"},
        )
        return self._parse(payload)

    def _parse(self, payload: Any) -> CurrentWeather:
        if not isinstance(payload, dict) or not isinstance(payload.get("main"), dict):
            logger.error("OpenWeather response has no 'main' section")
            raise ExternalAPIError(self.api_name, "Unexpected OpenWeather response")

        main = payload["main"]
        weather = payload.get("weather") or [{}]
        description = weather[0].get("description") if isinstance(weather[0], dict) else None

        return CurrentWeather(
            temperature=main.get("temp"),
            humidity=main.get("humidity"),
            conditions=description[:100] if description else None,
        )
