# 📄 File: botanical_buddy/shared/infrastructure/external_apis/api_client.py
#
# 🧭 Purpose (Layman Explanation):
# The shared "phone line" the app uses to call outside services such as the plant
# encyclopedia and the weather service, redialing automatically when the line drops.
#
# 🧪 Purpose (Technical Summary):
# Generic async HTTP JSON client built on aiohttp with tenacity retries for connection
# and timeout errors. Error statuses and undecodable bodies map to ExternalAPIError, and
# logging never includes credential query parameters.
#
# 🔗 Dependencies:
# - aiohttp: async HTTP client
# - tenacity: retry with exponential backoff
# - botanical_buddy.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - plant_library TrefleClient
# - weather_environmental OpenWeatherClient
# - botanical_buddy.main (client shutdown)

import asyncio
import logging
import time
from typing import Any, Dict, Iterable, Optional

import aiohttp
from aiohttp import ClientSession, ClientTimeout
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from botanical_buddy.shared.core.exceptions import ExternalAPIError

logger = logging.getLogger(__name__)


class APIClient:
    """
    Generic async HTTP client for external API integrations.

    Subclasses add their credential parameter through ``_auth_params`` and expose
    typed methods on top of ``get``.
    """

    # Query parameters carrying credentials, never written to logs
    secret_params: Iterable[str] = ()

    def __init__(self, base_url: str, api_name: str, timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.api_name = api_name
        self.timeout = timeout
        self.session: Optional[ClientSession] = None

    async def initialize(self) -> None:
        """Create the aiohttp session. Must run inside the event loop."""
        if self.session is not None and not self.session.closed:
            return
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers={"Accept": "application/json", "User-Agent": "BotanicalBuddy/1.0"},
        )
        logger.info(f"API client initialized for {self.api_name}")

    async def close(self) -> None:
        if self.session is not None and not self.session.closed:
            await self.session.close()
            logger.info(f"API client closed for {self.api_name}")
        self.session = None

    def _auth_params(self) -> Dict[str, str]:
        return {}

    def _build_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _loggable_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {k: ("***" if k in self.secret_params else v) for k, v in params.items()}

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a JSON document.

        Raises:
            ExternalAPIError: On network failure after retries, non-2xx status or a body
                that is not JSON
        """
        request_params = {**(params or {}), **self._auth_params()}
        try:
            return await self._make_request("GET", endpoint, request_params)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{self.api_name} request to {endpoint} failed: {type(e).__name__}: {e}")
            raise ExternalAPIError(self.api_name) from e

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((aiohttp.ClientError, asyncio.TimeoutError)),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _make_request(self, method: str, endpoint: str, params: Dict[str, Any]) -> Any:
        """Make an HTTP request with retry logic."""
        await self.initialize()
        url = self._build_url(endpoint)
        start_time = time.time()

        async with self.session.request(method, url, params=params) as response:
            response_time = time.time() - start_time
            await self._handle_response_status(response, endpoint)
            try:
                payload = await response.json(content_type=None)
            except ValueError as e:
                logger.error(
                    f"{self.api_name} returned a non-JSON body for {endpoint} "
                    f"({response.status}, {response.content_type})"
                )
                raise ExternalAPIError(
                    self.api_name,
                    message="Invalid JSON response",
                    api_status_code=response.status,
                ) from e

        logger.info(
            f"{self.api_name} API request successful: {method} {endpoint} "
            f"{self._loggable_params(params)} - {response.status} - {response_time:.2f}s"
        )
        return payload

    async def _handle_response_status(self, response: aiohttp.ClientResponse, endpoint: str) -> None:
        """Map unsuccessful HTTP statuses to ExternalAPIError."""
        if response.status < 400:
            return

        body = await response.text()
        if response.status in (401, 403):
            logger.error(f"{self.api_name} rejected our credentials ({response.status})")
        elif response.status == 429:
            logger.warning(f"{self.api_name} rate limit hit on {endpoint}")
        else:
            logger.error(f"{self.api_name} returned {response.status} for {endpoint}: {body[:200]}")

        raise ExternalAPIError(self.api_name, api_status_code=response.status)
