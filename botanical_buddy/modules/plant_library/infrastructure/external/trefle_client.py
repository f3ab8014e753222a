# 📄 File: botanical_buddy/modules/plant_library/infrastructure/external/trefle_client.py
#
# 🧭 Purpose (Layman Explanation):
# Talks to the Trefle online plant encyclopedia to search species and read their details.
#
# 🧪 Purpose (Technical Summary):
# Trefle v1 REST client on top of the shared aiohttp APIClient. Authenticates with the
# "token" query parameter and parses responses into pydantic models; malformed
# payloads surface as ExternalAPIError.
#
# 🔗 Dependencies:
# - botanical_buddy.shared.infrastructure.external_apis.api_client
# - pydantic (response parsing)
#
# 🔄 Connected Modules / Calls From:
# - plant_library PlantLibraryService
# - botanical_buddy.main (lifespan creates and closes the client)

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from botanical_buddy.modules.plant_library.domain.models.plant_catalogue import (
    TreflePlantDetail,
    TreflePlantDetailEnvelope,
    TreflePlantPage,
)
from botanical_buddy.shared.core.exceptions import ExternalAPIError
from botanical_buddy.shared.infrastructure.external_apis.api_client import APIClient

logger = logging.getLogger(__name__)


class TrefleClient(APIClient):
    """Client for the Trefle plant catalogue."""

    secret_params = ("token",)

    def __init__(self, base_url: str, api_token: Optional[str], timeout: int = 30):
        super().__init__(base_url=base_url, api_name="Trefle", timeout=timeout)
        self.api_token = api_token

    def _auth_params(self) -> Dict[str, str]:
        if not self.api_token:
            return {}
        return {"token": self.api_token}

    async def _get_page(self, endpoint: str, params: Dict[str, Any]) -> TreflePlantPage:
        payload = await self.get(endpoint, params)
        try:
            return TreflePlantPage.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Unexpected Trefle payload from {endpoint}: {e}")
            raise ExternalAPIError(self.api_name, "Unexpected Trefle response") from e

    async def list_plants(self, page: int = 1) -> TreflePlantPage:
        return await self._get_page("/plants", {"page": page})

    async def search_plants(self, query: str, page: int = 1) -> TreflePlantPage:
        return await self._get_page("/plants/search", {"q": query, "page": page})

    async def filter_by_common_name(self, common_name: str, page: int = 1) -> TreflePlantPage:
        return await self._get_page("/plants", {"filter[common_name]": common_name, "page": page})

    async def get_plant(self, plant_id: int) -> TreflePlantDetail:
        payload = await self.get(f"/plants/{plant_id}")
        try:
            return TreflePlantDetailEnvelope.model_validate(payload).data
        except ValidationError as e:
            logger.error(f"Unexpected Trefle payload for plant {plant_id}: {e}")
            raise ExternalAPIError(self.api_name, "Unexpected Trefle response") from e
