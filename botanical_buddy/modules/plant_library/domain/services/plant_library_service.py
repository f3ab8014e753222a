# 📄 File: botanical_buddy/modules/plant_library/domain/services/plant_library_service.py
#
# 🧭 Purpose (Layman Explanation):
# Looks up plant species for users and remembers the answers for a day, so popular
# searches don't hit the encyclopedia again and again.
#
# 🧪 Purpose (Technical Summary):
# Read-through cache over TrefleClient. Keys are the normalized query parameter tuples;
# entries live CACHE_PLANT_LIBRARY_TTL seconds (24h). Provider failures propagate as
# ExternalAPIError and are never cached.
#
# 🔗 Dependencies:
# - plant_library TrefleClient
# - botanical_buddy.shared.infrastructure.cache.memory_cache.TTLCache
#
# 🔄 Connected Modules / Calls From:
# - plant_library presentation plants router

import logging

from botanical_buddy.modules.plant_library.infrastructure.external.trefle_client import TrefleClient
from botanical_buddy.modules.plant_library.domain.models.plant_catalogue import (
    TreflePlantDetail,
    TreflePlantPage,
)
from botanical_buddy.shared.infrastructure.cache.memory_cache import TTLCache

logger = logging.getLogger(__name__)

DEFAULT_TAXONOMY_TTL = 24 * 60 * 60


class PlantLibraryService:
    """Cached access to the Trefle plant catalogue."""

    def __init__(self, client: TrefleClient, cache: TTLCache, ttl: float = DEFAULT_TAXONOMY_TTL):
        self.client = client
        self.cache = cache
        self.ttl = ttl

    async def list_plants(self, page: int = 1) -> TreflePlantPage:
        return await self.cache.get_or_load(
            ("trefle_list", page),
            lambda: self.client.list_plants(page),
            self.ttl,
        )

    async def search_plants(self, query: str, page: int = 1) -> TreflePlantPage:
        query = query.strip()
        return await self.cache.get_or_load(
            ("trefle_search", query, page),
            lambda: self.client.search_plants(query, page),
            self.ttl,
        )

    async def filter_by_common_name(self, common_name: str, page: int = 1) -> TreflePlantPage:
        common_name = common_name.strip()
        return await self.cache.get_or_load(
            ("trefle_common", common_name, page),
            lambda: self.client.filter_by_common_name(common_name, page),
            self.ttl,
        )

    async def get_plant(self, plant_id: int) -> TreflePlantDetail:
        return await self.cache.get_or_load(
            ("trefle_plant", plant_id),
            lambda: self.client.get_plant(plant_id),
            self.ttl,
        )
