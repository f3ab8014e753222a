# 📄 File: botanical_buddy/shared/infrastructure/cache/memory_cache.py
#
# 🧭 Purpose (Layman Explanation):
# A short-term memory for answers from outside services (plant encyclopedia, weather),
# so asking the same question twice in a row doesn't call the outside service twice.
#
# 🧪 Purpose (Technical Summary):
# In-process keyed store with an absolute expiry per entry. Time-based eviction only
# (lazy on read, plus purge_expired), no size bound. get_or_load stores results only
# after the loader succeeds, so failures are never cached. One instance is created per
# application lifespan and injected into services.
#
# 🔗 Dependencies:
# - time (monotonic clock, injectable for tests)
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.main (lifespan creates app.state.cache)
# - plant_library and weather_environmental services

import logging
import time
from typing import Any, Awaitable, Callable, Dict, Hashable, Tuple

logger = logging.getLogger(__name__)

_MISSING = object()


class TTLCache:
    """Process-local cache with per-entry absolute expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[Any, float]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the live value for key, evicting it if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return default

        value, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            self._misses += 1
            return default

        self._hits += 1
        return value

    def set(self, key: Hashable, value: Any, ttl: float) -> None:
        self._entries[key] = (value, self._clock() + ttl)

    def delete(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    async def get_or_load(
        self,
        key: Hashable,
        loader: Callable[[], Awaitable[Any]],
        ttl: float,
    ) -> Any:
        """
        Return the cached value or await loader() and cache its result.

        Exceptions from loader propagate and leave the cache untouched. Two concurrent
        misses on one key may both call loader; the last result wins.
        """
        cached = self.get(key, _MISSING)
        if cached is not _MISSING:
            logger.debug(f"Cache hit: {key}")
            return cached

        logger.debug(f"Cache miss: {key}")
        value = await loader()
        self.set(key, value, ttl)
        return value

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> Dict[str, Any]:
        total = self._hits + self._misses
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": (self._hits / total) if total else 0.0,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key, _MISSING) is not _MISSING
