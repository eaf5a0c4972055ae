"""Process-wide named caches for external API responses."""

import time
from typing import Any, Callable, Dict, List, NamedTuple

from cachetools import TLRUCache
from pydantic import BaseModel

DEFAULT_MAXSIZE = 500

_MISSING = object()


class CacheEntry(NamedTuple):
    """A cached value and the number of seconds it stays fresh."""

    value: Any
    ttl: float


def _time_to_use(_key: str, entry: CacheEntry, now: float) -> float:
    return now + entry.ttl


class CacheStats(BaseModel):
    """Hit/miss counters for a single cache."""

    id: str
    name: str
    hits: int
    misses: int
    keys: int


class Cache:
    """A keyed store where every entry expires on its own TTL.

    Entries are replaced wholesale on ``set`` and never mutated in place.
    """

    def __init__(
        self,
        id: str,
        name: str,
        maxsize: int = DEFAULT_MAXSIZE,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.id = id
        self.name = name
        self.data: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)
        self.hits = 0
        self.misses = 0

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value for ``key`` or ``default`` if missing/expired."""
        entry = self.data.get(key, _MISSING)
        if entry is _MISSING:
            self.misses += 1
            return default
        self.hits += 1
        return entry.value

    def set(self, key: str, value: Any, ttl: float) -> None:
        self.data[key] = CacheEntry(value, ttl)

    def flush(self) -> None:
        self.data.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> CacheStats:
        self.data.expire()
        return CacheStats(
            id=self.id,
            name=self.name,
            hits=self.hits,
            misses=self.misses,
            keys=len(self.data),
        )


class CacheManager:
    """Registry of the caches shared by all service adapters."""

    def __init__(self) -> None:
        self._caches: Dict[str, Cache] = {
            "radarr": Cache("radarr", "Radarr API"),
        }

    def get_cache(self, id: str) -> Cache:
        """Get a cache by id, raising KeyError for unknown ids."""
        return self._caches[id]

    def get_all_caches(self) -> List[Cache]:
        return list(self._caches.values())


cache_manager = CacheManager()
