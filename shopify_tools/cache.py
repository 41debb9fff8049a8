"""In-memory read-through cache with a fixed time-to-live."""

import time
from typing import Any, Callable, NamedTuple

PRODUCTS_CACHE_KEY = "products:list"
DEFAULT_TTL_SECONDS = 5 * 60


class CacheEntry(NamedTuple):
    value: Any
    stored_at: float


class TTLCache:
    """Process-wide key -> value map where entries expire ``ttl_seconds`` after being set.

    Expired entries are ignored on read, not deleted; the next ``set`` for the
    key overwrites them. There is no lock: tools run on one asyncio loop, so
    two concurrent misses simply both refetch and the later ``set`` wins.

    Args:
        ttl_seconds: Maximum age at which a value is still returned
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` if younger than the TTL, else ``default``."""
        entry = self._entries.get(key)
        if entry is None:
            return default
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            return default
        return entry.value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value, self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
