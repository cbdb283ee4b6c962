"""Process-local geocode cache with lazy TTL eviction."""

import time
from typing import Callable, Optional

from placecast.geocode_cache.base import GeocodeCache
from placecast.models import AddressResult, CacheEntry
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="geocode_cache/in_memory")


class InMemoryGeocodeCache(GeocodeCache):
    """
    Dict-backed cache; staleness is only checked when a key is read.

    Entries are immutable and replaced whole, so concurrent readers and
    writers never observe a partial update and no lock is taken. There is no
    size bound.
    """

    def __init__(self, ttl_seconds: float = 600, clock: Callable[[], float] = time.monotonic) -> None:
        logger.debug("Initializing InMemoryGeocodeCache", extra={"ttl_seconds": ttl_seconds})
        self.ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[AddressResult]:
        """Return a fresh entry's value; drop the entry and miss when it is stale."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at <= self.ttl:
            return entry.value
        self._entries.pop(key, None)
        logger.debug("Evicted stale geocode entry", extra={"key": key})
        return None

    def set(self, key: str, value: AddressResult) -> None:
        self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()
