"""Redis-backed geocode cache; Redis enforces the TTL."""

import json
from dataclasses import asdict
from typing import Optional

from placecast.geocode_cache.base import GeocodeCache
from placecast.models import AddressResult
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="geocode_cache/redis")


class RedisGeocodeCache(GeocodeCache):
    """Stores AddressResult values as JSON under ``prefix + key`` with SETEX."""

    def __init__(self, client, ttl_seconds: int = 600, prefix: str = "geocode:") -> None:
        logger.debug("Initializing RedisGeocodeCache")
        self.client = client
        self.ttl = int(ttl_seconds)
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @staticmethod
    def _dump(value: AddressResult) -> bytes:
        data = asdict(value)
        data["types"] = list(value.types)
        data["address_components"] = list(value.address_components)
        return json.dumps(data).encode("utf-8")

    @staticmethod
    def _load(raw: bytes | str) -> Optional[AddressResult]:
        try:
            text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            data = json.loads(text)
            data["types"] = tuple(data.get("types") or ())
            data["address_components"] = tuple(data.get("address_components") or ())
            return AddressResult(**data)
        except (ValueError, TypeError) as exc:
            logger.error("Failed to deserialize cached geocode result: %s", exc)
            return None

    def get(self, key: str) -> Optional[AddressResult]:
        """Read through to Redis; connection errors count as a miss."""
        try:
            raw = self.client.get(self._key(key))
        except Exception as exc:  # pragma: no cover - defensive
            logger.error("Failed to read geocode entry from Redis: %s", exc)
            return None
        if not raw:
            return None
        return self._load(raw)

    def set(self, key: str, value: AddressResult) -> None:
        try:
            self.client.setex(self._key(key), self.ttl, self._dump(value))
        except Exception as exc:  # pragma: no cover - defensive
            logger.error("Failed to write geocode entry to Redis: %s", exc)

    def clear(self) -> None:
        """Best-effort clear of every key under the prefix."""
        try:
            for key in self.client.scan_iter(f"{self.prefix}*"):
                self.client.delete(key)
        except Exception as exc:  # pragma: no cover - defensive
            logger.error("Failed to clear geocode entries from Redis: %s", exc)
