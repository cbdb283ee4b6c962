"""Pick the geocode cache backend from configuration."""

import redis

from placecast import config
from placecast.geocode_cache.base import GeocodeCache
from placecast.geocode_cache.memory import InMemoryGeocodeCache
from placecast.geocode_cache.redis import RedisGeocodeCache
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="geocode_cache/factory")


def build_geocode_cache(settings: config.Settings | None = None) -> GeocodeCache:
    """Use Redis when a URL is configured and reachable, else an in-memory cache."""
    settings = settings or config.settings
    ttl = settings.geocode_cache_ttl_seconds
    url = settings.geocode_cache_redis_url
    if url:
        masked = mask_url(url)
        try:
            client = redis.Redis.from_url(url)
            client.ping()
            logger.info("Using RedisGeocodeCache", extra={"redis_url": masked})
            return RedisGeocodeCache(client, ttl_seconds=ttl, prefix=settings.geocode_cache_prefix)
        except (redis.RedisError, ValueError) as exc:
            logger.warning(
                "Falling back to InMemoryGeocodeCache (Redis unavailable)",
                extra={"redis_url": masked, "error": str(exc)},
            )
    return InMemoryGeocodeCache(ttl_seconds=ttl)
