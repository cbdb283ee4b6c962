"""Geocode cache backends."""

from .base import GeocodeCache, forward_key, normalize_address, reverse_key
from .factory import build_geocode_cache
from .memory import InMemoryGeocodeCache
from .redis import RedisGeocodeCache

__all__ = [
    "GeocodeCache",
    "InMemoryGeocodeCache",
    "RedisGeocodeCache",
    "build_geocode_cache",
    "forward_key",
    "normalize_address",
    "reverse_key",
]
