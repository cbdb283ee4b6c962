"""Cached forward/reverse address lookups and the nearby-point probe."""
from __future__ import annotations

import asyncio
from typing import Optional

from placecast.errors import InvalidInputError
from placecast.facade import validate_coordinates
from placecast.geocode_cache.base import GeocodeCache, forward_key, reverse_key
from placecast.geocoding import GeocodingResolver
from placecast.models import AddressResult
from placecast.spatial_fallback import SpatialFallbackSearch
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="address_service")


class AddressLookupService:
    """
    Address lookups for a "my location" style flow.

    ``reverse`` and ``forward`` sit behind the geocode cache; only successful
    winners are stored. ``nearby`` runs the spatial fallback and is never
    cached. Upstream calls run in worker threads while cache reads and writes
    stay on the event loop.
    """

    def __init__(
        self,
        resolver: GeocodingResolver,
        cache: GeocodeCache,
        fallback: Optional[SpatialFallbackSearch] = None,
        *,
        default_language: str = "es",
    ) -> None:
        self.resolver = resolver
        self.cache = cache
        self.fallback = fallback or SpatialFallbackSearch(resolver)
        self.default_language = default_language

    async def reverse(self, lat: float, lng: float, language: Optional[str] = None) -> Optional[AddressResult]:
        validate_coordinates(lat, lng)
        language = language or self.default_language
        key = reverse_key(float(lat), float(lng), language)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Geocode cache hit", extra={"key": key})
            return cached

        result = await asyncio.to_thread(
            self.resolver.resolve_best, latlng=(float(lat), float(lng)), language=language
        )
        if result is not None:
            self.cache.set(key, result)
        return result

    async def forward(self, address: Optional[str], language: Optional[str] = None) -> Optional[AddressResult]:
        text = (address or "").strip()
        if not text:
            raise InvalidInputError("address must not be blank")
        language = language or self.default_language
        key = forward_key(text, language)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Geocode cache hit", extra={"key": key})
            return cached

        result = await asyncio.to_thread(self.resolver.resolve_best, address=text, language=language)
        if result is not None:
            self.cache.set(key, result)
        return result

    async def nearby(self, lat: float, lng: float, language: Optional[str] = None) -> AddressResult:
        validate_coordinates(lat, lng)
        return await asyncio.to_thread(
            self.fallback.search, float(lat), float(lng), language or self.default_language
        )
