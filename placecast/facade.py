"""Single entry point: resolve a query (or a point) and fetch weather for each match."""
from __future__ import annotations

import asyncio
import math
from typing import List, Optional

from placecast.errors import InvalidInputError, NoMatchError
from placecast.geocoding import GeocodingResolver
from placecast.models import GeoCandidate, LocationWeather
from placecast.query_parser import parse_query
from placecast.weather_service import WeatherAggregator
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="facade")


def validate_coordinates(lat: float, lng: float) -> None:
    """Raise InvalidInputError unless (lat, lng) is a finite point on the globe."""
    try:
        lat_f, lng_f = float(lat), float(lng)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError("coordinates must be numbers") from exc
    if not (math.isfinite(lat_f) and math.isfinite(lng_f)):
        raise InvalidInputError("coordinates must be finite")
    if not -90.0 <= lat_f <= 90.0:
        raise InvalidInputError("latitude must be between -90 and 90")
    if not -180.0 <= lng_f <= 180.0:
        raise InvalidInputError("longitude must be between -180 and 180")


class WeatherLookup:
    """Resolve + fetch weather for every plausible match of a query."""

    def __init__(self, resolver: GeocodingResolver, aggregator: WeatherAggregator) -> None:
        self.resolver = resolver
        self.aggregator = aggregator

    async def by_query(self, query: Optional[str]) -> List[LocationWeather]:
        """
        Return weather for each candidate of ``query``, most populous first.

        Raises InvalidInputError for a blank query, an UpstreamHTTPError when
        geocoding itself is unreachable and NoMatchError when nothing matched.
        The list may be empty if every weather fetch failed.
        """
        text = (query or "").strip()
        if not text:
            raise InvalidInputError("query must not be blank")
        if not parse_query(text).city:
            raise InvalidInputError("query has no place name")

        candidates = await asyncio.to_thread(self.resolver.resolve_many, text, raise_on_error=True)
        if not candidates:
            raise NoMatchError(f"no place matches '{text}'")

        logger.info("Resolved candidates", extra={"query": text, "candidates": len(candidates)})
        return await self.aggregator.for_locations(candidates)

    async def best_match(self, query: Optional[str]) -> Optional[LocationWeather]:
        """First (most populous) entry of ``by_query``, or None."""
        results = await self.by_query(query)
        return results[0] if results else None

    async def by_coordinates(self, lat: float, lng: float) -> List[LocationWeather]:
        """Weather for an explicit point, wrapped as a single unnamed candidate."""
        validate_coordinates(lat, lng)
        lat, lng = float(lat), float(lng)
        candidate = GeoCandidate(
            id=None,
            name=f"{lat:.4f}, {lng:.4f}",
            admin1=None,
            country=None,
            country_code=None,
            latitude=lat,
            longitude=lng,
        )
        return await self.aggregator.for_locations([candidate])
