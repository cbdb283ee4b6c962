"""Value objects passed between the resolver, the aggregator and the API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class ParsedQuery:
    """Structured view of a ``City[, Admin][, CC]`` query."""
    city: str
    admin: Optional[str] = None
    country_code: Optional[str] = None


@dataclass(frozen=True)
class GeoCandidate:
    """A place returned by name search."""
    id: Optional[int]
    name: str
    admin1: Optional[str]
    country: Optional[str]
    country_code: Optional[str]
    latitude: float
    longitude: float
    population: Optional[int] = None
    timezone: str = "auto"


@dataclass(frozen=True)
class AddressResult:
    """Winning address for a single forward/reverse geocode call."""
    status: str
    formatted_address: Optional[str]
    place_id: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    types: Tuple[str, ...] = ()
    address_components: Tuple[Any, ...] = ()

    @property
    def found(self) -> bool:
        return self.formatted_address is not None


@dataclass(frozen=True)
class WeatherSample:
    """Rounded readings for one location; ``None`` means the provider omitted it."""
    current: Optional[float] = None
    humidity: Optional[int] = None
    wind: Optional[int] = None
    min_observed: Optional[float] = None
    max_observed: Optional[float] = None
    min_forecast: Optional[float] = None
    max_forecast: Optional[float] = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.current,
                self.humidity,
                self.wind,
                self.min_observed,
                self.max_observed,
                self.min_forecast,
                self.max_forecast,
            )
        )


@dataclass(frozen=True)
class LocationWeather:
    """One entry of an aggregated result."""
    location: GeoCandidate
    weather: WeatherSample = field(default_factory=WeatherSample)


@dataclass(frozen=True)
class CacheEntry:
    """Cached address result with the clock reading it was stored at."""
    key: str
    value: AddressResult
    stored_at: float
