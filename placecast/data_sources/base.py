"""Interfaces and helpers for upstream geocoding and weather sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple

from placecast.data_sources.open_meteo_client import ForecastReading, HourlySeries


class DataSource(Protocol):
    """Anything that can search places, geocode addresses and fetch weather."""

    def search_places(
        self,
        name: str,
        *,
        count: int = 10,
        language: str = "es",
        country_code: Optional[str] = None,
    ) -> List[dict]:
        """Return raw name-search results."""
        ...

    def geocode_address(
        self,
        *,
        address: Optional[str] = None,
        latlng: Optional[Tuple[float, float]] = None,
        language: str = "es",
    ) -> dict:
        """Return a raw address/point geocoding payload with a ``status``."""
        ...

    def fetch_forecast(self, latitude: float, longitude: float, *, timezone: str = "auto") -> ForecastReading:
        """Return the current reading and today's forecast extremes."""
        ...

    def fetch_observations(self, latitude: float, longitude: float, *, timezone: str = "auto") -> HourlySeries:
        """Return today's hourly temperature series."""
        ...


@dataclass
class CallableDataSource(DataSource):
    """Wrap four callables so backends (or test stubs) can be swapped."""

    place_search: Callable[..., List[dict]]
    address_geocoder: Callable[..., dict]
    forecast: Callable[..., ForecastReading]
    observations: Callable[..., HourlySeries]

    def search_places(self, *args, **kwargs) -> List[dict]:
        return self.place_search(*args, **kwargs)

    def geocode_address(self, *args, **kwargs) -> dict:
        return self.address_geocoder(*args, **kwargs)

    def fetch_forecast(self, *args, **kwargs) -> ForecastReading:
        return self.forecast(*args, **kwargs)

    def fetch_observations(self, *args, **kwargs) -> HourlySeries:
        return self.observations(*args, **kwargs)
