"""Upstream providers for place search, address geocoding and weather."""

from .base import CallableDataSource, DataSource
from .factory import build_data_source
from .google_geocoding_client import geocode_address
from .open_meteo_client import (
    ForecastReading,
    HourlySeries,
    fetch_forecast,
    fetch_observations,
    search_places,
)

__all__ = [
    "build_data_source",
    "DataSource",
    "CallableDataSource",
    "ForecastReading",
    "HourlySeries",
    "fetch_forecast",
    "fetch_observations",
    "geocode_address",
    "search_places",
]
