"""Factory helpers for choosing the upstream data source at startup."""

from __future__ import annotations

from placecast import config
from placecast.data_sources.base import CallableDataSource, DataSource
from placecast.data_sources.google_geocoding_client import geocode_address
from placecast.data_sources.open_meteo_client import (
    fetch_forecast,
    fetch_observations,
    search_places,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "open_meteo"


def build_data_source(settings: config.Settings | None = None) -> DataSource:
    """Instantiate the configured data source."""
    settings = settings or config.settings
    source = (settings.data_source or DEFAULT_SOURCE_NAME).lower()

    if source == "open_meteo":
        if not getattr(settings, "google_maps_api_key", None):
            logger.warning("No Google Maps API key configured; address lookups will fail")
        logger.info("Using Open-Meteo data source with Google address geocoding")
        return CallableDataSource(
            place_search=search_places,
            address_geocoder=geocode_address,
            forecast=fetch_forecast,
            observations=fetch_observations,
        )

    raise ValueError(f"Unknown data source '{source}'")
