"""Thin client for the Google Geocoding web service (address and point lookups)."""
from __future__ import annotations

from typing import Optional, Tuple

from placecast.config import settings
from placecast.data_sources import http
from placecast.errors import ConfigurationError, UpstreamHTTPError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="google_geocoding_client")


def geocode_address(*,
                    address: Optional[str] = None,
                    latlng: Optional[Tuple[float, float]] = None,
                    language: str = "es",
                    ) -> dict:
    """
    Forward-geocode ``address`` or reverse-geocode ``latlng``.

    Returns the raw payload (``status``, ``results``, optional
    ``error_message``). Interpreting ``status`` is left to the resolver.
    """
    key = settings.google_maps_api_key
    if not key:
        raise ConfigurationError("PLACECAST_GOOGLE_MAPS_API_KEY is not set")
    if (address is None) == (latlng is None):
        raise ValueError("Pass exactly one of address or latlng")

    params = {"language": language, "key": key}
    if latlng is not None:
        lat, lng = latlng
        params["latlng"] = f"{lat},{lng}"
    else:
        params["address"] = address

    data = http.get_json(settings.google_geocode_url, params, provider="google_geocoding")
    if not isinstance(data, dict) or "status" not in data:
        raise UpstreamHTTPError("google geocoding payload has no status", provider="google_geocoding")
    results = data.get("results")
    if results is not None and not isinstance(results, list):
        raise UpstreamHTTPError("google geocoding results is not a list", provider="google_geocoding")

    logger.debug(
        "Google geocoding response",
        extra={"status": data.get("status"), "results": len(results or [])},
    )
    return data
