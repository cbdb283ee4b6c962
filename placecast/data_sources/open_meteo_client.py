"""Helpers for the Open-Meteo geocoding and forecast APIs."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from placecast.config import settings
from placecast.data_sources import http
from placecast.errors import UpstreamHTTPError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="open_meteo_client")

CURRENT_VARS = ["temperature_2m", "relative_humidity_2m", "wind_speed_10m"]
DAILY_VARS = ["temperature_2m_min", "temperature_2m_max"]
HOURLY_VARS = ["temperature_2m"]


@dataclass
class ForecastReading:
    """Current conditions plus today's forecast extremes, as returned upstream."""
    time: Optional[str]  # local ISO timestamp, e.g. "2024-01-01T06:15"
    temperature: Optional[float]
    humidity: Optional[float]
    wind: Optional[float]
    daily_min: Optional[float]
    daily_max: Optional[float]


@dataclass
class HourlySeries:
    """Today's hourly temperature series (parallel arrays)."""
    times: List[str] = field(default_factory=list)
    temperatures: List[Optional[float]] = field(default_factory=list)


def _require_mapping(data: Any, *, context: str) -> dict:
    """Reject payloads that are not JSON objects."""
    if not isinstance(data, dict):
        logger.warning("Malformed Open-Meteo payload", extra={"context": context})
        raise UpstreamHTTPError(f"open-meteo {context} payload is not an object", provider="open_meteo")
    return data


def _first(values: Any) -> Optional[float]:
    """First element of a daily array, or None."""
    if isinstance(values, list) and values:
        return values[0]
    return None


def search_places(name: str,
                  *,
                  count: int = 10,
                  language: str = "es",
                  country_code: Optional[str] = None,
                  ) -> List[dict]:
    """Search places by name and return the raw ``results`` list (possibly empty)."""
    params = {
        "name": name,
        "count": count,
        "language": language,
        "format": "json",
    }
    if country_code:
        params["countryCode"] = country_code

    data = _require_mapping(
        http.get_json(settings.geocoding_url, params, provider="open_meteo_geocoding"),
        context="geocoding",
    )
    results = data.get("results", None)
    if results is None:
        return []
    if not isinstance(results, list):
        raise UpstreamHTTPError("open-meteo geocoding results is not a list", provider="open_meteo")
    logger.debug("Open-Meteo geocoding results", extra={"place": name, "count": len(results)})
    return results


def fetch_forecast(latitude: float,
                   longitude: float,
                   *,
                   timezone: str = "auto",
                   ) -> ForecastReading:
    """Fetch the current reading and today's forecast min/max for a point."""
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "timezone": timezone or "auto",
        "current": ",".join(CURRENT_VARS),
        "daily": ",".join(DAILY_VARS),
        "forecast_days": 1,
    }

    data = _require_mapping(
        http.get_json(settings.forecast_url, params, provider="open_meteo_forecast"),
        context="forecast",
    )
    current = data.get("current") or {}
    daily = data.get("daily") or {}

    return ForecastReading(
        time=current.get("time", None),
        temperature=current.get("temperature_2m", None),
        humidity=current.get("relative_humidity_2m", None),
        wind=current.get("wind_speed_10m", None),
        daily_min=_first(daily.get("temperature_2m_min")),
        daily_max=_first(daily.get("temperature_2m_max")),
    )


def fetch_observations(latitude: float,
                       longitude: float,
                       *,
                       timezone: str = "auto",
                       ) -> HourlySeries:
    """Fetch today's hourly temperature series for a point."""
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "timezone": timezone or "auto",
        "hourly": ",".join(HOURLY_VARS),
        "forecast_days": 1,
    }

    data = _require_mapping(
        http.get_json(settings.observation_url, params, provider="open_meteo_observation"),
        context="observation",
    )
    hourly = data.get("hourly") or {}
    times = hourly.get("time") or []
    temps = hourly.get("temperature_2m") or []
    if not isinstance(times, list) or not isinstance(temps, list):
        raise UpstreamHTTPError("open-meteo hourly arrays are malformed", provider="open_meteo")
    return HourlySeries(times=list(times), temperatures=list(temps))
