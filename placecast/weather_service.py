"""Fetch and merge per-location weather for a list of resolved candidates."""
from __future__ import annotations

import asyncio
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Tuple

from placecast.data_sources.base import DataSource
from placecast.data_sources.open_meteo_client import ForecastReading, HourlySeries
from placecast.models import GeoCandidate, LocationWeather, WeatherSample
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather_service")


def _is_number(value: object) -> bool:
    """True for finite ints/floats (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def round_half_up(value: Optional[float], digits: int = 1) -> Optional[float | int]:
    """Round away from zero on ties; ``digits=0`` returns an int."""
    if not _is_number(value):
        return None
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def compute_observed_extremes(
    times: Sequence[str],
    temperatures: Sequence[Optional[float]],
    current_time: Optional[str],
) -> Tuple[Optional[float], Optional[float]]:
    """
    Min/max temperature observed today up to "now".

    "Today" is the date part of ``current_time``; without it every index counts.
    The cutoff is the index whose timestamp equals ``current_time``, or the
    last index of today when there is no exact match. Only numeric readings at
    or before the cutoff are considered.
    """
    if not times or not temperatures or len(times) != len(temperatures):
        return None, None

    current_date = current_time[:10] if current_time else None
    today = [i for i, t in enumerate(times) if current_date is None or str(t)[:10] == current_date]
    if not today:
        return None, None

    cutoff = next((i for i, t in enumerate(times) if current_time is not None and t == current_time), -1)
    if cutoff == -1:
        cutoff = today[-1]

    observed = [temperatures[i] for i in today if i <= cutoff and _is_number(temperatures[i])]
    if not observed:
        return None, None
    return min(observed), max(observed)


def build_sample(forecast: Optional[ForecastReading], series: Optional[HourlySeries]) -> WeatherSample:
    """Combine the two calls into one rounded sample; either side may be missing."""
    current_time = forecast.time if forecast else None
    if series is not None:
        obs_min, obs_max = compute_observed_extremes(series.times, series.temperatures, current_time)
    else:
        obs_min, obs_max = None, None

    current = forecast.temperature if forecast and _is_number(forecast.temperature) else None
    if current is None and obs_min is not None and obs_max is not None:
        current = (obs_min + obs_max) / 2

    return WeatherSample(
        current=round_half_up(current, 1),
        humidity=round_half_up(forecast.humidity, 0) if forecast else None,
        wind=round_half_up(forecast.wind, 0) if forecast else None,
        min_observed=round_half_up(obs_min, 1),
        max_observed=round_half_up(obs_max, 1),
        min_forecast=round_half_up(forecast.daily_min, 1) if forecast else None,
        max_forecast=round_half_up(forecast.daily_max, 1) if forecast else None,
    )


class WeatherAggregator:
    """Concurrent per-location fetches; a failing location is dropped, never fatal."""

    def __init__(self, data_source: DataSource) -> None:
        self.data_source = data_source

    async def fetch_location(self, candidate: GeoCandidate) -> Optional[WeatherSample]:
        """Run the forecast and observation calls together for one location."""
        forecast, series = await asyncio.gather(
            asyncio.to_thread(
                self.data_source.fetch_forecast,
                candidate.latitude,
                candidate.longitude,
                timezone=candidate.timezone,
            ),
            asyncio.to_thread(
                self.data_source.fetch_observations,
                candidate.latitude,
                candidate.longitude,
                timezone=candidate.timezone,
            ),
            return_exceptions=True,
        )
        if isinstance(forecast, BaseException):
            logger.warning("Forecast call failed", extra={"location": candidate.name, "error": str(forecast)})
            forecast = None
        if isinstance(series, BaseException):
            logger.warning("Observation call failed", extra={"location": candidate.name, "error": str(series)})
            series = None
        if forecast is None and series is None:
            return None
        return build_sample(forecast, series)

    async def for_locations(self, candidates: Sequence[GeoCandidate]) -> List[LocationWeather]:
        """
        Fetch weather for every candidate and keep successes in input order.

        Waits for every location to settle; locations that failed or came back
        with no data at all are omitted rather than returned as placeholders.
        """
        if not candidates:
            return []
        samples = await asyncio.gather(
            *(self.fetch_location(c) for c in candidates),
            return_exceptions=True,
        )

        out: List[LocationWeather] = []
        for candidate, sample in zip(candidates, samples):
            if isinstance(sample, BaseException):
                logger.warning(
                    "Weather fetch failed; dropping location",
                    extra={"location": candidate.name, "error": str(sample)},
                )
                continue
            if sample is None or sample.is_empty():
                logger.info("No weather data; dropping location", extra={"location": candidate.name})
                continue
            out.append(LocationWeather(location=candidate, weather=sample))

        logger.info(
            "Aggregated weather",
            extra={"requested": len(candidates), "returned": len(out)},
        )
        return out
