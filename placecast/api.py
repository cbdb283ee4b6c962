"""HTTP API for place resolution and multi-location weather."""

from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from .address_service import AddressLookupService
from .config import settings
from .data_sources import build_data_source
from .errors import (
    ConfigurationError,
    InvalidInputError,
    LookupFailure,
    NoMatchError,
    UpstreamUnavailableError,
)
from .facade import WeatherLookup
from .geocode_cache import build_geocode_cache
from .geocoding import GeocodingResolver
from .models import AddressResult, LocationWeather
from .weather_service import WeatherAggregator
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="api")

router = APIRouter()
DATA_SOURCE = build_data_source(settings)
GEOCODE_CACHE = build_geocode_cache(settings)

resolver = GeocodingResolver(DATA_SOURCE, language=settings.language, limit=settings.candidate_limit)
weather_lookup = WeatherLookup(resolver, WeatherAggregator(DATA_SOURCE))
address_lookup = AddressLookupService(resolver, GEOCODE_CACHE, default_language=settings.language)


class LocationModel(BaseModel):
    """Serialized GeoCandidate."""
    id: Optional[int] = None
    name: str
    admin1: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    latitude: float
    longitude: float
    population: Optional[int] = None
    timezone: str = "auto"


class WeatherModel(BaseModel):
    """Serialized WeatherSample."""
    current: Optional[float] = None
    humidity: Optional[int] = None
    wind: Optional[int] = None
    min_observed: Optional[float] = None
    max_observed: Optional[float] = None
    min_forecast: Optional[float] = None
    max_forecast: Optional[float] = None


class LocationWeatherModel(BaseModel):
    location: LocationModel
    weather: WeatherModel


class WeatherResponse(BaseModel):
    """Weather for every resolved location, in rank order."""
    query: str
    results: List[LocationWeatherModel]


class AddressResponse(BaseModel):
    """Best address for a forward/reverse/nearby lookup."""
    status: str
    formatted_address: Optional[str] = None
    place_id: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    types: List[str] = []
    address_components: List[Any] = []


_STATUS_BY_FAILURE = (
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NoMatchError, status.HTTP_404_NOT_FOUND),
    (ConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (UpstreamUnavailableError, status.HTTP_502_BAD_GATEWAY),
)


def _http_error(exc: LookupFailure) -> HTTPException:
    """Map a LookupFailure onto an HTTPException carrying its code."""
    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for failure_type, http_status in _STATUS_BY_FAILURE:
        if isinstance(exc, failure_type):
            code = http_status
            break
    logger.info("Request failed", extra={"error": exc.code, "detail": exc.message})
    return HTTPException(status_code=code, detail={"error": exc.code, "message": exc.message})


def _parse_coordinates(lat: Optional[str], lng: Optional[str]) -> tuple[float, float]:
    """Parse query-string coordinates, rejecting missing or non-numeric values."""
    try:
        return float(lat), float(lng)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidInputError("missing or invalid 'lat' and 'lng' parameters") from exc


def _to_weather_response(query: str, results: List[LocationWeather]) -> WeatherResponse:
    return WeatherResponse(
        query=query,
        results=[
            LocationWeatherModel(
                location=LocationModel(**vars(r.location)),
                weather=WeatherModel(**vars(r.weather)),
            )
            for r in results
        ],
    )


def _to_address_response(result: Optional[AddressResult]) -> AddressResponse:
    if result is None:
        raise NoMatchError("no address found")
    return AddressResponse(
        status=result.status,
        formatted_address=result.formatted_address,
        place_id=result.place_id,
        latitude=result.latitude,
        longitude=result.longitude,
        types=list(result.types),
        address_components=list(result.address_components),
    )


@router.get("/weather", response_model=WeatherResponse)
async def weather_by_query(q: Optional[str] = Query(default=None)):
    """Resolve ``q`` and return weather for every plausible match."""
    try:
        results = await weather_lookup.by_query(q)
    except LookupFailure as exc:
        raise _http_error(exc)
    return _to_weather_response((q or "").strip(), results)


@router.get("/weather/coordinates", response_model=WeatherResponse)
async def weather_by_coordinates(lat: Optional[str] = None, lng: Optional[str] = None):
    """Return weather for an explicit point."""
    try:
        lat_f, lng_f = _parse_coordinates(lat, lng)
        results = await weather_lookup.by_coordinates(lat_f, lng_f)
    except LookupFailure as exc:
        raise _http_error(exc)
    return _to_weather_response(f"{lat_f},{lng_f}", results)


@router.get("/geocode/reverse", response_model=AddressResponse)
async def geocode_reverse(lat: Optional[str] = None, lng: Optional[str] = None, lang: Optional[str] = None):
    """Most specific address at a point (cached)."""
    try:
        lat_f, lng_f = _parse_coordinates(lat, lng)
        return _to_address_response(await address_lookup.reverse(lat_f, lng_f, lang))
    except LookupFailure as exc:
        raise _http_error(exc)


@router.get("/geocode/forward", response_model=AddressResponse)
async def geocode_forward(address: Optional[str] = None, lang: Optional[str] = None):
    """Most specific match for an address string (cached)."""
    try:
        return _to_address_response(await address_lookup.forward(address, lang))
    except LookupFailure as exc:
        raise _http_error(exc)


@router.get("/geocode/nearby", response_model=AddressResponse)
async def geocode_nearby(lat: Optional[str] = None, lng: Optional[str] = None, lang: Optional[str] = None):
    """Address at a point, probing a small ring around it when the point itself has none."""
    try:
        lat_f, lng_f = _parse_coordinates(lat, lng)
        return _to_address_response(await address_lookup.nearby(lat_f, lng_f, lang))
    except LookupFailure as exc:
        raise _http_error(exc)
