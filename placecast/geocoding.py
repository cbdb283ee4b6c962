"""Resolve free-text queries and addresses into ranked geographic candidates."""
from __future__ import annotations

import unicodedata
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from placecast.data_sources.base import DataSource
from placecast.errors import UpstreamHTTPError, UpstreamStatusError
from placecast.models import AddressResult, GeoCandidate
from placecast.query_parser import parse_query
from placecast.ranking import pick_best
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="geocoding")

OK_STATUS = "OK"
ZERO_RESULTS_STATUS = "ZERO_RESULTS"


def normalize_text(value: Optional[str]) -> str:
    """Strip diacritics, lowercase and trim for loose comparisons."""
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", str(value))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold().strip()


def _population_sort_key(candidate: GeoCandidate) -> tuple[bool, int]:
    """Population descending, unknown population last."""
    if candidate.population is None:
        return True, 0
    return False, -candidate.population


def _to_candidate(raw: Mapping[str, Any]) -> GeoCandidate:
    """Map an Open-Meteo search result onto a GeoCandidate."""
    population = raw.get("population")
    return GeoCandidate(
        id=raw.get("id"),
        name=raw["name"],
        admin1=raw.get("admin1") or None,
        country=raw.get("country"),
        country_code=raw.get("country_code"),
        latitude=float(raw["latitude"]),
        longitude=float(raw["longitude"]),
        population=int(population) if population is not None else None,
        timezone=raw.get("timezone") or "auto",
    )


def to_address_result(status: str, best: Mapping[str, Any]) -> AddressResult:
    """Normalize a raw Google geocoding result into an AddressResult."""
    location = (best.get("geometry") or {}).get("location") or {}
    lat = location.get("lat")
    lng = location.get("lng")
    types = tuple(dict.fromkeys(best.get("types") or ()))
    return AddressResult(
        status=status,
        formatted_address=best.get("formatted_address"),
        place_id=best.get("place_id"),
        latitude=float(lat) if lat is not None else None,
        longitude=float(lng) if lng is not None else None,
        types=types,
        address_components=tuple(best.get("address_components") or ()),
    )


def best_address(status: str, results: Sequence[Any]) -> Optional[AddressResult]:
    """Pick the most specific raw result and normalize it; None when nothing ranks."""
    try:
        best = pick_best(results)
        return to_address_result(status, best) if best is not None else None
    except (AttributeError, TypeError, ValueError) as exc:
        logger.warning("Malformed address result", extra={"status": status, "error": str(exc)})
        raise UpstreamHTTPError(f"malformed geocoding result: {exc}", provider="google_geocoding") from exc


class GeocodingResolver:
    """Name search with a loose retry, admin filtering and population ranking."""

    def __init__(self, data_source: DataSource, *, language: str = "es", limit: int = 10) -> None:
        self.data_source = data_source
        self.language = language
        self.limit = limit

    def _search(self, name: str, country_code: Optional[str] = None) -> List[GeoCandidate]:
        raw = self.data_source.search_places(
            name,
            count=self.limit,
            language=self.language,
            country_code=country_code,
        )
        try:
            return [_to_candidate(r) for r in raw or []]
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamHTTPError(f"malformed geocoding result: {exc}", provider="open_meteo") from exc

    def resolve_many(self, query: str, *, raise_on_error: bool = False) -> List[GeoCandidate]:
        """
        Return up to ``limit`` candidates for ``query``, most populous first.

        Upstream failures yield ``[]`` unless ``raise_on_error`` is set, in
        which case the ``UpstreamHTTPError`` propagates.
        """
        parsed = parse_query(query)
        logger.info(
            "Resolving query",
            extra={"query": query, "city": parsed.city, "admin": parsed.admin, "country_code": parsed.country_code},
        )
        try:
            candidates = self._search(parsed.city, parsed.country_code)
            if not candidates:
                simple = query.split(",")[0].strip()
                logger.debug("No results; retrying with first segment only", extra={"place": simple})
                candidates = self._search(simple)
        except UpstreamHTTPError as exc:
            logger.warning("Geocoding failed", extra={"query": query, "error": str(exc)})
            if raise_on_error:
                raise
            return []

        if candidates and parsed.admin:
            admin_n = normalize_text(parsed.admin)
            filtered = [c for c in candidates if admin_n in normalize_text(c.admin1)]
            if filtered:
                candidates = filtered
            else:
                logger.debug("Admin filter matched nothing; keeping all candidates", extra={"admin": parsed.admin})

        candidates = sorted(candidates, key=_population_sort_key)
        return candidates[: self.limit]

    def lookup_raw(
        self,
        *,
        address: Optional[str] = None,
        latlng: Optional[Tuple[float, float]] = None,
        language: Optional[str] = None,
    ) -> Tuple[str, Sequence[Mapping[str, Any]], Optional[str]]:
        """Return ``(status, results, error_message)`` from the address provider."""
        payload = self.data_source.geocode_address(
            address=address,
            latlng=latlng,
            language=language or self.language,
        )
        return str(payload.get("status")), payload.get("results") or [], payload.get("error_message")

    def resolve_best(
        self,
        *,
        address: Optional[str] = None,
        latlng: Optional[Tuple[float, float]] = None,
        language: Optional[str] = None,
    ) -> Optional[AddressResult]:
        """
        Geocode one address or point and return the most specific result.

        Any status other than ``OK`` raises ``UpstreamStatusError``; an ``OK``
        response with nothing rankable returns None.
        """
        status, results, error_message = self.lookup_raw(address=address, latlng=latlng, language=language)
        if status != OK_STATUS:
            logger.warning(
                "Address provider returned non-OK status",
                extra={"status": status, "error_message": error_message},
            )
            raise UpstreamStatusError(status, error_message)
        return best_address(status, results)
