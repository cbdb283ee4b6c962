"""Nearest-street heuristic for reverse lookups that land on nothing.

When a point (a park, a river, the middle of a block) reverse-geocodes to no
usable result, nudge it around a small ring and take the first address found.
This is best effort: there is no guarantee the result is the closest street,
and running out of probes is reported as an empty result, not an error.
"""
from __future__ import annotations

from typing import Optional, Tuple

from placecast.errors import LookupFailure, UpstreamStatusError
from placecast.geocoding import OK_STATUS, ZERO_RESULTS_STATUS, GeocodingResolver, best_address
from placecast.models import AddressResult
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="spatial_fallback")

# (latitude delta, longitude delta) in degrees, roughly a 20-35 m ring, in probe order.
PROBE_OFFSETS: Tuple[Tuple[float, float], ...] = (
    (0.0003, 0.0),
    (-0.0003, 0.0),
    (0.0, 0.0003),
    (0.0, -0.0003),
    (0.0002, 0.0002),
    (-0.0002, 0.0002),
    (0.0002, -0.0002),
    (-0.0002, -0.0002),
)

_PROBE_STATUSES = {OK_STATUS, ZERO_RESULTS_STATUS}


class SpatialFallbackSearch:
    """Reverse-geocode a point, probing nearby offsets if it yields nothing."""

    def __init__(self, resolver: GeocodingResolver, offsets: Tuple[Tuple[float, float], ...] = PROBE_OFFSETS) -> None:
        self.resolver = resolver
        self.offsets = offsets

    def _probe(self, lat: float, lng: float, language: Optional[str]) -> Tuple[str, Optional[AddressResult]]:
        status, results, error_message = self.resolver.lookup_raw(latlng=(lat, lng), language=language)
        if status not in _PROBE_STATUSES:
            raise UpstreamStatusError(status, error_message)
        found = best_address(status, results) if status == OK_STATUS else None
        return status, found

    def search(self, lat: float, lng: float, language: Optional[str] = None) -> AddressResult:
        """Return the first address found at the point or around it."""
        origin_status, found = self._probe(lat, lng, language)
        logger.debug("Direct reverse lookup", extra={"status": origin_status, "found": found is not None})
        if found is not None:
            return found

        for d_lat, d_lng in self.offsets:
            try:
                status, found = self._probe(lat + d_lat, lng + d_lng, language)
            except LookupFailure as exc:
                logger.warning(
                    "Nearby probe failed",
                    extra={"d_lat": d_lat, "d_lng": d_lng, "error": str(exc)},
                )
                continue
            logger.debug("Nearby probe", extra={"d_lat": d_lat, "d_lng": d_lng, "status": status})
            if found is not None:
                return found

        logger.info("No address found around point", extra={"lat": lat, "lng": lng})
        return AddressResult(
            status=origin_status or ZERO_RESULTS_STATUS,
            formatted_address=None,
            place_id=None,
            latitude=None,
            longitude=None,
        )
