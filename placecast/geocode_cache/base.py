"""Shared protocol and key builders for geocode cache backends."""

import re
from typing import Optional, Protocol

from placecast.models import AddressResult

_WHITESPACE_RE = re.compile(r"\s+")


def reverse_key(lat: float, lng: float, language: str) -> str:
    """Key for a point lookup, coordinates fixed to six decimals."""
    return f"rev:{lat:.6f},{lng:.6f}:{language}"


def normalize_address(address: str) -> str:
    """Trim, collapse internal whitespace and lowercase."""
    return _WHITESPACE_RE.sub(" ", address.strip()).lower()


def forward_key(address: str, language: str) -> str:
    """Key for an address lookup."""
    return f"fwd:{normalize_address(address)}:{language}"


class GeocodeCache(Protocol):
    """Protocol for geocode cache backends."""

    def get(self, key: str) -> Optional[AddressResult]:
        """Return the cached result, or None on a miss or a stale entry."""

    def set(self, key: str, value: AddressResult) -> None:
        """Store ``value`` under ``key``, replacing whatever was there."""

    def clear(self) -> None:
        """Drop every entry."""
