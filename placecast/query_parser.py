"""Split free-text place queries into city / admin region / country code."""

from __future__ import annotations

import re

from placecast.models import ParsedQuery

_COUNTRY_CODE_RE = re.compile(r"^[A-Za-z]{2}$")


def _country_code(token: str) -> str | None:
    """Return ``token`` uppercased if it looks like an ISO-3166 alpha-2 code.

    Any two-letter token qualifies, so US state abbreviations ("OH") are read
    as country codes too.
    """
    if _COUNTRY_CODE_RE.match(token):
        return token.upper()
    return None


def parse_query(text: str) -> ParsedQuery:
    """
    Parse ``"City"``, ``"City, CC"`` or ``"City, Admin[, ...], CC"``.

    - one segment: city only
    - two segments: the tail is a country code when it has two letters,
      otherwise it is left to the provider's full-text matching
    - three or more: the second segment is the admin region and is appended to
      the city name; the last segment is checked for a country code
    """
    parts = [p.strip() for p in text.split(",")]
    parts = [p for p in parts if p]
    if not parts:
        return ParsedQuery(city="")

    city = parts[0]
    admin = None
    country_code = None

    if len(parts) == 2:
        country_code = _country_code(parts[1])
    elif len(parts) >= 3:
        admin = parts[1]
        country_code = _country_code(parts[-1])
        city = f"{city} {admin}"

    return ParsedQuery(city=city, admin=admin, country_code=country_code)
