"""Shared ``requests`` session and JSON GET helper for upstream providers."""
from __future__ import annotations

from typing import Any, Mapping

import requests

from placecast.config import settings
from placecast.errors import UpstreamHTTPError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/http")

session = requests.Session()
session.headers.update({"User-Agent": settings.user_agent})


def get_json(url: str, params: Mapping[str, Any], *, provider: str, timeout: float | None = None) -> Any:
    """
    GET ``url`` and decode the JSON body.

    Transport errors, timeouts, non-2xx responses and undecodable bodies all
    surface as ``UpstreamHTTPError``; there is no retry.
    """
    timeout = settings.http_timeout_seconds if timeout is None else timeout
    try:
        resp = session.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as exc:
        logger.warning(
            "Upstream request failed",
            extra={"provider": provider, "url": url, "error": str(exc)},
        )
        raise UpstreamHTTPError(f"{provider} request failed: {exc}", provider=provider) from exc
    except ValueError as exc:
        logger.warning("Upstream returned a non-JSON body", extra={"provider": provider, "url": url})
        raise UpstreamHTTPError(f"{provider} returned malformed JSON", provider=provider) from exc
