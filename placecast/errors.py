"""Failure taxonomy shared by the resolver, the aggregator and the HTTP layer."""

from __future__ import annotations

from typing import Optional


class LookupFailure(Exception):
    """Base class; ``code`` is the stable identifier reported to callers."""

    code = "lookup-failure"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidInputError(LookupFailure):
    """Blank or malformed query/coordinates, rejected before any network call."""

    code = "invalid-input"


class NoMatchError(LookupFailure):
    """Well-formed request that produced zero usable candidates."""

    code = "no-match"


class ConfigurationError(LookupFailure):
    """A required credential or setting is missing."""

    code = "configuration-error"


class UpstreamUnavailableError(LookupFailure):
    """A provider could not be used to answer the request."""

    code = "upstream-unavailable"


class UpstreamHTTPError(UpstreamUnavailableError):
    """Transport failure, timeout, non-2xx response or malformed payload."""

    code = "upstream-http-error"

    def __init__(self, message: str = "", *, provider: Optional[str] = None) -> None:
        super().__init__(message)
        self.provider = provider


class UpstreamStatusError(UpstreamUnavailableError):
    """Provider answered 200 but reported a status other than ``OK``."""

    code = "upstream-status-error"

    def __init__(self, status: str, error_message: Optional[str] = None) -> None:
        detail = f"provider status {status}"
        if error_message:
            detail = f"{detail}: {error_message}"
        super().__init__(detail)
        self.status = status
        self.error_message = error_message
