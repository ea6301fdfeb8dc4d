"""Error taxonomy for UniversalHTTP.

These exceptions are raised inside the request pipeline and caught at the
executor boundary, where they turn into error-observer notifications and
normalized outcomes. Callers never see them escape a public operation.
"""

from __future__ import annotations

from typing import Optional


class UniversalHTTPError(Exception):
    """Base class for every failure the executor knows how to report."""


class InvalidURLError(UniversalHTTPError):
    """The URL string could not be turned into a usable http(s) URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class EncodeError(UniversalHTTPError):
    """A body model could not be encoded as JSON."""


class TransportError(UniversalHTTPError):
    """The transport failed before any HTTP response was obtained."""


class DecodeError(UniversalHTTPError):
    """A response body did not match the expected model."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
