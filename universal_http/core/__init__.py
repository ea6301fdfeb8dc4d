"""Core request pipeline for UniversalHTTP."""

from universal_http.core.errors import (
    DecodeError,
    EncodeError,
    InvalidURLError,
    TransportError,
    UniversalHTTPError,
)
from universal_http.core.executor import (
    UniversalHTTP,
    fire_request,
    notify_error,
    perform_request,
    perform_request_async,
)

__all__ = [
    "DecodeError",
    "EncodeError",
    "InvalidURLError",
    "TransportError",
    "UniversalHTTP",
    "UniversalHTTPError",
    "fire_request",
    "notify_error",
    "perform_request",
    "perform_request_async",
]
