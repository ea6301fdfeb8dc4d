"""UniversalHTTP: send one HTTP request and decode the JSON response into a model."""

from universal_http.config import HTTPConfig
from universal_http.core import (
    DecodeError,
    EncodeError,
    InvalidURLError,
    TransportError,
    UniversalHTTP,
    UniversalHTTPError,
    fire_request,
    perform_request,
    perform_request_async,
)
from universal_http.models import (
    HTTPServiceDelegate,
    HttpMethod,
    RequestOutcome,
    RequestState,
)

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "EncodeError",
    "HTTPConfig",
    "HTTPServiceDelegate",
    "HttpMethod",
    "InvalidURLError",
    "RequestOutcome",
    "RequestState",
    "TransportError",
    "UniversalHTTP",
    "UniversalHTTPError",
    "fire_request",
    "perform_request",
    "perform_request_async",
]
