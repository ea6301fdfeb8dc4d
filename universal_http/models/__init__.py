"""Models package for UniversalHTTP."""

from universal_http.models.http import (
    CompletionHandler,
    ErrorObserver,
    HTTPServiceDelegate,
    HttpMethod,
    RequestOutcome,
    RequestState,
)

__all__ = [
    "CompletionHandler",
    "ErrorObserver",
    "HTTPServiceDelegate",
    "HttpMethod",
    "RequestOutcome",
    "RequestState",
]
