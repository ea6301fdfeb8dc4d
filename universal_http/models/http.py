"""Request and outcome models for UniversalHTTP.

These types describe what a caller hands to the executor (method, error
observer) and what comes back from a single request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterator, Optional, Protocol, TypeVar, Union


ModelT = TypeVar("ModelT")


class HttpMethod(str, Enum):
    """HTTP methods supported by the executor."""

    GET = "GET"
    POST = "POST"

    @classmethod
    def coerce(cls, value: Union["HttpMethod", str]) -> "HttpMethod":
        """Accept either an ``HttpMethod`` or its (case-insensitive) name."""

        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


class RequestState(str, Enum):
    """Terminal state reached by a single request."""

    SUCCEEDED = "succeeded"
    TRANSPORT_FAILED = "transport_failed"
    DECODE_FAILED = "decode_failed"
    EMPTY_BODY = "empty_body"
    ENCODE_FAILED = "encode_failed"


class HTTPServiceDelegate(Protocol):
    """Observer informed whenever a request fails."""

    def error_did_occur(self) -> None:
        ...


# Either a delegate object or a bare zero-argument callable.
ErrorObserver = Union[HTTPServiceDelegate, Callable[[], Any]]

CompletionHandler = Callable[[Optional[Any], Optional[int]], Any]


@dataclass
class RequestOutcome(Generic[ModelT]):
    """Result of one request.

    Attributes:
        model: The decoded response, or None when anything went wrong or the
               response body was empty.
        status_code: HTTP status of the response, or None when no response
                     was ever received.
        state: Which terminal state the request reached.
        request_id: Identifier used in log lines for this request.

    Unpacks as a ``(model, status_code)`` pair.
    """

    model: Optional[ModelT]
    status_code: Optional[int]
    state: RequestState
    request_id: str = field(default="", compare=False)

    @property
    def ok(self) -> bool:
        return self.model is not None

    def __iter__(self) -> Iterator[Any]:
        yield self.model
        yield self.status_code
