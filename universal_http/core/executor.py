"""Generic single-request executor.

``UniversalHTTP`` sends one GET or POST request, optionally with a JSON body
and custom headers, and decodes the response into a caller-chosen model.

Three calling conventions share the same pipeline:

- ``await perform_request_async(...)`` returns a ``RequestOutcome`` (or None
  when the URL is invalid and nothing was sent);
- ``perform_request(..., completion=fn)`` runs in the background and calls
  ``fn(model, status_code)`` exactly once;
- ``fire_request(...)`` runs in the background and only informs the error
  observer.

The background forms return a ``concurrent.futures.Future`` that resolves once
the request (and the completion, if any) has finished.

Failures never raise. They are reported to the optional error observer (a
``HTTPServiceDelegate`` or a zero-argument callable) and reflected in the
outcome as an absent model.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass
from threading import Lock
from typing import Any, AsyncIterator, Generic, Iterator, Mapping, Optional, Type, TypeVar, Union

import httpx

from universal_http.config.settings import HTTPConfig
from universal_http.core.errors import DecodeError, EncodeError, InvalidURLError, TransportError, UniversalHTTPError
from universal_http.core.request_builder import build_body, build_request, validate_url
from universal_http.core.response import ModelDecoder, log_debug_response
from universal_http.models.http import (
    CompletionHandler,
    ErrorObserver,
    HttpMethod,
    RequestOutcome,
    RequestState,
)
from universal_http.utils.logger import generate_request_id, log_error, log_warn


logger = logging.getLogger("universal_http.executor")

ModelT = TypeVar("ModelT")

_background_pool: Optional[ThreadPoolExecutor] = None
_background_lock = Lock()


def _background() -> ThreadPoolExecutor:
    """Return the worker pool shared by every background request."""

    global _background_pool
    with _background_lock:
        if _background_pool is None:
            _background_pool = ThreadPoolExecutor(thread_name_prefix="universal-http")
        return _background_pool


@dataclass
class _PreparedCall:
    url: httpx.URL
    method: HttpMethod
    content: Optional[bytes]


def notify_error(observer: Optional[ErrorObserver], request_id: str = "") -> None:
    """Tell ``observer`` that a request failed."""

    if observer is None:
        return

    callback = getattr(observer, "error_did_occur", None)
    if callback is None and callable(observer):
        callback = observer
    if callback is None:
        logger.warning("Error observer %r is neither a delegate nor callable", observer)
        return

    try:
        callback()
    except Exception:  # noqa: BLE001
        logger.exception("Error observer raised while being notified (request_id=%s)", request_id)


class UniversalHTTP(Generic[ModelT]):
    """Send a request and decode its response as ``model_type``."""

    def __init__(self, model_type: Type[ModelT], config: Optional[HTTPConfig] = None) -> None:
        self.model_type = model_type
        self.config = config or HTTPConfig.from_env()
        self._decoder: ModelDecoder[ModelT] = ModelDecoder(model_type)

    def parse_model(self, data: bytes) -> Optional[ModelT]:
        """Decode ``data`` according to the model type, or return None."""

        return self._decoder.parse(data)

    # ------------------------------------------------------------------
    # Calling conventions
    # ------------------------------------------------------------------

    async def perform_request_async(
        self,
        url: str,
        body: Optional[Mapping[str, Any]] = None,
        method: Union[HttpMethod, str] = HttpMethod.GET,
        body_model: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        debug: bool = False,
        delegate: Optional[ErrorObserver] = None,
        client: Optional[httpx.AsyncClient] = None,
        strict_body: bool = False,
    ) -> Optional[RequestOutcome[ModelT]]:
        """Send the request and return its outcome.

        Returns None (not an outcome) when the URL is invalid and no request
        was sent.
        """

        request_id = generate_request_id()
        try:
            prepared = self._prepare(url, body, method, body_model, strict_body)
        except UniversalHTTPError as exc:
            return self._reject(exc, delegate, request_id)

        async with self._async_client(client) as http_client:
            request = build_request(http_client, prepared.url, prepared.method, prepared.content, headers, self.config)
            try:
                response = await http_client.send(request)
            except httpx.RequestError as exc:
                return self._transport_failed(exc, delegate, request_id)

        return self._complete(response, debug, delegate, request_id)

    def perform_request(
        self,
        url: str,
        body: Optional[Mapping[str, Any]] = None,
        method: Union[HttpMethod, str] = HttpMethod.GET,
        body_model: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        debug: bool = False,
        delegate: Optional[ErrorObserver] = None,
        completion: Optional[CompletionHandler] = None,
        client: Optional[httpx.Client] = None,
        strict_body: bool = False,
    ) -> "Future[None]":
        """Send the request in the background and hand ``(model, status_code)`` to ``completion``.

        ``completion`` is invoked exactly once on a worker thread, with
        ``(None, None)`` when the request could not be sent at all. An
        exception raised by ``completion`` is stored on the returned future.
        """

        def run() -> None:
            outcome = self._send(url, body, method, body_model, headers, debug, delegate, client, strict_body)
            if completion is None:
                return
            if outcome is None:
                completion(None, None)
            else:
                completion(outcome.model, outcome.status_code)

        return _background().submit(run)

    def fire_request(
        self,
        url: str,
        body: Optional[Mapping[str, Any]] = None,
        method: Union[HttpMethod, str] = HttpMethod.GET,
        body_model: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        debug: bool = False,
        delegate: Optional[ErrorObserver] = None,
        client: Optional[httpx.Client] = None,
        strict_body: bool = False,
    ) -> "Future[None]":
        """Send the request in the background, reporting only failures through ``delegate``."""

        def run() -> None:
            self._send(url, body, method, body_model, headers, debug, delegate, client, strict_body)

        return _background().submit(run)

    # ------------------------------------------------------------------
    # Shared pipeline
    # ------------------------------------------------------------------

    def _send(
        self,
        url: str,
        body: Optional[Mapping[str, Any]],
        method: Union[HttpMethod, str],
        body_model: Any,
        headers: Optional[Mapping[str, str]],
        debug: bool,
        delegate: Optional[ErrorObserver],
        client: Optional[httpx.Client],
        strict_body: bool,
    ) -> Optional[RequestOutcome[ModelT]]:
        request_id = generate_request_id()
        try:
            prepared = self._prepare(url, body, method, body_model, strict_body)
        except UniversalHTTPError as exc:
            return self._reject(exc, delegate, request_id)

        with self._sync_client(client) as http_client:
            request = build_request(http_client, prepared.url, prepared.method, prepared.content, headers, self.config)
            try:
                response = http_client.send(request)
            except httpx.RequestError as exc:
                return self._transport_failed(exc, delegate, request_id)

        return self._complete(response, debug, delegate, request_id)

    def _prepare(
        self,
        url: str,
        body: Optional[Mapping[str, Any]],
        method: Union[HttpMethod, str],
        body_model: Any,
        strict_body: bool,
    ) -> _PreparedCall:
        parsed_url = validate_url(url)
        http_method = HttpMethod.coerce(method)
        content = build_body(http_method, body=body, body_model=body_model, strict=strict_body)
        return _PreparedCall(url=parsed_url, method=http_method, content=content)

    def _reject(
        self,
        exc: UniversalHTTPError,
        delegate: Optional[ErrorObserver],
        request_id: str,
    ) -> Optional[RequestOutcome[ModelT]]:
        """Handle failures that happen before anything is sent."""

        log_error(str(exc), request_id=request_id)
        notify_error(delegate, request_id)
        if isinstance(exc, EncodeError):
            return RequestOutcome(None, None, RequestState.ENCODE_FAILED, request_id)
        if not isinstance(exc, InvalidURLError):
            raise exc
        return None

    def _transport_failed(
        self,
        exc: httpx.RequestError,
        delegate: Optional[ErrorObserver],
        request_id: str,
    ) -> RequestOutcome[ModelT]:
        error = TransportError(f"{type(exc).__name__}: {exc}")
        log_error(f"Request met with an error: {error}", request_id=request_id)
        notify_error(delegate, request_id)
        return RequestOutcome(None, None, RequestState.TRANSPORT_FAILED, request_id)

    def _complete(
        self,
        response: httpx.Response,
        debug: bool,
        delegate: Optional[ErrorObserver],
        request_id: str,
    ) -> RequestOutcome[ModelT]:
        if debug or self.config.debug:
            log_debug_response(response, request_id, method=response.request.method, url=str(response.request.url))

        if not response.content:
            return RequestOutcome(None, response.status_code, RequestState.EMPTY_BODY, request_id)

        try:
            model = self._decoder.decode(response.content, status_code=response.status_code)
        except DecodeError as exc:
            log_warn(f"Error caught: {exc}", request_id=request_id, status_code=exc.status_code)
            notify_error(delegate, request_id)
            return RequestOutcome(None, exc.status_code, RequestState.DECODE_FAILED, request_id)

        return RequestOutcome(model, response.status_code, RequestState.SUCCEEDED, request_id)

    @contextmanager
    def _sync_client(self, client: Optional[httpx.Client]) -> Iterator[httpx.Client]:
        if client is not None:
            yield client
            return
        with httpx.Client(timeout=self.config.timeout) as owned:
            yield owned

    @asynccontextmanager
    async def _async_client(self, client: Optional[httpx.AsyncClient]) -> AsyncIterator[httpx.AsyncClient]:
        if client is not None:
            yield client
            return
        async with httpx.AsyncClient(timeout=self.config.timeout) as owned:
            yield owned


async def perform_request_async(
    model_type: Type[ModelT],
    url: str,
    config: Optional[HTTPConfig] = None,
    **kwargs: Any,
) -> Optional[RequestOutcome[ModelT]]:
    """Shortcut for ``UniversalHTTP(model_type).perform_request_async(url, ...)``."""

    return await UniversalHTTP(model_type, config=config).perform_request_async(url, **kwargs)


def perform_request(
    model_type: Type[ModelT],
    url: str,
    config: Optional[HTTPConfig] = None,
    **kwargs: Any,
) -> "Future[None]":
    """Shortcut for ``UniversalHTTP(model_type).perform_request(url, ...)``."""

    return UniversalHTTP(model_type, config=config).perform_request(url, **kwargs)


def fire_request(
    model_type: Type[ModelT],
    url: str,
    config: Optional[HTTPConfig] = None,
    **kwargs: Any,
) -> "Future[None]":
    """Shortcut for ``UniversalHTTP(model_type).fire_request(url, ...)``."""

    return UniversalHTTP(model_type, config=config).fire_request(url, **kwargs)
