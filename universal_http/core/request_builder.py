"""Outgoing request construction for UniversalHTTP.

Validates the target URL, picks the body to attach and assembles an
``httpx.Request`` that either the sync or the async client can send.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic_core import PydanticSerializationError, to_json

from universal_http.config.settings import HTTPConfig
from universal_http.core.errors import EncodeError, InvalidURLError
from universal_http.models.http import HttpMethod


logger = logging.getLogger("universal_http.request_builder")

_ALLOWED_SCHEMES = ("http", "https")

# Characters that must be percent-encoded before they can appear in a URL.
_ILLEGAL_URL_CHARS = re.compile(r'[\s\x00-\x1f\x7f<>"{}|\\^`]')
_BROKEN_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def validate_url(url: str) -> httpx.URL:
    """Parse ``url`` into an absolute http(s) URL or raise ``InvalidURLError``."""

    if not isinstance(url, str) or not url:
        raise InvalidURLError(str(url), "empty URL")

    if _ILLEGAL_URL_CHARS.search(url):
        raise InvalidURLError(url, "contains characters that must be percent-encoded")

    if _BROKEN_PERCENT_ESCAPE.search(url):
        raise InvalidURLError(url, "malformed percent escape")

    # The host is IDNA-decoded lazily, so reading it can fail too.
    try:
        parsed = httpx.URL(url)
        scheme = parsed.scheme
        host = parsed.host
    except (httpx.InvalidURL, UnicodeError, ValueError) as exc:
        raise InvalidURLError(url, str(exc)) from exc

    if scheme not in _ALLOWED_SCHEMES:
        raise InvalidURLError(url, f"unsupported scheme {scheme!r}")
    if not host:
        raise InvalidURLError(url, "missing host")

    return parsed


def _serialize_body_map(body: Mapping[str, Any]) -> Optional[bytes]:
    try:
        return json.dumps(body).encode("utf-8")
    except (TypeError, ValueError):
        logger.warning("Body map is not JSON serializable; falling back to body model", exc_info=True)
        return None


def _encode_body_model(body_model: Any) -> bytes:
    try:
        return to_json(body_model)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EncodeError(f"Cannot encode {type(body_model).__name__} as JSON: {exc}") from exc


def build_body(
    method: HttpMethod,
    body: Optional[Mapping[str, Any]] = None,
    body_model: Any = None,
    strict: bool = False,
) -> Optional[bytes]:
    """Return the bytes to send, or None when no body should be attached.

    A loose ``body`` map wins over ``body_model`` and is attached even for GET.
    ``body_model`` is only used for non-GET requests. If it cannot be encoded
    no body is attached, unless ``strict`` is set, in which case
    ``EncodeError`` is raised.
    """

    if body is not None:
        data = _serialize_body_map(body)
        if data is not None:
            return data

    if body_model is None or method == HttpMethod.GET:
        return None

    try:
        return _encode_body_model(body_model)
    except EncodeError:
        if strict:
            raise
        logger.warning("Body model could not be encoded; sending request without a body", exc_info=True)
        return None


def build_headers(
    headers: Optional[Mapping[str, str]] = None,
    has_body: bool = False,
    config: Optional[HTTPConfig] = None,
) -> httpx.Headers:
    """Combine caller headers with the defaults the executor adds."""

    merged = httpx.Headers()
    if config is not None and config.user_agent:
        merged["User-Agent"] = config.user_agent

    for key, value in (headers or {}).items():
        merged[key] = value

    if has_body and "Content-Type" not in merged:
        merged["Content-Type"] = "application/json"

    return merged


def build_request(
    client: Union[httpx.Client, httpx.AsyncClient],
    url: httpx.URL,
    method: HttpMethod,
    content: Optional[bytes] = None,
    headers: Optional[Mapping[str, str]] = None,
    config: Optional[HTTPConfig] = None,
) -> httpx.Request:
    """Build a request on ``client`` so its default headers still apply."""

    request_headers = build_headers(headers, has_body=content is not None, config=config)
    return client.build_request(method.value, url, content=content, headers=request_headers)
