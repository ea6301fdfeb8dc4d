"""Response decoding for UniversalHTTP."""

from __future__ import annotations

from typing import Any, Generic, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from universal_http.core.errors import DecodeError
from universal_http.utils.logger import log_info, log_warn


ModelT = TypeVar("ModelT")


class ModelDecoder(Generic[ModelT]):
    """Decode raw JSON bytes into ``model_type``.

    Anything ``pydantic.TypeAdapter`` understands is accepted: BaseModel
    subclasses, ``List[Item]``, dataclasses, plain dicts and primitives.
    """

    def __init__(self, model_type: Type[ModelT]) -> None:
        self.model_type = model_type
        self._adapter: TypeAdapter[ModelT] = TypeAdapter(model_type)

    def decode(self, data: bytes, status_code: Optional[int] = None) -> ModelT:
        """Return the decoded model or raise ``DecodeError``."""

        try:
            return self._adapter.validate_json(data)
        except (ValidationError, ValueError) as exc:
            raise DecodeError(f"Response does not match {self.model_name}: {exc}", status_code=status_code) from exc

    def parse(self, data: bytes) -> Optional[ModelT]:
        """Return the decoded model, or None when ``data`` does not fit."""

        try:
            return self.decode(data)
        except DecodeError as exc:
            log_warn(f"Error caught while decoding {self.model_name}: {exc.__cause__}")
            return None

    @property
    def model_name(self) -> str:
        return getattr(self.model_type, "__name__", None) or repr(self.model_type)


def response_text(response: httpx.Response) -> str:
    """Best-effort text rendering of a response body for diagnostics."""

    if not response.content:
        return "-"
    try:
        return response.text
    except (LookupError, UnicodeDecodeError):
        return response.content.decode("utf-8", errors="replace")


def log_debug_response(response: httpx.Response, request_id: str, **extra: Any) -> None:
    """Log the status code and raw body of ``response``."""

    log_info(
        f"Response came back with code: {response.status_code}",
        request_id=request_id,
        status_code=response.status_code,
        **extra,
    )
    log_info(
        f"Raw response body:\n{response_text(response)}",
        request_id=request_id,
    )
