"""Logging utilities for UniversalHTTP.

This module centralizes logger configuration for the library. Log lines are
emitted as JSON-like structured strings so a single request can be followed
through its ``request_id``.
"""

import json
import logging
import uuid
from typing import Optional


_ROOT_LOGGER_NAME = "universal_http"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a configured logger instance."""

    logger_name = name or _ROOT_LOGGER_NAME
    logger = logging.getLogger(logger_name)

    # Configure a basic console handler once so logs are visible when the
    # host application has not set up logging itself.
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    return logger


def generate_request_id() -> str:
    """Generate a unique request identifier for correlating logs."""

    return str(uuid.uuid4())


def _format_prefixed_message(msg: str) -> str:
    return f"[UNIVERSAL-HTTP] {msg}"


def _format_structured_message(
    message: str,
    request_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> str:
    """Format a log message as a JSON-like structured string."""

    payload: dict = {"message": message}
    if request_id is not None:
        payload["request_id"] = request_id
    if extra:
        payload["extra"] = extra
    return json.dumps(payload, default=str)


def log_info(msg: str, request_id: Optional[str] = None, **extra: object) -> None:
    """Log an informational message for request activity."""

    logger = get_logger(f"{_ROOT_LOGGER_NAME}.request")
    logger.info(
        _format_structured_message(
            _format_prefixed_message(msg),
            request_id=request_id,
            extra=extra or None,
        )
    )


def log_warn(msg: str, request_id: Optional[str] = None, **extra: object) -> None:
    """Log a warning message for request activity."""

    logger = get_logger(f"{_ROOT_LOGGER_NAME}.request")
    logger.warning(
        _format_structured_message(
            _format_prefixed_message(msg),
            request_id=request_id,
            extra=extra or None,
        )
    )


def log_error(msg: str, request_id: Optional[str] = None, **extra: object) -> None:
    """Log an error message for request activity."""

    logger = get_logger(f"{_ROOT_LOGGER_NAME}.request")
    logger.error(
        _format_structured_message(
            _format_prefixed_message(msg),
            request_id=request_id,
            extra=extra or None,
        )
    )
