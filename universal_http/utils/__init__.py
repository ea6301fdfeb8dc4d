"""Utilities package for UniversalHTTP."""

from universal_http.utils.logger import (
    generate_request_id,
    get_logger,
    log_error,
    log_info,
    log_warn,
)

__all__ = [
    "generate_request_id",
    "get_logger",
    "log_error",
    "log_info",
    "log_warn",
]
