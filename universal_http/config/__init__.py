"""Configuration package for UniversalHTTP."""

from universal_http.config.settings import (
    DEFAULT_TIMEOUT_SECONDS,
    HTTPConfig,
)

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "HTTPConfig",
]
