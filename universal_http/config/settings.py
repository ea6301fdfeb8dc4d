"""Runtime settings for UniversalHTTP.

Values come from the environment (a local ``.env`` file is honoured) and can
be overridden per executor by passing an ``HTTPConfig`` explicitly.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv()

logger = logging.getLogger("universal_http.config")

DEFAULT_TIMEOUT_SECONDS = 15.0

_TRUTHY = {"1", "true", "yes", "on"}


class HTTPConfig(BaseModel):
    """Configuration shared by every request an executor issues."""

    timeout: float = DEFAULT_TIMEOUT_SECONDS
    debug: bool = False
    user_agent: Optional[str] = None

    @classmethod
    def from_env(cls) -> "HTTPConfig":
        """Build a config from ``UNIVERSAL_HTTP_*`` environment variables."""

        timeout = DEFAULT_TIMEOUT_SECONDS
        raw_timeout = os.getenv("UNIVERSAL_HTTP_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning(
                    "Ignoring malformed UNIVERSAL_HTTP_TIMEOUT=%r; using %s",
                    raw_timeout,
                    DEFAULT_TIMEOUT_SECONDS,
                )
            else:
                if timeout <= 0:
                    logger.warning("UNIVERSAL_HTTP_TIMEOUT must be positive; using %s", DEFAULT_TIMEOUT_SECONDS)
                    timeout = DEFAULT_TIMEOUT_SECONDS

        debug = os.getenv("UNIVERSAL_HTTP_DEBUG", "").strip().lower() in _TRUTHY
        user_agent = os.getenv("UNIVERSAL_HTTP_USER_AGENT") or None

        return cls(timeout=timeout, debug=debug, user_agent=user_agent)
