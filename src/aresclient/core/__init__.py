r"""Configuration and validation shared by the client components."""

from __future__ import annotations

__all__ = [
    "DEFAULT_HEADERS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_REFRESH_PATH",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "validate_refresh_path",
    "validate_retry_params",
    "validate_timeout",
]

from aresclient.core.config import (
    DEFAULT_HEADERS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_REFRESH_PATH,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from aresclient.core.validation import (
    validate_refresh_path,
    validate_retry_params,
    validate_timeout,
)
