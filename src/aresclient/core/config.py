r"""Configuration dataclass and defaults for ApiClient.

This module provides configuration constants and a dataclass-based
configuration object shared by every request of an ``ApiClient``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_HEADERS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_REFRESH_PATH",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aresclient.core.validation import (
    validate_refresh_path,
    validate_retry_params,
    validate_timeout,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from aresclient.backoff.base import BaseBackoffStrategy
    from aresclient.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo


# Default timeout in seconds for one attempt
DEFAULT_TIMEOUT = 10.0

# Default maximum number of retries
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Path of the endpoint exchanging a refresh token for a new token pair
DEFAULT_REFRESH_PATH = "/auth/refresh"

DEFAULT_HEADERS: Mapping[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass
class ClientConfig:
    """Configuration for an ``ApiClient``.

    Args:
        base_url: URL prefix prepended to every request path.
        timeout: Default maximum seconds to wait for one attempt.
            Must be > 0.
        max_retries: Default maximum number of retries. Must be >= 0.
        headers: Default headers sent with every request.
        backoff_strategy: Optional backoff strategy for retries.
            Defaults to exponential backoff (1s, 2s, 4s, ...).
        max_wait_time: Optional cap in seconds for backoff delays.
            Must be > 0 if provided.
        retry_on_timeout: Whether timed-out attempts are retried.
        refresh_path: Path of the token refresh endpoint.
        refresh_timeout: Optional timeout for the refresh call. Defaults
            to ``timeout``.
        on_request: Optional callback called before each attempt.
        on_retry: Optional callback called before each retry wait.
        on_success: Optional callback called when a request succeeds.
        on_failure: Optional callback called when a request fails.

    Example:
        ```pycon
        >>> from aresclient.core.config import ClientConfig
        >>> config = ClientConfig(base_url="https://api.example.com")
        >>> config.timeout, config.max_retries
        (10.0, 3)
        >>> config.merge(max_retries=0, timeout=None).max_retries
        0
        >>> config.max_retries  # Original unchanged
        3

        ```
    """

    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    headers: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    backoff_strategy: BaseBackoffStrategy | None = None
    max_wait_time: float | None = None
    retry_on_timeout: bool = False
    refresh_path: str = DEFAULT_REFRESH_PATH
    refresh_timeout: float | None = None
    on_request: Callable[[RequestInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_timeout(self.timeout)
        if self.refresh_timeout is not None:
            validate_timeout(self.refresh_timeout, name="refresh_timeout")
        validate_retry_params(max_retries=self.max_retries, max_wait_time=self.max_wait_time)
        validate_refresh_path(self.refresh_path)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with the non-``None`` overrides applied.

        Args:
            **overrides: Parameters to override. ``None`` values keep
                the current value.

        Returns:
            A new validated ``ClientConfig``.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def url_for(self, path: str) -> str:
        """Build the absolute URL of a request path.

        Args:
            path: The request path, or an absolute ``http(s)`` URL that
                is returned unchanged.

        Returns:
            The absolute URL.

        Example:
            ```pycon
            >>> from aresclient.core.config import ClientConfig
            >>> ClientConfig(base_url="https://api.example.com/v1/").url_for("/users")
            'https://api.example.com/v1/users'

            ```
        """
        if path.startswith(("http://", "https://")):
            return path
        if not self.base_url:
            return path
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    @property
    def effective_refresh_timeout(self) -> float:
        """The timeout applied to the token refresh call."""
        return self.refresh_timeout if self.refresh_timeout is not None else self.timeout
