r"""Parameter validation for the client configuration."""

from __future__ import annotations

__all__ = ["validate_refresh_path", "validate_retry_params", "validate_timeout"]


def validate_timeout(timeout: float, name: str = "timeout") -> None:
    """Validate a timeout in seconds.

    Args:
        timeout: The timeout to validate. Must be > 0.
        name: The parameter name used in the error message.

    Raises:
        ValueError: If the timeout is not > 0.

    Example:
        ```pycon
        >>> from aresclient.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"{name} must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(max_retries: int, max_wait_time: float | None = None) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retries. Must be >= 0. A value of
            0 means only the initial attempt is made.
        max_wait_time: Optional cap for backoff delays. Must be > 0 if
            provided.

    Raises:
        ValueError: If a parameter is out of range.

    Example:
        ```pycon
        >>> from aresclient.core import validate_retry_params
        >>> validate_retry_params(max_retries=3)
        >>> validate_retry_params(max_retries=0, max_wait_time=5.0)

        ```
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if max_wait_time is not None and max_wait_time <= 0:
        msg = f"max_wait_time must be > 0, got {max_wait_time}"
        raise ValueError(msg)


def validate_refresh_path(refresh_path: str) -> None:
    """Validate the path of the token refresh endpoint.

    Args:
        refresh_path: The path. Must start with ``/``.

    Raises:
        ValueError: If the path does not start with ``/``.
    """
    if not refresh_path.startswith("/"):
        msg = f"refresh_path must start with '/', got {refresh_path!r}"
        raise ValueError(msg)
