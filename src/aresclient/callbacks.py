r"""Callback types for observing the request lifecycle.

Four hooks are available on ``ClientConfig``:

- on_request: Called before each attempt
- on_retry: Called before waiting for a retry
- on_success: Called when a request returns a payload
- on_failure: Called when a request raises an ``ApiError``

Example:
    ```pycon
    >>> from aresclient.callbacks import RetryInfo
    >>> from aresclient.core import ClientConfig
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"{info.method} {info.url}: attempt {info.attempt} in {info.wait_time}s")
    ...
    >>> config = ClientConfig(on_retry=log_retry)

    ```
"""

from __future__ import annotations

__all__ = [
    "FailureInfo",
    "RequestInfo",
    "ResponseInfo",
    "RetryInfo",
    "invoke_on_failure",
    "invoke_on_request",
    "invoke_on_retry",
    "invoke_on_success",
]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from aresclient.exceptions import ApiError


@dataclass
class RequestInfo:
    """Information passed to the on_request callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method.
        attempt: The attempt number (1-indexed).
        max_retries: Maximum number of retries for this request.
        replay: Whether the attempt replays a request after a token
            refresh.
    """

    url: str
    method: str
    attempt: int
    max_retries: int
    replay: bool


@dataclass
class RetryInfo:
    """Information passed to the on_retry callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method.
        attempt: The number of the upcoming attempt (1-indexed).
        max_retries: Maximum number of retries for this request.
        wait_time: Seconds waited before the upcoming attempt.
        error: The error that triggered the retry.
    """

    url: str
    method: str
    attempt: int
    max_retries: int
    wait_time: float
    error: ApiError


@dataclass
class ResponseInfo:
    """Information passed to the on_success callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method.
        attempt: The attempt that succeeded (1-indexed).
        status_code: The HTTP status code of the response.
        total_time: Seconds spent on all attempts including waits.
    """

    url: str
    method: str
    attempt: int
    status_code: int
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to the on_failure callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method.
        attempt: The last attempt made (1-indexed).
        error: The error raised to the caller.
        total_time: Seconds spent on all attempts including waits.
    """

    url: str
    method: str
    attempt: int
    error: ApiError
    total_time: float


def invoke_on_request(
    on_request: Callable[[RequestInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_retries: int,
    replay: bool,
) -> None:
    """Invoke the on_request callback if provided.

    ``attempt`` is 0-indexed and reported 1-indexed.
    """
    if on_request is not None:
        on_request(
            RequestInfo(
                url=url,
                method=method,
                attempt=attempt + 1,
                max_retries=max_retries,
                replay=replay,
            )
        )


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_retries: int,
    wait_time: float,
    error: ApiError,
) -> None:
    """Invoke the on_retry callback if provided.

    ``attempt`` is the 0-indexed failed attempt; the callback receives
    the 1-indexed number of the next attempt, i.e. ``attempt + 2``.
    """
    if on_retry is not None:
        on_retry(
            RetryInfo(
                url=url,
                method=method,
                attempt=attempt + 2,
                max_retries=max_retries,
                wait_time=wait_time,
                error=error,
            )
        )


def invoke_on_success(
    on_success: Callable[[ResponseInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    status_code: int,
    start_time: float,
) -> None:
    """Invoke the on_success callback if provided."""
    if on_success is not None:
        on_success(
            ResponseInfo(
                url=url,
                method=method,
                attempt=attempt + 1,
                status_code=status_code,
                total_time=time.monotonic() - start_time,
            )
        )


def invoke_on_failure(
    on_failure: Callable[[FailureInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    error: ApiError,
    start_time: float,
) -> None:
    """Invoke the on_failure callback if provided."""
    if on_failure is not None:
        on_failure(
            FailureInfo(
                url=url,
                method=method,
                attempt=attempt + 1,
                error=error,
                total_time=time.monotonic() - start_time,
            )
        )
