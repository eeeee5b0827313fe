r"""Retry policy deciding whether and when a failed attempt is retried.

The policy is stateless with respect to any one call: all it knows about
a request is the error, the attempt counter and the response headers it
is given.
"""

from __future__ import annotations

__all__ = ["RetryDecision", "RetryPolicy"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from aresclient.backoff.exponential import ExponentialBackoff
from aresclient.exceptions import ApiErrorKind
from aresclient.utils.retry_after import parse_retry_after
from aresclient.utils.sleep import calculate_sleep_time

if TYPE_CHECKING:
    from collections.abc import Mapping

    from aresclient.backoff.base import BaseBackoffStrategy
    from aresclient.exceptions import ApiError

logger: logging.Logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = 429


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of a retry decision.

    Attributes:
        retry: Whether the request should be attempted again.
        delay: Seconds to wait before the next attempt.
        reason: Short human readable explanation, used in logs.
    """

    retry: bool
    delay: float = 0.0
    reason: str = ""


class RetryPolicy:
    r"""Decide whether a failed attempt should be retried.

    Rules, evaluated in order:

    1. Never retry once ``attempt >= max_retries``.
    2. ``network`` errors are retried with backoff.
    3. ``client`` errors with status 429 are retried, waiting at least
       the ``Retry-After`` duration when the server sends one.
    4. ``server`` errors are retried with backoff.
    5. Other ``client`` errors are never retried.
    6. ``timeout`` errors are retried only if ``retry_on_timeout`` is set.

    Args:
        backoff_strategy: The backoff strategy. Defaults to
            ``ExponentialBackoff()``.
        max_wait_time: Optional cap in seconds for backoff delays. It
            does not shorten a server-specified ``Retry-After`` wait.
        retry_on_timeout: Whether timed-out attempts are retried.

    Example:
        ```pycon
        >>> from aresclient.exceptions import ApiError
        >>> from aresclient.retry import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.should_retry(ApiError.network(), attempt=0, max_retries=3)
        RetryDecision(retry=True, delay=1.0, reason='network error')
        >>> policy.should_retry(
        ...     ApiError.from_status(429, "Too Many Requests"),
        ...     attempt=0,
        ...     max_retries=3,
        ...     headers={"Retry-After": "2"},
        ... ).delay
        2.0
        >>> policy.should_retry(ApiError.from_status(404, "Not found"), 0, 3).retry
        False

        ```
    """

    def __init__(
        self,
        backoff_strategy: BaseBackoffStrategy | None = None,
        max_wait_time: float | None = None,
        retry_on_timeout: bool = False,
    ) -> None:
        self.backoff_strategy: BaseBackoffStrategy = (
            backoff_strategy if backoff_strategy is not None else ExponentialBackoff()
        )
        self.max_wait_time = max_wait_time
        self.retry_on_timeout = retry_on_timeout

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(backoff_strategy={self.backoff_strategy!r}, "
            f"max_wait_time={self.max_wait_time}, retry_on_timeout={self.retry_on_timeout})"
        )

    def should_retry(
        self,
        error: ApiError,
        attempt: int,
        max_retries: int,
        headers: Mapping[str, str] | None = None,
    ) -> RetryDecision:
        """Decide whether to retry after a failed attempt.

        Args:
            error: The classified error of the failed attempt.
            attempt: The 0-indexed number of the failed attempt.
            max_retries: The maximum number of retries allowed.
            headers: The response headers, if a response was received.
                Header lookup should be case-insensitive (e.g.
                ``httpx.Headers``).

        Returns:
            The retry decision.
        """
        if attempt >= max_retries:
            return RetryDecision(retry=False, reason="max retries exhausted")

        if error.kind is ApiErrorKind.NETWORK:
            return self._backoff(attempt, "network error")

        if error.kind is ApiErrorKind.SERVER:
            return self._backoff(attempt, f"status {error.status}")

        if error.kind is ApiErrorKind.CLIENT:
            if error.status != TOO_MANY_REQUESTS:
                return RetryDecision(retry=False, reason=f"non-retryable status {error.status}")
            retry_after = parse_retry_after(_get_header(headers, "Retry-After"))
            delay = calculate_sleep_time(
                attempt,
                retry_after=retry_after,
                backoff_strategy=self.backoff_strategy,
                max_wait_time=self.max_wait_time,
            )
            return RetryDecision(retry=True, delay=delay, reason="status 429")

        if self.retry_on_timeout:
            return self._backoff(attempt, "timeout")
        return RetryDecision(retry=False, reason="timeout")

    def _backoff(self, attempt: int, reason: str) -> RetryDecision:
        delay = calculate_sleep_time(
            attempt, backoff_strategy=self.backoff_strategy, max_wait_time=self.max_wait_time
        )
        return RetryDecision(retry=True, delay=delay, reason=reason)


def _get_header(headers: Mapping[str, str] | None, name: str) -> str | None:
    if headers is None:
        return None
    value = headers.get(name)
    if value is None:
        # Plain dicts are case-sensitive.
        value = headers.get(name.lower())
    return value
