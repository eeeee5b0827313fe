r"""Wait time computation between retry attempts."""

from __future__ import annotations

__all__ = ["calculate_sleep_time"]

import logging
from typing import TYPE_CHECKING

from aresclient.backoff.exponential import ExponentialBackoff

if TYPE_CHECKING:
    from aresclient.backoff.base import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)


def calculate_sleep_time(
    attempt: int,
    *,
    retry_after: float | None = None,
    backoff_strategy: BaseBackoffStrategy | None = None,
    max_wait_time: float | None = None,
) -> float:
    """Compute how long to wait before the next attempt.

    A server-specified wait takes precedence and is used as-is, so the
    client never comes back earlier than the server asked. Otherwise the
    backoff strategy delay is used, capped at ``max_wait_time``.

    Args:
        attempt: The 0-indexed number of the attempt that just failed.
        retry_after: Optional wait in seconds requested by the server.
        backoff_strategy: The backoff strategy. Defaults to
            ``ExponentialBackoff()``.
        max_wait_time: Optional cap in seconds for backoff delays.

    Returns:
        The wait time in seconds.

    Example:
        ```pycon
        >>> from aresclient.utils import calculate_sleep_time
        >>> calculate_sleep_time(attempt=2)
        4.0
        >>> calculate_sleep_time(attempt=2, max_wait_time=3.0)
        3.0
        >>> calculate_sleep_time(attempt=0, retry_after=5.0, max_wait_time=3.0)
        5.0

        ```
    """
    if retry_after is not None:
        logger.debug(f"Using Retry-After header value: {retry_after:.2f}s")
        return retry_after

    if backoff_strategy is None:
        backoff_strategy = ExponentialBackoff()
    sleep_time = backoff_strategy.calculate(attempt)
    if max_wait_time is not None and sleep_time > max_wait_time:
        logger.debug(f"Capping sleep time from {sleep_time:.2f}s to {max_wait_time:.2f}s")
        sleep_time = max_wait_time
    return sleep_time
