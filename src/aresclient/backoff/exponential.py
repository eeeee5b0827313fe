r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from aresclient.backoff.base import BaseBackoffStrategy

DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 30.0


class ExponentialBackoff(BaseBackoffStrategy):
    """Double the delay after every failed attempt, up to a cap.

    The delay is ``base_delay * 2 ** attempt`` capped at ``max_delay``,
    which gives 1s, 2s, 4s, ... with the defaults.

    Args:
        base_delay: The delay in seconds before the first retry.
        max_delay: The upper bound in seconds of any delay.

    Example:
        ```pycon
        >>> from aresclient.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff()
        >>> [backoff.calculate(attempt) for attempt in range(4)]
        [1.0, 2.0, 4.0, 8.0]
        >>> ExponentialBackoff(base_delay=1.0, max_delay=5.0).calculate(10)
        5.0

        ```
    """

    def __init__(
        self, base_delay: float = DEFAULT_BASE_DELAY, max_delay: float = DEFAULT_MAX_DELAY
    ) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay <= 0:
            msg = f"max_delay must be positive, got {max_delay}"
            raise ValueError(msg)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        # Bound the exponent so large attempt numbers cannot overflow a float.
        exponent = min(attempt, 64)
        return min(self.base_delay * 2.0**exponent, self.max_delay)
