r"""Fixed-delay backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from aresclient.backoff.base import BaseBackoffStrategy


class ConstantBackoff(BaseBackoffStrategy):
    """Wait the same delay before every retry.

    Args:
        delay: The delay in seconds (default: 1.0).

    Example:
        ```pycon
        >>> from aresclient.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(delay=0.5)
        >>> backoff.calculate(0), backoff.calculate(7)
        (0.5, 0.5)

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay
