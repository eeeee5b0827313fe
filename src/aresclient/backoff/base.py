r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    Implementations must return a finite delay that never decreases
    when ``attempt`` grows.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Return the delay in seconds to wait before the next attempt.

        Args:
            attempt: The 0-indexed number of the attempt that just
                failed. ``attempt=0`` means the first request failed
                and the first retry is about to happen.
        """
