r"""Backoff strategies computing the delay between retry attempts.

Every strategy is bounded and monotonically non-decreasing in the
attempt number.
"""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ConstantBackoff", "ExponentialBackoff"]

from aresclient.backoff.base import BaseBackoffStrategy
from aresclient.backoff.constant import ConstantBackoff
from aresclient.backoff.exponential import ExponentialBackoff
