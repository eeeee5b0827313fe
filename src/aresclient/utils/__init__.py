r"""Helpers for computing retry waits from server hints and backoff
strategies."""

from __future__ import annotations

__all__ = ["calculate_sleep_time", "parse_retry_after"]

from aresclient.utils.retry_after import parse_retry_after
from aresclient.utils.sleep import calculate_sleep_time
