r"""Retry decisions for failed API requests."""

from __future__ import annotations

__all__ = ["RetryDecision", "RetryPolicy"]

from aresclient.retry.policy import RetryDecision, RetryPolicy
