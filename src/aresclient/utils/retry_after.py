r"""Retry-After header parsing.

The header is either a number of seconds or an HTTP-date (RFC 7231).
"""

from __future__ import annotations

__all__ = ["parse_retry_after"]

import logging
import math
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(retry_after_header: str | None) -> float | None:
    """Parse a Retry-After header value into seconds.

    Args:
        retry_after_header: The raw header value, or ``None`` if the
            header is absent.

    Returns:
        The number of seconds to wait, or ``None`` if the header is
        absent or cannot be parsed. Negative values and dates in the
        past give ``0.0``.

    Example:
        ```pycon
        >>> from aresclient.utils import parse_retry_after
        >>> parse_retry_after("2")
        2.0
        >>> parse_retry_after("0.5")
        0.5
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("soon") is None
        True

        ```
    """
    if retry_after_header is None:
        return None
    value = retry_after_header.strip()

    with suppress(ValueError):
        seconds = float(value)
        if math.isfinite(seconds):
            return max(0.0, seconds)
        logger.debug(f"Ignoring non-finite Retry-After header: {retry_after_header!r}")
        return None

    try:
        retry_date = parsedate_to_datetime(value)
    except (ValueError, TypeError, IndexError, OverflowError):
        logger.debug(f"Failed to parse Retry-After header: {retry_after_header!r}")
        return None
    if retry_date.tzinfo is None:
        retry_date = retry_date.replace(tzinfo=timezone.utc)
    return max(0.0, (retry_date - datetime.now(timezone.utc)).total_seconds())
