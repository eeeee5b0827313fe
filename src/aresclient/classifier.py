r"""Map transport outcomes to typed errors and success payloads."""

from __future__ import annotations

__all__ = ["classify_outcome", "decode_body", "parse_json_body", "unwrap_envelope"]

import json
import logging
from typing import Any

from aresclient.exceptions import ApiError
from aresclient.transport import AttemptOutcome, NetworkFailure, Success, Timeout

logger: logging.Logger = logging.getLogger(__name__)

_ENVELOPE_KEYS = frozenset({"success", "data", "message"})


def parse_json_body(body: bytes) -> Any | None:
    """Parse a response body as JSON.

    Args:
        body: The raw response body.

    Returns:
        The parsed value, or ``None`` if the body is empty or is not
        valid JSON.

    Example:
        ```pycon
        >>> from aresclient.classifier import parse_json_body
        >>> parse_json_body(b'{"message": "Bad Request"}')
        {'message': 'Bad Request'}
        >>> parse_json_body(b"<html>oops</html>") is None
        True

        ```
    """
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


def classify_outcome(
    outcome: AttemptOutcome,
    *,
    method: str | None = None,
    url: str | None = None,
) -> ApiError | None:
    r"""Classify the outcome of one transport call.

    Args:
        outcome: The outcome to classify.
        method: The HTTP method, attached to the error for diagnostics.
        url: The URL, attached to the error for diagnostics.

    Returns:
        ``None`` if the outcome is a successful response, otherwise the
        matching ``ApiError``. A 401 response is returned as a ``client``
        error; deciding whether it is recoverable is left to the caller.

    Example:
        ```pycon
        >>> from aresclient.classifier import classify_outcome
        >>> from aresclient.transport import Success, Timeout
        >>> classify_outcome(Success(status=200, body=b"{}")) is None
        True
        >>> classify_outcome(Timeout(timeout=1.0)).kind.value
        'timeout'
        >>> error = classify_outcome(Success(status=404, body=b'{"message": "Not found"}'))
        >>> error.kind.value, error.status, error.message
        ('client', 404, 'Not found')

        ```
    """
    if isinstance(outcome, Timeout):
        return ApiError.timeout(
            f"Request timeout after {outcome.timeout}s", method=method, url=url
        )
    if isinstance(outcome, NetworkFailure):
        return ApiError.network(
            f"Network error: {outcome.error}",
            details=type(outcome.error).__name__,
            method=method,
            url=url,
        )
    if outcome.status < 400:
        return None

    payload = parse_json_body(outcome.body)
    message = None
    details = None
    if isinstance(payload, dict):
        message = payload.get("message")
        details = payload.get("details")
    if not isinstance(message, str) or not message:
        message = _generic_message(outcome.status)
    return ApiError.from_status(outcome.status, message, details, method=method, url=url)


def unwrap_envelope(payload: Any) -> Any:
    """Return the business payload of a ``{success, data, message}``
    envelope.

    Args:
        payload: The decoded response body.

    Returns:
        ``payload["data"]`` if ``payload`` is an envelope, otherwise
        ``payload`` unchanged.

    Example:
        ```pycon
        >>> from aresclient.classifier import unwrap_envelope
        >>> unwrap_envelope({"success": True, "data": [1, 2]})
        [1, 2]
        >>> unwrap_envelope({"data": [1], "pagination": {"page": 1}})
        {'data': [1], 'pagination': {'page': 1}}

        ```
    """
    if isinstance(payload, dict) and "data" in payload and payload.keys() <= _ENVELOPE_KEYS:
        return payload["data"]
    return payload


def decode_body(outcome: Success) -> Any:
    """Decode the body of a successful response.

    JSON bodies are parsed and unwrapped from their envelope, other
    bodies are returned as text, and empty bodies as ``None``.

    Args:
        outcome: The successful outcome.

    Returns:
        The business payload.
    """
    if not outcome.body:
        return None
    content_type = outcome.headers.get("content-type", "")
    if "json" in content_type or not content_type:
        try:
            payload = json.loads(outcome.body)
        except ValueError:
            if content_type:
                logger.debug("Response declared as JSON could not be parsed, returning text")
        else:
            return unwrap_envelope(payload)
    return outcome.body.decode(errors="replace")


def _generic_message(status: int) -> str:
    if status >= 500:
        return f"Server error (status {status})"
    return f"Request failed with status {status}"
