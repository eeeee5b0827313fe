r"""Token refresh call."""

from __future__ import annotations

__all__ = ["refresh_access_token"]

import json
import logging
from typing import TYPE_CHECKING

from aresclient.auth.bridge import TokenPair
from aresclient.classifier import classify_outcome, parse_json_body, unwrap_envelope
from aresclient.exceptions import TokenRefreshError
from aresclient.transport import PreparedRequest

if TYPE_CHECKING:
    from collections.abc import Mapping

    from aresclient.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)


async def refresh_access_token(
    transport: Transport,
    url: str,
    refresh_token: str,
    *,
    timeout: float,
    headers: Mapping[str, str] | None = None,
) -> TokenPair:
    r"""Exchange a refresh token for a new token pair.

    The call is sent once, directly through the transport: it is never
    retried and a 401 answer never triggers another refresh.

    Args:
        transport: The transport used to send the request.
        url: The absolute URL of the refresh endpoint.
        refresh_token: The refresh token to exchange.
        timeout: The deadline of the call in seconds.
        headers: Optional headers, typically the client defaults.

    Returns:
        The new token pair.

    Raises:
        ApiError: If the call times out, fails at the network level or
            is answered with an error status.
        TokenRefreshError: If the response carries no access token.
    """
    request = PreparedRequest(
        method="POST",
        url=url,
        headers={**(headers or {}), "Content-Type": "application/json"},
        content=json.dumps({"refresh_token": refresh_token}).encode(),
    )
    logger.debug(f"Requesting new tokens from {url}")
    outcome = await transport.send(request, timeout=timeout)
    error = classify_outcome(outcome, method=request.method, url=url)
    if error is not None:
        raise error

    payload = unwrap_envelope(parse_json_body(outcome.body))
    if not isinstance(payload, dict) or not isinstance(payload.get("access_token"), str):
        msg = f"Refresh response from {url} does not contain an access_token"
        raise TokenRefreshError(msg)
    new_refresh_token = payload.get("refresh_token")
    return TokenPair(
        access_token=payload["access_token"],
        refresh_token=new_refresh_token if isinstance(new_refresh_token, str) else None,
    )
