r"""Request executor orchestrating transport, retries and token refresh.

This module provides the ``RequestExecutor`` class that runs one logical
request to completion: it builds each attempt with fresh credentials,
sends it through the transport, classifies the outcome, and either
returns the payload, waits and retries, hands a 401 over to the
``AuthCoordinator``, or raises the classified ``ApiError``.
"""

from __future__ import annotations

__all__ = ["RequestExecutor"]

import asyncio
import json
import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from aresclient.callbacks import (
    invoke_on_failure,
    invoke_on_request,
    invoke_on_retry,
    invoke_on_success,
)
from aresclient.classifier import classify_outcome, decode_body
from aresclient.retry.policy import RetryPolicy
from aresclient.transport import PreparedRequest, Success

if TYPE_CHECKING:
    from aresclient.auth.bridge import AuthBridge
    from aresclient.auth.coordinator import AuthCoordinator
    from aresclient.core.config import ClientConfig
    from aresclient.models import RequestDescriptor
    from aresclient.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)


class RequestExecutor:
    """Execute API requests with retries and token refresh.

    The executor composes the following components:
    - Transport: Performs one network call per attempt
    - RetryPolicy: Decides whether and when to retry a failed attempt
    - AuthCoordinator: Refreshes the access token on HTTP 401 and
      replays the request

    Args:
        config: The client configuration.
        transport: The transport used to send attempts.
        bridge: The credential store read for every attempt.
        coordinator: The refresh coordinator shared by all requests of
            the client. If ``None``, 401 responses are not recovered.
        policy: Optional retry policy. Defaults to a policy built from
            ``config``.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport,
        bridge: AuthBridge,
        coordinator: AuthCoordinator | None = None,
        policy: RetryPolicy | None = None,
    ) -> None:
        self.config = config
        self.transport = transport
        self.bridge = bridge
        self.coordinator = coordinator
        self.policy: RetryPolicy = (
            policy
            if policy is not None
            else RetryPolicy(
                backoff_strategy=config.backoff_strategy,
                max_wait_time=config.max_wait_time,
                retry_on_timeout=config.retry_on_timeout,
            )
        )

    async def execute(self, request: RequestDescriptor) -> Any:
        """Run a request, recovering from an expired access token.

        Args:
            request: The request to run.

        Returns:
            The decoded response payload.

        Raises:
            ApiError: If the request fails after all retries, fails with
                a non-retryable error, or cannot be authorized.
        """
        return await self._run(request, allow_refresh=True)

    async def replay(self, request: RequestDescriptor) -> Any:
        """Run a request after a token refresh.

        A 401 answer to a replay is raised as a ``client`` error and
        never triggers another refresh.
        """
        return await self._run(request, allow_refresh=False)

    async def _run(self, request: RequestDescriptor, *, allow_refresh: bool) -> Any:
        start_time = time.monotonic()
        url = self.config.url_for(request.path)
        attempt = 0
        while True:
            invoke_on_request(
                self.config.on_request,
                url=url,
                method=request.method,
                attempt=attempt,
                max_retries=request.max_retries,
                replay=not allow_refresh,
            )
            prepared = await self._prepare(request, url)
            outcome = await self.transport.send(prepared, timeout=request.timeout)
            error = classify_outcome(outcome, method=request.method, url=url)

            if error is None:
                logger.debug(
                    f"{request.method} request to {url} succeeded on attempt {attempt + 1}"
                )
                invoke_on_success(
                    self.config.on_success,
                    url=url,
                    method=request.method,
                    attempt=attempt,
                    status_code=outcome.status,
                    start_time=start_time,
                )
                return decode_body(outcome)

            if (
                error.is_unauthorized
                and allow_refresh
                and not request.skip_auth
                and self.coordinator is not None
            ):
                return await self.coordinator.handle_unauthorized(request, error, self.replay)

            headers = outcome.headers if isinstance(outcome, Success) else None
            decision = self.policy.should_retry(error, attempt, request.max_retries, headers)
            if not decision.retry:
                logger.debug(
                    f"{request.method} request to {url} failed on attempt {attempt + 1} "
                    f"({decision.reason})"
                )
                invoke_on_failure(
                    self.config.on_failure,
                    url=url,
                    method=request.method,
                    attempt=attempt,
                    error=error,
                    start_time=start_time,
                )
                raise error

            logger.debug(
                f"{request.method} request to {url} will retry in {decision.delay:.2f}s "
                f"({decision.reason}, attempt {attempt + 1}/{request.max_retries + 1})"
            )
            invoke_on_retry(
                self.config.on_retry,
                url=url,
                method=request.method,
                attempt=attempt,
                max_retries=request.max_retries,
                wait_time=decision.delay,
                error=error,
            )
            await asyncio.sleep(decision.delay)
            attempt += 1

    async def _prepare(self, request: RequestDescriptor, url: str) -> PreparedRequest:
        headers = httpx.Headers(self.config.headers)
        headers.update(request.headers)
        if not request.skip_auth and "Authorization" not in headers:
            token = await self.bridge.get_access_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        content = None
        if request.body is not None:
            content = json.dumps(request.body).encode()
        return PreparedRequest(
            method=request.method, url=url, headers=dict(headers), content=content
        )
