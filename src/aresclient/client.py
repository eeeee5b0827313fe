r"""Asynchronous API client with retries and transparent token refresh.

This module provides the ``ApiClient`` async context manager. It owns the
underlying ``httpx.AsyncClient`` and one ``AuthCoordinator``, so all the
requests made through one client share a single refresh state.
"""

from __future__ import annotations

__all__ = ["ApiClient"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from aresclient.auth.coordinator import AuthCoordinator
from aresclient.auth.refresh import refresh_access_token
from aresclient.core.config import ClientConfig
from aresclient.executor import RequestExecutor
from aresclient.models import RequestDescriptor, RequestOptions
from aresclient.transport import HttpxTransport

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    from aresclient.auth.bridge import AuthBridge, TokenPair
    from aresclient.auth.coordinator import RefreshState
    from aresclient.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)


class ApiClient:
    r"""Asynchronous client for a JSON API.

    Requests are retried on network errors, 5xx and 429 responses. A 401
    response triggers one token refresh shared by all concurrent
    requests, after which the failed requests are replayed with the new
    access token.

    Args:
        auth_bridge: The credential store.
        config: Optional client configuration. If ``None``, a default
            ``ClientConfig`` is used.
        client: Optional ``httpx.AsyncClient``. It is used as-is and is
            not closed by this client.
        transport: Optional transport. Takes precedence over ``client``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresclient import ApiClient, ClientConfig, InMemoryAuthBridge
        >>> async def main():  # doctest: +SKIP
        ...     bridge = InMemoryAuthBridge(access_token="a1", refresh_token="r1")
        ...     config = ClientConfig(base_url="https://api.example.com/v1")
        ...     async with ApiClient(bridge, config=config) as api:
        ...         profile = await api.get("/users/profile")
        ...         await api.put("/users/profile", {"pais": "CL"}, retries=0)
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        auth_bridge: AuthBridge,
        *,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._bridge = auth_bridge
        self._config = config if config is not None else ClientConfig()
        self._client = client
        self._owns_client = False
        self._transport = transport
        self._coordinator = AuthCoordinator(auth_bridge, self._refresh_tokens)
        self._executor: RequestExecutor | None = None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_url={self._config.base_url!r}, "
            f"state={self._coordinator.state.value})"
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def state(self) -> RefreshState:
        """The refresh state of this client."""
        return self._coordinator.state

    async def __aenter__(self) -> Self:
        """Enter the async context manager and create the underlying
        httpx client if none was provided.

        Returns:
            The ApiClient instance for making requests.
        """
        transport = self._transport
        if transport is None:
            if self._client is None:
                self._client = httpx.AsyncClient(timeout=self._config.timeout)
                self._owns_client = True
            transport = HttpxTransport(self._client)
        self._executor = RequestExecutor(
            config=self._config,
            transport=transport,
            bridge=self._bridge,
            coordinator=self._coordinator,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this client created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False
        self._executor = None

    def _ensure_executor(self) -> RequestExecutor:
        """Return the executor.

        Raises:
            RuntimeError: If the client is used outside of an async
                context manager.
        """
        if self._executor is None:
            msg = "ApiClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._executor

    async def _refresh_tokens(self, refresh_token: str) -> TokenPair:
        executor = self._ensure_executor()
        return await refresh_access_token(
            executor.transport,
            self._config.url_for(self._config.refresh_path),
            refresh_token,
            timeout=self._config.effective_refresh_timeout,
            headers=self._config.headers,
        )

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        timeout: float | None = None,
        retries: int | None = None,
        headers: Mapping[str, str] | None = None,
        skip_auth: bool = False,
    ) -> Any:
        r"""Send a request and return the decoded response payload.

        Args:
            method: The HTTP method.
            path: The request path, appended to ``config.base_url``.
            body: Optional JSON-serializable request body.
            timeout: Override the client timeout for this request.
            retries: Override the client max_retries for this request.
            headers: Headers overriding the client default headers.
            skip_auth: Send the request without credentials and never
                refresh on 401.

        Returns:
            The response payload: parsed JSON (unwrapped from a
            ``{success, data, message}`` envelope), text, or ``None``
            for an empty body.

        Raises:
            RuntimeError: If called outside of a context manager.
            ApiError: If the request fails.
        """
        executor = self._ensure_executor()
        descriptor = RequestDescriptor.build(
            method,
            path,
            config=self._config,
            body=body,
            options=RequestOptions(
                timeout=timeout, retries=retries, headers=headers, skip_auth=skip_auth
            ),
        )
        return await executor.execute(descriptor)

    async def get(self, path: str, **kwargs: Any) -> Any:
        """Send a GET request (see ``request()``)."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        """Send a POST request with a JSON body (see ``request()``)."""
        return await self.request("POST", path, body, **kwargs)

    async def put(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        """Send a PUT request with a JSON body (see ``request()``)."""
        return await self.request("PUT", path, body, **kwargs)

    async def patch(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        """Send a PATCH request with a JSON body (see ``request()``)."""
        return await self.request("PATCH", path, body, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        """Send a DELETE request (see ``request()``)."""
        return await self.request("DELETE", path, **kwargs)
