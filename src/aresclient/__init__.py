r"""aresclient - Resilient asynchronous API client with token refresh.

This package provides an asynchronous client for JSON APIs built on top
of httpx. It retries transient failures with backoff, honors Retry-After
on 429 responses, bounds every attempt with a timeout, and recovers from
expired access tokens with a single refresh shared by all concurrent
requests.

Key Features:
    - Typed errors: ``timeout``, ``network``, ``client`` and ``server``
    - Automatic retries of network errors, 5xx and 429 responses
    - Exponential or constant backoff, and Retry-After support
    - Hard per-attempt deadline
    - At most one token refresh in flight, with replay of queued requests
    - Forced sign-out through the auth bridge when the refresh fails
    - Callbacks for observability (logging, metrics, alerting)

Example:
    ```pycon
    >>> import asyncio
    >>> from aresclient import ApiClient, ApiError, ClientConfig, InMemoryAuthBridge
    >>> async def main():  # doctest: +SKIP
    ...     bridge = InMemoryAuthBridge(access_token="a1", refresh_token="r1")
    ...     async with ApiClient(
    ...         bridge, config=ClientConfig(base_url="https://api.example.com")
    ...     ) as api:
    ...         try:
    ...             return await api.get("/events", timeout=5.0, retries=2)
    ...         except ApiError as exc:
    ...             print(exc.kind, exc.status, exc.message)
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiErrorKind",
    "AuthBridge",
    "ClientConfig",
    "InMemoryAuthBridge",
    "RefreshState",
    "TokenPair",
    "TokenRefreshError",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from aresclient.auth import AuthBridge, InMemoryAuthBridge, RefreshState, TokenPair
from aresclient.client import ApiClient
from aresclient.core.config import ClientConfig
from aresclient.exceptions import ApiError, ApiErrorKind, TokenRefreshError

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
