r"""Credential storage capability consumed by the client.

The client never stores tokens itself: it reads the access token from
the bridge every time it builds a request and writes the new pair back
after a refresh.
"""

from __future__ import annotations

__all__ = ["AuthBridge", "InMemoryAuthBridge", "TokenPair"]

import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPair:
    """An access token and its optional refresh token.

    Attributes:
        access_token: The bearer token attached to requests.
        refresh_token: The token exchanged for a new pair, or ``None``
            if the server did not rotate it.
    """

    access_token: str
    refresh_token: str | None = None


class AuthBridge(ABC):
    """Abstract credential store.

    All operations are coroutines so that implementations can rely on
    asynchronous storage.
    """

    @abstractmethod
    async def get_access_token(self) -> str | None:
        """Return the current access token, or ``None`` if signed out."""

    @abstractmethod
    async def get_refresh_token(self) -> str | None:
        """Return the current refresh token, or ``None`` if absent."""

    @abstractmethod
    async def set_tokens(self, tokens: TokenPair) -> None:
        """Persist a new token pair.

        Args:
            tokens: The new tokens. A ``None`` refresh token keeps the
                stored one.
        """

    @abstractmethod
    async def clear_tokens(self) -> None:
        """Remove all stored tokens."""

    @abstractmethod
    async def logout(self) -> None:
        """Force the application to sign out."""


class InMemoryAuthBridge(AuthBridge):
    r"""Auth bridge keeping tokens in memory.

    Args:
        access_token: The initial access token.
        refresh_token: The initial refresh token.
        on_logout: Optional callable, sync or async, invoked after the
            tokens are cleared by ``logout``. Applications use it to
            reset their session state.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresclient.auth import InMemoryAuthBridge, TokenPair
        >>> bridge = InMemoryAuthBridge(access_token="a1", refresh_token="r1")
        >>> asyncio.run(bridge.set_tokens(TokenPair(access_token="a2")))
        >>> asyncio.run(bridge.get_access_token()), asyncio.run(bridge.get_refresh_token())
        ('a2', 'r1')

        ```
    """

    def __init__(
        self,
        access_token: str | None = None,
        refresh_token: str | None = None,
        on_logout: Callable[[], Awaitable[None] | None] | None = None,
    ) -> None:
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._on_logout = on_logout

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(signed_in={self._access_token is not None})"
        )

    async def get_access_token(self) -> str | None:
        return self._access_token

    async def get_refresh_token(self) -> str | None:
        return self._refresh_token

    async def set_tokens(self, tokens: TokenPair) -> None:
        self._access_token = tokens.access_token
        if tokens.refresh_token:
            self._refresh_token = tokens.refresh_token

    async def clear_tokens(self) -> None:
        self._access_token = None
        self._refresh_token = None

    async def logout(self) -> None:
        await self.clear_tokens()
        logger.info("Signed out")
        if self._on_logout is not None:
            result = self._on_logout()
            if inspect.isawaitable(result):
                await result
