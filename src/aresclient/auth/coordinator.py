r"""Coordination of access token refreshes across concurrent requests.

When requests fail with HTTP 401, the ``AuthCoordinator`` guarantees
that a single refresh call serves all of them: the first failing request
starts the refresh, the others join it, and every one of them is
replayed, or rejected, exactly once when the refresh settles.
"""

from __future__ import annotations

__all__ = ["AuthCoordinator", "QueuedRequest", "RefreshState"]

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from aresclient.exceptions import TokenRefreshError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aresclient.auth.bridge import AuthBridge, TokenPair
    from aresclient.exceptions import ApiError
    from aresclient.models import RequestDescriptor

logger: logging.Logger = logging.getLogger(__name__)


class RefreshState(Enum):
    """Token refresh states.

    Attributes:
        IDLE: No refresh is in flight.
        REFRESHING: A refresh call is in flight and 401 failures join it.
    """

    IDLE = "idle"
    REFRESHING = "refreshing"


@dataclass
class QueuedRequest:
    """A request waiting for the in-flight refresh to settle.

    Attributes:
        request: The request to replay.
        error: The 401 error the request received.
        replay: Coroutine function replaying the request without
            another refresh.
        result: The future awaited by the original caller.
    """

    request: RequestDescriptor
    error: ApiError
    replay: Callable[[RequestDescriptor], Awaitable[Any]]
    result: asyncio.Future[Any] = field(repr=False)

    def resolve(self, value: Any) -> None:
        if not self.result.done():
            self.result.set_result(value)

    def reject(self, exc: BaseException) -> None:
        if not self.result.done():
            self.result.set_exception(exc)


class AuthCoordinator:
    r"""Serialize token refreshes for one client.

    Args:
        bridge: The credential store.
        refresh_tokens: Coroutine function exchanging a refresh token
            for a new ``TokenPair``. It raises on failure.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresclient.auth import AuthCoordinator, InMemoryAuthBridge, TokenPair
        >>> from aresclient.exceptions import ApiError
        >>> from aresclient.models import RequestDescriptor
        >>> async def refresh(refresh_token):
        ...     return TokenPair(access_token="new", refresh_token="r2")
        ...
        >>> async def replay(request):
        ...     return f"replayed {request.path}"
        ...
        >>> async def main():
        ...     coordinator = AuthCoordinator(InMemoryAuthBridge("old", "r1"), refresh)
        ...     return await coordinator.handle_unauthorized(
        ...         RequestDescriptor(method="GET", path="/me"),
        ...         ApiError.from_status(401, "Unauthorized"),
        ...         replay,
        ...     )
        ...
        >>> asyncio.run(main())
        'replayed /me'

        ```
    """

    def __init__(
        self,
        bridge: AuthBridge,
        refresh_tokens: Callable[[str], Awaitable[TokenPair]],
    ) -> None:
        self._bridge = bridge
        self._refresh_tokens = refresh_tokens
        self._state = RefreshState.IDLE
        self._background_tasks: set[asyncio.Task[None]] = set()
        self._queue: list[QueuedRequest] = []

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(state={self._state.value}, "
            f"pending={len(self._queue)})"
        )

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def pending_count(self) -> int:
        """The number of requests waiting for the in-flight refresh."""
        return len(self._queue)

    async def handle_unauthorized(
        self,
        request: RequestDescriptor,
        error: ApiError,
        replay: Callable[[RequestDescriptor], Awaitable[Any]],
    ) -> Any:
        """Recover a request that failed with HTTP 401.

        The request joins the in-flight refresh, or starts one if none
        is running, and is replayed once new tokens are stored.

        Args:
            request: The request that failed.
            error: The 401 error it received.
            replay: Coroutine function replaying the request. It must
                not call ``handle_unauthorized`` again.

        Returns:
            The result of the replay.

        Raises:
            ApiError: The replay error if the replay fails, or ``error``
                if the refresh fails.
        """
        # No await before the state transition: two callers must never
        # both observe IDLE.
        queued = QueuedRequest(
            request=request,
            error=error,
            replay=replay,
            result=asyncio.get_running_loop().create_future(),
        )
        self._queue.append(queued)
        if self._state is RefreshState.IDLE:
            self._state = RefreshState.REFRESHING
            logger.info(f"{request.method} {request.path} got 401, refreshing access token")
            task = asyncio.create_task(self._refresh_and_release())
            self._background_tasks.add(task)
            task.add_done_callback(self._background_tasks.discard)
        else:
            logger.debug(
                f"{request.method} {request.path} got 401, joining in-flight refresh "
                f"({len(self._queue)} pending)"
            )
        return await queued.result

    async def _refresh_and_release(self) -> None:
        try:
            await self._refresh()
        except Exception as exc:  # noqa: BLE001
            logger.warning(f"Access token refresh failed: {exc!r}")
            await self._fail_pending(exc)
        except BaseException as exc:
            # Cancelled before settling: unblock the callers without signing out.
            logger.warning("Access token refresh was interrupted")
            self._reject_pending(self._release(), exc)
            raise
        else:
            await self._replay_pending()

    async def _refresh(self) -> None:
        refresh_token = await self._bridge.get_refresh_token()
        if not refresh_token:
            msg = "no refresh token available"
            raise TokenRefreshError(msg)
        tokens = await self._refresh_tokens(refresh_token)
        await self._bridge.set_tokens(tokens)

    def _release(self) -> list[QueuedRequest]:
        pending, self._queue = self._queue, []
        self._state = RefreshState.IDLE
        return pending

    async def _replay_pending(self) -> None:
        pending = self._release()
        logger.info(f"Access token refreshed, replaying {len(pending)} request(s)")
        await asyncio.gather(*(self._replay_one(queued) for queued in pending))

    @staticmethod
    async def _replay_one(queued: QueuedRequest) -> None:
        if queued.result.done():
            # The caller is gone.
            return
        try:
            result = await queued.replay(queued.request)
        except asyncio.CancelledError:
            queued.result.cancel()
            raise
        except Exception as exc:  # noqa: BLE001
            queued.reject(exc)
        else:
            queued.resolve(result)

    async def _fail_pending(self, cause: Exception) -> None:
        pending = self._release()
        try:
            await self._bridge.clear_tokens()
            await self._bridge.logout()
        except Exception:
            logger.exception("Forced sign-out after failed token refresh raised")
        finally:
            self._reject_pending(pending, cause)

    @staticmethod
    def _reject_pending(pending: list[QueuedRequest], cause: BaseException) -> None:
        for queued in pending:
            queued.error.__cause__ = cause
            queued.reject(queued.error)
