from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from aresclient.auth import InMemoryAuthBridge

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make retry tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def bridge() -> Mock:
    """Create an in-memory auth bridge wrapped in a spy.

    Every bridge method keeps its behavior, and calls can be asserted
    on the returned mock.
    """
    return Mock(wraps=InMemoryAuthBridge(access_token="old-token", refresh_token="refresh-token"))
