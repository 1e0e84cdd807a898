"""Shared fixtures for integration tests.

Adapters are built through get_adapter() and talk to a respx-mocked
httpx.AsyncClient, so the full config mapping → request → parsing path runs.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import respx


@pytest.fixture
def mock_api() -> Iterator[respx.MockRouter]:
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
async def http_client(mock_api: respx.MockRouter) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def no_sleep() -> Iterator[AsyncMock]:
    with patch("services.publishers.wpcom.asyncio.sleep", new_callable=AsyncMock) as mock:
        yield mock
