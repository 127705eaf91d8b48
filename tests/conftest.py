"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - backend_url: Base URL the relay is configured with
    - upstream: Scriptable fake of the debugging assistant backend
    - relay_config: RelayConfig pointing at the fake upstream
    - async_client: HTTPX client for the relay API, upstream faked
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.relay.config import RelayConfig
from tests.fakes import FakeUpstream


@pytest.fixture
def backend_url() -> str:
    """Return the upstream base URL used in tests."""
    return "https://assistant.test/api"


@pytest.fixture
def upstream() -> FakeUpstream:
    """Return a fresh fake upstream backend."""
    return FakeUpstream()


@pytest.fixture
def relay_config(backend_url: str) -> RelayConfig:
    """Return relay configuration pointing at the fake upstream."""
    return RelayConfig(backend_url=backend_url, upstream_timeout=None)


@pytest.fixture
async def async_client(
    relay_config: RelayConfig, upstream: FakeUpstream
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient bound to an app whose upstream calls hit the fake backend.
    """
    app = create_app(relay_config, transport=upstream.transport)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
