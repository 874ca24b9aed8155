"""
Pytest configuration and shared fixtures for LightAI tests.
"""
import pytest
import pytest_asyncio
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from httpx import AsyncClient, ASGITransport

from lightai.config import Settings
from lightai.main import create_app
from lightai.responders import RemoteProvider, ResponderPolicy


@pytest.fixture
def local_settings():
    """Settings with no API key and remote routing disabled, ignoring the host environment."""
    return Settings(_env_file=None, openai_api_key=None, use_openai=False, port=3000)


@pytest.fixture
def mock_provider():
    """A RemoteProvider whose complete() is an AsyncMock."""
    provider = MagicMock(spec=RemoteProvider)
    provider.complete = AsyncMock(return_value="remote says hi")
    provider.close = AsyncMock()
    return provider


@pytest.fixture
def local_policy():
    """Policy with no provider handle."""
    return ResponderPolicy(provider=None, remote_enabled=False)


@pytest_asyncio.fixture
async def test_client(local_settings) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against an app with no provider configured."""
    app = create_app(local_settings)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client
