"""
pytest configuration and fixtures
Each test gets its own app wired to fresh in-memory stores
"""

import pytest
import pytest_asyncio
import httpx

from crud_backend.app import create_app
from crud_backend.config.settings import Settings
from crud_backend.database.factory import memory_stores

TEST_JWT_SECRET = "test-secret-for-unit-tests-only-0123456789"


@pytest.fixture
def settings() -> Settings:
    return Settings(env="TEST")


@pytest.fixture
def auth_settings() -> Settings:
    return Settings(env="TEST", enable_auth=True, jwt_secret=TEST_JWT_SECRET)


@pytest.fixture
def stores():
    return memory_stores()


@pytest.fixture
def app(settings, stores):
    return create_app(settings, stores=stores)


def _asgi_client(app) -> httpx.AsyncClient:
    # Unhandled exceptions must come back as the 500 response, not re-raise into the test
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


@pytest.fixture
def client_for():
    """Factory for in-process clients bound to a test-specific app"""
    return _asgi_client


@pytest_asyncio.fixture
async def api_client(app):
    """HTTP client talking to the app in-process"""
    async with _asgi_client(app) as client:
        yield client
