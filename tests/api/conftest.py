"""API test fixtures — HTTP clients over a mocked database session.

The handlers are exercised through the real FastAPI app with JWT auth and
get_db overridden, so tests cover routing, validation, status codes and
response shapes. Domain operations are patched per test where the handler's
coordination is under test.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from tests.helpers.mock_factories import make_mock_user


@pytest.fixture
def mock_db() -> AsyncMock:
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def mock_user() -> MagicMock:
    return make_mock_user()


async def _client_for(user: MagicMock | None, db: AsyncMock):
    from app.api.deps.auth import get_current_user, get_current_user_optional
    from app.core.database import get_db
    from app.main import app

    if user is not None:
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_current_user_optional] = lambda: user

    async def override_db():
        yield db

    app.dependency_overrides[get_db] = override_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def client(mock_user, mock_db):
    """HTTP client authenticated as mock_user."""
    async for c in _client_for(mock_user, mock_db):
        yield c


@pytest.fixture
async def other_user_client(mock_db):
    """HTTP client authenticated as a different user than mock_user."""
    async for c in _client_for(make_mock_user(github_username="hubot"), mock_db):
        yield c


@pytest.fixture
async def unauth_client(mock_db):
    """HTTP client with no credentials; real auth dependencies apply."""
    async for c in _client_for(None, mock_db):
        yield c
