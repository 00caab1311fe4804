"""Root conftest — test infrastructure for all backend tests.

Provides:
- Safety guard: require HACKNICAL_TESTS_ENABLED=1 for DB integration tests
- Transaction-rollback db_session fixture
- Test user fixtures
- API client with dependency overrides
- Autouse guard against real GitHub calls, and GitHub cache reset
"""

from __future__ import annotations

import os
import uuid
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from app.config.settings import settings
from app.services.github.cache import clear_all_caches

# ─────────────────────────────────────────────────────────────────────────────
# Safety Guard
# ─────────────────────────────────────────────────────────────────────────────


def pytest_configure(config: pytest.Config) -> None:
    """Safety check: require explicit opt-in for DB tests.

    Unit and API tests (pure mocks) run without this flag. Integration tests
    that touch the database require HACKNICAL_TESTS_ENABLED=1.
    """
    if any("integration" in str(arg) for arg in config.invocation_params.args):
        if not os.getenv("HACKNICAL_TESTS_ENABLED"):
            pytest.exit(
                "SAFETY: Set HACKNICAL_TESTS_ENABLED=1 to confirm running tests "
                f"against the database at {settings.database_url_direct.split('@')[-1]}.",
                returncode=1,
            )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly enabled."""
    if os.getenv("HACKNICAL_TESTS_ENABLED"):
        return
    skip = pytest.mark.skip(reason="set HACKNICAL_TESTS_ENABLED=1 to run DB integration tests")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


# ─────────────────────────────────────────────────────────────────────────────
# Transaction-Rollback Engine (direct connection, not pooler)
# ─────────────────────────────────────────────────────────────────────────────

TEST_ENGINE = create_async_engine(
    settings.database_url_direct,
    echo=False,
    pool_pre_ping=True,
    pool_size=3,
    max_overflow=2,
    connect_args={
        "command_timeout": 30,
    },
)


@pytest.fixture
async def db_session():
    """Database session wrapped in a transaction that is ALWAYS rolled back.

    Uses SAVEPOINT so tests can call commit() internally without
    actually committing — the outer transaction absorbs it.
    """
    async with TEST_ENGINE.connect() as conn:
        trans = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)
        await conn.begin_nested()

        @event.listens_for(session.sync_session, "after_transaction_end")
        def restart_savepoint(session_sync, transaction):
            """Restart SAVEPOINT after each nested transaction ends."""
            if transaction.nested and not transaction._parent.nested:
                session_sync.begin_nested()

        try:
            yield session
        finally:
            await session.close()
            await trans.rollback()


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """A test user inside the rolled-back transaction."""
    from app.models.user import User

    user = User(
        id=uuid.uuid4(),
        email=f"__test_{uuid.uuid4().hex[:8]}@example.com",
        display_name="Test User",
        github_username="octocat",
        created_at=datetime.now(UTC),
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def second_user(db_session: AsyncSession):
    """Another user, for ownership (403) checks."""
    from app.models.user import User

    user = User(
        id=uuid.uuid4(),
        email=f"__test_second_{uuid.uuid4().hex[:8]}@example.com",
        display_name="Second User",
        created_at=datetime.now(UTC),
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def api_client(db_session: AsyncSession, test_user):
    """HTTP client that bypasses JWT auth and uses the rolled-back DB session."""
    from app.api.deps.auth import get_current_user, get_current_user_optional
    from app.core.database import get_db
    from app.main import app

    app.dependency_overrides[get_current_user] = lambda: test_user
    app.dependency_overrides[get_current_user_optional] = lambda: test_user

    async def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ─────────────────────────────────────────────────────────────────────────────
# External Service Guards
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def block_github_http():
    """SAFETY: Fail loudly on any GitHub request a test did not mock itself."""
    guard = MagicMock()
    guard.request = AsyncMock(side_effect=RuntimeError("Unmocked GitHub request in tests"))
    with patch("app.services.github.client.get_github_client", return_value=guard):
        yield guard


@pytest.fixture(autouse=True)
def _clear_github_caches():
    """Clear GitHub TTL caches before each test to prevent cross-test pollution."""
    clear_all_caches()
    yield
    clear_all_caches()
