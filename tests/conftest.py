"""
Portico Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   No real database or Redis: sessions and Redis are mocks, and the
       FastAPI dependencies that build services are overridden per test.

Fixtures:
    mock_db_session:   AsyncMock simulating AsyncSession
    mock_redis:        AsyncMock simulating redis.asyncio.Redis
    token_service:     TokenService with a fixed test secret
    make_user:         factory for User model instances
    app:               fresh application from create_app()
    test_client:       HTTPX AsyncClient bound to `app`
    auth_headers:      builds Authorization headers for a user
"""

import os

# Must be set before portico.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"
os.environ["JWT_SECRET"] = "test-secret-that-is-long-enough-for-hs256"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from portico.context import set_current_user, set_language
from portico.models.user import STATUS_ACTIVATED, User
from portico.security.passwords import hash_password
from portico.security.tokens import TokenRevocationStore, TokenService

TEST_SECRET = os.environ["JWT_SECRET"]


@pytest.fixture(autouse=True)
def reset_context():
    """Tests share one thread; start each from an empty context store."""
    set_language(None)
    set_current_user(None)
    yield
    set_current_user(None)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_redis():
    """Redis double: nothing is revoked until a test says otherwise."""
    redis = AsyncMock()
    redis.exists = AsyncMock(return_value=0)
    redis.set = AsyncMock(return_value=True)
    redis.ping = AsyncMock(return_value=True)
    return redis


@pytest.fixture
def revocation_store(mock_redis):
    return TokenRevocationStore(mock_redis, prefix="test:revoked:")


@pytest.fixture
def token_service():
    return TokenService(
        secret=TEST_SECRET,
        algorithm="HS256",
        expiration_minutes=15,
        extended_expiration_minutes=60 * 24,
    )


@pytest.fixture
def make_user():
    """Factory for User instances with sensible defaults."""

    def _make(
        user_id: int = 1,
        username: str = "alice",
        password: str = "correct-horse",
        roles=None,
        status: str = STATUS_ACTIVATED,
    ) -> User:
        return User(
            id=user_id,
            username=username,
            email=f"{username}@example.com",
            password=hash_password(password),
            full_name=username.title(),
            status=status,
            roles=list(roles) if roles is not None else ["USER"],
            created_at=datetime(2026, 1, 15, tzinfo=timezone.utc),
            updated_at=datetime(2026, 1, 15, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def app(token_service, revocation_store):
    """Fresh application with token verification wired to the test doubles."""
    from portico.main import create_app
    from portico.security.dependencies import get_revocation_store, get_token_service

    application = create_app()
    application.dependency_overrides[get_token_service] = lambda: token_service
    application.dependency_overrides[get_revocation_store] = lambda: revocation_store
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(token_service):
    """Builds a Bearer header for the given user."""

    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {token_service.issue(user)}"}

    return _headers
