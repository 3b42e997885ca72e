"""
DevConnector Backend — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy:
    Unit-level (no database):
    ├── token_service: TokenService with a fixed test secret
    ├── mock_users / mock_posts / mock_profiles: AsyncMock repositories
    ├── mock_passwords: AsyncMock PasswordHasher
    └── make_user / make_post: transient ORM objects with ids and timestamps

    API-level (in-memory SQLite, one fresh database per test):
    ├── settings: Settings pointed at sqlite+aiosqlite:///:memory:
    ├── app: create_app(settings) with the schema created
    └── test_client: HTTPX AsyncClient over ASGITransport
"""

import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Dict, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any devconnector import: devconnector.main builds a module-level app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "devconnector-test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"

from devconnector.config import Settings  # noqa: E402
from devconnector.database import create_schema, dispose_engine  # noqa: E402
from devconnector.main import create_app  # noqa: E402
from devconnector.models import Post, User  # noqa: E402
from devconnector.repositories.posts import PostRepository  # noqa: E402
from devconnector.repositories.profiles import ProfileRepository  # noqa: E402
from devconnector.repositories.users import UserRepository  # noqa: E402
from devconnector.services.passwords import PasswordHasher  # noqa: E402
from devconnector.services.token_service import TokenService  # noqa: E402

TEST_SECRET = "devconnector-test-secret"


# ══════════════════════════════════════════════════════════════════════════
# Unit-Level Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def token_service():
    return TokenService(secret=TEST_SECRET)


@pytest.fixture
def mock_users():
    """UserRepository double: every coroutine method is an AsyncMock."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_posts():
    return AsyncMock(spec=PostRepository)


@pytest.fixture
def mock_profiles():
    return AsyncMock(spec=ProfileRepository)


@pytest.fixture
def mock_passwords():
    """
    PasswordHasher double.

    hash() returns "hashed:<password>"; verify() compares against that form,
    so tests can register and log in without paying for bcrypt.
    """
    hasher = AsyncMock(spec=PasswordHasher)
    hasher.hash.side_effect = lambda password: f"hashed:{password}"
    hasher.verify.side_effect = lambda password, hashed: hashed == f"hashed:{password}"
    return hasher


@pytest.fixture
def make_user():
    """Factory for transient User rows."""

    def _make(name: str = "Ada Lovelace", email: str = "ada@devmail.com", password: str = "secret123") -> User:
        return User(
            id=uuid.uuid4(),
            name=name,
            email=email,
            password=f"hashed:{password}",
            avatar="//www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
            created_at=datetime.now(timezone.utc),
        )

    return _make


@pytest.fixture
def make_post():
    """Factory for transient Post rows with empty like/comment lists."""

    def _make(author: User, text: str = "Hello developers", age_minutes: int = 0) -> Post:
        return Post(
            id=uuid.uuid4(),
            user_id=author.id,
            text=text,
            name=author.name,
            avatar=author.avatar,
            created_at=datetime.now(timezone.utc) - timedelta(minutes=age_minutes),
            likes=[],
            comments=[],
        )

    return _make


# ══════════════════════════════════════════════════════════════════════════
# API-Level Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        rate_limit_requests=100000,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings):
    """
    Fresh application with its own in-memory database.

    ASGITransport does not run the lifespan, so the schema is created here.
    """
    application = create_app(settings)
    await create_schema(application.state.engine)
    yield application
    await dispose_engine(application.state.engine)


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════════════════════════════════

async def register(
    client: AsyncClient,
    name: str = "Ada Lovelace",
    email: str = "ada@devmail.com",
    password: str = "secret123",
) -> str:
    """Register through the API and return the issued token."""
    response = await client.post(
        "/api/users",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["token"]


def auth_headers(token: Optional[str]) -> Dict[str, str]:
    return {"x-auth-token": token} if token is not None else {}
