"""Test configuration and fixtures."""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("AUTH_SECRET_KEY", "test-secret-key")
os.environ.setdefault("AUTH_BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskboard.config import settings
from taskboard.core.auth import auth_service
from taskboard.main import app
from taskboard.models.base import Base
from taskboard.models.user import User


@pytest_asyncio.fixture
async def async_engine(tmp_path):
    """Create async engine for tests."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'service.db'}",
        echo=False,
    )

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(async_engine):
    """Create async session for tests."""
    async_session_factory = async_sessionmaker(
        async_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_factory() as session:
        yield session


async def _create_user(session: AsyncSession, email: str, password: str) -> User:
    user = User(email=email, hashed_password=auth_service.hash_password(password))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(async_session):
    """Create test user."""
    return await _create_user(async_session, "test@example.com", "testpassword123")


@pytest_asyncio.fixture
async def other_user(async_session):
    """A second account, used for ownership checks."""
    return await _create_user(async_session, "other@example.com", "otherpassword123")


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Point the application engine at a per-test SQLite file."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'api.db'}"
    monkeypatch.setattr(settings.database, "url", url)
    return url


@pytest.fixture
def client(database_url):
    """Test client; the app lifespan creates the tables."""
    with TestClient(app) as test_client:
        yield test_client


def register(client: TestClient, email: str, password: str) -> dict:
    response = client.post(
        "/api/auth/register", json={"email": email, "password": password}
    )
    assert response.status_code == 201, response.text
    return {"x-auth-token": response.json()["token"]}


@pytest.fixture
def register_user(client):
    """Register an account through the API and return its auth headers."""
    return lambda email, password: register(client, email, password)


@pytest.fixture
def auth_headers(client):
    """Headers for a freshly registered user."""
    return register(client, "test@example.com", "testpassword123")


@pytest.fixture
def other_headers(client):
    """Headers for a second registered user."""
    return register(client, "other@example.com", "otherpassword123")
