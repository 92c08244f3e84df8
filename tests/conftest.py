"""
Tremu Backend — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   API tests run the real FastAPI app against an in-memory SQLite
       database (aiosqlite), swapped in for the session factory.
       Service unit tests use a mocked AsyncSession.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── db_engine: In-memory SQLite engine with every table created
    ├── test_client: HTTPX AsyncClient wired to the app and db_engine
    ├── register_user / login_user: helpers that call the auth endpoints
    ├── auth_headers: "Authorization: Bearer" headers for a fresh user
    └── board_factory: creates boards (and optionally columns) over HTTP
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run BEFORE any tremu import: settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-secret-key-for-pytest-only-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tremu import database
from tremu.database import Base
from tremu.main import app
import tremu.models  # noqa: F401

DEFAULT_PASSWORD = "password123"


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_login(mock_db_session):
            mock_db_session.execute.return_value = result_with(user)
            await auth_service.login(mock_db_session, payload)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A private in-memory database per test.

    StaticPool keeps the single connection alive; a new connection to
    ``sqlite://`` would otherwise see an empty database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(db_engine, monkeypatch) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    The app's own get_db_session runs against db_engine, so tests see the
    production transaction boundary: commit before the response, rollback
    when the handler or the commit raises.
    """
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(database, "async_session_factory", session_factory)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(test_client):
    """Register a user and return the response's ``data`` (id, email, name)."""

    async def _register(email: str, name: str = "Test User", password: str = DEFAULT_PASSWORD):
        response = await test_client.post(
            "/api/auth/register",
            json={"email": email, "name": name, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _register


@pytest.fixture
def login_user(test_client):
    """Log in and return ready-to-send Authorization headers."""

    async def _login(email: str, password: str = DEFAULT_PASSWORD) -> dict:
        response = await test_client.post(
            "/api/auth/login",
            json={"email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['data']['token']}"}

    return _login


@pytest.fixture
def make_user(register_user, login_user):
    """Register + log in; returns (user data, auth headers)."""

    async def _make(email: str, name: str = "Test User"):
        user = await register_user(email, name)
        headers = await login_user(email)
        return user, headers

    return _make


@pytest_asyncio.fixture
async def auth_headers(make_user) -> dict:
    _, headers = await make_user("owner@example.com", "Board Owner")
    return headers


@pytest.fixture
def board_factory(test_client):
    """
    Create a board over HTTP, optionally with columns.

    Returns (board id, [column ids in creation order]).
    """

    async def _create(headers: dict, title: str = "Roadmap", columns=()):
        response = await test_client.post("/api/boards", json={"title": title}, headers=headers)
        assert response.status_code == 201, response.text
        board_id = response.json()["data"]["id"]

        column_ids = []
        for column_title in columns:
            response = await test_client.post(
                f"/api/boards/{board_id}/columns",
                json={"title": column_title},
                headers=headers,
            )
            assert response.status_code == 201, response.text
            column_ids.append(response.json()["data"]["id"])
        return board_id, column_ids

    return _create
