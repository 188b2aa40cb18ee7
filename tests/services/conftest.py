"""Service test fixtures - in-memory SQLite app + authenticated users.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - app.state carries the test DB manager and token maker (lifespan is not
      run by ASGITransport)
    - Password hashing uses few iterations to keep tests fast

Design Decisions:
    - StaticPool: every session shares the single in-memory connection
"""

from functools import partial

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from tasktracker.db.base import Base
from tasktracker.infrastructure.database import DatabaseSessionManager
from tasktracker.infrastructure.passwords import hash_password
from tasktracker.infrastructure.token_maker import JWTTokenMaker
from tasktracker.main import app
import tasktracker.models  # noqa: F401

TEST_TOKEN_KEY = "test-key-test-key-test-key-test-key"


@pytest.fixture
async def test_db_manager():
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    manager._session_factory = async_sessionmaker(
        manager.engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.engine.dispose()


@pytest.fixture
def token_maker():
    return JWTTokenMaker(TEST_TOKEN_KEY)


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    monkeypatch.setattr(
        "tasktracker.services.user_service.hash_password",
        partial(hash_password, iterations=1_000),
    )


@pytest.fixture
async def client(test_db_manager, token_maker):
    """FastAPI test client wired to the in-memory database."""
    app.state.db_manager = test_db_manager
    app.state.token_maker = token_maker
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.state.db_manager = None
    app.state.token_maker = None


@pytest.fixture
def make_user(client):
    """Register and log in a user. Returns (auth headers, user id)."""

    async def _make_user(username: str, password: str = "s3cret-pass"):
        res = await client.post("/api/v1/users", json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
        })
        assert res.status_code == 201, res.text
        res = await client.post("/api/v1/users/login", json={
            "username": username, "password": password,
        })
        assert res.status_code == 200, res.text
        body = res.json()
        headers = {"Authorization": f"Bearer {body['access_token']}"}
        return headers, body["user"]["id"]

    return _make_user
