"""
Shared fixtures — an app wired to an in-memory SQLite database.
"""

from typing import Awaitable, Callable, Tuple

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from config.settings import Settings
from database.session import Database
from main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite://",
        secret_key="test-secret",
        jwt_expiry_seconds=3600,
        bcrypt_rounds=10,
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database(
        settings.database_url,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_user(client) -> Callable[..., Awaitable[Tuple[str, str]]]:
    """Register + login through the API; returns ``(user_id, token)``."""

    async def _make(username: str, email: str, password: str = "secret1"):
        res = await client.post(
            "/api/user/register",
            json={"username": username, "email": email, "password": password},
        )
        assert res.status_code == 200, res.text
        user_id = res.json()["id"]

        res = await client.post("/api/user/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.text
        return user_id, res.json()["token"]

    return _make
