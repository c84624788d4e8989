"""Shared test fixtures.

Every test gets its own SQLite file under ``tmp_path`` and Redis disabled, so
the rate limiter is a pass-through.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from zyscope.catalog.service import load_catalog
from zyscope.config import get_settings
from zyscope.database import Store
from zyscope.db.models import User
from zyscope.main import create_app
from zyscope.users.service import create_user


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'zyscope.sqlite'}"


@pytest.fixture(autouse=True)
def _test_settings(monkeypatch: pytest.MonkeyPatch, database_url: str):
    """Point settings at the per-test database and turn Redis off."""
    monkeypatch.setenv("ZYSCOPE_DATABASE_URL", database_url)
    monkeypatch.setenv("ZYSCOPE_REDIS_URL", "")
    monkeypatch.setenv("ZYSCOPE_CATALOG_PATH", "")
    monkeypatch.setenv("ZYSCOPE_LOG_FORMAT", "console")
    get_settings.cache_clear()
    load_catalog.cache_clear()
    yield
    get_settings.cache_clear()
    load_catalog.cache_clear()


@pytest_asyncio.fixture
async def store(database_url: str) -> AsyncGenerator[Store, None]:
    """An opened store on a fresh database."""
    s = Store(database_url)
    await s.open()
    yield s
    await s.close()


@pytest_asyncio.fixture
async def db_session(store: Store) -> AsyncGenerator[AsyncSession, None]:
    """Get a direct database session for service calls and assertions."""
    async with store.session() as session:
        yield session


@pytest_asyncio.fixture
async def client(store: Store) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to an app that shares the test store.

    ASGITransport does not run the lifespan; the store is already open.
    """
    app = create_app(settings=get_settings(), store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[[str], Awaitable[User]]:
    """Factory that creates and commits a user."""

    async def _make(username: str) -> User:
        user = await create_user(db_session, username)
        await db_session.commit()
        return user

    return _make


@pytest_asyncio.fixture
async def alice(make_user: Callable[[str], Awaitable[User]]) -> User:
    return await make_user("alice")
