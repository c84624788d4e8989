"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

import structlog
from alembic.util import CommandError
from fastapi import Request
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from zyscope.db.migrate import upgrade_to_head
from zyscope.errors import StoreUnavailableError

logger = structlog.get_logger()


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:  # noqa: ANN401
    """SQLite ships with FK enforcement off; cascades depend on it."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class Store:
    """Process-lifetime owner of the database engine.

    One instance is created per application and attached to ``app.state``.
    :meth:`open` is idempotent: it creates the engine once and brings the
    schema up to the latest migration.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    async def open(self) -> None:
        """Create the engine and upgrade the schema.

        Raises:
            StoreUnavailableError: If the database cannot be opened or migrated.
        """
        if self._engine is not None:
            return

        engine = create_async_engine(self.url, pool_pre_ping=True, echo=False)
        if engine.dialect.name == "sqlite":
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        try:
            async with engine.begin() as conn:
                await conn.run_sync(upgrade_to_head)
        except (SQLAlchemyError, CommandError, OSError) as exc:
            await engine.dispose()
            logger.error("store_init_failed", url=self.url, error=str(exc))
            msg = "Database could not be initialized"
            raise StoreUnavailableError(msg) from exc

        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("store_opened", url=self.url)

    async def close(self) -> None:
        """Dispose of the database engine."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            msg = "Store not opened. Call open() first."
            raise RuntimeError(msg)
        return self._engine

    def session(self) -> AsyncSession:
        """Return a new session; use it as an async context manager."""
        if self._session_factory is None:
            msg = "Store not opened. Call open() first."
            raise RuntimeError(msg)
        return self._session_factory()


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session from the app's store (FastAPI dependency)."""
    store: Store = request.app.state.store
    async with store.session() as session:
        yield session
