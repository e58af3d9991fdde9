"""Async engine and session handling for the invitation store.

SQLite (aiosqlite) is the default backend; PostgreSQL (asyncpg) is
available through the `postgres` extra.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from playerpath.core.config import Settings, get_settings
from playerpath.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by every model."""


def _engine_options(settings: Settings) -> dict:
    if settings.database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
    }


class DatabaseManager:
    """Owns the engine and hands out sessions.

    The engine is created lazily on first use so that importing the
    application never opens a connection.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(
                self.settings.database_url,
                echo=self.settings.db_echo,
                **_engine_options(self.settings),
            )
            logger.info(
                "Database engine ready",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        if self._sessionmaker is None:
            self._sessionmaker = async_sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._sessionmaker

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session, rolling back if the block raises.

        Callers commit explicitly:

            async with manager.session() as session:
                await InvitationRepository(session).mark_email_failed(invitation_id, error)
                await session.commit()
        """
        async with self.sessionmaker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def create_tables(self) -> None:
        """Create missing tables from model metadata (development and init-db only)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables created", tables=sorted(Base.metadata.tables))

    async def is_reachable(self) -> bool:
        """Run a trivial query; False if the database cannot be reached."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database is unreachable", error=str(e))
            return False
        return True

    async def dispose(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database engine disposed")


_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Return the process-wide manager, creating it on first call."""
    global _manager
    if _manager is None:
        _manager = DatabaseManager()
    return _manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session."""
    async with get_db_manager().session() as session:
        yield session


def _ensure_sqlite_directory(database_url: str) -> None:
    path = database_url.split(":///", 1)[-1]
    if path and path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)


async def init_database(create_tables: bool | None = None) -> None:
    """Check connectivity and optionally create tables.

    Args:
        create_tables: Create missing tables. Defaults to True in
            development and False elsewhere, where alembic owns the schema.

    Raises:
        RuntimeError: The database cannot be reached.
    """
    # Register models on Base.metadata
    from playerpath.infrastructure.persistence.models import CoachInvitationModel  # noqa: F401

    settings = get_settings()
    if settings.database_url.startswith("sqlite"):
        _ensure_sqlite_directory(settings.database_url)

    manager = get_db_manager()
    if not await manager.is_reachable():
        raise RuntimeError("Database is unreachable")

    if create_tables is None:
        create_tables = settings.is_development
    if create_tables:
        await manager.create_tables()
    else:
        logger.info("Table creation skipped, schema is managed by alembic")


async def close_database() -> None:
    """Dispose of the process-wide manager."""
    global _manager
    if _manager is not None:
        await _manager.dispose()
        _manager = None
