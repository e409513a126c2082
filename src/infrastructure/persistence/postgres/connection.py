"""Database connection management.

This module provides async database connection management using SQLAlchemy 2.0
with connection pooling and proper session handling.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.infrastructure.persistence.postgres.models import Base
from src.shared.config.settings import get_settings

logger = structlog.get_logger(__name__)


class DatabaseConnection:
    """Manages database connections with async support."""

    def __init__(self, database_url: str | None = None):
        """Initialize database connection manager.

        Args:
            database_url: Optional database URL, defaults to settings
        """
        self.database_url = database_url or get_settings().database.async_database_url
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    async def initialize(self) -> None:
        """Initialize the database engine and session factory."""
        if self._engine is not None:
            return

        settings = get_settings()
        url = make_url(self.database_url)
        engine_kwargs: dict = {"echo": settings.debug_mode}

        if url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=settings.database.db_pool_size,
                max_overflow=settings.database.db_pool_max_overflow,
                pool_timeout=settings.database.db_pool_timeout,
                pool_recycle=3600,
                pool_pre_ping=True,  # Enable connection health checks
            )

        self._engine = create_async_engine(self.database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info(
            "database_connection_initialized",
            url=url.render_as_string(hide_password=True),
        )

    async def create_tables(self) -> None:
        """Create all tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database_tables_created", tables=sorted(Base.metadata.tables))

    async def close(self) -> None:
        """Close the database engine."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("database_connection_closed")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession]:
        """Get an async database session.

        The session commits when the block exits normally and rolls back
        when it raises.

        Yields:
            AsyncSession: Database session with automatic cleanup

        Raises:
            RuntimeError: If connection not initialized
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    @property
    def engine(self) -> AsyncEngine:
        """Get the async engine instance.

        Raises:
            RuntimeError: If not initialized
        """
        if self._engine is None:
            raise RuntimeError("Database connection not initialized")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get the session factory.

        Raises:
            RuntimeError: If not initialized
        """
        if self._session_factory is None:
            raise RuntimeError("Database connection not initialized")
        return self._session_factory


# Global connection instance
_db_connection: DatabaseConnection | None = None


async def get_db_connection() -> DatabaseConnection:
    """Get or create the global database connection.

    Returns:
        DatabaseConnection: The initialized connection manager
    """
    global _db_connection
    if _db_connection is None:
        _db_connection = DatabaseConnection()
        await _db_connection.initialize()
    return _db_connection


async def close_db_connection() -> None:
    """Dispose the global database connection, if any."""
    global _db_connection
    if _db_connection is not None:
        await _db_connection.close()
        _db_connection = None
