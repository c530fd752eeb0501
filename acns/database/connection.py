"""
Database Connection Management.

This module owns the async SQLAlchemy engine and session factory.
Every read issues its own AsyncSession so independent queries can run
concurrently under asyncio.gather.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from acns.core.logging_config import get_logger
from acns.database.models import Base

logger = get_logger(__name__)


class Database:
    """
    Manages the async engine and session lifecycle.

    Example:
        >>> db = Database("sqlite+aiosqlite:///./acns.db")
        >>> async with db.session() as session:
        ...     await session.execute(text("SELECT 1"))
    """

    def __init__(self, url: str, echo: bool = False):
        """
        Initialize the async engine with connection pooling.

        Args:
            url: Async SQLAlchemy URL (postgresql+asyncpg://, sqlite+aiosqlite://)
            echo: Log all SQL statements
        """
        engine_kwargs = {"echo": echo, "pool_pre_ping": True}
        if not url.startswith("sqlite"):
            # pool_size: connections kept open; max_overflow: burst headroom
            engine_kwargs.update(pool_size=5, max_overflow=10)

        self.url = url
        self.engine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            autoflush=False,
        )

        logger.info(f"Database engine initialized: {url.split('@')[-1] if '@' in url else url}")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session that is committed on success and rolled back on error.
        """
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error, rolling back: {e}")
            raise
        finally:
            await session.close()

    async def check_connection(self) -> bool:
        """
        Test database connectivity.

        Returns:
            True if connection is healthy, False otherwise.
        """
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            logger.debug("Database connection check: OK")
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    async def create_tables(self) -> None:
        """Create all content tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Content tables checked/created")

    async def close(self) -> None:
        """Close all connections in the pool."""
        await self.engine.dispose()
        logger.info("Database connections closed")
