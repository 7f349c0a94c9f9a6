"""Database connection and session management.

Provides the async engine and transactional sessions that
``SqlAlchemyResourceStore`` instances are built on. Works with PostgreSQL
(asyncpg) and SQLite (aiosqlite); pool settings apply to PostgreSQL only.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tenantry.infrastructure.persistence.base import BaseModel


class Database:
    """Database connection and session management.

    Usage:
        db = Database("sqlite+aiosqlite:///./tenantry.db")
        async with db.get_session() as session:
            store = SqlAlchemyResourceStore(session)
            # Commits on success, rolls back on error
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 0,
    ) -> None:
        """Initialize database with connection parameters.

        Args:
            database_url: Database connection URL.
            echo: If True, log all SQL statements.
            pool_size: Connections kept in the pool (PostgreSQL only).
            max_overflow: Extra connections above pool_size (PostgreSQL only).
        """
        engine_args: dict = {"echo": echo}
        if database_url.startswith("postgresql"):
            engine_args.update(
                pool_pre_ping=True,
                pool_size=pool_size,
                max_overflow=max_overflow,
                connect_args={"server_settings": {"jit": "off"}, "timeout": 30},
            )
        self.engine: AsyncEngine = create_async_engine(database_url, **engine_args)

        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional database session.

        Commits on successful exit, rolls back on exception, always closes.
        """
        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create all tables (development and tests)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def drop_all(self) -> None:
        """Drop all tables. Deletes all data."""
        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.drop_all)

    async def check_connection(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            return False

    async def close(self) -> None:
        """Dispose of the engine and its connections."""
        await self.engine.dispose()
