"""Database connection and session management."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from risk_gateway.core.config import settings


def normalize_database_url(url: str) -> str:
    """Point bare postgres URLs at the asyncpg driver."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class DatabaseSessionManager:
    """
    Manages database connections and sessions.

    Uses SQLAlchemy async engine for non-blocking database operations.
    """

    def __init__(self):
        self._engine = None
        self._sessionmaker = None

    @property
    def engine(self):
        return self._engine

    def init(self, database_url: str | None = None, **engine_kwargs):
        """
        Initialize the database engine and session factory.

        Args:
            database_url: Optional override for the database URL
            **engine_kwargs: Overrides for create_async_engine (pool settings)
        """
        url = normalize_database_url(database_url or settings.database_url)

        options = {"echo": settings.debug, "pool_pre_ping": True}
        if url.startswith("postgresql+asyncpg://"):
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
            )
        options.update(engine_kwargs)

        self._engine = create_async_engine(url, **options)

        self._sessionmaker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def close(self):
        """Close the database engine."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a transactional scope around operations.

        Yields:
            An async database session
        """
        if self._sessionmaker is None:
            raise RuntimeError("Database not initialized. Call init() first.")

        session = self._sessionmaker()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


db_manager = DatabaseSessionManager()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Yields:
        An async database session
    """
    async with db_manager.session() as session:
        yield session


async def get_read_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for a second, read-only session.

    Lets a request run independent reads concurrently, since a single
    AsyncSession cannot execute two statements at once.

    Yields:
        An async database session
    """
    async with db_manager.session() as session:
        yield session
