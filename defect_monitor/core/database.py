"""
Database configuration and session management.

Provides async SQLAlchemy setup for the record store (PostgreSQL via
asyncpg, or SQLite via aiosqlite), connection pooling, and dependency
injection for FastAPI routes.
"""

from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from defect_monitor.core.config import get_settings

# Database engine and session factory (initialized during startup)
engine = None
async_session_factory = None


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


async def init_db() -> None:
    """
    Initialize database engine and session factory.

    This should be called during application startup.

    Raises:
        StoreConfigurationError: If the store endpoint or credential is missing
    """
    global engine, async_session_factory

    settings = get_settings()
    url = settings.store_url()

    engine_kwargs = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,  # Validate connections before use
    }
    # SQLite uses a single-file (or in-memory) pool without sizing options
    if url.get_backend_name() != "sqlite":
        engine_kwargs["pool_size"] = settings.database_pool_size
        engine_kwargs["pool_recycle"] = settings.database_pool_recycle

    engine = create_async_engine(url, **engine_kwargs)

    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


async def create_tables() -> None:
    """Create missing tables for a fresh database."""
    if engine is None:
        raise RuntimeError(
            "Database not initialized. Call init_db() during startup."
        )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get database session.

    Provides async database session with automatic cleanup.
    Use this as a FastAPI dependency.

    Yields:
        AsyncSession: Database session

    Example:
        ```python
        @router.get("/records")
        async def list_records(db: AsyncSession = Depends(get_db)):
            return await RecordStore(db).load()
        ```
    """
    if async_session_factory is None:
        raise RuntimeError(
            "Database not initialized. Call init_db() during startup."
        )

    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database session.

    Use this for database operations outside of FastAPI routes.

    Yields:
        AsyncSession: Database session

    Example:
        ```python
        async with get_db_context() as db:
            records = await RecordStore(db).load()
        ```
    """
    if async_session_factory is None:
        raise RuntimeError(
            "Database not initialized. Call init_db() during startup."
        )

    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def close_db() -> None:
    """
    Close database engine.

    This should be called during application shutdown.
    """
    global engine, async_session_factory
    if engine:
        await engine.dispose()
        engine = None
        async_session_factory = None
