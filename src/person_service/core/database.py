"""Database connection and session management for the person service.

This module owns the async engine, the session factory, the request-scoped
session dependency and schema bootstrap.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .config import get_settings_instance
from .logging import get_logger

logger = get_logger(__name__)

# Create declarative base
Base = declarative_base()

# Global async engine and session factory - lazy initialization
_async_engine: AsyncEngine | None = None
_AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None

# Postgres extensions the schema depends on: pgp_sym_* and gen_random_uuid, case-insensitive keys
REQUIRED_EXTENSIONS = ("pgcrypto", "citext")


def _safe_url(database_url: str) -> str:
    return make_url(database_url).render_as_string(hide_password=True)


def get_async_engine() -> AsyncEngine:
    global _async_engine  # noqa: PLW0603
    if _async_engine is None:
        settings = get_settings_instance()
        logger.debug("Creating database engine", extra={"database_url": _safe_url(settings.database_url)})
        _async_engine = create_async_engine(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
            pool_recycle=settings.database_pool_recycle,
            pool_pre_ping=True,
            echo=False,
        )
    return _async_engine


def get_async_session_local() -> async_sessionmaker[AsyncSession]:
    global _AsyncSessionLocal  # noqa: PLW0603
    if _AsyncSessionLocal is None:
        _AsyncSessionLocal = async_sessionmaker(
            bind=get_async_engine(),
            expire_on_commit=False,
            autoflush=False,
            class_=AsyncSession,
        )
    return _AsyncSessionLocal


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session, rolling back on database errors."""
    session_local = get_async_session_local()
    async with session_local() as session:
        try:
            yield session
        except SQLAlchemyError as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise
        finally:
            await session.close()


async def check_db_connection() -> None:
    """Ping the database; raises if it cannot be reached."""
    engine = get_async_engine()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_db() -> None:
    """Create required extensions and any missing tables."""
    from ..models.registry import register_all_models

    register_all_models()
    engine = get_async_engine()
    logger.debug("Initializing database schema")

    async with engine.begin() as conn:
        for extension in REQUIRED_EXTENSIONS:
            await conn.execute(text(f"CREATE EXTENSION IF NOT EXISTS {extension}"))
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema initialized successfully")


async def close_db() -> None:
    global _async_engine, _AsyncSessionLocal  # noqa: PLW0603
    if _async_engine is None:
        return
    await _async_engine.dispose()
    _async_engine = None
    _AsyncSessionLocal = None
    logger.debug("Database connections closed")
