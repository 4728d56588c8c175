"""
Database Configuration

Async SQLAlchemy engine, session factory and the declarative base
shared by every model.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_size=settings.database_pool_size,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session.

    Services commit explicitly; anything left uncommitted when an
    exception escapes the request is rolled back.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def check_db_connection() -> bool:
    """Run a trivial query against the database."""
    async with async_session_maker() as session:
        result = await session.execute(text("SELECT 1"))
        return result.scalar() == 1


async def init_db() -> None:
    """
    Verify database connectivity on startup.

    Retries a few times so the API can start alongside a database
    container that is still booting.
    """
    retries = settings.database_connect_retries
    delay = settings.database_retry_delay_seconds

    for attempt in range(1, retries + 1):
        try:
            await check_db_connection()
            logger.info("Database connection established")
            return
        except Exception as e:
            logger.warning(f"Database connection attempt {attempt}/{retries} failed: {e}")
            if attempt == retries:
                raise
            await asyncio.sleep(delay)


async def close_db() -> None:
    """Dispose of the connection pool."""
    await engine.dispose()
