"""
Database engine and sessions

One AsyncSession per unit of work: a request, a script run or a startup
task. The session commits when the unit finishes cleanly and rolls back
otherwise.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from .config import settings


Base = declarative_base()


def create_engine_for(database_url: str, debug: bool = False) -> AsyncEngine:
    """Async engine for PostgreSQL (pooled) or SQLite (tests, local runs)"""
    options = {"echo": debug, "pool_pre_ping": True}

    if not database_url.startswith("sqlite"):
        if debug:
            options["poolclass"] = NullPool
        else:
            options.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_recycle=settings.DB_POOL_RECYCLE,
            )

    return create_async_engine(database_url, **options)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    # Entities are mapped out of the session, so loaded state must survive commit
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False, autoflush=False)


engine: AsyncEngine = create_engine_for(settings.DATABASE_URL, settings.DEBUG)
AsyncSessionLocal = create_session_factory(engine)


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Unit of work outside the request cycle

    Usage:
        async with get_db_session() as session:
            await AdminService(...).ensure_admin(...)
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency; every repository in a request shares this session"""
    async with get_db_session() as session:
        yield session


async def init_db():
    """Create missing tables"""
    from internship_portal.infrastructure.persistence import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


async def close_db():
    await engine.dispose()


async def health_check() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database health check failed: {str(e)}")
        return False
    return True
