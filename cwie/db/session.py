"""Database session and engine configuration."""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cwie.config import Settings
from cwie.db.base import Base


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database."""
    options = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if settings.DATABASE_URL.startswith("sqlite"):
        # In-memory databases live as long as their single connection
        if ":memory:" in settings.DATABASE_URL or settings.DATABASE_URL.endswith("//"):
            options["poolclass"] = StaticPool
            options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.DATABASE_POOL_SIZE
        options["max_overflow"] = settings.DATABASE_MAX_OVERFLOW
    engine = create_async_engine(settings.DATABASE_URL, **options)
    if settings.DATABASE_URL.startswith("sqlite"):
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory bound to the engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session."""
    session_factory = request.app.state.context.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine) -> None:
    """Create tables directly from the models (development only, use Alembic otherwise)."""
    # Import all models to register them
    from cwie import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
