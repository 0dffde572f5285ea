"""
Engine and session plumbing for the curriculum store.

One async engine per process, one AsyncSession per request. Routers receive
their session through the get_async_db dependency; tests replace it via
app.dependency_overrides.

Dependencies: sqlalchemy, curriculum.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from curriculum.configs import get_settings


def _engine_options(db_config) -> dict:
    if db_config.is_sqlite:
        # aiosqlite runs on a worker thread; keep every session on one connection
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_size": db_config.pool_size,
        "max_overflow": db_config.max_overflow,
        "pool_timeout": db_config.pool_timeout,
        "pool_pre_ping": True,
    }


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Process-wide async engine built from DatabaseSettings.

    Postgres gets a sized pool with pre-ping; SQLite URLs (local runs) use a
    StaticPool instead. Disposed by the application lifespan on shutdown.
    """
    db_config = get_settings().database
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        **_engine_options(db_config),
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to the shared engine.

    expire_on_commit is off so services can read attributes of committed rows
    when building their response dicts. Flushes are explicit (autoflush off).
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session and close it when the route returns."""
    session_factory = get_async_session_factory()
    async with session_factory() as session:
        yield session
