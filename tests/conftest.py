"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, actors, service mocks
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from curriculum.core.actor import Actor, Role


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from curriculum.boundary.db.base import Base
    import curriculum.boundary.db.models  # noqa: F401  (register tables)

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def admin() -> Actor:
    """Admin caller."""
    return Actor(user_id=uuid.uuid4(), role=Role.ADMIN)


@pytest.fixture
def learner() -> Actor:
    """Learner caller."""
    return Actor(user_id=uuid.uuid4(), role=Role.LEARNER)


@pytest.fixture
def other_learner() -> Actor:
    """Second learner, for per-learner isolation checks."""
    return Actor(user_id=uuid.uuid4(), role=Role.LEARNER)


@pytest.fixture
def mock_db():
    """
    Create mock AsyncSession for service tests.

    Returns:
        AsyncMock: Session whose commit/rollback/flush are awaitable no-ops
    """
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.flush = AsyncMock()
    return db


@pytest.fixture
def course_id() -> uuid.UUID:
    """Generate a test course ID."""
    return uuid.uuid4()


@pytest.fixture
def lesson_id() -> uuid.UUID:
    """Generate a test lesson ID."""
    return uuid.uuid4()
