"""
Schema bootstrap for courses, lessons, enrollments and completions.

Run once against a fresh database, or with --drop to rebuild a development
schema from scratch.

Dependencies: sqlalchemy, curriculum.configs
System role: Database schema initialization

Usage:
    python -m curriculum.boundary.db.create_tables
    python -m curriculum.boundary.db.create_tables --drop
"""

import asyncio
import logging
import sys

from curriculum.boundary.db.base import Base
from curriculum.boundary.db.connection import get_async_engine

# Registers every mapped table on Base.metadata
from curriculum.boundary.db.models import (  # noqa: F401
    CompletionModel,
    CourseModel,
    EnrollmentModel,
    LessonModel,
)
from curriculum.observability.logger import configure_logging

logger = logging.getLogger(__name__)


async def create_all_tables() -> None:
    """
    Emit CREATE TABLE for every mapped model that does not exist yet.

    Existing tables are left alone, so reruns are harmless. Constraints
    (including the per-course lesson order unique key) are created with
    their tables.
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created", extra={"tables": sorted(Base.metadata.tables)})


async def drop_all_tables() -> None:
    """Drop every mapped table. Development only: all rows are lost."""
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All tables dropped")


async def _main(drop: bool) -> None:
    if drop:
        await drop_all_tables()
    await create_all_tables()
    await get_async_engine().dispose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(_main("--drop" in sys.argv))
