"""
Transaction scope shared by service orchestrators.

Commits on success, rolls back on any failure. Domain errors propagate
unchanged; SQLAlchemy errors are re-raised as PersistenceError naming the
operation that failed, with the original error chained.

Dependencies: sqlalchemy, curriculum.core
System role: One logical transaction per service operation
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(
    db: AsyncSession,
    operation: str,
    commit: bool = True,
) -> AsyncIterator[AsyncSession]:
    """
    Run a block as one transaction.

    Args:
        db: Async database session
        operation: Operation name recorded on failure
        commit: Commit on success (False for read-only blocks)

    Yields:
        AsyncSession: The same session

    Raises:
        PersistenceError: The database layer failed
    """
    try:
        yield db
        if commit:
            await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"{operation} - persistence failure",
            extra={"operation": operation, "error_type": type(e).__name__, "error": str(e)},
        )
        raise PersistenceError(f"Persistence failure during {operation}", operation=operation) from e
    except Exception:
        await db.rollback()
        raise
