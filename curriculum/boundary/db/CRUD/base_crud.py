"""
Shared persistence primitives for curriculum tables.

Generic create, read, update, delete, count and existence checks shared by
the course, lesson, enrollment and completion CRUD singletons.

Dependencies: sqlalchemy
System role: Generic data access layer
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic CRUD over one model class.

    Methods flush but never commit; the calling service owns the
    transaction (see unit_of_work).

    Attributes:
        model: Mapped class every statement targets
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs: Any) -> ModelT:
        """
        Insert a new row.

        Args:
            session: Async database session
            **kwargs: Column values for the new row

        Returns:
            The flushed instance, refreshed so server defaults are loaded
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Retrieve a row by primary key, None if absent."""
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        session: AsyncSession,
        *conditions: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Retrieve rows matching every condition, with optional pagination.

        Args:
            session: Async database session
            *conditions: WHERE clauses, AND-ed together
            order_by: ORDER BY expressions
            limit: Maximum number of rows (None for all)
            offset: Number of rows to skip

        Returns:
            Matching instances in the requested order
        """
        stmt = select(self.model).where(*conditions).order_by(*order_by).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count(self, session: AsyncSession, *conditions: ColumnElement[bool]) -> int:
        """Return the number of rows matching every condition."""
        stmt = select(func.count()).select_from(self.model).where(*conditions)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def update_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        **kwargs: Any,
    ) -> ModelT | None:
        """
        Update a row by primary key.

        The returned instance is the identity-map object refreshed from the
        UPDATE ... RETURNING row.

        Returns:
            The updated instance, None when no row has this id
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**kwargs)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """Delete a row by primary key; False if nothing was deleted."""
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        """Check whether a row with this primary key exists."""
        stmt = select(self.model.id).where(self.model.id == id).limit(1)
        return (await session.scalar(stmt)) is not None
