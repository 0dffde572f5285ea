"""
Lesson CRUD operations.

Provides Create, Read, Update, Delete operations for LessonModel
plus ordered course sequences and the batch order write used by reorder.

Dependencies: sqlalchemy, curriculum.boundary.db.models
System role: Lesson persistence operations
"""

from typing import Mapping, Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.boundary.db.models.completion_model import CompletionModel
from curriculum.boundary.db.models.lesson_model import LessonModel
from curriculum.boundary.db.CRUD.base_crud import BaseCRUD


class LessonCRUD(BaseCRUD[LessonModel]):
    """CRUD operations for LessonModel."""

    def __init__(self) -> None:
        """Initialize LessonCRUD with LessonModel."""
        super().__init__(LessonModel)

    async def list_by_course(
        self,
        session: AsyncSession,
        course_id: UUID,
    ) -> Sequence[LessonModel]:
        """
        Retrieve the lessons of a course in sequence (ascending order).

        Rows already in the identity map are refreshed, so the result
        reflects order writes made earlier in the same session.

        Args:
            session: Async database session
            course_id: Course UUID

        Returns:
            Sequence of LessonModels ordered by order value
        """
        stmt = (
            select(LessonModel)
            .where(LessonModel.course_id == course_id)
            .order_by(LessonModel.order)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_orders(self, session: AsyncSession, course_id: UUID) -> list[int]:
        """Return the order values currently used in a course."""
        stmt = select(LessonModel.order).where(LessonModel.course_id == course_id)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def write_orders(
        self,
        session: AsyncSession,
        course_id: UUID,
        assignments: Mapping[UUID, int],
    ) -> None:
        """
        Persist a batch of order assignments for one course.

        Rows are first parked on negated (hence unused) values and then given
        their final order, so UNIQUE(course_id, lesson_order) holds after
        every statement. Must run inside the caller's transaction for the
        batch to be all-or-nothing.

        Args:
            session: Async database session
            course_id: Course UUID
            assignments: lesson id -> new order value (positive)
        """
        await session.execute(
            update(LessonModel)
            .where(
                LessonModel.course_id == course_id,
                LessonModel.id.in_(list(assignments)),
            )
            .values({LessonModel.order: -LessonModel.order})
            .execution_options(synchronize_session=False)
        )
        for lesson_id, order in assignments.items():
            await session.execute(
                update(LessonModel)
                .where(LessonModel.id == lesson_id, LessonModel.course_id == course_id)
                .values({LessonModel.order: order})
                .execution_options(synchronize_session=False)
            )
        await session.flush()

    async def delete_with_completions(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a lesson and every completion recorded against it.

        Args:
            session: Async database session
            id: Lesson UUID

        Returns:
            True if the lesson was deleted, False if not found
        """
        await session.execute(delete(CompletionModel).where(CompletionModel.lesson_id == id))
        return await self.delete_by_id(session, id)


lesson_crud = LessonCRUD()
