"""
Completion CRUD operations.

Idempotent completion creation and the course-scoped reads used to derive
learner progress.

Dependencies: sqlalchemy, curriculum.boundary.db.models
System role: Completion persistence operations
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.boundary.db.models.completion_model import CompletionModel
from curriculum.boundary.db.models.lesson_model import LessonModel
from curriculum.boundary.db.CRUD.base_crud import BaseCRUD


class CompletionCRUD(BaseCRUD[CompletionModel]):
    """CRUD operations for CompletionModel."""

    def __init__(self) -> None:
        """Initialize CompletionCRUD with CompletionModel."""
        super().__init__(CompletionModel)

    async def get_for(
        self,
        session: AsyncSession,
        learner_id: UUID,
        lesson_id: UUID,
    ) -> CompletionModel | None:
        """Retrieve the completion of a lesson by a learner, if any."""
        stmt = select(CompletionModel).where(
            CompletionModel.learner_id == learner_id,
            CompletionModel.lesson_id == lesson_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def completed_lesson_ids(
        self,
        session: AsyncSession,
        learner_id: UUID,
        course_id: UUID,
    ) -> set[UUID]:
        """
        Lesson ids of a course completed by a learner.

        Joined against current lessons, so completions of deleted lessons
        never appear.

        Args:
            session: Async database session
            learner_id: Learner UUID
            course_id: Course UUID

        Returns:
            set of completed lesson UUIDs
        """
        stmt = (
            select(CompletionModel.lesson_id)
            .join(LessonModel, LessonModel.id == CompletionModel.lesson_id)
            .where(
                CompletionModel.learner_id == learner_id,
                LessonModel.course_id == course_id,
            )
        )
        result = await session.execute(stmt)
        return set(result.scalars().all())

    async def count_course_finishers(
        self,
        session: AsyncSession,
        course_id: UUID,
        lesson_count: int,
    ) -> int:
        """
        Number of learners who completed every lesson of a course.

        Args:
            session: Async database session
            course_id: Course UUID
            lesson_count: Current number of lessons in the course

        Returns:
            int: learners with lesson_count completions in the course (0 for an empty course)
        """
        if lesson_count < 1:
            return 0
        per_learner = (
            select(CompletionModel.learner_id)
            .join(LessonModel, LessonModel.id == CompletionModel.lesson_id)
            .where(LessonModel.course_id == course_id)
            .group_by(CompletionModel.learner_id)
            .having(func.count(CompletionModel.id) >= lesson_count)
            .subquery()
        )
        stmt = select(func.count()).select_from(per_learner)
        result = await session.execute(stmt)
        return int(result.scalar_one())


completion_crud = CompletionCRUD()
