"""
Course CRUD operations.

Provides Create, Read, Update, Delete operations for CourseModel
with course-specific queries: filtered search, lesson counts and
cascading delete.

Dependencies: sqlalchemy, curriculum.boundary.db.models
System role: Course persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.boundary.db.models.completion_model import CompletionModel
from curriculum.boundary.db.models.course_model import CourseModel
from curriculum.boundary.db.models.enrollment_model import EnrollmentModel
from curriculum.boundary.db.models.lesson_model import LessonModel
from curriculum.boundary.db.CRUD.base_crud import BaseCRUD
from curriculum.core.course_state_machine import CourseStatus


class CourseCRUD(BaseCRUD[CourseModel]):
    """
    CRUD operations for CourseModel.

    Extends BaseCRUD with paginated search, lesson counts and
    a delete that also removes dependent rows.
    """

    def __init__(self) -> None:
        """Initialize CourseCRUD with CourseModel."""
        super().__init__(CourseModel)

    async def search(
        self,
        session: AsyncSession,
        status: CourseStatus | None = None,
        query: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[Sequence[CourseModel], int]:
        """
        Retrieve a page of courses filtered by status and free text.

        Args:
            session: Async database session
            status: Only courses in this state (None for all)
            query: Case-insensitive substring matched against title and description
            limit: Maximum number of courses to return
            offset: Number of courses to skip

        Returns:
            (courses, total) where total counts every match ignoring pagination
        """
        conditions = []
        if status is not None:
            conditions.append(CourseModel.status == status)
        if query:
            pattern = f"%{query.strip()}%"
            conditions.append(
                or_(
                    CourseModel.title.ilike(pattern),
                    CourseModel.description.ilike(pattern),
                )
            )

        total = await self.count(session, *conditions)
        courses = await self.get_all(
            session,
            *conditions,
            order_by=(CourseModel.updated_at.desc(), CourseModel.id),
            limit=limit,
            offset=offset,
        )
        return courses, total

    async def count_lessons(self, session: AsyncSession, id: UUID) -> int:
        """Return the number of lessons currently in the course."""
        stmt = select(func.count()).select_from(LessonModel).where(LessonModel.course_id == id)
        return int((await session.execute(stmt)).scalar_one())

    async def delete_cascade(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a course with its lessons, completions and enrollments.

        Args:
            session: Async database session
            id: Course UUID

        Returns:
            True if the course was deleted, False if not found
        """
        lesson_ids = select(LessonModel.id).where(LessonModel.course_id == id)
        await session.execute(
            delete(CompletionModel).where(CompletionModel.lesson_id.in_(lesson_ids))
        )
        await session.execute(delete(EnrollmentModel).where(EnrollmentModel.course_id == id))
        await session.execute(delete(LessonModel).where(LessonModel.course_id == id))
        return await self.delete_by_id(session, id)


course_crud = CourseCRUD()
