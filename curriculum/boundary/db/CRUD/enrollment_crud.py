"""
Enrollment CRUD operations.

Idempotent enrollment creation and the per-course aggregates used by
course summaries and dashboard statistics.

Dependencies: sqlalchemy, curriculum.boundary.db.models
System role: Enrollment persistence operations
"""

from uuid import UUID

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.boundary.db.models.enrollment_model import EnrollmentModel
from curriculum.boundary.db.CRUD.base_crud import BaseCRUD


class EnrollmentCRUD(BaseCRUD[EnrollmentModel]):
    """CRUD operations for EnrollmentModel."""

    def __init__(self) -> None:
        """Initialize EnrollmentCRUD with EnrollmentModel."""
        super().__init__(EnrollmentModel)

    async def get_for(
        self,
        session: AsyncSession,
        learner_id: UUID,
        course_id: UUID,
    ) -> EnrollmentModel | None:
        """Retrieve the enrollment of a learner in a course, if any."""
        stmt = select(EnrollmentModel).where(
            EnrollmentModel.learner_id == learner_id,
            EnrollmentModel.course_id == course_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        session: AsyncSession,
        learner_id: UUID,
        course_id: UUID,
    ) -> tuple[EnrollmentModel, bool]:
        """
        Enroll a learner unless already enrolled.

        Args:
            session: Async database session
            learner_id: Learner UUID
            course_id: Course UUID

        Returns:
            (enrollment, created) where created is False for a repeat call
        """
        existing = await self.get_for(session, learner_id, course_id)
        if existing is not None:
            return existing, False
        created = await self.create(session, learner_id=learner_id, course_id=course_id)
        return created, True

    async def is_enrolled(
        self,
        session: AsyncSession,
        learner_id: UUID,
        course_id: UUID,
    ) -> bool:
        """Return whether the learner is enrolled in the course."""
        return await self.get_for(session, learner_id, course_id) is not None

    async def count_for_course(self, session: AsyncSession, course_id: UUID) -> int:
        """Return the number of learners enrolled in a course."""
        return await self.count(session, EnrollmentModel.course_id == course_id)

    async def count_learners(self, session: AsyncSession) -> int:
        """Return the number of distinct learners enrolled anywhere."""
        stmt = select(func.count(distinct(EnrollmentModel.learner_id)))
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def top_courses(
        self,
        session: AsyncSession,
        limit: int,
    ) -> list[tuple[UUID, int]]:
        """
        Courses with the most enrollments.

        Args:
            session: Async database session
            limit: Maximum number of courses

        Returns:
            list of (course_id, enrollment_count), most enrolled first
        """
        enrollment_count = func.count(EnrollmentModel.id).label("enrollment_count")
        stmt = (
            select(EnrollmentModel.course_id, enrollment_count)
            .group_by(EnrollmentModel.course_id)
            .order_by(enrollment_count.desc(), EnrollmentModel.course_id)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [(row.course_id, int(row.enrollment_count)) for row in result.all()]


enrollment_crud = EnrollmentCRUD()
