"""
Dashboard service orchestrator.

Aggregate statistics for administrators: learners, enrollments, lesson
completions and the most enrolled courses with their completion rates.

Dependencies: curriculum.boundary.db.CRUD
System role: Admin reporting
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.application.services.unit_of_work import unit_of_work
from curriculum.boundary.db.CRUD.completion_crud import completion_crud
from curriculum.boundary.db.CRUD.course_crud import course_crud
from curriculum.boundary.db.CRUD.enrollment_crud import enrollment_crud
from curriculum.core.actor import Actor, Role
from curriculum.core.exceptions import PermissionDenied

logger = logging.getLogger(__name__)


def completion_rate(completions: int, enrollments: int) -> int:
    """Percentage of enrolled learners who finished; 0 without enrollments."""
    if enrollments <= 0:
        return 0
    return round(100 * completions / enrollments)


class DashboardService:
    """Dashboard statistics orchestrator."""

    def __init__(self, db: AsyncSession, top_courses_limit: int = 5) -> None:
        """
        Initialize dashboard service.

        Args:
            db: Async SQLAlchemy session
            top_courses_limit: Number of courses reported in top_courses
        """
        self.db = db
        self.top_courses_limit = top_courses_limit

    async def get_stats(self, actor: Actor) -> dict:
        """
        Platform-wide statistics.

        Returns:
            dict: total_learners, total_enrollments, total_completions, top_courses

        Raises:
            PermissionDenied: Caller is not an admin
        """
        if not actor.is_admin:
            raise PermissionDenied("dashboard_stats", Role.ADMIN.value)

        async with unit_of_work(self.db, "dashboard_stats", commit=False):
            total_learners = await enrollment_crud.count_learners(self.db)
            total_enrollments = await enrollment_crud.count(self.db)
            total_completions = await completion_crud.count(self.db)

            top_courses = []
            for course_id, enrollments in await enrollment_crud.top_courses(
                self.db, self.top_courses_limit
            ):
                course = await course_crud.get_by_id(self.db, course_id)
                if course is None:
                    continue
                lesson_count = await course_crud.count_lessons(self.db, course_id)
                completions = await completion_crud.count_course_finishers(
                    self.db, course_id, lesson_count
                )
                top_courses.append({
                    "course_id": course_id,
                    "title": course.title,
                    "enrollments": enrollments,
                    "completions": completions,
                    "completion_rate": completion_rate(completions, enrollments),
                })

        logger.debug(
            "Dashboard stats computed",
            extra={"total_enrollments": total_enrollments, "top_course_count": len(top_courses)},
        )
        return {
            "total_learners": total_learners,
            "total_enrollments": total_enrollments,
            "total_completions": total_completions,
            "top_courses": top_courses,
        }
