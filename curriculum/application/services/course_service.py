"""
Course service orchestrator.

Coordinates course authoring and catalogue reads: create, edit, delete,
filtered search and summaries. Status transitions go through
CurriculumCoordinator.publish_course / unpublish_course.

Dependencies: curriculum.boundary.db.CRUD, curriculum.core
System role: Course use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.application.services.unit_of_work import unit_of_work
from curriculum.boundary.db.CRUD.course_crud import course_crud
from curriculum.boundary.db.CRUD.enrollment_crud import enrollment_crud
from curriculum.boundary.db.models import CourseModel
from curriculum.core.actor import Actor, Role
from curriculum.core.course_state_machine import CourseStateMachine, CourseStatus
from curriculum.core.exceptions import CourseNotFound, PermissionDenied

logger = logging.getLogger(__name__)


def course_to_dict(course: CourseModel) -> dict:
    """Flatten a CourseModel into the dict shape used by course responses."""
    return {
        "id": course.id,
        "title": course.title,
        "description": course.description,
        "cover_url": course.cover_url,
        "status": course.status,
        "created_at": course.created_at,
        "updated_at": course.updated_at,
    }


class CourseService:
    """Course service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize course service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    @staticmethod
    def _require_admin(actor: Actor, operation: str) -> None:
        if not actor.is_admin:
            raise PermissionDenied(operation, Role.ADMIN.value, details={"user_id": str(actor.user_id)})

    async def create_course(
        self,
        actor: Actor,
        title: str,
        description: str | None = None,
        cover_url: str | None = None,
    ) -> dict:
        """
        Create a new draft course.

        Args:
            actor: Caller (admin)
            title: Course title
            description: Course description (optional)
            cover_url: Cover image reference (optional)

        Returns:
            dict: Created course data

        Raises:
            PermissionDenied: Caller is not an admin
            PersistenceError: If database operation fails
        """
        self._require_admin(actor, "create_course")

        async with unit_of_work(self.db, "create_course"):
            course = await course_crud.create(
                self.db,
                title=title,
                description=description,
                cover_url=cover_url,
                status=CourseStatus.DRAFT,
            )

        logger.info(
            "Course created",
            extra={"course_id": str(course.id), "course_title": title}
        )
        return course_to_dict(course)

    async def get_course(self, actor: Actor, course_id: UUID) -> dict:
        """
        Get course by ID.

        Args:
            actor: Caller
            course_id: Course UUID

        Returns:
            dict: Course data with id, title, description, cover_url, status, timestamps

        Raises:
            CourseNotFound: If course not found
            CourseNotAvailable: Learner asked for an unpublished course
        """
        async with unit_of_work(self.db, "get_course", commit=False):
            course = await course_crud.get_by_id(self.db, course_id)

        if not course:
            raise CourseNotFound(str(course_id))
        CourseStateMachine.ensure_visible(course, actor)
        return course_to_dict(course)

    async def search_courses(
        self,
        actor: Actor,
        status: CourseStatus | None = None,
        query: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> dict:
        """
        Search courses by status and free text with pagination.

        Learners only ever see published courses, whatever status they ask for.

        Args:
            actor: Caller
            status: Status filter (None for all)
            query: Free-text filter over title and description
            page: 1-indexed page number
            page_size: Courses per page

        Returns:
            dict: items (course dicts), total, page, page_size, has_more
        """
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be positive")

        if not actor.is_admin:
            status = CourseStatus.PUBLISHED

        offset = (page - 1) * page_size
        async with unit_of_work(self.db, "search_courses", commit=False):
            courses, total = await course_crud.search(
                self.db,
                status=status,
                query=query,
                limit=page_size,
                offset=offset,
            )

        return {
            "items": [course_to_dict(c) for c in courses],
            "total": total,
            "page": page,
            "page_size": page_size,
            "has_more": offset + len(courses) < total,
        }

    async def get_course_summary(self, actor: Actor, course_id: UUID) -> dict:
        """
        Course fields plus lesson and enrollment counts.

        Raises:
            CourseNotFound: If course not found
            CourseNotAvailable: Learner asked for an unpublished course
        """
        async with unit_of_work(self.db, "get_course_summary", commit=False):
            course = await course_crud.get_by_id(self.db, course_id)
            if not course:
                raise CourseNotFound(str(course_id))
            CourseStateMachine.ensure_visible(course, actor)
            lesson_count = await course_crud.count_lessons(self.db, course_id)
            enrollment_count = await enrollment_crud.count_for_course(self.db, course_id)

        return {
            **course_to_dict(course),
            "lesson_count": lesson_count,
            "enrollment_count": enrollment_count,
        }

    async def update_course(
        self,
        actor: Actor,
        course_id: UUID,
        title: str | None = None,
        description: str | None = None,
        cover_url: str | None = None,
    ) -> dict:
        """
        Update course fields.

        Args:
            actor: Caller (admin)
            course_id: Course UUID
            title: New course title (optional)
            description: New course description (optional)
            cover_url: New cover reference (optional)

        Returns:
            dict: Updated course data

        Raises:
            PermissionDenied: Caller is not an admin
            CourseNotFound: If course not found
        """
        self._require_admin(actor, "update_course")

        updates = {}
        if title is not None:
            updates["title"] = title
        if description is not None:
            updates["description"] = description
        if cover_url is not None:
            updates["cover_url"] = cover_url

        async with unit_of_work(self.db, "update_course"):
            course = await course_crud.get_by_id(self.db, course_id)
            if not course:
                raise CourseNotFound(str(course_id))

            if updates:
                course = await course_crud.update_by_id(self.db, course_id, **updates)

        if updates:
            logger.info(
                "Course updated",
                extra={"course_id": str(course_id), "updates": list(updates.keys())}
            )
        return course_to_dict(course)

    async def delete_course(self, actor: Actor, course_id: UUID) -> bool:
        """
        Delete course with its lessons, completions and enrollments.

        Raises:
            PermissionDenied: Caller is not an admin
            CourseNotFound: If course not found
        """
        self._require_admin(actor, "delete_course")

        async with unit_of_work(self.db, "delete_course"):
            deleted = await course_crud.delete_cascade(self.db, course_id)
            if not deleted:
                raise CourseNotFound(str(course_id))

        logger.info("Course deleted", extra={"course_id": str(course_id)})
        return True
