"""
Course lifecycle state machine.

Draft <-> Published. Publishing is gated on the course having at least one
lesson; unpublishing is always allowed. Only published courses accept
enrollments or are visible to learners.

Dependencies: curriculum.core
System role: Course publication rules
"""

import enum
import logging
from datetime import datetime, timezone
from typing import Protocol

from curriculum.core.actor import Actor
from curriculum.core.exceptions import CourseNotAvailable, PublishPrecondition

logger = logging.getLogger(__name__)


class CourseStatus(str, enum.Enum):
    """
    Course lifecycle states.

    DRAFT: Being authored; hidden from learners, not enrollable
    PUBLISHED: Visible to learners and open for enrollment
    """

    DRAFT = "draft"
    PUBLISHED = "published"


class Stateful(Protocol):
    """Course-like record the state machine mutates."""

    id: object
    status: CourseStatus
    updated_at: datetime


class CourseStateMachine:
    """
    Transition rules for a course.

    | From      | Event     | To        | Guard            |
    |-----------|-----------|-----------|------------------|
    | draft     | publish   | published | lesson_count >= 1 |
    | published | unpublish | draft     | none             |
    | draft     | unpublish | draft     | none (idempotent) |
    """

    @staticmethod
    def publish(course: Stateful, lesson_count: int) -> CourseStatus:
        """
        Move the course to PUBLISHED.

        Args:
            course: Course record (mutated in place)
            lesson_count: Number of lessons currently in the course

        Returns:
            CourseStatus: PUBLISHED

        Raises:
            PublishPrecondition: The course has no lessons
        """
        if lesson_count < 1:
            raise PublishPrecondition(str(course.id), details={"lesson_count": lesson_count})

        previous = course.status
        course.status = CourseStatus.PUBLISHED
        course.updated_at = datetime.now(timezone.utc)
        logger.debug(
            "Course status transition",
            extra={"course_id": str(course.id), "from": previous, "to": course.status},
        )
        return course.status

    @staticmethod
    def unpublish(course: Stateful) -> CourseStatus:
        """Move the course to DRAFT; a draft course stays draft."""
        if course.status == CourseStatus.DRAFT:
            return course.status

        course.status = CourseStatus.DRAFT
        course.updated_at = datetime.now(timezone.utc)
        logger.debug(
            "Course status transition",
            extra={"course_id": str(course.id), "from": "published", "to": "draft"},
        )
        return course.status

    @staticmethod
    def ensure_enrollable(course: Stateful) -> None:
        """Raise CourseNotAvailable unless the course is published."""
        if course.status != CourseStatus.PUBLISHED:
            raise CourseNotAvailable(str(course.id), details={"status": course.status})

    @staticmethod
    def ensure_visible(course: Stateful, actor: Actor) -> None:
        """Admins see every course; learners only published ones."""
        if actor.is_admin:
            return
        CourseStateMachine.ensure_enrollable(course)
