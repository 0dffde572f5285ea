"""
Course response mapping utilities.

Transforms service dictionaries and core progress snapshots into Pydantic
response models.

Dependencies: curriculum.models, curriculum.core
System role: Course response transformation
"""

from typing import Any
from uuid import UUID

from curriculum.boundary.db.models import EnrollmentModel
from curriculum.core.progress_tracker import CourseProgress
from curriculum.models.common import PaginatedResponse
from curriculum.models.course import CourseResponse, CourseSummaryResponse, EnrollmentResponse
from curriculum.models.progress import CourseProgressResponse, LessonProgressResponse


def map_course_to_response(course_data: dict[str, Any]) -> CourseResponse:
    """
    Transform course data dictionary into CourseResponse.

    Args:
        course_data: Dictionary containing course fields
            Expected keys: id, title, description, cover_url, status, created_at, updated_at

    Returns:
        CourseResponse: Pydantic model for API response
    """
    return CourseResponse(**course_data)


def map_course_page_to_response(page: dict[str, Any]) -> PaginatedResponse[CourseResponse]:
    """Transform a search result page into PaginatedResponse[CourseResponse]."""
    return PaginatedResponse[CourseResponse](
        items=[map_course_to_response(course) for course in page["items"]],
        total=page["total"],
        page=page["page"],
        page_size=page["page_size"],
        has_more=page["has_more"],
    )


def map_summary_to_response(summary: dict[str, Any]) -> CourseSummaryResponse:
    """Transform a course summary dictionary into CourseSummaryResponse."""
    return CourseSummaryResponse(**summary)


def map_enrollment_to_response(enrollment: EnrollmentModel, created: bool) -> EnrollmentResponse:
    """Transform an enrollment row into EnrollmentResponse."""
    return EnrollmentResponse(
        id=enrollment.id,
        learner_id=enrollment.learner_id,
        course_id=enrollment.course_id,
        created_at=enrollment.created_at,
        created=created,
    )


def map_progress_to_response(
    course_id: UUID,
    learner_id: UUID,
    progress: CourseProgress,
) -> CourseProgressResponse:
    """Transform a CourseProgress snapshot into CourseProgressResponse."""
    return CourseProgressResponse(
        course_id=course_id,
        learner_id=learner_id,
        total_lessons=progress.total_lessons,
        completed_lessons=progress.completed_lessons,
        percent_complete=progress.percent_complete,
        next_lesson_id=progress.next_lesson_id,
        lessons=[LessonProgressResponse.model_validate(item) for item in progress.lessons],
    )
