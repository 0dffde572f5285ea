"""
Lesson response mapping utilities.

Dependencies: curriculum.models.lesson
System role: Lesson response transformation
"""

from uuid import UUID

from curriculum.boundary.db.models import LessonModel
from curriculum.models.lesson import (
    LessonDetailResponse,
    LessonNeighborsResponse,
    LessonResponse,
)


def map_lesson_to_response(lesson: LessonModel) -> LessonResponse:
    """Transform a LessonModel into LessonResponse."""
    return LessonResponse.model_validate(lesson)


def map_lessons_to_response(lessons: list[LessonModel]) -> list[LessonResponse]:
    """Transform an ordered lesson list into LessonResponse items, order preserved."""
    return [map_lesson_to_response(lesson) for lesson in lessons]


def map_lesson_detail_to_response(lesson: LessonModel, is_completed: bool) -> LessonDetailResponse:
    """Transform a lesson and the caller's completion flag into LessonDetailResponse."""
    return LessonDetailResponse(
        **LessonResponse.model_validate(lesson).model_dump(),
        is_completed=is_completed,
    )


def map_neighbors_to_response(
    lesson_id: UUID,
    neighbors: tuple[UUID | None, UUID | None],
) -> LessonNeighborsResponse:
    previous_id, next_id = neighbors
    return LessonNeighborsResponse(
        lesson_id=lesson_id,
        previous_lesson_id=previous_id,
        next_lesson_id=next_id,
    )
