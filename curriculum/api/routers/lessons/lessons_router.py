"""
Lesson API endpoints.

Routes:
- GET /lessons/course/{course_id} - Ordered lessons of a course
- POST /lessons - Add lesson to a course
- POST /lessons/reorder - Reorder every lesson of a course
- POST /lessons/course/{course_id}/reorder - Same, with the id array as the body
- GET /lessons/{id} - Get lesson with the caller's completion flag
- PUT /lessons/{id} - Update lesson fields
- DELETE /lessons/{id} - Remove lesson
- POST /lessons/{id}/complete - Mark lesson complete for the caller
- GET /lessons/{id}/neighbors - Previous/next lesson ids

Dependencies: curriculum.application.services, curriculum.models
System role: Lesson authoring and progression HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Response, status

from curriculum.api.deps.dependencies import get_actor, get_curriculum_coordinator
from curriculum.api.routers.router_utils import handle_curriculum_errors
from curriculum.application.services.curriculum_coordinator import CurriculumCoordinator
from curriculum.core.actor import Actor
from curriculum.models.lesson import (
    CompletionResponse,
    CreateLessonRequest,
    LessonDetailResponse,
    LessonNeighborsResponse,
    LessonResponse,
    ReorderLessonsRequest,
    UpdateLessonRequest,
)

from .lesson_responses import (
    map_lesson_detail_to_response,
    map_lesson_to_response,
    map_lessons_to_response,
    map_neighbors_to_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.get("/course/{course_id}", response_model=list[LessonResponse])
@handle_curriculum_errors
async def list_course_lessons(
    course_id: UUID,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> list[LessonResponse]:
    """
    Authoritative lesson sequence of a course, ascending by order.

    Clients that reordered optimistically refetch this after a failed reorder.

    Raises:
        HTTPException(403): Learner asked for an unpublished course
        HTTPException(404): Course not found
    """
    lessons = await coordinator.list_lessons(actor, course_id)
    return map_lessons_to_response(lessons)


@router.post("", response_model=LessonResponse, status_code=201)
@handle_curriculum_errors
async def create_lesson(
    request: CreateLessonRequest,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> LessonResponse:
    """
    Add a lesson to a course.

    Raises:
        HTTPException(403): Caller is not an admin
        HTTPException(404): Course not found
        HTTPException(409): Requested order already used in the course
    """
    lesson = await coordinator.add_lesson(
        actor,
        request.course_id,
        title=request.title,
        body=request.body,
        media_url=request.media_url,
        requested_order=request.order,
    )
    return map_lesson_to_response(lesson)


@router.post("/reorder", response_model=list[LessonResponse])
@handle_curriculum_errors
async def reorder_lessons(
    request: ReorderLessonsRequest,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> list[LessonResponse]:
    """
    Reorder every lesson of a course.

    Raises:
        HTTPException(400): Submitted ids are not a permutation of the course's lessons
        HTTPException(403): Caller is not an admin
        HTTPException(404): Course not found
    """
    logger.info(
        "Reordering lessons",
        extra={"course_id": str(request.course_id), "lesson_count": len(request.lesson_ids_in_order)}
    )

    lessons = await coordinator.reorder_lessons(
        actor, request.course_id, request.lesson_ids_in_order
    )
    return map_lessons_to_response(lessons)



@router.post("/course/{course_id}/reorder", response_model=list[LessonResponse])
@handle_curriculum_errors
async def reorder_course_lessons(
    course_id: UUID,
    lesson_ids: list[UUID] = Body(..., description="Every lesson id of the course, first to last"),
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> list[LessonResponse]:
    """Reorder a course's lessons from a bare JSON array of lesson ids."""
    logger.info(
        "Reordering lessons",
        extra={"course_id": str(course_id), "lesson_count": len(lesson_ids)}
    )

    lessons = await coordinator.reorder_lessons(actor, course_id, lesson_ids)
    return map_lessons_to_response(lessons)


@router.get("/{lesson_id}", response_model=LessonDetailResponse)
@handle_curriculum_errors
async def get_lesson(
    lesson_id: UUID,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> LessonDetailResponse:
    """Get a lesson with the caller's completion flag."""
    lesson, is_completed = await coordinator.get_lesson(actor, lesson_id)
    return map_lesson_detail_to_response(lesson, is_completed)


@router.put("/{lesson_id}", response_model=LessonResponse)
@handle_curriculum_errors
async def update_lesson(
    lesson_id: UUID,
    request: UpdateLessonRequest,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> LessonResponse:
    """
    Update lesson fields. Order changes go through /lessons/reorder.

    Raises:
        HTTPException(403): Caller is not an admin
        HTTPException(404): Lesson not found
    """
    lesson = await coordinator.update_lesson(
        actor,
        lesson_id,
        title=request.title,
        body=request.body,
        media_url=request.media_url,
    )
    return map_lesson_to_response(lesson)


@router.delete("/{lesson_id}", status_code=204)
@handle_curriculum_errors
async def delete_lesson(
    lesson_id: UUID,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> Response:
    """Remove a lesson; remaining lessons keep their order values."""
    await coordinator.remove_lesson(actor, lesson_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{lesson_id}/complete", response_model=CompletionResponse)
@handle_curriculum_errors
async def complete_lesson(
    lesson_id: UUID,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> CompletionResponse:
    """
    Mark a lesson complete for the caller.

    Repeat calls return the original completion with created=false.

    Raises:
        HTTPException(403): Caller is not enrolled in the lesson's course
        HTTPException(404): Lesson not found
    """
    result = await coordinator.complete_lesson(actor, lesson_id)
    lesson, _ = await coordinator.get_lesson(actor, lesson_id)
    progress = await coordinator.course_progress(actor, lesson.course_id)

    return CompletionResponse(
        lesson_id=lesson_id,
        learner_id=actor.user_id,
        completed_at=result.completion.created_at,
        created=result.created,
        percent_complete=progress.percent_complete,
    )


@router.get("/{lesson_id}/neighbors", response_model=LessonNeighborsResponse)
@handle_curriculum_errors
async def get_lesson_neighbors(
    lesson_id: UUID,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> LessonNeighborsResponse:
    """
    Previous and next lesson ids; null at the ends of the course.

    Raises:
        HTTPException(403): Learner asked for a lesson of an unpublished course
        HTTPException(404): Lesson not found
    """
    neighbors = await coordinator.lesson_neighbors(actor, lesson_id)
    return map_neighbors_to_response(lesson_id, neighbors)
