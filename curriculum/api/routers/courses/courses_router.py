"""
Course API endpoints.

Routes:
- GET /courses/search - Search courses by status and text, paginated
- POST /courses - Create new draft course
- GET /courses - List courses (first page of an unfiltered search)
- GET /courses/{id} - Get single course
- PUT /courses/{id} - Update course
- DELETE /courses/{id} - Delete course with its lessons and enrollments
- PATCH /courses/{id}/publish - Publish course
- PATCH /courses/{id}/unpublish - Return course to draft
- POST /courses/{id}/enroll - Enroll the caller
- GET /courses/{id}/summary - Course with lesson and enrollment counts
- GET /courses/{id}/progress - Caller's progress through the course

Dependencies: curriculum.application.services, curriculum.models
System role: Course management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from curriculum.api.deps.dependencies import (
    get_actor,
    get_course_service,
    get_curriculum_coordinator,
    get_settings_dependency,
)
from curriculum.api.routers.router_utils import handle_curriculum_errors
from curriculum.application.services.course_service import CourseService, course_to_dict
from curriculum.application.services.curriculum_coordinator import CurriculumCoordinator
from curriculum.configs import Settings
from curriculum.core.actor import Actor
from curriculum.core.course_state_machine import CourseStatus
from curriculum.models.common import PaginatedResponse
from curriculum.models.course import (
    CourseResponse,
    CourseSummaryResponse,
    CreateCourseRequest,
    EnrollmentResponse,
    UpdateCourseRequest,
)
from curriculum.models.progress import CourseProgressResponse

from .course_responses import (
    map_course_page_to_response,
    map_course_to_response,
    map_enrollment_to_response,
    map_progress_to_response,
    map_summary_to_response,
)
from .course_validators import validate_course_creation, validate_course_update

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("/search", response_model=PaginatedResponse[CourseResponse])
@handle_curriculum_errors
async def search_courses(
    q: str | None = Query(None, description="Free-text filter over title and description"),
    course_status: CourseStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1),
    actor: Actor = Depends(get_actor),
    settings: Settings = Depends(get_settings_dependency),
    course_service: CourseService = Depends(get_course_service),
) -> PaginatedResponse[CourseResponse]:
    """
    Search courses with pagination.

    Learners only receive published courses regardless of the status filter.
    page_size is capped at the configured maximum.
    """
    page_size = min(page_size, settings.max_page_size)

    result = await course_service.search_courses(
        actor,
        status=course_status,
        query=q,
        page=page,
        page_size=page_size,
    )

    logger.info(
        "Courses searched",
        extra={"total": result["total"], "page": page, "page_size": page_size}
    )
    return map_course_page_to_response(result)


@router.post("", response_model=CourseResponse, status_code=201)
@handle_curriculum_errors
async def create_course(
    request: CreateCourseRequest,
    actor: Actor = Depends(get_actor),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Create new draft course.

    Args:
        request: CreateCourseRequest with title, description, cover_url
        actor: Caller (admin)
        course_service: Injected CourseService

    Returns:
        CourseResponse: Created course

    Raises:
        HTTPException(400): Invalid request
        HTTPException(403): Caller is not an admin
    """
    # Business validation
    validate_course_creation(request)

    course_data = await course_service.create_course(
        actor,
        title=request.title,
        description=request.description,
        cover_url=request.cover_url,
    )
    return map_course_to_response(course_data)


@router.get("", response_model=PaginatedResponse[CourseResponse])
@handle_curriculum_errors
async def list_courses(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1),
    actor: Actor = Depends(get_actor),
    settings: Settings = Depends(get_settings_dependency),
    course_service: CourseService = Depends(get_course_service),
) -> PaginatedResponse[CourseResponse]:
    """List courses visible to the caller, newest first."""
    result = await course_service.search_courses(
        actor,
        page=page,
        page_size=min(page_size, settings.max_page_size),
    )
    return map_course_page_to_response(result)


@router.get("/{course_id}", response_model=CourseResponse)
@handle_curriculum_errors
async def get_course(
    course_id: UUID,
    actor: Actor = Depends(get_actor),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Get single course by ID.

    Raises:
        HTTPException(404): Course not found
        HTTPException(403): Learner asked for an unpublished course
    """
    course_data = await course_service.get_course(actor, course_id)
    return map_course_to_response(course_data)


@router.put("/{course_id}", response_model=CourseResponse)
@handle_curriculum_errors
async def update_course(
    course_id: UUID,
    request: UpdateCourseRequest,
    actor: Actor = Depends(get_actor),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Update course fields.

    Raises:
        HTTPException(400): No field provided
        HTTPException(403): Caller is not an admin
        HTTPException(404): Course not found
    """
    validate_course_update(request)

    course_data = await course_service.update_course(
        actor,
        course_id,
        title=request.title,
        description=request.description,
        cover_url=request.cover_url,
    )
    return map_course_to_response(course_data)


@router.delete("/{course_id}", status_code=204)
@handle_curriculum_errors
async def delete_course(
    course_id: UUID,
    actor: Actor = Depends(get_actor),
    course_service: CourseService = Depends(get_course_service),
) -> Response:
    """
    Delete course with its lessons, completions and enrollments.

    Raises:
        HTTPException(403): Caller is not an admin
        HTTPException(404): Course not found
    """
    await course_service.delete_course(actor, course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{course_id}/publish", response_model=CourseResponse)
@handle_curriculum_errors
async def publish_course(
    course_id: UUID,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> CourseResponse:
    """
    Publish a course.

    Raises:
        HTTPException(403): Caller is not an admin
        HTTPException(404): Course not found
        HTTPException(409): Course has no lessons
    """
    course = await coordinator.publish_course(actor, course_id)
    return map_course_to_response(course_to_dict(course))


@router.patch("/{course_id}/unpublish", response_model=CourseResponse)
@handle_curriculum_errors
async def unpublish_course(
    course_id: UUID,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> CourseResponse:
    """Return a course to draft."""
    course = await coordinator.unpublish_course(actor, course_id)
    return map_course_to_response(course_to_dict(course))


@router.post("/{course_id}/enroll", response_model=EnrollmentResponse)
@handle_curriculum_errors
async def enroll(
    course_id: UUID,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> EnrollmentResponse:
    """
    Enroll the caller in a published course.

    Repeat calls return the existing enrollment with created=false.

    Raises:
        HTTPException(403): Course is not published
        HTTPException(404): Course not found
    """
    enrollment, created = await coordinator.enroll(actor, course_id)
    return map_enrollment_to_response(enrollment, created)


@router.get("/{course_id}/summary", response_model=CourseSummaryResponse)
@handle_curriculum_errors
async def get_course_summary(
    course_id: UUID,
    actor: Actor = Depends(get_actor),
    course_service: CourseService = Depends(get_course_service),
) -> CourseSummaryResponse:
    """Course fields plus lesson and enrollment counts."""
    summary = await course_service.get_course_summary(actor, course_id)
    return map_summary_to_response(summary)


@router.get("/{course_id}/progress", response_model=CourseProgressResponse)
@handle_curriculum_errors
async def get_course_progress(
    course_id: UUID,
    actor: Actor = Depends(get_actor),
    coordinator: CurriculumCoordinator = Depends(get_curriculum_coordinator),
) -> CourseProgressResponse:
    """
    The caller's progress through a course.

    Raises:
        HTTPException(403): Learner asked for an unpublished course
        HTTPException(404): Course not found
    """
    progress = await coordinator.course_progress(actor, course_id)
    return map_progress_to_response(course_id, actor.user_id, progress)
