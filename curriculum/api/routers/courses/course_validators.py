"""
Course request checks that pydantic field constraints cannot express:
whitespace-only titles, blank cover references, empty updates.

Dependencies: curriculum.models.course
System role: Course business logic validation
"""

from curriculum.models.course import CreateCourseRequest, UpdateCourseRequest


class CourseValidationError(ValueError):
    """Raised when course validation fails."""


def _validate_title(title: str) -> None:
    if not title.strip():
        raise CourseValidationError("Course title cannot be empty or whitespace-only")

    if len(title.strip()) < 2:
        raise CourseValidationError("Course title must be at least 2 characters")


def validate_course_creation(request: CreateCourseRequest) -> None:
    """
    Validate course creation request with business rules.

    Args:
        request: CreateCourseRequest with title, description, cover_url

    Raises:
        CourseValidationError: If business validation fails
    """
    _validate_title(request.title)

    if request.cover_url is not None and not request.cover_url.strip():
        raise CourseValidationError("Cover reference cannot be blank")


def validate_course_update(request: UpdateCourseRequest) -> None:
    """
    Validate course update request with business rules.

    Args:
        request: UpdateCourseRequest with optional title, description, cover_url

    Raises:
        CourseValidationError: If business validation fails
    """
    # At least one field should be provided for update
    if request.title is None and request.description is None and request.cover_url is None:
        raise CourseValidationError("At least one field must be provided for update")

    if request.title is not None:
        _validate_title(request.title)
