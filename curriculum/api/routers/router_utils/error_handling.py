"""
Curriculum error handling utilities.

Provides a decorator for consistent error handling across course, lesson
and dashboard endpoints: domain exceptions are logged with their context
and mapped to HTTP status codes.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError

from curriculum.core.exceptions import (
    CourseNotAvailable,
    CourseNotFound,
    CurriculumException,
    DuplicateLessonOrder,
    InvalidReorderSet,
    LessonNotFound,
    LessonNotInSequence,
    NotEnrolled,
    PermissionDenied,
    PersistenceError,
    PublishPrecondition,
)
from curriculum.models.common import ErrorDetail

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

STATUS_BY_ERROR: list[tuple[type[CurriculumException], int]] = [
    (CourseNotFound, status.HTTP_404_NOT_FOUND),
    (LessonNotFound, status.HTTP_404_NOT_FOUND),
    (CourseNotAvailable, status.HTTP_403_FORBIDDEN),
    (NotEnrolled, status.HTTP_403_FORBIDDEN),
    (PermissionDenied, status.HTTP_403_FORBIDDEN),
    (PublishPrecondition, status.HTTP_409_CONFLICT),
    (DuplicateLessonOrder, status.HTTP_409_CONFLICT),
    (LessonNotInSequence, status.HTTP_409_CONFLICT),
    (InvalidReorderSet, status.HTTP_400_BAD_REQUEST),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(error: CurriculumException) -> int:
    """HTTP status code for a domain exception (400 when unmapped)."""
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def error_detail(error: CurriculumException) -> dict:
    """Response body detail for a domain exception."""
    return ErrorDetail(
        error=type(error).__name__,
        message=error.message,
        details=error.details,
    ).model_dump(mode="json")


def handle_curriculum_errors(func: F) -> F:
    """
    Decorator to handle curriculum errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context
    - Mapping specific exceptions to HTTP status codes
    - Ensuring uniform error response formats
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except PersistenceError as e:
            logger.error(
                "Persistence failure",
                extra={"error": str(e), "operation": e.details.get("operation")},
            )
            raise HTTPException(status_code=status_for(e), detail=error_detail(e))

        except CurriculumException as e:
            logger.warning(
                "Curriculum request rejected",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            raise HTTPException(status_code=status_for(e), detail=error_detail(e))

        except ValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors()
            )

        except ValueError as e:
            logger.warning("Invalid request (ValueError)", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        except Exception as e:
            logger.exception(
                "Unexpected failure in curriculum operation",
                extra={"error": str(e)}
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred during curriculum operation"
            )

    return wrapper  # type: ignore
