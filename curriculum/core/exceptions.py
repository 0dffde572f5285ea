"""
Exception hierarchy for the curriculum service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class CurriculumException(Exception):
    """Base exception for all curriculum application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidReorderSet(CurriculumException):
    """Raised when a reorder request is not a permutation of the course's lessons."""

    def __init__(
        self,
        message: str,
        missing: list[str] | None = None,
        unexpected: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid reorder error.

        Args:
            message: Error message
            missing: Current lesson ids absent from the submitted sequence
            unexpected: Submitted ids that are not current lessons (or repeats)
            details: Additional context
        """
        details = details or {}
        if missing:
            details["missing"] = missing
        if unexpected:
            details["unexpected"] = unexpected
        super().__init__(message, details)


class PublishPrecondition(CurriculumException):
    """Raised when publishing a course that has no lessons."""

    def __init__(self, course_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["course_id"] = course_id
        super().__init__("A course must have at least one lesson to be published", details)


class CourseNotAvailable(CurriculumException):
    """Raised when a learner enrolls in or views a course that is not published."""

    def __init__(self, course_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["course_id"] = course_id
        super().__init__(f"Course is not available: {course_id}", details)


class NotEnrolled(CurriculumException):
    """Raised when a learner completes a lesson of a course they are not enrolled in."""

    def __init__(
        self,
        learner_id: str,
        course_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["learner_id"] = learner_id
        details["course_id"] = course_id
        super().__init__("Learner is not enrolled in this course", details)


class LessonNotInSequence(CurriculumException):
    """Raised when a lesson id is absent from the course sequence it was looked up in."""

    def __init__(self, lesson_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["lesson_id"] = lesson_id
        super().__init__(f"Lesson is not part of the course sequence: {lesson_id}", details)


class DuplicateLessonOrder(CurriculumException):
    """Raised when a requested lesson order is already taken within the course."""

    def __init__(
        self,
        course_id: str,
        order: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["course_id"] = course_id
        details["order"] = order
        super().__init__(f"Order {order} is already used in this course", details)


class CourseNotFound(CurriculumException):
    """Raised when a course cannot be found."""

    def __init__(self, course_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["course_id"] = course_id
        super().__init__(f"Course not found: {course_id}", details)


class LessonNotFound(CurriculumException):
    """Raised when a lesson cannot be found."""

    def __init__(self, lesson_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["lesson_id"] = lesson_id
        super().__init__(f"Lesson not found: {lesson_id}", details)


class PermissionDenied(CurriculumException):
    """Raised when an operation requires a role the actor does not hold."""

    def __init__(
        self,
        operation: str,
        required_role: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["operation"] = operation
        details["required_role"] = required_role
        super().__init__(f"'{operation}' requires the {required_role} role", details)


class PersistenceError(CurriculumException):
    """Raised when the persistence layer fails; the original error is chained."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize persistence error.

        Args:
            message: Error message
            operation: Coordinator operation that failed (add_lesson, reorder_lessons, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
