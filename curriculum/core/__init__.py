"""
Core business logic module.

Contains the ordered-curriculum rules: lesson ordering, course lifecycle,
learner progress, plus the exception hierarchy and the acting-user type.
"""

from curriculum.core.actor import Actor, Role
from curriculum.core.course_state_machine import CourseStateMachine, CourseStatus
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
from curriculum.core.ordering_policy import OrderingPolicy
from curriculum.core.progress_tracker import CompletionResult, CourseProgress, ProgressTracker

__all__ = [
    # Actor
    "Actor",
    "Role",
    # Exceptions
    "CurriculumException",
    "InvalidReorderSet",
    "PublishPrecondition",
    "CourseNotAvailable",
    "NotEnrolled",
    "LessonNotInSequence",
    "DuplicateLessonOrder",
    "CourseNotFound",
    "LessonNotFound",
    "PermissionDenied",
    "PersistenceError",
    # Business logic
    "OrderingPolicy",
    "CourseStateMachine",
    "CourseStatus",
    "ProgressTracker",
    "CompletionResult",
    "CourseProgress",
]
