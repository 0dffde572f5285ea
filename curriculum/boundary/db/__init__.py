"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - CourseModel, LessonModel, EnrollmentModel, CompletionModel: Domain entities
  - course_crud, lesson_crud, enrollment_crud, completion_crud: CRUD operation singletons

Dependencies: sqlalchemy, curriculum.configs
System role: Persistence collaborator for the curriculum coordinator
"""

from curriculum.boundary.db.base import Base, TimestampMixin, UUIDMixin
from curriculum.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from curriculum.boundary.db.models import (
    CompletionModel,
    CourseModel,
    EnrollmentModel,
    LessonModel,
)
from curriculum.boundary.db.CRUD import (
    BaseCRUD,
    CompletionCRUD,
    CourseCRUD,
    EnrollmentCRUD,
    LessonCRUD,
    completion_crud,
    course_crud,
    enrollment_crud,
    lesson_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "CourseModel",
    "LessonModel",
    "EnrollmentModel",
    "CompletionModel",
    # CRUD classes
    "BaseCRUD",
    "CourseCRUD",
    "LessonCRUD",
    "EnrollmentCRUD",
    "CompletionCRUD",
    # CRUD singletons
    "course_crud",
    "lesson_crud",
    "enrollment_crud",
    "completion_crud",
]
