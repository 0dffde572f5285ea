"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from curriculum.boundary.db.CRUD import course_crud, lesson_crud

    # Use singleton instances
    course = await course_crud.get_by_id(db, course_id)

    # Or instantiate classes directly for custom behavior
    from curriculum.boundary.db.CRUD import LessonCRUD
    custom_crud = LessonCRUD()
"""

from curriculum.boundary.db.CRUD.base_crud import BaseCRUD
from curriculum.boundary.db.CRUD.course_crud import CourseCRUD, course_crud
from curriculum.boundary.db.CRUD.lesson_crud import LessonCRUD, lesson_crud
from curriculum.boundary.db.CRUD.enrollment_crud import EnrollmentCRUD, enrollment_crud
from curriculum.boundary.db.CRUD.completion_crud import CompletionCRUD, completion_crud

__all__ = [
    "BaseCRUD",
    "CourseCRUD",
    "course_crud",
    "LessonCRUD",
    "lesson_crud",
    "EnrollmentCRUD",
    "enrollment_crud",
    "CompletionCRUD",
    "completion_crud",
]
