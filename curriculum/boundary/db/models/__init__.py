"""
Database models package.

Exports:
  - CourseModel: Course ORM model
  - LessonModel: Lesson ORM model (unique order per course)
  - EnrollmentModel: Learner/course enrollment
  - CompletionModel: Learner/lesson completion

Dependencies: sqlalchemy, curriculum.boundary.db.base
System role: Database model definitions for domain entities
"""

from curriculum.boundary.db.models.course_model import CourseModel
from curriculum.boundary.db.models.lesson_model import LessonModel
from curriculum.boundary.db.models.enrollment_model import EnrollmentModel
from curriculum.boundary.db.models.completion_model import CompletionModel

__all__ = [
    "CourseModel",
    "LessonModel",
    "EnrollmentModel",
    "CompletionModel",
]
