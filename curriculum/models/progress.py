"""
Progress schemas.

Dependencies: pydantic
System role: Learner progress API contracts
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class LessonProgressResponse(BaseModel):
    """Completion flag of one lesson."""

    model_config = ConfigDict(from_attributes=True)

    lesson_id: uuid.UUID
    title: str
    order: int
    completed: bool


class CourseProgressResponse(BaseModel):
    """A learner's progress through one course."""

    model_config = ConfigDict(from_attributes=True)

    course_id: uuid.UUID
    learner_id: uuid.UUID
    total_lessons: int
    completed_lessons: int
    percent_complete: int = Field(..., ge=0, le=100)
    next_lesson_id: uuid.UUID | None = None
    lessons: list[LessonProgressResponse] = Field(default_factory=list)
