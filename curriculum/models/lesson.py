"""
Lesson domain models and schemas.

Request/response schemas for lesson authoring, reordering and navigation.

Dependencies: pydantic
System role: Lesson API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateLessonRequest(BaseModel):
    """Request schema for adding a lesson to a course."""

    course_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=255, description="Lesson title")
    body: str = Field("", description="Lesson content")
    media_url: str | None = Field(None, max_length=1024, description="Optional media reference")
    order: int | None = Field(
        None,
        ge=1,
        description="Requested position; appended after the last lesson when omitted",
    )


class UpdateLessonRequest(BaseModel):
    """Request schema for editing lesson fields; order changes via reorder."""

    title: str | None = Field(None, min_length=1, max_length=255)
    body: str | None = None
    media_url: str | None = Field(None, max_length=1024)


class ReorderLessonsRequest(BaseModel):
    """Request schema for reordering every lesson of a course."""

    course_id: uuid.UUID
    lesson_ids_in_order: list[uuid.UUID] = Field(
        ...,
        description="Every lesson id of the course, first to last",
    )


class LessonResponse(BaseModel):
    """Response schema for lesson operations."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    course_id: uuid.UUID
    title: str
    body: str
    media_url: str | None
    order: int
    created_at: datetime
    updated_at: datetime


class LessonDetailResponse(LessonResponse):
    """Lesson with the caller's completion flag."""

    is_completed: bool = False


class LessonNeighborsResponse(BaseModel):
    """Previous/next lesson ids around a lesson."""

    lesson_id: uuid.UUID
    previous_lesson_id: uuid.UUID | None
    next_lesson_id: uuid.UUID | None


class CompletionResponse(BaseModel):
    """Response schema for completing a lesson."""

    lesson_id: uuid.UUID
    learner_id: uuid.UUID
    completed_at: datetime
    created: bool = Field(..., description="False when the lesson was already completed")
    percent_complete: int = Field(..., ge=0, le=100)
