"""
Course domain models and schemas.

Request/response schemas for course operations.

Dependencies: pydantic, curriculum.core
System role: Course API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from curriculum.core.course_state_machine import CourseStatus


class CreateCourseRequest(BaseModel):
    """Request schema for creating a new course (always created as draft)."""

    title: str = Field(..., min_length=1, max_length=255, description="Course title")
    description: str | None = Field(None, max_length=4096, description="Course description")
    cover_url: str | None = Field(None, max_length=1024, description="Cover image reference")


class UpdateCourseRequest(BaseModel):
    """Request schema for editing course fields; status changes via publish/unpublish."""

    title: str | None = Field(None, min_length=1, max_length=255, description="Course title")
    description: str | None = Field(None, max_length=4096, description="Course description")
    cover_url: str | None = Field(None, max_length=1024, description="Cover image reference")


class CourseResponse(BaseModel):
    """Response schema for course operations."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str | None
    cover_url: str | None
    status: CourseStatus
    created_at: datetime
    updated_at: datetime


class CourseSummaryResponse(CourseResponse):
    """Response schema for course with lesson and enrollment counts."""

    lesson_count: int
    enrollment_count: int


class EnrollmentResponse(BaseModel):
    """Response schema for an enrollment."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    learner_id: uuid.UUID
    course_id: uuid.UUID
    created_at: datetime
    created: bool = Field(False, description="False when the learner was already enrolled")
