"""
Dashboard statistics schemas.

Dependencies: pydantic
System role: Admin dashboard API contracts
"""

import uuid

from pydantic import BaseModel, Field


class TopCourseStats(BaseModel):
    """Enrollment and completion counts for one course."""

    course_id: uuid.UUID
    title: str
    enrollments: int
    completions: int = Field(..., description="Learners who completed every lesson")
    completion_rate: int = Field(..., ge=0, le=100)


class DashboardStatsResponse(BaseModel):
    """Aggregate platform statistics."""

    total_learners: int
    total_enrollments: int
    total_completions: int = Field(..., description="Lesson completion records")
    top_courses: list[TopCourseStats] = Field(default_factory=list)
