"""
FastAPI dependency providers.

Identity headers become an Actor; each service is built per request
around the request-scoped AsyncSession.

Dependencies: curriculum.configs, curriculum.application, curriculum.boundary
System role: DI container for service injection
"""

from functools import lru_cache
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.configs import Settings, get_settings
from curriculum.boundary.db import get_async_db
from curriculum.application.services import (
    CourseService,
    CurriculumCoordinator,
    DashboardService,
)
from curriculum.core.actor import Actor, Role


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_actor(
    x_user_id: UUID | None = Header(default=None),
    x_user_role: Role = Header(default=Role.LEARNER),
) -> Actor:
    """
    Build the acting user from identity headers.

    The upstream identity provider authenticates the caller and forwards
    X-User-Id / X-User-Role; this service trusts them as given.

    Raises:
        HTTPException(401): X-User-Id header missing
    """
    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header is required",
        )
    return Actor(user_id=x_user_id, role=x_user_role)


def get_course_service(db: AsyncSession = Depends(get_async_db)) -> CourseService:
    """Course service bound to the request session."""
    return CourseService(db=db)


def get_curriculum_coordinator(db: AsyncSession = Depends(get_async_db)) -> CurriculumCoordinator:
    """Coordinator for lesson ordering, publication and progress on the request session."""
    return CurriculumCoordinator(db=db)


def get_dashboard_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> DashboardService:
    """Dashboard service sized by settings.top_courses_limit."""
    return DashboardService(db=db, top_courses_limit=settings.top_courses_limit)
