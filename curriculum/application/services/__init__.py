"""Service orchestrators."""

from .course_service import CourseService
from .curriculum_coordinator import CurriculumCoordinator
from .dashboard_service import DashboardService

__all__ = [
    "CourseService",
    "CurriculumCoordinator",
    "DashboardService",
]
