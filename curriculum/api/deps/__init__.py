"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_actor,
    get_course_service,
    get_curriculum_coordinator,
    get_dashboard_service,
    get_settings_dependency,
)

__all__ = [
    "get_actor",
    "get_course_service",
    "get_curriculum_coordinator",
    "get_dashboard_service",
    "get_settings_dependency",
]
