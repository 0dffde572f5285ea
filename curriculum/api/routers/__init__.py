"""API routers."""

from .courses import router as courses_router
from .dashboard import router as dashboard_router
from .health import router as health_router
from .lessons import router as lessons_router

__all__ = [
    "courses_router",
    "dashboard_router",
    "health_router",
    "lessons_router",
]
