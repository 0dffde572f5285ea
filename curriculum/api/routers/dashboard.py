"""
Admin dashboard API endpoints.

Routes: GET /dashboard/stats

Dependencies: curriculum.application.services
System role: Admin reporting HTTP API
"""

from fastapi import APIRouter, Depends

from curriculum.api.deps.dependencies import get_actor, get_dashboard_service
from curriculum.api.routers.router_utils import handle_curriculum_errors
from curriculum.application.services.dashboard_service import DashboardService
from curriculum.core.actor import Actor
from curriculum.models.dashboard import DashboardStatsResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
@handle_curriculum_errors
async def get_dashboard_stats(
    actor: Actor = Depends(get_actor),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardStatsResponse:
    """
    Platform statistics: learners, enrollments, completions and top courses.

    Raises:
        HTTPException(403): Caller is not an admin
    """
    stats = await dashboard_service.get_stats(actor)
    return DashboardStatsResponse(**stats)
