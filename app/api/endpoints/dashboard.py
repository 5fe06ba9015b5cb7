"""Dashboard API: aggregate counts and recent activity."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import CurrentUser, get_dashboard_service
from app.application.services import DashboardService
from app.schemas.common import ApiResponse
from app.schemas.dashboard import ActivityOut, DashboardStats, RecentActivityData

router = APIRouter()

Dashboard = Annotated[DashboardService, Depends(get_dashboard_service)]


@router.get("/stats", response_model=ApiResponse[DashboardStats])
async def dashboard_stats(_user: CurrentUser, dashboard: Dashboard):
    return ApiResponse(data=DashboardStats.model_validate(await dashboard.stats()))


@router.get("/recent-activity", response_model=ApiResponse[RecentActivityData])
async def recent_activity(
    _user: CurrentUser,
    dashboard: Dashboard,
    limit: Annotated[int, Query(ge=1, le=50)] = 10,
):
    """Newest audit entries first, each with the acting user's email."""
    entries = await dashboard.recent_activity(limit)
    return ApiResponse(
        data=RecentActivityData(
            activities=[ActivityOut.model_validate(e) for e in entries]
        )
    )
