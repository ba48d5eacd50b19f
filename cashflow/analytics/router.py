from fastapi import APIRouter

from cashflow.analytics.schemas import AnalyticsResponse, DashboardResponse
from cashflow.config import settings
from cashflow.dependencies import AnalyticsServiceDep, CurrentUserId

router = APIRouter()
dashboard_router = APIRouter()


@router.get("/", response_model=AnalyticsResponse)
async def get_default_analytics(
    service: AnalyticsServiceDep,
    user_id: CurrentUserId,
) -> AnalyticsResponse:
    return await service.analytics(user_id, settings.default_period)


@router.get("/{period}", response_model=AnalyticsResponse)
async def get_analytics(
    period: str,
    service: AnalyticsServiceDep,
    user_id: CurrentUserId,
) -> AnalyticsResponse:
    return await service.analytics(user_id, period)


@dashboard_router.get("/", response_model=DashboardResponse)
async def get_dashboard(
    service: AnalyticsServiceDep,
    user_id: CurrentUserId,
) -> DashboardResponse:
    return await service.dashboard(user_id)
