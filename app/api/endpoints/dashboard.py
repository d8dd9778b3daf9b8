from typing import Any, Optional
from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas.auth import CallerIdentity
from app.schemas.dashboard import DashboardOverview, QuickStats
from app.schemas.responses import SuccessResponse, ErrorResponse
from app.services.dashboard_service import DashboardService

router = APIRouter()

_error_responses = {
    401: {"model": ErrorResponse, "description": "Caller not authenticated"},
    500: {"model": ErrorResponse, "description": "A data-store query failed"},
}


@router.get("/overview", response_model=SuccessResponse[DashboardOverview], responses=_error_responses)
async def get_dashboard_overview(
    caller: Optional[CallerIdentity] = Depends(deps.get_optional_caller),
    service: DashboardService = Depends(deps.get_dashboard_service),
) -> Any:
    """
    Dashboard overview: counts, growth, distributions, recent admissions
    and the 6-month trend.
    """
    report = await service.compute_overview(caller)
    return SuccessResponse(data=report)


@router.get("/quick-stats", response_model=SuccessResponse[QuickStats], responses=_error_responses)
async def get_quick_stats(
    caller: Optional[CallerIdentity] = Depends(deps.get_optional_caller),
    service: DashboardService = Depends(deps.get_dashboard_service),
) -> Any:
    """
    Active, pending and staff counts for widgets.
    """
    stats = await service.compute_quick_stats(caller)
    return SuccessResponse(data=stats)
