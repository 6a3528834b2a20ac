"""Dashboard summary route."""

from fastapi import APIRouter

from dashboard.api.routes.transactions import query_range
from dashboard.core.dependencies import DateRange, TransactionServiceDep
from dashboard.schemas.transaction import DashboardResponse
from dashboard.services.statistics import aggregate, daily_breakdown

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(date_range: DateRange, service: TransactionServiceDep) -> DashboardResponse:
    """Stat cards and chart series computed from a single range query."""
    start, end = date_range
    result = await service.query_range(start, end)
    return DashboardResponse(
        state=result.state,
        stats=aggregate(result.items, service.normalizer),
        daily=daily_breakdown(result.items, service.normalizer),
        error=result.error,
        range=query_range(start, end),
    )
