"""API routes for transaction listings and detail views."""

from datetime import datetime

from fastapi import APIRouter, Query

from dashboard.core.dependencies import DateRange, TransactionServiceDep
from dashboard.core.errors import NotFoundError
from dashboard.domain.datetimes import format_for_query
from dashboard.domain.models.transaction import QueryResult, Transaction
from dashboard.domain.status import StatusFamily
from dashboard.schemas.transaction import (
    DailyBreakdownResponse,
    QueryRange,
    TransactionHistoryResponse,
    TransactionListResponse,
    TransactionStatsResponse,
)
from dashboard.services.statistics import daily_breakdown

router = APIRouter(prefix="/transactions", tags=["transactions"])


def query_range(start: datetime, end: datetime) -> QueryRange:
    return QueryRange(
        desde=format_for_query(start, is_range_end=False),
        hasta=format_for_query(end, is_range_end=True),
    )


def list_response(result: QueryResult, range_: QueryRange | None = None) -> TransactionListResponse:
    return TransactionListResponse(
        state=result.state,
        items=result.items,
        total=len(result.items),
        error=result.error,
        range=range_,
    )


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    date_range: DateRange,
    service: TransactionServiceDep,
    status: StatusFamily | None = Query(
        None, description="Only transactions in this status family"
    ),
) -> TransactionListResponse:
    """List transactions created within the date range.

    - Without range parameters the last saved filter is used, else the last 7 days
    - `state` is `empty` when the range has no rows and `failure` when the fetch failed
    """
    start, end = date_range
    if status is None:
        result = await service.query_range(start, end)
    else:
        result = await service.by_status(status, start, end)
    return list_response(result, query_range(start, end))


@router.get("/stats", response_model=TransactionStatsResponse)
async def get_transaction_stats(
    date_range: DateRange,
    service: TransactionServiceDep,
) -> TransactionStatsResponse:
    """Counts by status family and the completed amount for the date range."""
    start, end = date_range
    stats, result = await service.stats(start, end)
    return TransactionStatsResponse(
        state=result.state,
        stats=stats,
        error=result.error,
        range=query_range(start, end),
    )


@router.get("/daily", response_model=DailyBreakdownResponse)
async def get_daily_breakdown(
    date_range: DateRange,
    service: TransactionServiceDep,
) -> DailyBreakdownResponse:
    """Per-day counts for the dashboard chart."""
    start, end = date_range
    result = await service.query_range(start, end)
    return DailyBreakdownResponse(
        state=result.state,
        buckets=daily_breakdown(result.items, service.normalizer),
        error=result.error,
        range=query_range(start, end),
    )


@router.get("/{code}", response_model=Transaction)
async def get_transaction(code: str, service: TransactionServiceDep) -> Transaction:
    """Merged transaction detail, history newest first."""
    transaction = await service.get_by_code(code)
    if transaction is None:
        raise NotFoundError(
            f"Transaction {code} not found", details={"transaction_code": code}
        )
    return transaction


@router.get("/{code}/history", response_model=TransactionHistoryResponse)
async def get_transaction_history(
    code: str, service: TransactionServiceDep
) -> TransactionHistoryResponse:
    """Status history of a transaction, newest first."""
    return TransactionHistoryResponse(transaction_code=code, items=await service.history(code))
