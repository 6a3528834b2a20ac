"""Response schemas for the transaction dashboard endpoints."""

from pydantic import BaseModel, Field

from dashboard.domain.models.transaction import (
    DailyBucket,
    HistoryEvent,
    QueryState,
    Transaction,
    TransactionStats,
)


class QueryRange(BaseModel):
    """Bounds sent to the backend, in its query format."""

    desde: str
    hasta: str


class TransactionListResponse(BaseModel):
    """Transactions for a range, with an explicit outcome."""

    state: QueryState
    items: list[Transaction]
    total: int
    error: str | None = None
    range: QueryRange | None = None


class TransactionStatsResponse(BaseModel):
    state: QueryState
    stats: TransactionStats
    error: str | None = None
    range: QueryRange


class DailyBreakdownResponse(BaseModel):
    state: QueryState
    buckets: list[DailyBucket]
    error: str | None = None
    range: QueryRange


class DashboardResponse(BaseModel):
    """Everything the dashboard home page renders, from one range query."""

    state: QueryState
    stats: TransactionStats
    daily: list[DailyBucket]
    error: str | None = None
    range: QueryRange


class TransactionHistoryResponse(BaseModel):
    transaction_code: str
    items: list[HistoryEvent] = Field(default_factory=list)
