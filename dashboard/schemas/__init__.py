"""Schemas package for request/response models."""

from dashboard.schemas.transaction import (
    DailyBreakdownResponse,
    DashboardResponse,
    QueryRange,
    TransactionHistoryResponse,
    TransactionListResponse,
    TransactionStatsResponse,
)

__all__ = [
    "DailyBreakdownResponse",
    "DashboardResponse",
    "QueryRange",
    "TransactionHistoryResponse",
    "TransactionListResponse",
    "TransactionStatsResponse",
]
