"""Transaction query service backed by the processing microservice."""

import asyncio
import logging
from collections.abc import Awaitable
from datetime import datetime, timedelta
from typing import TypeVar

from dashboard.clients.backend_client import TransactionBackendClient
from dashboard.core.config import Settings, get_settings
from dashboard.core.errors import DashboardError, ValidationError
from dashboard.domain.datetimes import format_for_query
from dashboard.domain.models.transaction import (
    HistoryEvent,
    QueryResult,
    Transaction,
    TransactionStats,
)
from dashboard.domain.status import StatusFamily, StatusNormalizer
from dashboard.services.normalization import merge_transaction, normalize_record, sort_history
from dashboard.services.statistics import aggregate

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransactionService:
    """Range queries, detail lookups and fraud listings over the backend.

    Listing operations never raise backend errors; they return a
    ``QueryResult`` whose state tells empty and failed apart.
    """

    def __init__(self, client: TransactionBackendClient, settings: Settings | None = None):
        settings = settings or get_settings()
        self.client = client
        self.normalizer = StatusNormalizer.from_settings(settings.status)
        self.max_depth = settings.normalization.max_search_depth
        self.fraud_lookback_days = settings.backend.fraud_lookback_days

    async def query_range(self, start: datetime, end: datetime) -> QueryResult:
        """Transactions created within ``[start, end]``."""
        if start > end:
            raise ValidationError(
                "Range start is after range end",
                details={"from": start.isoformat(), "to": end.isoformat()},
            )

        desde = format_for_query(start, is_range_end=False)
        hasta = format_for_query(end, is_range_end=True)
        try:
            records = await self.client.fetch_range(desde, hasta)
        except DashboardError as exc:
            logger.error(
                "Range query failed",
                extra={"desde": desde, "hasta": hasta, "error": exc.message},
            )
            return QueryResult.failure(exc.message)

        transactions = [normalize_record(record, self.max_depth) for record in records]
        logger.info(
            "Range query completed",
            extra={"desde": desde, "hasta": hasta, "count": len(transactions)},
        )
        return QueryResult.from_items(transactions)

    async def by_status(
        self, family: StatusFamily, start: datetime, end: datetime
    ) -> QueryResult:
        """Range query narrowed to one status family."""
        result = await self.query_range(start, end)
        if result.failed:
            return result
        return QueryResult.from_items(
            [item for item in result.items if self.normalizer.family(item.status) is family]
        )

    async def stats(
        self, start: datetime, end: datetime
    ) -> tuple[TransactionStats, QueryResult]:
        result = await self.query_range(start, end)
        return aggregate(result.items, self.normalizer), result

    async def get_by_code(self, code: str) -> Transaction | None:
        """Merged detail view, or ``None`` when neither source knows ``code``.

        The record and its history are fetched concurrently and may fail
        independently. Only when both fail is the error raised.
        """
        (primary, primary_error), (history, history_error) = await asyncio.gather(
            self._guarded(self.client.fetch_transaction(code), "transaction", code),
            self._guarded(self.client.fetch_history(code), "history", code),
        )

        if primary is None and not history:
            if primary_error is not None and history_error is not None:
                raise primary_error
            logger.info("Transaction not found", extra={"code": code})
            return None

        return merge_transaction(code, primary, history or [], self.max_depth)

    async def history(self, code: str) -> list[HistoryEvent]:
        """History events for ``code``, newest first; empty on failure."""
        records, _ = await self._guarded(self.client.fetch_history(code), "history", code)
        return [event for _, event in sort_history(records or [])]

    async def fraudulent(self, now: datetime | None = None) -> QueryResult:
        """Fraud listing, falling back to scanning recent transactions."""
        try:
            records = await self.client.fetch_fraud()
        except DashboardError as exc:
            logger.warning(
                "Fraud endpoint unavailable, scanning recent transactions",
                extra={"error": exc.message, "lookback_days": self.fraud_lookback_days},
            )
        else:
            return QueryResult.from_items(
                [normalize_record(record, self.max_depth) for record in records]
            )

        end = now or datetime.now()
        start = end - timedelta(days=self.fraud_lookback_days)
        result = await self.query_range(start, end)
        if result.failed:
            return result
        return QueryResult.from_items(
            [item for item in result.items if self.normalizer.is_fraud(item.status, item.message)]
        )

    async def _guarded(
        self, call: Awaitable[T], source: str, code: str
    ) -> tuple[T | None, DashboardError | None]:
        try:
            return await call, None
        except DashboardError as exc:
            logger.warning(
                "Transaction lookup source failed",
                extra={"source": source, "code": code, "error": exc.message},
            )
            return None, exc
