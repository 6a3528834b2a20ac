"""
FastAPI dependency injection utilities.

Provides the backend client, the query service, the filter store and the
resolved date range to route handlers.
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import Depends, Query, Request

from dashboard.clients.backend_client import TransactionBackendClient
from dashboard.core.config import Settings, get_settings
from dashboard.core.errors import ValidationError
from dashboard.domain.models.filters import RANGE_END_TIME, RANGE_START_TIME, DateRangeFilter
from dashboard.persistence.filter_store import FilterStore
from dashboard.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)


def get_settings_dep() -> Settings:
    return get_settings()


def get_backend_client(request: Request) -> TransactionBackendClient:
    """Backend client created in the application lifespan."""
    return request.app.state.backend_client


def get_filter_store(request: Request) -> FilterStore:
    """Filter store created in the application lifespan."""
    return request.app.state.filter_store


def get_transaction_service(
    client: TransactionBackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings_dep),
) -> TransactionService:
    return TransactionService(client, settings)


def get_date_range(
    store: Annotated[FilterStore, Depends(get_filter_store)],
    settings: Annotated[Settings, Depends(get_settings_dep)],
    from_date: str | None = Query(None, description="Range start date (YYYY-MM-DD)"),
    from_time: str = Query(RANGE_START_TIME, description="Range start time (HH:MM, 24h)"),
    to_date: str | None = Query(None, description="Range end date (YYYY-MM-DD)"),
    to_time: str = Query(RANGE_END_TIME, description="Range end time (HH:MM, 24h)"),
) -> tuple[datetime, datetime]:
    """Range from the query string, else the saved filter, else the default.

    An explicit range is validated before anything is saved or fetched.
    """
    if from_date or to_date:
        if not (from_date and to_date):
            raise ValidationError(
                "Both from_date and to_date are required",
                details={"from_date": from_date, "to_date": to_date},
            )
        date_range = DateRangeFilter(
            from_date=from_date, from_time=from_time, to_date=to_date, to_time=to_time
        )
        instants = date_range.to_instants()
        store.save(date_range)
        return instants

    saved = store.load()
    if saved is not None:
        try:
            return saved.to_instants()
        except ValidationError as exc:
            logger.warning("Discarding invalid saved filter", extra={"error": exc.message})
    return DateRangeFilter.default_range(settings.backend.default_range_days).to_instants()


SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
FilterStoreDep = Annotated[FilterStore, Depends(get_filter_store)]
DateRange = Annotated[tuple[datetime, datetime], Depends(get_date_range)]
