"""Transaction view-models and schemas."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from dashboard.domain.cards import mask_card
from dashboard.domain.datetimes import display_timestamp
from dashboard.domain.status import Severity, display_label, severity


class HistoryEvent(BaseModel):
    """One status transition recorded by the backend. Read-only here."""

    id: str | None = None
    status: str
    status_changed_at: datetime | str | None = None
    message: str | None = None
    history_status_code: str | None = None

    @computed_field
    @property
    def status_label(self) -> str:
        return display_label(self.status)

    @computed_field
    @property
    def severity(self) -> Severity:
        return severity(self.status)

    @computed_field
    @property
    def status_changed_at_display(self) -> str:
        return display_timestamp(self.status_changed_at)


class Transaction(BaseModel):
    """Canonical transaction, rebuilt from backend data on every fetch."""

    id: str | None = None
    transaction_code: str
    status: str
    created_at: datetime | str | None = None
    updated_at: datetime | str | None = None
    amount: float = Field(default=0.0, ge=0)
    card_number: str = "N/A"
    brand: str = "VISA"
    reference: str = "Sin referencia"
    country: str = "N/A"
    message: str = ""
    bank_swift: str = "N/A"
    account_iban: str = "N/A"
    history: list[HistoryEvent] = []

    @computed_field
    @property
    def status_label(self) -> str:
        return display_label(self.status)

    @computed_field
    @property
    def severity(self) -> Severity:
        return severity(self.status)

    @computed_field
    @property
    def masked_card(self) -> str:
        return mask_card(self.card_number)

    @computed_field
    @property
    def created_at_display(self) -> str:
        return display_timestamp(self.created_at)

    @computed_field
    @property
    def updated_at_display(self) -> str:
        return display_timestamp(self.updated_at)


class TransactionStats(BaseModel):
    total: int = 0
    completed_count: int = 0
    pending_count: int = 0
    failed_count: int = 0
    completed_amount_sum: float = 0.0


class DailyBucket(BaseModel):
    day: date
    label: str
    completed: int = 0
    pending: int = 0
    failed: int = 0
    in_progress: int = 0


class QueryState(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    FAILURE = "failure"


class QueryResult(BaseModel):
    """Outcome of a listing query: rows, no rows, or a failed fetch."""

    state: QueryState
    items: list[Transaction] = []
    error: str | None = None

    @classmethod
    def from_items(cls, items: list[Transaction]) -> QueryResult:
        return cls(state=QueryState.SUCCESS if items else QueryState.EMPTY, items=items)

    @classmethod
    def failure(cls, error: str) -> QueryResult:
        return cls(state=QueryState.FAILURE, items=[], error=error)

    @property
    def failed(self) -> bool:
        return self.state is QueryState.FAILURE
