"""Mapping raw backend records onto canonical transactions.

Range and fraud listings return one record shape per row; the detail view
merges the primary record with its history log. Missing values fall back
to neutral defaults, never to invented data.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from dashboard.domain.cards import NOT_AVAILABLE, brand_for_card, find_card_number
from dashboard.domain.datetimes import normalize_timestamp, sort_key
from dashboard.domain.fields import (
    DEFAULT_MAX_DEPTH,
    coerce_amount,
    resolve_field,
    text_or_none,
)
from dashboard.domain.models.transaction import HistoryEvent, Transaction
from dashboard.domain.status import DEFAULT_STATUS, canonical_status, default_message

DEFAULT_REFERENCE = "Sin referencia"
ONLINE_PURCHASE_REFERENCE = "Compra en línea"

HISTORY_FIELDS: dict[str, tuple[str, ...]] = {
    "id": ("id", "codHistorial"),
    "status": ("estado", "status"),
    "status_changed_at": ("fechaEstadoCambio", "statusChangedAt", "fechaCambio", "fecha"),
    "message": ("mensaje", "message", "detalle"),
    "history_status_code": ("codHistorialEstado", "historyStatusCode"),
}


def _first(record: Mapping[str, Any], names: tuple[str, ...]) -> Any:
    for name in names:
        value = record.get(name)
        if value is not None:
            return value
    return None


def _brand(value: Any, card_number: str | None) -> str:
    brand = text_or_none(value)
    if brand:
        return brand.upper()
    return brand_for_card(card_number)


def normalize_record(record: Mapping[str, Any], max_depth: int = DEFAULT_MAX_DEPTH) -> Transaction:
    """Canonical transaction from one listing row."""

    def field(name: str) -> Any:
        return resolve_field(record, name, max_depth)

    code = text_or_none(field("transactionCode")) or text_or_none(field("id")) or ""
    status = canonical_status(text_or_none(field("status")) or DEFAULT_STATUS.value)
    card_number = text_or_none(field("cardNumber"))

    return Transaction(
        id=text_or_none(field("id")) or code or None,
        transaction_code=code,
        status=status,
        created_at=normalize_timestamp(field("createdAt")),
        updated_at=normalize_timestamp(field("updatedAt")),
        amount=coerce_amount(field("amount")),
        card_number=card_number or NOT_AVAILABLE,
        brand=_brand(field("brand"), card_number),
        reference=text_or_none(field("reference")) or DEFAULT_REFERENCE,
        country=text_or_none(field("country")) or NOT_AVAILABLE,
        message=text_or_none(field("message")) or default_message(status),
        bank_swift=text_or_none(field("bankSwift")) or NOT_AVAILABLE,
        account_iban=text_or_none(field("accountIban")) or NOT_AVAILABLE,
    )


def normalize_history_event(record: Mapping[str, Any]) -> HistoryEvent:
    return HistoryEvent(
        id=text_or_none(_first(record, HISTORY_FIELDS["id"])),
        status=canonical_status(
            text_or_none(_first(record, HISTORY_FIELDS["status"])) or DEFAULT_STATUS.value
        ),
        status_changed_at=normalize_timestamp(_first(record, HISTORY_FIELDS["status_changed_at"])),
        message=text_or_none(_first(record, HISTORY_FIELDS["message"])),
        history_status_code=text_or_none(_first(record, HISTORY_FIELDS["history_status_code"])),
    )


def sort_history(
    records: Sequence[Mapping[str, Any]],
) -> list[tuple[Mapping[str, Any], HistoryEvent]]:
    """Raw records paired with their events, newest first."""
    pairs = [(record, normalize_history_event(record)) for record in records]
    pairs.sort(key=lambda pair: sort_key(pair[1].status_changed_at), reverse=True)
    return pairs


def _backfill_order(pairs: list[tuple[Mapping[str, Any], HistoryEvent]]):
    """Most recent event, then the oldest, then everything in between."""
    if len(pairs) <= 2:
        return pairs
    return [pairs[0], pairs[-1], *pairs[1:-1]]


def merge_transaction(
    code: str,
    primary: Mapping[str, Any] | None,
    history: Sequence[Mapping[str, Any]],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Transaction:
    """Detail view built from the primary record and its history log.

    Values on the primary record win. Gaps are filled from history events,
    including a last-resort scan of free-text messages.
    """
    pairs = sort_history(history)
    events = [event for _, event in pairs]

    values: dict[str, Any] = dict.fromkeys(
        (
            "id",
            "status",
            "created_at",
            "updated_at",
            "amount",
            "card_number",
            "brand",
            "reference",
            "country",
            "message",
            "bank_swift",
            "account_iban",
        )
    )

    if primary:

        def field(name: str) -> Any:
            return resolve_field(primary, name, max_depth)

        values["id"] = text_or_none(primary.get("id"))
        values["status"] = text_or_none(field("status"))
        values["created_at"] = normalize_timestamp(
            _first(primary, ("fechaCreacion", "fechaTransaccion")) or field("createdAt")
        )
        values["updated_at"] = normalize_timestamp(field("updatedAt"))
        values["amount"] = field("amount")
        values["card_number"] = text_or_none(field("cardNumber"))
        values["brand"] = text_or_none(field("brand"))
        values["reference"] = text_or_none(field("reference"))
        values["country"] = text_or_none(field("country"))
        values["message"] = text_or_none(field("message"))
        values["bank_swift"] = text_or_none(field("bankSwift"))
        values["account_iban"] = text_or_none(field("accountIban"))

    if pairs:
        latest_raw, latest = pairs[0]
        oldest_raw, oldest = pairs[-1]

        values["id"] = values["id"] or latest.id
        values["status"] = values["status"] or latest.status
        if values["created_at"] is None:
            values["created_at"] = normalize_timestamp(
                _first(oldest_raw, ("fechaCreacion",))
                or _first(oldest_raw, HISTORY_FIELDS["status_changed_at"])
                or resolve_field(oldest_raw, "createdAt", max_depth)
            )
        if values["updated_at"] is None:
            values["updated_at"] = latest.status_changed_at
        values["message"] = values["message"] or latest.message

        for record, event in _backfill_order(pairs):
            message = event.message or ""
            if values["amount"] is None:
                values["amount"] = resolve_field(record, "amount", max_depth)
            if not values["card_number"]:
                values["card_number"] = text_or_none(
                    resolve_field(record, "cardNumber", max_depth)
                ) or find_card_number(message)
            if not values["reference"]:
                values["reference"] = text_or_none(resolve_field(record, "reference", max_depth))
                if not values["reference"] and "compra" in message.lower():
                    values["reference"] = ONLINE_PURCHASE_REFERENCE
            if not values["brand"]:
                values["brand"] = text_or_none(resolve_field(record, "brand", max_depth))
            if not values["country"]:
                values["country"] = text_or_none(resolve_field(record, "country", max_depth))

    status = canonical_status(values["status"] or DEFAULT_STATUS.value)
    card_number = values["card_number"]

    return Transaction(
        id=values["id"] or code,
        transaction_code=code,
        status=status,
        created_at=values["created_at"],
        updated_at=values["updated_at"],
        amount=coerce_amount(values["amount"]),
        card_number=card_number or NOT_AVAILABLE,
        brand=_brand(values["brand"], card_number),
        reference=values["reference"] or DEFAULT_REFERENCE,
        country=values["country"] or NOT_AVAILABLE,
        message=values["message"] or default_message(status),
        bank_swift=values["bank_swift"] or NOT_AVAILABLE,
        account_iban=values["account_iban"] or NOT_AVAILABLE,
        history=events,
    )
