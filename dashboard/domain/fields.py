"""Field resolution over loosely-shaped backend records.

The transaction and history services disagree on field names and
sometimes bury values inside JSON-encoded string columns. ``resolve_field``
looks for a logical field in this order:

1. the field itself on the record
2. each known alias on the record
3. known container properties (decoded from JSON when they are strings),
   by name, then alias, then one level into nested objects
4. every nested object of the record, depth-first

Step 4 tracks visited objects and stops at ``max_depth``, so cyclic or very
deep payloads cannot recurse forever. Nothing here raises.
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("codTransaccion", "codigoUnicoTransaccion"),
    "transactionCode": ("codigoUnicoTransaccion", "codTransaccion", "codigo", "code"),
    "status": ("estado", "estadoTransaccion", "state"),
    "amount": (
        "monto",
        "montoTransaccion",
        "transactionAmount",
        "valor",
        "value",
        "total",
        "valorTransaccion",
    ),
    "cardNumber": (
        "numeroTarjeta",
        "tarjeta",
        "numeroTarj",
        "pan",
        "tarjetaNumero",
        "numeroTarjetaCredito",
    ),
    "reference": (
        "referencia",
        "referenciaTransaccion",
        "descripcion",
        "detalle",
        "referenciaComercial",
        "descripcionCompra",
    ),
    "country": ("pais", "paisOrigen", "paisComercio", "origen", "paisTransaccion"),
    "brand": ("marca", "marcaTarjeta", "franchise", "tipoTarjeta"),
    "createdAt": (
        "fechaCreacion",
        "fechaTransaccion",
        "dateCreated",
        "created",
        "timestamp",
        "date",
        "fecha",
    ),
    "updatedAt": ("fechaActualizacion", "updated", "dateUpdated", "fechaExpiracion"),
    "message": ("mensaje", "detalleMensaje", "descripcionEstado"),
    "bankSwift": ("swift_banco", "swiftBanco", "swift"),
    "accountIban": ("cuenta_iban", "cuentaIban", "iban"),
}

# Properties known to carry serialized JSON or nested payloads
CONTAINER_FIELDS: tuple[str, ...] = (
    "datosExtras",
    "informacion",
    "detalles",
    "metadata",
    "datos",
    "datosTarjeta",
    "datosTransaccion",
    "infoAdicional",
    "extras",
    "detallesTransaccion",
    "payload",
    "attributes",
    "response",
    "request",
)

_NON_NUMERIC = re.compile(r"[^\d.\-]")


def candidate_names(field: str) -> tuple[str, ...]:
    return (field, *FIELD_ALIASES.get(field, ()))


def _lookup(data: Mapping[str, Any], names: tuple[str, ...]) -> Any:
    for name in names:
        value = data.get(name)
        if value is not None:
            return value
    return None


def _decode_container(name: str, value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, Mapping):
        return value
    if not isinstance(value, str | bytes):
        return None
    try:
        decoded = json.loads(value)
    except (ValueError, TypeError) as exc:
        logger.warning(
            "Ignoring undecodable container field",
            extra={"container": name, "error": str(exc)},
        )
        return None
    return decoded if isinstance(decoded, Mapping) else None


def _search_containers(record: Mapping[str, Any], names: tuple[str, ...]) -> Any:
    for container in CONTAINER_FIELDS:
        raw = record.get(container)
        if not raw:
            continue
        data = _decode_container(container, raw)
        if data is None:
            continue

        value = _lookup(data, names)
        if value is not None:
            return value

        for nested in data.values():
            if isinstance(nested, Mapping):
                value = _lookup(nested, names)
                if value is not None:
                    return value
    return None


def _resolve(
    node: Any,
    names: tuple[str, ...],
    depth: int,
    max_depth: int,
    visited: set[int],
) -> Any:
    if isinstance(node, list):
        children = node
    elif isinstance(node, Mapping):
        if id(node) in visited:
            return None
        visited.add(id(node))

        value = _lookup(node, names)
        if value is not None:
            return value

        value = _search_containers(node, names)
        if value is not None:
            return value

        children = list(node.values())
    else:
        return None

    if depth >= max_depth:
        return None

    for child in children:
        if isinstance(child, Mapping | list):
            value = _resolve(child, names, depth + 1, max_depth, visited)
            if value is not None:
                return value
    return None


def resolve_field(
    record: Mapping[str, Any] | None,
    field: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Any:
    """Best-available value for a logical field, or ``None``."""
    if not record or not isinstance(record, Mapping):
        return None
    return _resolve(record, candidate_names(field), 0, max_depth, set())


def coerce_amount(value: Any) -> float:
    """Coerce a raw amount to a non-negative float.

    Currency symbols and thousands separators other than ``.`` are stripped.
    Anything unparsable, non-finite or negative becomes ``0.0``.
    """
    if value is None or isinstance(value, bool | Mapping | list):
        return 0.0
    if isinstance(value, int | float):
        amount = float(value)
    else:
        cleaned = _NON_NUMERIC.sub("", str(value))
        try:
            amount = float(cleaned)
        except ValueError:
            return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def text_or_none(value: Any) -> str | None:
    """Stringify a scalar, treating blanks and 'N/A' as missing."""
    if value is None or isinstance(value, Mapping | list):
        return None
    text = str(value).strip()
    if not text or text.upper() == "N/A":
        return None
    return text
