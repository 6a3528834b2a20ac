"""Status normalization.

The backend reports the same lifecycle state under several spellings
(three-letter codes, Spanish names, English names). Everything is
collapsed onto one canonical name before display or counting.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class CanonicalStatus(str, Enum):
    RECEIVED = "RECEIVED"
    PENDING = "PENDING"
    BRAND_VALIDATION = "BRAND_VALIDATION"
    FRAUD_VALIDATION = "FRAUD_VALIDATION"
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"
    REJECTED = "REJECTED"
    FRAUD = "FRAUD"


class Severity(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
    INFO = "info"


class StatusFamily(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"
    IN_PROGRESS = "in_progress"
    UNKNOWN = "unknown"


_ALIASES: dict[CanonicalStatus, tuple[str, ...]] = {
    CanonicalStatus.RECEIVED: ("RECIBIDA", "RECIBIDO"),
    CanonicalStatus.PENDING: ("PEN", "PENDIENTE"),
    CanonicalStatus.BRAND_VALIDATION: ("VMA", "VALIDACION_MARCA", "VALIDACIÓN MARCA"),
    CanonicalStatus.FRAUD_VALIDATION: ("VFR", "VALIDACION_FRAUDE", "VALIDACIÓN FRAUDE"),
    CanonicalStatus.DEBIT: ("DEB", "DEBITO", "DÉBITO"),
    CanonicalStatus.CREDIT: ("CRE", "CREDITO", "CRÉDITO"),
    CanonicalStatus.COMPLETED: ("COM", "COMPLETADA", "COMPLETADO"),
    CanonicalStatus.ERROR: ("ERR", "FALLIDA", "FAILED"),
    CanonicalStatus.REJECTED: ("RECHAZADA", "RECHAZADO"),
    CanonicalStatus.FRAUD: ("FRA", "FRAUDE"),
}

STATUS_ALIASES: dict[str, CanonicalStatus] = {
    alias: canonical for canonical, aliases in _ALIASES.items() for alias in aliases
}
STATUS_ALIASES.update({status.value: status for status in CanonicalStatus})

STATUS_LABELS: dict[CanonicalStatus, str] = {
    CanonicalStatus.RECEIVED: "Recibida",
    CanonicalStatus.PENDING: "Pendiente",
    CanonicalStatus.BRAND_VALIDATION: "Validación marca",
    CanonicalStatus.FRAUD_VALIDATION: "Validación fraude",
    CanonicalStatus.DEBIT: "Débito",
    CanonicalStatus.CREDIT: "Crédito",
    CanonicalStatus.COMPLETED: "Completada",
    CanonicalStatus.ERROR: "Error",
    CanonicalStatus.REJECTED: "Rechazada",
    CanonicalStatus.FRAUD: "Fraude",
}

# Narrative used when neither the record nor its history carries a message
STATUS_MESSAGES: dict[CanonicalStatus, str] = {
    CanonicalStatus.RECEIVED: "Transacción recibida",
    CanonicalStatus.PENDING: "Transacción pendiente",
    CanonicalStatus.BRAND_VALIDATION: "Transacción en validación de marca",
    CanonicalStatus.FRAUD_VALIDATION: "Transacción en validación de fraude",
    CanonicalStatus.DEBIT: "Débito en proceso",
    CanonicalStatus.CREDIT: "Crédito en proceso",
    CanonicalStatus.COMPLETED: "Transacción completada",
    CanonicalStatus.ERROR: "Error en la transacción",
    CanonicalStatus.REJECTED: "Transacción rechazada",
    CanonicalStatus.FRAUD: "Posible fraude detectado",
}

SEVERITIES: dict[CanonicalStatus, Severity] = {
    CanonicalStatus.COMPLETED: Severity.SUCCESS,
    CanonicalStatus.PENDING: Severity.WARNING,
    CanonicalStatus.BRAND_VALIDATION: Severity.WARNING,
    CanonicalStatus.FRAUD_VALIDATION: Severity.WARNING,
    CanonicalStatus.DEBIT: Severity.WARNING,
    CanonicalStatus.CREDIT: Severity.WARNING,
    CanonicalStatus.ERROR: Severity.DANGER,
    CanonicalStatus.REJECTED: Severity.DANGER,
    CanonicalStatus.FRAUD: Severity.DANGER,
}

DEFAULT_STATUS = CanonicalStatus.PENDING


def _lookup(code: str | None) -> CanonicalStatus | None:
    if code is None:
        return None
    return STATUS_ALIASES.get(str(code).strip().upper())


def canonical_status(code: str | None) -> str:
    """Return the canonical name for a raw status code.

    Unknown codes pass through unchanged (stripped) so nothing is lost
    on display.
    """
    status = _lookup(code)
    if status is not None:
        return status.value
    return "" if code is None else str(code).strip()


def is_known_status(code: str | None) -> bool:
    return _lookup(code) is not None


def severity(code: str | None) -> Severity:
    status = _lookup(code)
    if status is None:
        return Severity.INFO
    return SEVERITIES.get(status, Severity.INFO)


def display_label(code: str | None) -> str:
    status = _lookup(code)
    if status is None:
        return canonical_status(code)
    return STATUS_LABELS[status]


def default_message(code: str | None) -> str:
    status = _lookup(code) or DEFAULT_STATUS
    return STATUS_MESSAGES[status]


class StatusNormalizer:
    """Classifies statuses into counting families.

    Families are configured with canonical names; the aliases of each
    canonical name belong to the same family automatically.
    """

    def __init__(
        self,
        completed: Iterable[str] = ("COMPLETED",),
        pending: Iterable[str] = ("PENDING",),
        failed: Iterable[str] = ("ERROR", "REJECTED", "FRAUD"),
    ):
        self.completed = frozenset(canonical_status(code) for code in completed)
        self.pending = frozenset(canonical_status(code) for code in pending)
        self.failed = frozenset(canonical_status(code) for code in failed)

    @classmethod
    def from_settings(cls, status_config) -> StatusNormalizer:
        return cls(
            completed=status_config.completed,
            pending=status_config.pending,
            failed=status_config.failed,
        )

    def family(self, code: str | None) -> StatusFamily:
        name = canonical_status(code)
        if name in self.completed:
            return StatusFamily.COMPLETED
        if name in self.pending:
            return StatusFamily.PENDING
        if name in self.failed:
            return StatusFamily.FAILED
        if is_known_status(name):
            return StatusFamily.IN_PROGRESS
        return StatusFamily.UNKNOWN

    def is_fraud(self, code: str | None, message: str | None = None) -> bool:
        if canonical_status(code) == CanonicalStatus.FRAUD.value:
            return True
        # Synthesized narratives (e.g. for FRAUD_VALIDATION) are not evidence
        if not message or message == default_message(code):
            return False
        return "fraud" in message.lower()


def status_family(code: str | None) -> StatusFamily:
    """Family of a status under the default taxonomy."""
    return _default_normalizer.family(code)


_default_normalizer = StatusNormalizer()
