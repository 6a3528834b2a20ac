"""Storage for the last date-range filter the user applied.

The store is injected where the filter is read or written, so the query
layer never touches global state.
"""

import logging
import threading
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from dashboard.domain.models.filters import DateRangeFilter

logger = logging.getLogger(__name__)


class FilterStore(Protocol):
    def load(self) -> DateRangeFilter | None: ...

    def save(self, date_range: DateRangeFilter) -> None: ...


class InMemoryFilterStore:
    """Keeps the filter for the lifetime of the process."""

    def __init__(self, initial: DateRangeFilter | None = None):
        self._value = initial

    def load(self) -> DateRangeFilter | None:
        return self._value

    def save(self, date_range: DateRangeFilter) -> None:
        self._value = date_range


class JsonFileFilterStore:
    """Persists the filter as a small JSON document.

    Incomplete or unreadable files are treated as "no saved filter".
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> DateRangeFilter | None:
        if not self.path.exists():
            return None
        try:
            return DateRangeFilter.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, PydanticValidationError) as exc:
            logger.warning(
                "Ignoring unreadable saved filter",
                extra={"path": str(self.path), "error": str(exc)},
            )
            return None

    def save(self, date_range: DateRangeFilter) -> None:
        """Write the filter; a failed write is logged and the old file kept."""
        with self._lock:
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp.write_text(date_range.model_dump_json(indent=2), encoding="utf-8")
                tmp.replace(self.path)
            except OSError as exc:
                logger.warning(
                    "Could not save filter",
                    extra={"path": str(self.path), "error": str(exc)},
                )


def create_filter_store(path: str | None) -> FilterStore:
    """JSON-file store when a path is configured, in-memory otherwise."""
    if path:
        return JsonFileFilterStore(path)
    return InMemoryFilterStore()
