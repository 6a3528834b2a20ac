"""Date and time handling without timezone drift.

User input is a local date and a 24h time; both are turned into a datetime
from explicit components. Backend timestamps arrive in several shapes and
are read by a fixed, ordered list of named parsers. Whatever parser wins,
the calendar date and wall-clock time of the source string are kept as-is:
nothing is converted between timezones. A string no parser recognizes is
kept verbatim.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, timezone

from dashboard.core.errors import ValidationError

DISPLAY_FORMAT = "%d/%m/%Y, %H:%M:%S"
QUERY_FORMAT = "%Y-%m-%dT%H:%M:%S"
DATE_INPUT_FORMAT = "%Y-%m-%d"

_DATE_INPUT = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_TIME_INPUT = re.compile(r"^(\d{1,2}):(\d{1,2})$")

_ISO = re.compile(r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?)?$")
_SQL = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2}) (\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,9}))?)?"
    r"(?:\s?([+-])(\d{2})(?::?(\d{2}))?)?$"
)
_SLASH = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})(?:,?\s+(\d{1,2}):(\d{2})(?::(\d{2}))?)?$")
_DASH = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})(?:\s+(\d{1,2}):(\d{2})(?::(\d{2}))?)?$")


def parse_local(date_str: str, time_str: str) -> datetime:
    """Build a naive datetime from a ``YYYY-MM-DD`` date and ``HH:MM`` time.

    Raises:
        ValidationError: on malformed input or out-of-range components.
    """
    date_match = _DATE_INPUT.match((date_str or "").strip())
    time_match = _TIME_INPUT.match((time_str or "").strip())
    if date_match is None or time_match is None:
        raise ValidationError(
            "Invalid date or time",
            details={"date": date_str, "time": time_str},
        )

    year, month, day = (int(part) for part in date_match.groups())
    hour, minute = (int(part) for part in time_match.groups())

    if not 0 <= hour <= 23:
        raise ValidationError(f"Hour out of range (0-23): {hour}", details={"time": time_str})
    if not 0 <= minute <= 59:
        raise ValidationError(
            f"Minute out of range (0-59): {minute}", details={"time": time_str}
        )

    try:
        return datetime(year, month, day, hour, minute, 0)
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {exc}", details={"date": date_str}) from exc


def format_for_display(instant: datetime) -> str:
    """``DD/MM/YYYY, HH:MM:SS`` using the instant's own wall clock."""
    return instant.strftime(DISPLAY_FORMAT)


def format_for_query(instant: datetime, is_range_end: bool = False) -> str:
    """``YYYY-MM-DDTHH:MM:SS`` as the backend expects it.

    Range ends are widened to the last second of their minute, range
    starts to the first.
    """
    second = 59 if is_range_end else 0
    return instant.replace(second=second, microsecond=0).strftime(QUERY_FORMAT)


def format_date_input(day: date) -> str:
    return day.strftime(DATE_INPUT_FORMAT)


def _offset(sign: str | None, hours: str | None, minutes: str | None) -> timezone | None:
    if not sign:
        return None
    delta = timedelta(hours=int(hours or 0), minutes=int(minutes or 0))
    return timezone(-delta if sign == "-" else delta)


def _build(
    year: str,
    month: str,
    day: str,
    hour: str | None,
    minute: str | None,
    second: str | None,
    fraction: str | None = None,
    tz: timezone | None = None,
) -> datetime | None:
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            micro,
            tzinfo=tz,
        )
    except ValueError:
        return None


def parse_iso(raw: str) -> datetime | None:
    if not _ISO.match(raw):
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def parse_sql_timestamp(raw: str) -> datetime | None:
    """``YYYY-MM-DD HH:MM:SS[.ffffff][+HH[:MM]]`` as stored by the database."""
    match = _SQL.match(raw)
    if match is None:
        return None
    year, month, day, hour, minute, second, fraction, sign, tz_h, tz_m = match.groups()
    return _build(year, month, day, hour, minute, second, fraction, _offset(sign, tz_h, tz_m))


def parse_slash_delimited(raw: str) -> datetime | None:
    """``DD/MM/YYYY[, HH:MM[:SS]]``, including the display format itself."""
    match = _SLASH.match(raw)
    if match is None:
        return None
    day, month, year, hour, minute, second = match.groups()
    return _build(year, month, day, hour, minute, second)


def parse_dash_delimited(raw: str) -> datetime | None:
    """``DD-MM-YYYY[ HH:MM[:SS]]``."""
    match = _DASH.match(raw)
    if match is None:
        return None
    day, month, year, hour, minute, second = match.groups()
    return _build(year, month, day, hour, minute, second)


@dataclass(frozen=True)
class TimestampParser:
    name: str
    parse: Callable[[str], datetime | None]


TIMESTAMP_PARSERS: tuple[TimestampParser, ...] = (
    TimestampParser("iso", parse_iso),
    TimestampParser("sql_timestamp", parse_sql_timestamp),
    TimestampParser("slash_delimited", parse_slash_delimited),
    TimestampParser("dash_delimited", parse_dash_delimited),
)


@dataclass(frozen=True)
class ParsedTimestamp:
    raw: str
    value: datetime | None
    parser: str | None

    @property
    def recognized(self) -> bool:
        return self.value is not None


def parse_timestamp(raw: str) -> ParsedTimestamp:
    """Run the parsers in order; the first that recognizes ``raw`` wins."""
    text = raw.strip()
    for parser in TIMESTAMP_PARSERS:
        value = parser.parse(text)
        if value is not None:
            return ParsedTimestamp(raw=raw, value=value, parser=parser.name)
    return ParsedTimestamp(raw=raw, value=None, parser=None)


def normalize_timestamp(value: object) -> datetime | str | None:
    """Datetime for recognized shapes, the original string otherwise."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        # Epoch milliseconds, read as UTC wall clock
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return str(value)
    text = str(value).strip()
    if not text:
        return None
    parsed = parse_timestamp(text)
    return parsed.value if parsed.recognized else text


def display_timestamp(value: datetime | str | None) -> str:
    if value is None:
        return "N/A"
    if isinstance(value, datetime):
        return format_for_display(value)
    return value


def wall_clock(value: datetime | str | None) -> datetime | None:
    """Naive datetime carrying the same calendar/clock components."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return None


def sort_key(value: datetime | str | None) -> datetime:
    """Chronological key; aware values are compared on UTC, unknowns sort oldest."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(UTC).replace(tzinfo=None)
        return value
    return datetime.min
