"""Unit tests for date/time parsing and formatting."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from dashboard.core.errors import ValidationError
from dashboard.domain.datetimes import (
    TIMESTAMP_PARSERS,
    display_timestamp,
    format_date_input,
    format_for_display,
    format_for_query,
    normalize_timestamp,
    parse_local,
    parse_timestamp,
    sort_key,
    wall_clock,
)


class TestParseLocal:
    """Test user input parsing."""

    def test_components_are_kept(self):
        """Test date and time become a naive datetime with the same fields."""
        assert parse_local("2025-03-01", "14:30") == datetime(2025, 3, 1, 14, 30)

    def test_single_digit_parts(self):
        """Test unpadded components are accepted."""
        assert parse_local("2025-3-1", "7:05") == datetime(2025, 3, 1, 7, 5)

    @pytest.mark.parametrize("time_str", ["24:00", "25:10"])
    def test_hour_out_of_range(self, time_str):
        """Test hours above 23 are rejected."""
        with pytest.raises(ValidationError, match="Hour"):
            parse_local("2025-03-01", time_str)

    def test_minute_out_of_range(self):
        """Test minute 60 is rejected."""
        with pytest.raises(ValidationError, match="Minute"):
            parse_local("2025-03-01", "10:60")

    @pytest.mark.parametrize(
        ("date_str", "time_str"),
        [("2025-02-30", "10:00"), ("01/03/2025", "10:00"), ("2025-03-01", "10h"), ("", "")],
    )
    def test_invalid_input(self, date_str, time_str):
        """Test malformed dates and times are rejected."""
        with pytest.raises(ValidationError):
            parse_local(date_str, time_str)


class TestQueryFormatting:
    """Test the backend query format."""

    def test_range_start(self):
        """Test range starts use second zero."""
        instant = parse_local("2025-03-01", "14:30")
        assert format_for_query(instant) == "2025-03-01T14:30:00"

    def test_range_end(self):
        """Test range ends are widened to the last second of the minute."""
        instant = parse_local("2025-03-01", "14:30")
        assert format_for_query(instant, is_range_end=True) == "2025-03-01T14:30:59"

    def test_seconds_and_microseconds_are_replaced(self):
        """Test stray seconds never leak into the query."""
        instant = datetime(2025, 3, 1, 8, 15, 42, 123456)
        assert format_for_query(instant) == "2025-03-01T08:15:00"

    def test_date_input(self):
        """Test the date input format."""
        assert format_date_input(date(2025, 1, 9)) == "2025-01-09"


class TestParseTimestamp:
    """Test the ordered backend timestamp parsers."""

    def test_parser_order(self):
        """Test parsers are tried in a fixed order."""
        assert [parser.name for parser in TIMESTAMP_PARSERS] == [
            "iso",
            "sql_timestamp",
            "slash_delimited",
            "dash_delimited",
        ]

    @pytest.mark.parametrize(
        ("raw", "parser", "expected"),
        [
            ("2025-03-01T14:30:00", "iso", datetime(2025, 3, 1, 14, 30)),
            ("2025-03-01", "iso", datetime(2025, 3, 1)),
            ("2025-03-01 14:30:00.123", "sql_timestamp", datetime(2025, 3, 1, 14, 30, 0, 123000)),
            ("01/03/2025, 14:30:00", "slash_delimited", datetime(2025, 3, 1, 14, 30)),
            ("1/3/2025", "slash_delimited", datetime(2025, 3, 1)),
            ("01-03-2025 14:30", "dash_delimited", datetime(2025, 3, 1, 14, 30)),
        ],
    )
    def test_recognized_shapes(self, raw, parser, expected):
        """Test each supported shape and which parser claims it."""
        parsed = parse_timestamp(raw)

        assert parsed.recognized
        assert parsed.parser == parser
        assert parsed.value == expected

    def test_sql_timestamp_with_offset(self):
        """Test a database timestamp with a short offset."""
        parsed = parse_timestamp("2025-03-01 14:30:00-05")

        assert parsed.value == datetime(2025, 3, 1, 14, 30, tzinfo=timezone(timedelta(hours=-5)))

    def test_unrecognized_is_kept(self):
        """Test strings no parser recognizes stay verbatim."""
        parsed = parse_timestamp("ayer por la tarde")

        assert not parsed.recognized
        assert parsed.parser is None
        assert normalize_timestamp("ayer por la tarde") == "ayer por la tarde"
        assert display_timestamp("ayer por la tarde") == "ayer por la tarde"

    def test_impossible_calendar_date(self):
        """Test shapes that match but name no real date are not recognized."""
        assert not parse_timestamp("31/02/2025").recognized


class TestNoTimezoneDrift:
    """Test displayed wall-clock time equals the source wall-clock time."""

    @pytest.mark.parametrize(
        "raw",
        [
            "2025-03-01T23:30:00-05:00",
            "2025-03-01T23:30:00+09:00",
            "2025-03-01T23:30:00Z",
            "2025-03-01 23:30:00+02",
            "2025-03-01 23:30:00 -03:00",
        ],
    )
    def test_display_keeps_source_components(self, raw):
        """Test the calendar date and clock survive any offset."""
        value = normalize_timestamp(raw)

        assert display_timestamp(value) == "01/03/2025, 23:30:00"
        assert wall_clock(value) == datetime(2025, 3, 1, 23, 30)

    @pytest.mark.parametrize("hours", [-5, -3, 0, 2, 9])
    def test_display_round_trip(self, hours):
        """Test re-parsing the displayed text gives back the same date and clock."""
        instant = datetime(2025, 12, 31, 22, 45, 10, tzinfo=timezone(timedelta(hours=hours)))

        reparsed = parse_timestamp(display_timestamp(instant))

        assert reparsed.parser == "slash_delimited"
        assert reparsed.value == datetime(2025, 12, 31, 22, 45, 10)


class TestNormalizeTimestamp:
    """Test conversion of raw timestamp values."""

    def test_none_and_blank(self):
        """Test missing values stay missing."""
        assert normalize_timestamp(None) is None
        assert normalize_timestamp("   ") is None
        assert display_timestamp(None) == "N/A"

    def test_epoch_milliseconds(self):
        """Test numeric timestamps are epoch milliseconds in UTC."""
        assert normalize_timestamp(1_740_839_400_000) == datetime(2025, 3, 1, 14, 30, tzinfo=UTC)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(10**20, str(10**20)), (-(10**20), str(-(10**20))), (float("nan"), "nan")],
    )
    def test_unconvertible_epoch_kept_verbatim(self, value, expected):
        """Test numbers outside the datetime range come back as their text."""
        assert normalize_timestamp(value) == expected

    def test_datetime_passthrough(self):
        """Test datetimes are returned untouched."""
        value = datetime(2025, 3, 1, 10, 0)
        assert normalize_timestamp(value) is value

    def test_format_for_display(self):
        """Test the display format."""
        assert format_for_display(datetime(2025, 3, 1, 9, 5, 7)) == "01/03/2025, 09:05:07"


class TestSortKey:
    """Test chronological ordering of mixed timestamps."""

    def test_aware_values_compare_on_utc(self):
        """Test offsets are honoured when ordering."""
        earlier = datetime(2025, 3, 1, 10, 0, tzinfo=timezone(timedelta(hours=5)))  # 05:00 UTC
        later = datetime(2025, 3, 1, 6, 0, tzinfo=UTC)

        assert sort_key(earlier) < sort_key(later)

    def test_unknown_sorts_oldest(self):
        """Test unparsed values sort before everything else."""
        assert sort_key("garbage") == datetime.min
        assert sort_key(None) < sort_key(datetime(1970, 1, 1))
