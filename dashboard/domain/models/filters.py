"""Date-range filter chosen by the user."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from pydantic import BaseModel

from dashboard.core.errors import ValidationError
from dashboard.domain.datetimes import format_date_input, parse_local

RANGE_START_TIME = "00:00"
RANGE_END_TIME = "23:59"


class DateRangeFilter(BaseModel):
    from_date: str
    from_time: str = RANGE_START_TIME
    to_date: str
    to_time: str = RANGE_END_TIME

    @classmethod
    def default_range(cls, days: int = 7, today: date | None = None) -> DateRangeFilter:
        """Last ``days`` days, from midnight to the last minute of today."""
        today = today or date.today()
        return cls(
            from_date=format_date_input(today - timedelta(days=days)),
            from_time=RANGE_START_TIME,
            to_date=format_date_input(today),
            to_time=RANGE_END_TIME,
        )

    def to_instants(self) -> tuple[datetime, datetime]:
        """Parse both bounds, rejecting inverted ranges."""
        start = parse_local(self.from_date, self.from_time)
        end = parse_local(self.to_date, self.to_time)
        if start > end:
            raise ValidationError(
                "Range start is after range end",
                details={
                    "from": f"{self.from_date} {self.from_time}",
                    "to": f"{self.to_date} {self.to_time}",
                },
            )
        return start, end
