from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


@dataclass(frozen=True)
class DateRange:
    """Half-open range of calendar days: start <= d < stop."""

    start: date
    stop: date

    @classmethod
    def for_day(cls, day: date) -> "DateRange":
        return cls(start=day, stop=day + timedelta(days=1))

    @classmethod
    def between(cls, start: date, end: date) -> "DateRange":
        if end < start:
            raise ValidationError("End date must not be before start date")
        return cls(start=start, stop=end + timedelta(days=1))

    @property
    def end(self) -> date:
        """Last day included in the range."""
        return self.stop - timedelta(days=1)

    def __contains__(self, value: date) -> bool:
        if isinstance(value, datetime):
            value = value.date()
        return self.start <= value < self.stop


def parse_date_range(start_s: Optional[str], end_s: Optional[str], *, today: date) -> DateRange:
    """Build the dashboard filter from query-string values.

    Both bounds are needed for a custom range; otherwise the range is today.
    """
    start_s = (start_s or "").strip()
    end_s = (end_s or "").strip()
    if not start_s or not end_s:
        return DateRange.for_day(today)
    try:
        start = parse_iso_date(start_s)
        end = parse_iso_date(end_s)
    except ValueError:
        raise ValidationError("Invalid date (YYYY-MM-DD)")
    return DateRange.between(start, end)
