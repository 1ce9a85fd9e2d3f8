from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.exceptions import ValidationError

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


@dataclass(frozen=True)
class MonthRange:
    """A payroll month (YYYY-MM) with its first and last calendar day."""

    month: str
    start: date
    end: date

    def days(self) -> Iterator[date]:
        d = self.start
        while d <= self.end:
            yield d
            d += timedelta(days=1)

    @property
    def label(self) -> str:
        """Human-readable month, e.g. 'March 2026'."""
        return self.start.strftime("%B %Y")


def parse_month(value: str) -> MonthRange:
    """Parse 'YYYY-MM' into a MonthRange."""
    if not isinstance(value, str):
        raise ValidationError("Month must be in YYYY-MM format")
    v = value.strip()
    if not _MONTH_RE.match(v):
        raise ValidationError("Month must be in YYYY-MM format")
    year, month = int(v[:4]), int(v[5:7])
    last_day = calendar.monthrange(year, month)[1]
    return MonthRange(month=v, start=date(year, month, 1), end=date(year, month, last_day))


def month_of(value: date) -> str:
    return value.strftime("%Y-%m")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not isinstance(value, str):
        raise ValidationError("Date must be in YYYY-MM-DD format")
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Date must be in YYYY-MM-DD format")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
