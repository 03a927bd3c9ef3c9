"""Calendar date codec and month arithmetic.

Dates cross every boundary as 8-digit ``YYYYMMDD`` strings with no
separators.  Internally they are plain :class:`datetime.date` values;
there is no time-of-day component.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime

from taskcadence.domain.errors import InvalidDateError

DATE_FORMAT = "%Y%m%d"

_DATE_RE = re.compile(r"[0-9]{8}")


def parse_date(value: str, *, field: str = "date") -> date:
    """Parse a ``YYYYMMDD`` string into a :class:`date`.

    Raises:
        InvalidDateError: If *value* is not exactly eight digits or does
            not name a real calendar day.
    """
    if not _DATE_RE.fullmatch(value):
        msg = f"{field} is invalid: {value!r} (expected YYYYMMDD)"
        raise InvalidDateError(msg)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        msg = f"{field} is invalid: {value!r} ({exc})"
        raise InvalidDateError(msg) from exc


def format_date(value: date) -> str:
    """Format a date as ``YYYYMMDD``."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_of_next_month(value: date) -> date:
    """Day 1 of the month after *value* (December rolls into January)."""
    if value.month == 12:
        return date(value.year + 1, 1, 1)
    return date(value.year, value.month + 1, 1)


def add_year(value: date) -> date:
    """Same month/day one year later.

    Feb 29 has no counterpart in a common year and normalises to Mar 1.
    """
    if (value.month, value.day) == (2, 29) and not calendar.isleap(value.year + 1):
        return date(value.year + 1, 3, 1)
    return value.replace(year=value.year + 1)


def sunday_weekday(value: date) -> int:
    """Weekday numbered 0=Sunday .. 6=Saturday."""
    return (value.weekday() + 1) % 7
