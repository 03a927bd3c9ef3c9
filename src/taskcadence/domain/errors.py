"""Recurrence failure taxonomy.

Every failure is a local rejection of one specific input: there is no
retry, no partial result, and no fallback date.  Each exception carries a
stable ``code`` that the service layer copies into ``ServiceError.code``.
"""

from __future__ import annotations

from typing import ClassVar


class RecurrenceError(ValueError):
    """Base class for every rejection raised by the recurrence engine."""

    code: ClassVar[str] = "RECURRENCE_ERROR"


class EmptyRuleError(RecurrenceError):
    """The rule text is empty (the task does not repeat)."""

    code = "EMPTY_RULE"


class InvalidDateError(RecurrenceError):
    """A date is not a real ``YYYYMMDD`` calendar day."""

    code = "INVALID_DATE"


class InvalidRuleError(RecurrenceError):
    """Unknown rule kind, or wrong token count for the kind."""

    code = "INVALID_RULE"


class InvalidIntervalError(RecurrenceError):
    code = "INVALID_INTERVAL"


class InvalidWeekdayError(RecurrenceError):
    code = "INVALID_WEEKDAY"


class InvalidMonthDayError(RecurrenceError):
    code = "INVALID_MONTH_DAY"


class InvalidMonthError(RecurrenceError):
    code = "INVALID_MONTH"
