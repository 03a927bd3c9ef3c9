"""Recurrence rules — parsing, canonical formatting, and next-date evaluation.

Grammar (tokens separated by single spaces)::

    d <n>                 every n days, 1 <= n <= 400
    y                     every year on the same month/day
    w <wd,...>            on weekdays 1..7 (1=Monday .. 7=Sunday)
    m <day,...> [<m,...>] on month days 1..31 or -1/-2 (last/second-to-last),
                          optionally only in months 1..12

Each rule kind is one frozen dataclass with two phases: ``parse`` validates
the tokens once, ``next_date`` does the date math.  Weekdays are stored
0=Sunday .. 6=Saturday.

INVARIANT: rules are parsed fresh on every call; only the source text is
ever persisted by callers.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import ClassVar

from taskcadence.domain.dates import (
    add_year,
    days_in_month,
    first_of_next_month,
    format_date,
    parse_date,
    sunday_weekday,
)
from taskcadence.domain.errors import (
    EmptyRuleError,
    InvalidDateError,
    InvalidIntervalError,
    InvalidMonthDayError,
    InvalidMonthError,
    InvalidRuleError,
    InvalidWeekdayError,
    RecurrenceError,
)
from taskcadence.domain.types import RuleKind

MAX_INTERVAL_DAYS = 400
MONTH_END_DAYS = (-2, -1)

# Any day spec is matched within two calendar months.
_MAX_MONTH_HOPS = 12

_INT_RE = re.compile(r"[+-]?[0-9]+")

_WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def _parse_ints(raw: str, error: type[RecurrenceError], label: str) -> list[int]:
    values: list[int] = []
    for item in raw.split(","):
        if not _INT_RE.fullmatch(item):
            msg = f"invalid {label} value: {item!r}"
            raise error(msg)
        values.append(int(item))
    return values


def _join(values: list[int] | tuple[int, ...]) -> str:
    return ",".join(str(v) for v in values)


# ── Interval ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class IntervalRule:
    """Repeat every ``days`` days."""

    days: int

    kind: ClassVar[RuleKind] = RuleKind.INTERVAL

    @classmethod
    def parse(cls, tokens: list[str]) -> IntervalRule:
        if len(tokens) != 2:
            msg = f"repeat is invalid: {' '.join(tokens)!r} (expected 'd <days>')"
            raise InvalidRuleError(msg)
        raw = tokens[1]
        if not _INT_RE.fullmatch(raw) or not 1 <= int(raw) <= MAX_INTERVAL_DAYS:
            msg = f"invalid repeat day value: {raw!r} (expected 1..{MAX_INTERVAL_DAYS})"
            raise InvalidIntervalError(msg)
        return cls(days=int(raw))

    def next_date(self, now: date, base: date) -> date:
        """Step from *base* until it is no longer before *now*.

        The result may equal *now*.  A *base* already after *now* moves
        exactly one step.
        """
        if base > now:
            return base + timedelta(days=self.days)
        gap = (now - base).days
        steps = -(-gap // self.days)
        return base + timedelta(days=steps * self.days)

    def format(self) -> str:
        return f"{self.kind} {self.days}"

    def describe(self) -> str:
        return "every day" if self.days == 1 else f"every {self.days} days"


# ── Yearly ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class YearlyRule:
    """Repeat every year on the same month and day."""

    kind: ClassVar[RuleKind] = RuleKind.YEARLY

    @classmethod
    def parse(cls, tokens: list[str]) -> YearlyRule:
        if len(tokens) != 1:
            msg = f"repeat is invalid: {' '.join(tokens)!r} (expected 'y')"
            raise InvalidRuleError(msg)
        return cls()

    def next_date(self, now: date, base: date) -> date:
        if base > now:
            return add_year(base)
        while base < now:
            base = add_year(base)
        return base

    def format(self) -> str:
        return str(self.kind)

    def describe(self) -> str:
        return "every year on the same day"


# ── Weekly ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class WeeklyRule:
    """Repeat on a set of weekdays, 0=Sunday .. 6=Saturday."""

    weekdays: tuple[int, ...]

    kind: ClassVar[RuleKind] = RuleKind.WEEKLY

    @classmethod
    def parse(cls, tokens: list[str]) -> WeeklyRule:
        if len(tokens) != 2:
            msg = f"repeat is invalid: {' '.join(tokens)!r} (expected 'w <weekdays>')"
            raise InvalidRuleError(msg)
        weekdays: set[int] = set()
        for value in _parse_ints(tokens[1], InvalidWeekdayError, "repeat day of week"):
            if not 1 <= value <= 7:
                msg = f"invalid repeat day of week value: {value} (expected 1..7)"
                raise InvalidWeekdayError(msg)
            weekdays.add(value % 7)
        return cls(weekdays=tuple(sorted(weekdays)))

    def next_date(self, now: date, base: date) -> date:
        """Nearest configured weekday strictly after the anchor.

        The anchor is *base* when it lies after *now*, otherwise *now*.
        A target on the anchor's own weekday rolls a full week forward.
        """
        anchor = base if base > now else now
        current = sunday_weekday(anchor)
        step = min((target - current) % 7 or 7 for target in self.weekdays)
        return anchor + timedelta(days=step)

    def format(self) -> str:
        return f"{self.kind} {_join(sorted(wd or 7 for wd in self.weekdays))}"

    def describe(self) -> str:
        names = ", ".join(_WEEKDAY_NAMES[wd] for wd in self.weekdays)
        return f"every week on {names}"


# ── Monthly ──────────────────────────────────────────────────────────


def _day_in_month(cursor: date, days: tuple[int, ...], *, inclusive: bool) -> date | None:
    """First configured day in *cursor*'s month at/after *cursor*.

    Negative specs count back from the month end (-1 = last day).  Positive
    specs past the month end are skipped.  Returns None when nothing in
    this month qualifies.
    """
    month_len = days_in_month(cursor.year, cursor.month)
    candidates = sorted(
        {month_len + spec + 1 if spec < 0 else spec for spec in days if spec <= month_len}
    )
    for day in candidates:
        if day > cursor.day or (inclusive and day == cursor.day):
            return cursor.replace(day=day)
    return None


def _next_configured_month(cursor: date, months: tuple[int, ...]) -> date:
    """Day 1 of the earliest configured month strictly after *cursor*'s month."""
    for month in months:
        if month > cursor.month:
            return date(cursor.year, month, 1)
    return date(cursor.year + 1, months[0], 1)


@dataclass(frozen=True)
class MonthlyRule:
    """Repeat on days of the month, optionally restricted to some months.

    An empty ``months`` tuple means every month.
    """

    days: tuple[int, ...]
    months: tuple[int, ...] = ()

    kind: ClassVar[RuleKind] = RuleKind.MONTHLY

    @classmethod
    def parse(cls, tokens: list[str]) -> MonthlyRule:
        if len(tokens) not in (2, 3):
            msg = f"repeat is invalid: {' '.join(tokens)!r} (expected 'm <days> [<months>]')"
            raise InvalidRuleError(msg)

        days: set[int] = set()
        for value in _parse_ints(tokens[1], InvalidMonthDayError, "repeat day"):
            if value not in MONTH_END_DAYS and not 1 <= value <= 31:
                msg = f"invalid repeat day value: {value} (expected 1..31, -1 or -2)"
                raise InvalidMonthDayError(msg)
            days.add(value)

        months: set[int] = set()
        if len(tokens) == 3:
            for value in _parse_ints(tokens[2], InvalidMonthError, "repeat month"):
                if not 1 <= value <= 12:
                    msg = f"invalid repeat month value: {value} (expected 1..12)"
                    raise InvalidMonthError(msg)
                months.add(value)

        return cls(days=tuple(sorted(days)), months=tuple(sorted(months)))

    def next_date(self, now: date, base: date) -> date:
        """Next matching day, searching from the later of *base* and *now*.

        Without a month set the search excludes the start day itself.
        With one it restarts on day 1 of the next configured month after
        the start month, and the start day of that month may match.  The
        month set only picks that starting month: a month with no valid
        day hands over to the following calendar month.
        """
        cursor = max(base, now)
        if self.months:
            cursor = _next_configured_month(cursor, self.months)
            inclusive = True
        else:
            inclusive = False

        for _ in range(_MAX_MONTH_HOPS):
            found = _day_in_month(cursor, self.days, inclusive=inclusive)
            if found is not None:
                return found
            cursor = first_of_next_month(cursor)
            inclusive = True

        msg = f"no date matches {self.format()!r} after {format_date(cursor)}"
        raise InvalidMonthDayError(msg)

    def format(self) -> str:
        parts = [str(self.kind), _join(self.days)]
        if self.months:
            parts.append(_join(self.months))
        return " ".join(parts)

    def describe(self) -> str:
        labels = []
        for day in self.days:
            if day == -1:
                labels.append("last day")
            elif day == -2:
                labels.append("second-to-last day")
            else:
                labels.append(f"day {day}")
        text = f"every month on {', '.join(labels)}"
        if self.months:
            text += " in " + ", ".join(calendar.month_name[m] for m in self.months)
        return text


RecurrenceRule = IntervalRule | YearlyRule | WeeklyRule | MonthlyRule

_RULE_TYPES: dict[str, type[RecurrenceRule]] = {
    RuleKind.INTERVAL: IntervalRule,
    RuleKind.YEARLY: YearlyRule,
    RuleKind.WEEKLY: WeeklyRule,
    RuleKind.MONTHLY: MonthlyRule,
}


# ── Public API ───────────────────────────────────────────────────────


def parse_rule(text: str) -> RecurrenceRule:
    """Parse rule text into one of the four rule variants.

    Raises:
        EmptyRuleError: *text* is empty.
        InvalidRuleError: Unknown kind or wrong token count.
        InvalidIntervalError, InvalidWeekdayError, InvalidMonthDayError,
        InvalidMonthError: A component is unparsable or out of range.
    """
    if text == "":
        msg = "repeat is empty"
        raise EmptyRuleError(msg)
    tokens = text.split(" ")
    rule_type = _RULE_TYPES.get(tokens[0])
    if rule_type is None:
        msg = f"repeat is invalid: unknown rule kind {tokens[0]!r}"
        raise InvalidRuleError(msg)
    return rule_type.parse(tokens)


def format_rule(rule: RecurrenceRule) -> str:
    """Canonical rule text: sorted, deduplicated components, Sunday as 7."""
    return rule.format()


def next_date(now: date, base: date, rule: RecurrenceRule) -> date:
    """Next occurrence of *rule* given the last due date *base*.

    Raises:
        InvalidDateError: The occurrence would fall past year 9999.
    """
    try:
        return rule.next_date(now, base)
    except RecurrenceError:
        raise
    except (OverflowError, ValueError) as exc:
        msg = "next occurrence falls outside the supported calendar"
        raise InvalidDateError(msg) from exc


def compute_next(now: str, base: str, rule_text: str) -> str:
    """String-level entry point: ``YYYYMMDD`` dates in, ``YYYYMMDD`` out.

    An empty *rule_text* is rejected before either date is looked at.
    """
    if rule_text == "":
        msg = "repeat is empty"
        raise EmptyRuleError(msg)
    now_date = parse_date(now, field="now")
    base_date = parse_date(base, field="date")
    rule = parse_rule(rule_text)
    return format_date(next_date(now_date, base_date, rule))
