"""ScheduleService — recurrence operations behind the ServiceResult contract.

Four operations, one per collaborator touch-point of the task scheduler:

- ``next_date``   — raw next-occurrence query
- ``check_rule``  — validate and canonicalise rule text before storing it
- ``resolve_due`` — due date to store when a task is created or edited
- ``complete``    — what marking a task done does to it

All dates are ``YYYYMMDD`` strings in and out.
"""

from __future__ import annotations

import logging

from taskcadence.domain import recurrence
from taskcadence.domain.dates import format_date, parse_date
from taskcadence.domain.errors import RecurrenceError
from taskcadence.services.base import BaseService
from taskcadence.services.result import ServiceResult
from taskcadence.services.telemetry import traced

logger = logging.getLogger(__name__)


class ScheduleService(BaseService):
    """Computes next occurrences for recurring tasks."""

    @traced
    def next_date(self, date: str, repeat: str, *, now: str | None = None) -> ServiceResult:
        """Next occurrence of *repeat* for a task last due on *date*.

        *now* defaults to the reference date from settings.  An empty
        *repeat* fails with ``EMPTY_RULE`` before any date is checked.
        """
        op = "next_date"
        now_text = now or format_date(self._settings.reference_date())
        try:
            next_text = recurrence.compute_next(now_text, date, repeat)
        except RecurrenceError as exc:
            return self._reject(op, exc, now=now_text, date=date, repeat=repeat)

        logger.debug("next_date now=%s date=%s repeat=%r -> %s", now_text, date, repeat, next_text)
        return ServiceResult(
            ok=True,
            op=op,
            data={"now": now_text, "date": date, "repeat": repeat, "next": next_text},
        )

    @traced
    def check_rule(self, repeat: str) -> ServiceResult:
        """Validate *repeat* and report its canonical form."""
        op = "check_rule"
        try:
            rule = recurrence.parse_rule(repeat)
        except RecurrenceError as exc:
            return self._reject(op, exc, repeat=repeat)

        canonical = recurrence.format_rule(rule)
        warnings: list[str] = []
        if canonical != repeat:
            warnings.append(f"Rule normalised to {canonical!r}")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "repeat": repeat,
                "rule": canonical,
                "kind": rule.kind.name.lower(),
                "description": rule.describe(),
            },
            warnings=warnings,
        )

    @traced
    def resolve_due(
        self,
        date: str | None = None,
        repeat: str = "",
        *,
        now: str | None = None,
    ) -> ServiceResult:
        """Due date to store for a created or edited task.

        - no *date*: today
        - *date* before today: next occurrence of *repeat*, or today
          when the task does not repeat
        - otherwise *date* unchanged

        A non-empty *repeat* is validated even when it is not needed.
        """
        op = "resolve_due"
        try:
            today = self._resolve_now(now)
            rule = recurrence.parse_rule(repeat) if repeat else None
            if not date:
                due, source = today, "today"
            else:
                due, source = parse_date(date), "given"
                if due < today:
                    if rule is None:
                        due, source = today, "today"
                    else:
                        due, source = recurrence.next_date(today, due, rule), "rule"
        except RecurrenceError as exc:
            return self._reject(op, exc, date=date, repeat=repeat)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "date": format_date(due),
                "source": source,
                "repeat": repeat,
                "now": format_date(today),
            },
        )

    @traced
    def complete(self, date: str, repeat: str = "", *, now: str | None = None) -> ServiceResult:
        """Outcome of marking a task done.

        A repeating task is rescheduled to its next occurrence; a one-off
        task is deleted.
        """
        op = "complete_task"
        try:
            today = self._resolve_now(now)
            parse_date(date)
            next_text = None
            if repeat:
                next_text = recurrence.compute_next(format_date(today), date, repeat)
        except RecurrenceError as exc:
            return self._reject(op, exc, date=date, repeat=repeat)

        action = "reschedule" if next_text else "delete"
        logger.debug("complete date=%s repeat=%r -> %s %s", date, repeat, action, next_text)
        return ServiceResult(
            ok=True,
            op=op,
            data={"action": action, "date": date, "repeat": repeat, "next": next_text},
        )
