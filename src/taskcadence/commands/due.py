"""Command group: due-date decisions for stored tasks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskcadence.commands._base import CadenceGroup, validate_date_option

if TYPE_CHECKING:
    from taskcadence.commands._context import AppContext

_DUE_EXAMPLES = """\
  taskcadence due resolve --date 20240101 --repeat "d 7"
  taskcadence due done 20240110 --repeat "w 1,3\""""


@click.group(cls=CadenceGroup, examples=_DUE_EXAMPLES)
def due() -> None:
    """Decide what due date a task should carry."""


@due.command(
    examples="""\
  taskcadence due resolve
  taskcadence due resolve --date 20991231
  taskcadence due resolve --date 20240101 --repeat "d 7" --now 20240120
  taskcadence -q due resolve --date 20240101""",
)
@click.option("--date", "date", default=None, help="Requested due date (YYYYMMDD).")
@click.option("--repeat", default="", help="Recurrence rule, empty for a one-off task.")
@click.option(
    "--now",
    default=None,
    callback=validate_date_option,
    help="Reference date (YYYYMMDD). Defaults to today.",
)
@click.pass_obj
def resolve(app: AppContext, date: str | None, repeat: str, now: str | None) -> None:
    """Resolve the due date to store for a new or edited task.

    Dates in the past move to the next occurrence of the rule, or to
    today when the task does not repeat.
    """
    app.emit(app.schedule.resolve_due(date, repeat, now=now))


@due.command(
    examples="""\
  taskcadence due done 20240110 --repeat "d 5"
  taskcadence due done 20240110
  taskcadence --json due done 20240304 --repeat "w 1,3" --now 20240304""",
)
@click.argument("date")
@click.option("--repeat", default="", help="The task's recurrence rule, if any.")
@click.option(
    "--now",
    default=None,
    callback=validate_date_option,
    help="Reference date (YYYYMMDD). Defaults to today.",
)
@click.pass_obj
def done(app: AppContext, date: str, repeat: str, now: str | None) -> None:
    """Mark a task due on DATE as done.

    Repeating tasks are rescheduled; one-off tasks are deleted.
    """
    app.emit(app.schedule.complete(date, repeat, now=now))
