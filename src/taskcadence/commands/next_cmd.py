"""Command: next occurrence of a recurrence rule."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskcadence.commands._base import CadenceCommand, validate_date_option

if TYPE_CHECKING:
    from taskcadence.commands._context import AppContext


@click.command(
    "next",
    cls=CadenceCommand,
    examples="""\
  taskcadence next 20240110 "d 5" --now 20240115
  taskcadence next 20240115 y --now 20240301
  taskcadence next 20240101 "w 1,3"
  taskcadence -q next 20240120 "m 31,-1 2"
  taskcadence --json next 20240110 "m -1\"""",
)
@click.argument("date")
@click.argument("repeat")
@click.option(
    "--now",
    default=None,
    callback=validate_date_option,
    help="Reference date (YYYYMMDD). Defaults to today.",
)
@click.pass_obj
def next_cmd(app: AppContext, date: str, repeat: str, now: str | None) -> None:
    """Print the next occurrence of REPEAT for a task last due on DATE."""
    app.emit(app.schedule.next_date(date, repeat, now=now))
