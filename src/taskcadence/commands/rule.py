"""Command group: recurrence rule inspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskcadence.commands._base import CadenceGroup

if TYPE_CHECKING:
    from taskcadence.commands._context import AppContext

_RULE_EXAMPLES = """\
  taskcadence rule check "d 7"
  taskcadence rule check "w 7,1,1"
  taskcadence -q rule check "m 15,-1 12,1\""""


@click.group(cls=CadenceGroup, examples=_RULE_EXAMPLES)
def rule() -> None:
    """Inspect recurrence rules."""


@rule.command(
    examples="""\
  taskcadence rule check y
  taskcadence rule check "w 7,1,1"
  taskcadence --json rule check "m -2,-1 3,6,9,12\"""",
)
@click.argument("repeat")
@click.pass_obj
def check(app: AppContext, repeat: str) -> None:
    """Validate REPEAT and print its canonical form."""
    app.emit(app.schedule.check_rule(repeat))
