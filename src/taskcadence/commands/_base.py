"""Click base classes with ``--examples`` support.

``--help`` stays short; ``--examples`` prints worked invocations and exits.
Groups hand the behaviour down to their subcommands automatically.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class CadenceCommand(click.Command):
    """Command accepting an ``examples`` keyword."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class CadenceGroup(click.Group):
    """Group accepting an ``examples`` keyword; subcommands default to CadenceCommand."""

    command_class = CadenceCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def validate_date_option(
    _ctx: click.Context, param: click.Parameter, value: str | None
) -> str | None:
    """Click callback rejecting anything that is not a ``YYYYMMDD`` date."""
    if value is None or value == "":
        return value
    from taskcadence.domain.dates import parse_date
    from taskcadence.domain.errors import InvalidDateError

    try:
        parse_date(value, field=param.name or "date")
    except InvalidDateError as exc:
        raise click.BadParameter(str(exc)) from exc
    return value
