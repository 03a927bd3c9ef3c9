"""Root CLI group for taskcadence with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from taskcadence import __version__
from taskcadence.commands import register_commands
from taskcadence.commands._base import CadenceGroup, validate_date_option
from taskcadence.commands._context import AppContext
from taskcadence.config.settings import CadenceSettings


@click.group(cls=CadenceGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="taskcadence")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the resulting value.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--today",
    default=None,
    callback=validate_date_option,
    help="Pin the reference date (YYYYMMDD) used when --now is omitted.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    today: str | None,
) -> None:
    """taskcadence — next-occurrence calculator for recurring tasks."""
    try:
        settings = CadenceSettings.from_cli(
            config_path=config_path,
            today=today or None,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc}"
        raise click.ClickException(msg) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
