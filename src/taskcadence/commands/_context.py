"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  Owns logging setup and centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskcadence.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from taskcadence.config.settings import CadenceSettings
    from taskcadence.services.result import ServiceResult
    from taskcadence.services.schedule import ScheduleService


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: CadenceSettings) -> None:
        self.settings = settings

        from taskcadence.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from taskcadence.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def schedule(self) -> ScheduleService:
        from taskcadence.services.schedule import ScheduleService

        return ScheduleService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # JSON already carries the warnings; quiet suppresses them.
            if not (settings.json_output or settings.quiet):
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
