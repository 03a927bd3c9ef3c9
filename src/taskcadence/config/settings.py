"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TASKCADENCE_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``taskcadence.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from datetime import date
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from taskcadence.config.discovery import find_config
from taskcadence.config.models import ScheduleConfig
from taskcadence.domain.dates import parse_date


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``taskcadence.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path has to reach settings_customise_sources, which pydantic
# calls as a classmethod during __init__.
_tls = threading.local()


class CadenceSettings(BaseSettings):
    """Settings for one taskcadence invocation, frozen after construction.

    Stored on the :class:`AppContext` at the CLI root and handed to every
    service.

    Attributes:
        config_path: The TOML file actually loaded, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TASKCADENCE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        today: str | None = None,
        **cli_flags: Any,
    ) -> CadenceSettings:
        """Construct settings from a CLI invocation.

        Uses the explicit *config_path* when it names a file, otherwise
        discovers ``taskcadence.toml`` walking up from *start* (default:
        cwd).  A *today* flag overrides ``[schedule] today``.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        if today is not None:
            cli_flags["schedule"] = {"today": today}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    def reference_date(self) -> date:
        """The date "now" resolves to: the pinned ``schedule.today`` or the host's local date."""
        if self.schedule.today is not None:
            return parse_date(self.schedule.today, field="schedule.today")
        return date.today()
