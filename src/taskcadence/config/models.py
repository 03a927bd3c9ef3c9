"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, taskcadence.toml only contains
overrides.  An empty file is a valid config.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from taskcadence.domain.dates import parse_date


class ScheduleConfig(BaseModel):
    """[schedule] section."""

    model_config = {"frozen": True}

    # Pins the reference "now" (YYYYMMDD); None means the host's local date.
    today: str | None = None

    @field_validator("today")
    @classmethod
    def _check_today(cls, value: str | None) -> str | None:
        if value is not None:
            parse_date(value, field="schedule.today")
        return value
