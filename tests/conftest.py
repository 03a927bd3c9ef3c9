"""Shared pytest fixtures for taskcadence tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from taskcadence.config.settings import CadenceSettings
from taskcadence.services.schedule import ScheduleService
from taskcadence.services.telemetry import disable_telemetry

# A Monday.
PINNED_TODAY = "20240304"


@pytest.fixture(autouse=True)
def _clean_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None]:
    """Isolate every test from real config files, env vars, and global log/telemetry state."""
    for var in ("TASKCADENCE_CONFIG", "TASKCADENCE_SCHEDULE__TODAY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("taskcadence")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> CadenceSettings:
    """Settings with the reference date pinned to :data:`PINNED_TODAY`."""
    return CadenceSettings.from_cli(start=tmp_path, today=PINNED_TODAY)


@pytest.fixture
def service(settings: CadenceSettings) -> ScheduleService:
    return ScheduleService(settings)
