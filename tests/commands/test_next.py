"""Tests for the next CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from taskcadence.cli import cli

_TODAY = ["--today", "20240304"]


class TestNextCommand:
    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [*_TODAY, "next", "20240110", "d 5"])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "20240305" in result.output

    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (["20240110", "d 5", "--now", "20240115"], "20240115"),
            (["20240110", "d 5", "--now", "20240116"], "20240120"),
            (["20240115", "y", "--now", "20240301"], "20250115"),
            (["20240229", "y", "--now", "20240301"], "20250301"),
            (["20240301", "w 1,3", "--now", "20240304"], "20240306"),
            (["20240110", "m -1", "--now", "20240115"], "20240131"),
            (["20230115", "m 31,-1 2", "--now", "20230110"], "20230228"),
        ],
    )
    def test_quiet_prints_bare_date(
        self, cli_runner: CliRunner, args: list[str], expected: str
    ) -> None:
        result = cli_runner.invoke(cli, ["-q", "next", *args])
        assert result.exit_code == 0
        assert result.output == f"{expected}\n"

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", *_TODAY, "next", "20240301", "w 1,3"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "next_date"
        assert data["data"]["next"] == "20240306"
        assert data["data"]["now"] == "20240304"

    def test_empty_rule_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["next", "20240110", ""])
        assert result.exit_code == 1
        assert "repeat is empty" in result.output

    def test_error_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "next", "20240110", "w 8", "--now", "20240115"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["error"]["code"] == "INVALID_WEEKDAY"

    def test_error_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "next", "2024011", "d 5", "--now", "20240115"])
        assert result.exit_code == 1
        assert result.output.startswith("ERROR: next_date")

    def test_verbose_shows_timing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", *_TODAY, "next", "20240110", "d 5"])
        assert result.exit_code == 0
        assert "ScheduleService.next_date" in result.output

    def test_missing_argument(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["next", "20240110"])
        assert result.exit_code == 2

    def test_invalid_now_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["next", "20240110", "d 5", "--now", "2024-01-15"])
        assert result.exit_code == 2
        assert "now is invalid" in result.output
