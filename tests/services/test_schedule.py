"""Tests for ScheduleService — reference date pinned to Monday 20240304."""

from __future__ import annotations

from pathlib import Path

import pytest

from taskcadence.config.settings import CadenceSettings
from taskcadence.services.schedule import ScheduleService


class TestNextDate:
    def test_uses_reference_date_by_default(self, service: ScheduleService) -> None:
        result = service.next_date("20240110", "d 5")
        assert result.ok
        assert result.op == "next_date"
        assert result.data == {
            "now": "20240304",
            "date": "20240110",
            "repeat": "d 5",
            "next": "20240305",
        }

    def test_explicit_now(self, service: ScheduleService) -> None:
        result = service.next_date("20240110", "d 5", now="20240115")
        assert result.data["next"] == "20240115"
        assert result.data["now"] == "20240115"

    @pytest.mark.parametrize(
        ("date", "repeat", "expected"),
        [
            ("20240115", "y", "20250115"),
            ("20240301", "w 1,3", "20240306"),
            ("20240120", "m 31,-1 2", "20250228"),
            ("20240101", "m -1", "20240331"),
        ],
    )
    def test_rule_kinds(
        self, service: ScheduleService, date: str, repeat: str, expected: str
    ) -> None:
        assert service.next_date(date, repeat).data["next"] == expected

    def test_empty_rule(self, service: ScheduleService) -> None:
        result = service.next_date("garbage", "")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "EMPTY_RULE"
        assert result.error.message == "repeat is empty"

    def test_invalid_date_carries_detail(self, service: ScheduleService) -> None:
        result = service.next_date("2024-01-10", "d 5")
        assert result.error is not None
        assert result.error.code == "INVALID_DATE"
        assert result.error.detail == {"now": "20240304", "date": "2024-01-10", "repeat": "d 5"}

    def test_invalid_now(self, service: ScheduleService) -> None:
        result = service.next_date("20240110", "d 5", now="20241301")
        assert result.error is not None
        assert result.error.code == "INVALID_DATE"
        assert "now" in result.error.message

    @pytest.mark.parametrize(
        ("repeat", "code"),
        [
            ("x 1", "INVALID_RULE"),
            ("d 401", "INVALID_INTERVAL"),
            ("w 0", "INVALID_WEEKDAY"),
            ("m 32", "INVALID_MONTH_DAY"),
            ("m 1 13", "INVALID_MONTH"),
        ],
    )
    def test_rule_errors(self, service: ScheduleService, repeat: str, code: str) -> None:
        result = service.next_date("20240110", repeat)
        assert result.error is not None
        assert result.error.code == code


class TestCheckRule:
    def test_canonical_input_has_no_warning(self, service: ScheduleService) -> None:
        result = service.check_rule("d 7")
        assert result.ok
        assert result.data == {
            "repeat": "d 7",
            "rule": "d 7",
            "kind": "interval",
            "description": "every 7 days",
        }
        assert result.warnings == []

    def test_normalised_rule_warns(self, service: ScheduleService) -> None:
        result = service.check_rule("w 7,1,1")
        assert result.data["rule"] == "w 1,7"
        assert result.data["kind"] == "weekly"
        assert result.data["description"] == "every week on Sunday, Monday"
        assert result.warnings == ["Rule normalised to 'w 1,7'"]

    def test_monthly(self, service: ScheduleService) -> None:
        result = service.check_rule("m -1,15 12,1")
        assert result.data["rule"] == "m -1,15 1,12"
        assert result.data["kind"] == "monthly"
        assert result.data["description"] == "every month on last day, day 15 in January, December"

    def test_day_missing_from_month_set_is_valid(self, service: ScheduleService) -> None:
        result = service.check_rule("m 31 2")
        assert result.ok
        assert result.data["rule"] == "m 31 2"
        assert result.warnings == []

    def test_invalid(self, service: ScheduleService) -> None:
        result = service.check_rule("m 32 2")
        assert result.error is not None
        assert result.error.code == "INVALID_MONTH_DAY"
        assert result.error.detail == {"repeat": "m 32 2"}


class TestResolveDue:
    def test_no_date_means_today(self, service: ScheduleService) -> None:
        result = service.resolve_due()
        assert result.ok
        assert result.data == {
            "date": "20240304",
            "source": "today",
            "repeat": "",
            "now": "20240304",
        }

    def test_future_date_kept(self, service: ScheduleService) -> None:
        result = service.resolve_due("20240310")
        assert result.data["date"] == "20240310"
        assert result.data["source"] == "given"

    def test_today_kept(self, service: ScheduleService) -> None:
        result = service.resolve_due("20240304", "d 7")
        assert result.data["date"] == "20240304"
        assert result.data["source"] == "given"

    def test_past_one_off_moves_to_today(self, service: ScheduleService) -> None:
        result = service.resolve_due("20240301")
        assert result.data["date"] == "20240304"
        assert result.data["source"] == "today"

    @pytest.mark.parametrize(
        ("repeat", "expected"),
        [("d 7", "20240308"), ("w 1,3", "20240306"), ("y", "20250301"), ("m 1", "20240401")],
    )
    def test_past_repeating_moves_to_next_occurrence(
        self, service: ScheduleService, repeat: str, expected: str
    ) -> None:
        result = service.resolve_due("20240301", repeat)
        assert result.data["date"] == expected
        assert result.data["source"] == "rule"

    def test_explicit_now(self, service: ScheduleService) -> None:
        result = service.resolve_due(now="20240101")
        assert result.data["date"] == "20240101"

    def test_invalid_date(self, service: ScheduleService) -> None:
        result = service.resolve_due("20240231")
        assert result.error is not None
        assert result.error.code == "INVALID_DATE"

    def test_repeat_validated_even_for_future_date(self, service: ScheduleService) -> None:
        result = service.resolve_due("20240310", "d 0")
        assert result.error is not None
        assert result.error.code == "INVALID_INTERVAL"

    def test_invalid_now(self, service: ScheduleService) -> None:
        result = service.resolve_due(now="2024")
        assert result.error is not None
        assert result.error.code == "INVALID_DATE"


class TestComplete:
    def test_repeating_task_is_rescheduled(self, service: ScheduleService) -> None:
        result = service.complete("20240301", "d 5")
        assert result.ok
        assert result.op == "complete_task"
        assert result.data == {
            "action": "reschedule",
            "date": "20240301",
            "repeat": "d 5",
            "next": "20240306",
        }

    def test_explicit_now(self, service: ScheduleService) -> None:
        result = service.complete("20240301", "d 5", now="20240310")
        assert result.data["next"] == "20240311"

    def test_one_off_task_is_deleted(self, service: ScheduleService) -> None:
        result = service.complete("20240301")
        assert result.data["action"] == "delete"
        assert result.data["next"] is None

    def test_one_off_date_still_validated(self, service: ScheduleService) -> None:
        result = service.complete("yesterday")
        assert result.error is not None
        assert result.error.code == "INVALID_DATE"

    def test_invalid_rule(self, service: ScheduleService) -> None:
        result = service.complete("20240301", "w 9")
        assert result.error is not None
        assert result.error.code == "INVALID_WEEKDAY"


class TestReferenceDate:
    def test_config_file_pins_today(self, tmp_path: Path) -> None:
        (tmp_path / "taskcadence.toml").write_text('[schedule]\ntoday = "20240601"\n')
        service = ScheduleService(CadenceSettings.from_cli(start=tmp_path))
        assert service.resolve_due().data["date"] == "20240601"

    def test_unpinned_uses_host_date(self, tmp_path: Path) -> None:
        from datetime import date

        from taskcadence.domain.dates import format_date

        service = ScheduleService(CadenceSettings.from_cli(start=tmp_path))
        assert service.resolve_due().data["date"] == format_date(date.today())
