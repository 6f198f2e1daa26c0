"""End-to-end tests for the habitpro command tree.

Commands run against the in-memory backend; the cached strategy context
keeps one MemoryStore alive across invocations within a test.
"""

from __future__ import annotations

import json

import pytest
import yaml
from typer.testing import CliRunner

from habitpro_cli import __version__
from habitpro_cli.main import app

runner = CliRunner()


def _invoke(*args: str):
    return runner.invoke(app, list(args))


def _json(*args: str):
    result = _invoke(*args, "--output", "json")
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def _add(title: str, *options: str) -> str:
    result = _invoke("tasks", "add", title, *options)
    assert result.exit_code == 0, result.output
    tasks = _json("tasks", "list", "--all")
    return next(t["id"] for t in tasks if t["title"] == title)


@pytest.fixture(autouse=True)
def _memory(memory_storage):
    return memory_storage


class TestTasks:
    def test_add_and_list(self):
        result = _invoke("tasks", "add", "Morning run", "--time", "7:00")
        assert result.exit_code == 0
        assert "Created habit: Morning run (Daily)" in result.stdout

        tasks = _json("tasks", "list")
        assert [t["title"] for t in tasks] == ["Morning run"]
        assert tasks[0]["frequency"] == "daily"

    def test_add_monthly_and_yearly(self):
        _add("Pay rent", "--time", "09:00", "--frequency", "monthly", "--day", "1")
        _add(
            "Birthday",
            "--time", "10:00",
            "--frequency", "yearly",
            "--month", "6",
            "--month-day", "6",
        )

        by_title = {t["title"]: t for t in _json("tasks", "list")}
        assert by_title["Pay rent"]["day_of_month"] == 1
        assert by_title["Birthday"]["month_of_year"] == 6
        assert by_title["Birthday"]["day_of_year"] == 6

    def test_add_rejects_unknown_frequency(self):
        result = _invoke("tasks", "add", "Run", "--time", "07:00", "--frequency", "weekly")
        assert result.exit_code == 2
        assert "Invalid frequency" in result.stdout

    def test_add_rejects_bad_time(self):
        result = _invoke("tasks", "add", "Run", "--time", "25:00")
        assert result.exit_code == 2
        assert "HH:MM" in result.stdout

    def test_add_monthly_without_day(self):
        result = _invoke("tasks", "add", "Rent", "--time", "09:00", "--frequency", "monthly")
        assert result.exit_code == 2
        assert "Day of month is required" in result.stdout

    def test_show_by_suffix(self):
        task_id = _add("Read", "--time", "21:00")

        detail = _json("tasks", "show", task_id[-8:])
        assert detail["id"] == task_id
        assert detail["streak"] == 0
        assert detail["next_occurrence"] is not None

    def test_show_unknown_task(self):
        result = _invoke("tasks", "show", "does-not-exist")
        assert result.exit_code == 5
        assert "Task not found" in result.stdout

    def test_edit(self):
        task_id = _add("Read", "--time", "21:00")

        result = _invoke("tasks", "edit", task_id, "--title", "Read a book", "--time", "22:00")
        assert result.exit_code == 0

        detail = _json("tasks", "show", task_id)
        assert detail["title"] == "Read a book"
        assert detail["time"] == "22:00"

    def test_pause_and_resume(self):
        task_id = _add("Read", "--time", "21:00")

        assert _invoke("tasks", "pause", task_id).exit_code == 0
        assert _json("tasks", "list") == []
        assert len(_json("tasks", "list", "--all")) == 1

        assert _invoke("tasks", "resume", task_id).exit_code == 0
        assert len(_json("tasks", "list")) == 1

    def test_bracketed_title_is_printed_literally(self):
        result = _invoke("tasks", "add", "Read [/] notes [bold]", "--time", "07:00")
        assert result.exit_code == 0, result.output
        assert "Created habit: Read [/] notes [bold]" in result.stdout
        task_id = _json("tasks", "list")[0]["id"]

        for args in (
            ("tasks", "list"),
            ("tasks", "show", task_id),
            ("today",),
            ("complete", task_id),
        ):
            result = _invoke(*args)
            assert result.exit_code == 0, (args, result.output)
            assert "Read [/] notes" in result.stdout

        assert _invoke("tasks", "list", "--output", "table").exit_code == 0

        result = _invoke("achievements", "list", "--progress")
        assert result.exit_code == 0
        assert "Read [/] notes [bold]" in result.stdout

    def test_edit_clears_description(self):
        task_id = _add("Read", "--time", "21:00", "--description", "Chapter 3")

        assert _invoke("tasks", "edit", task_id, "--description", "").exit_code == 0
        assert _json("tasks", "show", task_id)["description"] is None

    def test_delete_requires_confirmation(self):
        task_id = _add("Read", "--time", "21:00")

        result = runner.invoke(app, ["tasks", "delete", task_id], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.stdout
        assert len(_json("tasks", "list")) == 1

        result = _invoke("tasks", "delete", task_id, "--yes")
        assert result.exit_code == 0
        assert _json("tasks", "list") == []


class TestCompletions:
    def test_complete_builds_streak_and_milestone(self):
        task_id = _add("Run", "--time", "07:00")

        for day in range(1, 7):
            result = _invoke("complete", task_id, "--date", f"2024-01-0{day}")
            assert result.exit_code == 0
        result = _invoke("complete", task_id, "--date", "2024-01-07")

        assert "Completed: Run (2024-01-07)" in result.stdout
        assert "Streak: 7" in result.stdout
        assert "Milestone unlocked" in result.stdout

    def test_complete_json_output(self):
        task_id = _add("Run", "--time", "07:00")

        data = _json("complete", task_id, "--date", "2024-01-01")
        assert data["streak"] == 1
        assert data["completion"]["date"] == "2024-01-01"
        assert data["new_achievements"] == []

    def test_complete_rejects_bad_date(self):
        task_id = _add("Run", "--time", "07:00")
        result = _invoke("complete", task_id, "--date", "01/02/2024")
        assert result.exit_code == 2

    def test_uncomplete(self):
        task_id = _add("Run", "--time", "07:00")
        _invoke("complete", task_id, "--date", "2024-01-01")

        result = _invoke("uncomplete", task_id, "--date", "2024-01-01")
        assert result.exit_code == 0
        assert _json("completions", "list") == []

        result = _invoke("uncomplete", task_id, "--date", "2024-01-01")
        assert result.exit_code == 5

    def test_list_and_delete(self):
        task_id = _add("Run", "--time", "07:00")
        _invoke("complete", task_id, "--date", "2024-01-01")
        _invoke("complete", task_id, "--date", "2024-01-02")

        completions = _json("completions", "list", "--task", task_id)
        assert [c["date"] for c in completions] == ["2024-01-02", "2024-01-01"]
        assert len(_json("completions", "list", "--date", "2024-01-01")) == 1

        result = _invoke("completions", "delete", completions[0]["id"])
        assert result.exit_code == 0
        assert len(_json("completions", "list")) == 1

        result = _invoke("completions", "delete", completions[0]["id"])
        assert result.exit_code == 5


class TestSummaries:
    def test_today_json(self):
        run_id = _add("Run", "--time", "07:00")
        _add("Pay rent", "--time", "09:00", "--frequency", "monthly", "--day", "15")
        _invoke("complete", run_id, "--date", "2024-01-03")

        summary = _json("today", "--date", "2024-01-03")
        assert summary["date"] == "2024-01-03"
        assert summary["total_tasks"] == 1
        assert summary["completed_tasks"] == 1
        assert summary["completion_rate"] == 100.0
        assert summary["tasks"][0]["is_completed"] is True

    def test_today_pretty(self):
        _add("Run", "--time", "07:00")

        result = _invoke("today", "--date", "2024-01-03")
        assert result.exit_code == 0
        assert "Run" in result.stdout
        assert "0/1" in result.stdout

    def test_stats_month_json(self):
        run_id = _add("Run", "--time", "07:00")
        _invoke("complete", run_id, "--date", "2024-02-01")
        _invoke("complete", run_id, "--date", "2024-02-02")

        stats = _json("stats", "month", "2024", "2")
        assert stats["month"] == "February"
        assert len(stats["daily_completions"]) == 29
        assert stats["total_due"] == 29
        assert stats["completed_count"] == 2
        assert stats["perfect_days"] == 2
        assert stats["streak_days"] == 2
        assert stats["daily_completions"][0]["intensity"] == 5
        assert stats["daily_completions"][2]["intensity"] == 0

    def test_stats_month_pretty(self):
        _add("Run", "--time", "07:00")

        result = _invoke("stats", "month", "2024", "2")
        assert result.exit_code == 0
        assert "February 2024" in result.stdout
        assert "Completed: 0/29" in result.stdout

    def test_stats_rejects_invalid_month(self):
        result = _invoke("stats", "month", "2024", "13")
        assert result.exit_code == 2

    def test_stats_rejects_month_without_year(self):
        result = _invoke("stats", "month", "2")
        assert result.exit_code == 2


class TestAchievements:
    def test_list_after_seven_day_streak(self):
        task_id = _add("Run", "--time", "07:00")
        for day in range(1, 8):
            _invoke("complete", task_id, "--date", f"2024-01-0{day}")

        achievements = _json("achievements", "list")
        assert [(a["type"], a["streak_count"]) for a in achievements] == [("7-day", 7)]
        assert _json("achievements", "list", task_id)[0]["task_id"] == task_id

    def test_empty_list_shows_tip(self):
        result = _invoke("achievements", "list")
        assert result.exit_code == 0
        assert "No milestones earned yet" in result.stdout

    def test_progress(self):
        _add("Run", "--time", "07:00")

        result = _invoke("achievements", "list", "--progress")
        assert result.exit_code == 0
        assert "Next Milestones" in result.stdout
        assert "0/7" in result.stdout


class TestConfig:
    def test_show_defaults_to_yaml(self):
        result = _invoke("config", "show")
        assert result.exit_code == 0
        data = yaml.safe_load(result.stdout)
        assert data["storage"]["type"] == "memory"
        assert data["calendar"]["week_start"] == "monday"

    def test_get_and_set(self):
        assert _invoke("config", "set", "calendar.week_start", "sunday").exit_code == 0

        result = _invoke("config", "get", "calendar.week_start")
        assert result.exit_code == 0
        assert result.stdout.strip() == "sunday"

    def test_unknown_key(self):
        assert _invoke("config", "get", "nope.key").exit_code == 2
        assert _invoke("config", "set", "nope.key", "1").exit_code == 2

    def test_invalid_value(self):
        result = _invoke("config", "set", "output.format", "xml")
        assert result.exit_code == 2

    def test_reset(self):
        _invoke("config", "set", "output.compact", "true")

        result = _invoke("config", "reset", "--yes")
        assert result.exit_code == 0
        assert _invoke("config", "get", "output.compact").stdout.strip() == "False"


def test_version():
    result = _invoke("version", "--verbose")
    assert result.exit_code == 0
    assert __version__ in result.stdout
    assert "storage: memory" in result.stdout


def test_unknown_log_level_does_not_break_commands(monkeypatch):
    monkeypatch.setenv("HABITPRO_LOG_LEVEL", "chatty")

    result = _invoke("tasks", "list")
    assert result.exit_code == 0, result.output
