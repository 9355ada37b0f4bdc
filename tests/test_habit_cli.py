# tests/test_habit_cli.py

import pytest
from typer.testing import CliRunner

from habitlog.commands import habit_module
from habitlog.utils.db.habit_store import HabitTracker

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolate_data(data_file):
    yield


def reopen(data_file):
    return HabitTracker(data_file, profile_name="Test User")


def test_add_habit(data_file):
    result = runner.invoke(habit_module.app, ["add", "Read", "--target", "5"])
    assert result.exit_code == 0
    assert 'Habit "Read" added' in result.stdout

    habits = reopen(data_file).habits
    assert len(habits) == 1
    assert habits[0].target_frequency == 5


@pytest.mark.parametrize("target", ["0", "8"])
def test_add_habit_out_of_range(data_file, target):
    result = runner.invoke(habit_module.app, ["add", "Read", "-t", target])
    assert result.exit_code == 1
    assert "between 1-7" in result.stdout
    assert not data_file.exists()


def test_add_habit_blank_name(data_file):
    result = runner.invoke(habit_module.app, ["add", "   ", "-t", "3"])
    assert result.exit_code == 1
    assert "name is required" in result.stdout


def test_done_twice_reports_already_completed():
    runner.invoke(habit_module.app, ["add", "Read", "-t", "5"])
    first = runner.invoke(habit_module.app, ["done", "1"])
    second = runner.invoke(habit_module.app, ["done", "1"])
    assert first.exit_code == 0
    assert "marked complete" in first.stdout
    assert second.exit_code == 0
    assert "already complete" in second.stdout


def test_done_unknown_index():
    result = runner.invoke(habit_module.app, ["done", "3"])
    assert result.exit_code == 1
    assert "Habit #3 not found" in result.stdout


def test_delete_requires_confirmation(data_file):
    runner.invoke(habit_module.app, ["add", "Read", "-t", "5"])
    result = runner.invoke(habit_module.app, ["delete", "1"])
    assert result.exit_code == 0
    assert "aborted" in result.stdout
    assert len(reopen(data_file).habits) == 1

    result = runner.invoke(habit_module.app, ["delete", "1", "--force"])
    assert result.exit_code == 0
    assert 'Habit "Read" deleted' in result.stdout
    assert reopen(data_file).habits == []


def test_delete_unknown_index():
    result = runner.invoke(habit_module.app, ["delete", "1", "--force"])
    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_list_filters():
    runner.invoke(habit_module.app, ["add", "Once", "-t", "1"])
    runner.invoke(habit_module.app, ["add", "Daily", "-t", "7"])
    runner.invoke(habit_module.app, ["done", "1"])

    everything = runner.invoke(habit_module.app, ["list"])
    assert everything.exit_code == 0
    assert "Once" in everything.stdout and "Daily" in everything.stdout

    completed = runner.invoke(habit_module.app, ["list", "--filter", "completed"])
    assert "Once" in completed.stdout
    assert "Daily" not in completed.stdout

    active = runner.invoke(habit_module.app, ["list", "-f", "active"])
    assert "Daily" in active.stdout
    assert "Once" not in active.stdout


def test_list_empty():
    result = runner.invoke(habit_module.app, ["list"])
    assert result.exit_code == 0
    assert "No habits to show" in result.stdout


def test_stats_and_profile():
    runner.invoke(habit_module.app, ["add", "Read", "-t", "5"])
    runner.invoke(habit_module.app, ["done", "1"])

    stats = runner.invoke(habit_module.app, ["stats"])
    assert stats.exit_code == 0
    assert "HABIT STATISTICS" in stats.stdout
    assert "1. Read" in stats.stdout

    profile = runner.invoke(habit_module.app, ["profile"])
    assert profile.exit_code == 0
    assert "Test User" in profile.stdout


def test_clear_with_force(data_file):
    runner.invoke(habit_module.app, ["add", "Read", "-t", "5"])
    aborted = runner.invoke(habit_module.app, ["clear"])
    assert "aborted" in aborted.stdout
    result = runner.invoke(habit_module.app, ["clear", "--force"])
    assert result.exit_code == 0
    assert reopen(data_file).habits == []


def test_remind_once_uses_the_given_tracker(data_file, tmp_path):
    reopen(data_file).add_habit("FromConfigFile", 3)
    empty = HabitTracker(tmp_path / "other.json")
    assert habit_module.remind_once(empty) is None


def test_remind_once_loads_configured_tracker(data_file):
    reopen(data_file).add_habit("Stretch", 3)
    assert habit_module.remind_once() == "Stretch"
