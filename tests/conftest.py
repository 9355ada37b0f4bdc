# tests/conftest.py

import pytest
import toml
import typer
from rich.prompt import Confirm

import habitlog.config.config_manager as cfg
from habitlog.utils import log_utils
from habitlog.utils.db.habit_store import HabitTracker


@pytest.fixture(autouse=True)
def _stub_typer_prompts(monkeypatch):
    """
    Silence every interactive question coming from typer.confirm,
    typer.prompt, and rich.prompt.Confirm.ask so tests run headless.
    """
    monkeypatch.setattr(typer, "confirm", lambda *a, **k: False)
    monkeypatch.setattr(Confirm, "ask", lambda *a, **k: False)
    monkeypatch.setattr(typer, "prompt", lambda *a, **k: "")
    yield


@pytest.fixture(autouse=True)
def temp_config(tmp_path, monkeypatch):
    """
    Point BASE_DIR/USER_CONFIG at tmp_path and write a config with reminders off,
    so no test touches ~/.habitlog.
    """
    base = tmp_path / "habitlog_home"
    monkeypatch.setattr(cfg, "BASE_DIR", base)
    monkeypatch.setattr(cfg, "USER_CONFIG", base / "config.toml")
    monkeypatch.delenv("HABITLOG_DATA_PATH", raising=False)
    monkeypatch.setattr(log_utils, "setup_logging", lambda *a, **k: None)

    base.mkdir(parents=True)
    (base / "config.toml").write_text(toml.dumps({
        "profile": {"name": "Test User"},
        "storage": {"data_file": "habits-data.json"},
        "reminder": {"enabled": False, "interval_seconds": 10},
        "logging": {"level": "DEBUG"},
    }), encoding="utf-8")
    yield base / "config.toml"


@pytest.fixture
def data_file(tmp_path, monkeypatch):
    path = tmp_path / "habits-data.json"
    monkeypatch.setenv("HABITLOG_DATA_PATH", str(path))
    return path


@pytest.fixture
def tracker(data_file):
    return HabitTracker(data_file, profile_name="Test User")


