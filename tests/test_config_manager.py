# tests/test_config_manager.py

from pathlib import Path

import toml

import habitlog.config.config_manager as cfg


def set_value(config_path, section, key, value):
    doc = toml.loads(config_path.read_text(encoding="utf-8"))
    doc.setdefault(section, {})[key] = value
    config_path.write_text(toml.dumps(doc), encoding="utf-8")


def test_load_config_creates_file_from_defaults(temp_config):
    temp_config.unlink()
    conf = cfg.load_config()
    assert temp_config.exists()
    assert conf["reminder"]["interval_seconds"] == 10
    assert conf["storage"]["data_file"] == "habits-data.json"


def test_get_config_value(temp_config):
    set_value(temp_config, "profile", "name", "  Daud ")
    assert cfg.get_config_value("profile", "name") == "  Daud "
    assert cfg.get_profile_name() == "Daud"
    assert cfg.get_config_value("profile", "missing", default="xyz") == "xyz"


def test_broken_toml_falls_back_to_defaults(temp_config):
    temp_config.write_text("this is = = not toml", encoding="utf-8")
    assert cfg.load_config() == {}
    assert cfg.get_reminder_interval() == cfg.DEFAULT_REMINDER_INTERVAL
    assert cfg.get_profile_name() == cfg.DEFAULT_PROFILE_NAME
    assert cfg.get_data_file() == cfg.BASE_DIR / cfg.DEFAULT_DATA_FILE


def test_data_file_resolution(temp_config, tmp_path, monkeypatch):
    assert cfg.get_data_file() == cfg.BASE_DIR / "habits-data.json"

    set_value(temp_config, "storage", "data_file", str(tmp_path / "elsewhere.json"))
    assert cfg.get_data_file() == tmp_path / "elsewhere.json"

    monkeypatch.setenv("HABITLOG_DATA_PATH", str(tmp_path / "env.json"))
    assert cfg.get_data_file() == Path(tmp_path / "env.json")


def test_reminder_settings(temp_config):
    assert cfg.is_reminder_enabled() is False
    set_value(temp_config, "reminder", "interval_seconds", 2.5)
    assert cfg.get_reminder_interval() == 2.5
    set_value(temp_config, "reminder", "interval_seconds", -4)
    assert cfg.get_reminder_interval() == cfg.DEFAULT_REMINDER_INTERVAL
    set_value(temp_config, "reminder", "interval_seconds", "soon")
    assert cfg.get_reminder_interval() == cfg.DEFAULT_REMINDER_INTERVAL


def test_default_config_is_valid_toml():
    parsed = toml.loads(cfg.DEFAULT_CONFIG)
    assert parsed["reminder"]["enabled"] is True
    assert parsed["logging"]["level"] == "INFO"
