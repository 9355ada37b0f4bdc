# habitlog/config/config_manager.py
'''
config_manager.py - Configuration management for habitlog
'''
from importlib.resources import files
import logging
import os
from pathlib import Path
from typing import Any
import toml


logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "habits-data.json"
DEFAULT_PROFILE_NAME = "Habitlog User"
DEFAULT_REMINDER_INTERVAL = 10.0

if "BASE_DIR" not in globals():
    _xdg = os.getenv("XDG_CONFIG_HOME")
    BASE_DIR = Path(_xdg) if _xdg else Path.home() / ".habitlog"

if "USER_CONFIG" not in globals():
    USER_CONFIG = BASE_DIR / "config.toml"

if "DEFAULT_CONFIG" not in globals():
    # the shipped defaults, read from the package resources
    DEFAULT_CONFIG = files("habitlog.config") \
        .joinpath("config.toml") \
        .read_text(encoding="utf-8")


def load_config() -> dict:
    """
    Load the user configuration from USER_CONFIG file.
    - If the config directory or file does not exist, create them with defaults.
    - Returns a dict parsed from TOML; on error, logs and returns empty dict.
    """
    try:
        BASE_DIR.mkdir(parents=True, exist_ok=True)
        if not USER_CONFIG.exists():
            try:
                USER_CONFIG.write_text(DEFAULT_CONFIG, encoding="utf-8")
            except Exception as e:
                logger.error(
                    f"Failed to write default config to {USER_CONFIG}: {e}", exc_info=True)
        try:
            text = USER_CONFIG.read_text(encoding="utf-8")
        except Exception as e:
            logger.error(
                f"Failed to read config file {USER_CONFIG}: {e}", exc_info=True)
            return {}
        try:
            return toml.loads(text)
        except Exception as e:
            logger.error(
                f"Failed to parse TOML from {USER_CONFIG}: {e}", exc_info=True)
            return {}
    except Exception as e:
        logger.error(f"Unexpected error in load_config: {e}", exc_info=True)
        return {}


def get_config_value(section: str, key: str, default=None) -> Any:
    """
    Return value for [section][key] in config, or default if missing.
    """
    sec = load_config().get(section, {})
    if not isinstance(sec, dict):
        return default
    return sec.get(key, default)


def get_data_file() -> Path:
    """
    Return the path of the habits JSON file.
    HABITLOG_DATA_PATH wins over [storage].data_file; relative paths resolve under BASE_DIR.
    """
    env_path = os.getenv("HABITLOG_DATA_PATH")
    if env_path:
        return Path(env_path).expanduser()
    raw = get_config_value("storage", "data_file", DEFAULT_DATA_FILE)
    if not isinstance(raw, str) or not raw.strip():
        logger.warning(
            f"[storage].data_file is not a usable path: {raw!r}. Using default.")
        raw = DEFAULT_DATA_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = BASE_DIR / path
    return path


def get_reminder_interval() -> float:
    """
    Return [reminder].interval_seconds as a positive float (default 10).
    """
    val = get_config_value("reminder", "interval_seconds",
                           DEFAULT_REMINDER_INTERVAL)
    try:
        interval = float(val)
    except (TypeError, ValueError):
        logger.warning(
            f"Reminder interval is not a number: {val!r}. Using {DEFAULT_REMINDER_INTERVAL}.")
        return DEFAULT_REMINDER_INTERVAL
    if interval <= 0:
        logger.warning(
            f"Reminder interval must be positive, got {interval}. Using {DEFAULT_REMINDER_INTERVAL}.")
        return DEFAULT_REMINDER_INTERVAL
    return interval


def is_reminder_enabled() -> bool:
    return bool(get_config_value("reminder", "enabled", True))


def get_profile_name() -> str:
    """
    Return [profile].name, falling back to a generic name when blank.
    """
    name = get_config_value("profile", "name", DEFAULT_PROFILE_NAME)
    if not isinstance(name, str) or not name.strip():
        return DEFAULT_PROFILE_NAME
    return name.strip()


def get_log_level() -> str:
    level = get_config_value("logging", "level", "INFO")
    return level if isinstance(level, str) else "INFO"
