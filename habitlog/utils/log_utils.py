# habitlog/utils/log_utils.py

import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
from typing import Optional, Union


def setup_logging(level: Union[int, str] = logging.INFO, log_dir: Optional[Path] = None):
    """
    Configure root logger with:
     - RotatingFileHandler writing to ~/.habitlog/logs/habitlog.log
     - StreamHandler to console
    Idempotent: calling multiple times won't add duplicate handlers.
    Optional `level` param can be numeric or string (e.g., logging.DEBUG or "DEBUG").
    """
    log_dir = log_dir or Path.home() / ".habitlog" / "logs"
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except Exception as e:
        # If directory creation fails, log to console only
        print(f"WARNING: Could not create log directory {log_dir}: {e}")
        _configure_console_logging(level)
        return

    root_logger = logging.getLogger()
    level = _resolve_level(level)
    root_logger.setLevel(level)

    existing_handlers = list(root_logger.handlers)

    # 1) RotatingFileHandler: only add if not already present for our log file
    file_log_path = log_dir / "habitlog.log"
    add_file = True
    for h in existing_handlers:
        if isinstance(h, RotatingFileHandler):
            base = getattr(h, 'baseFilename', None)
            if base and os.path.abspath(base) == os.path.abspath(file_log_path):
                add_file = False
                break
    if add_file:
        try:
            file_handler = RotatingFileHandler(
                file_log_path,
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            file_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            file_handler.setFormatter(file_formatter)
            file_handler.setLevel(level)
            root_logger.addHandler(file_handler)
        except Exception as e:
            print(f"WARNING: Could not set up file logging: {e}")

    # 2) Console handler: warnings and up only, the menu owns the terminal
    add_console = True
    for h in existing_handlers:
        if type(h) is logging.StreamHandler:
            add_console = False
            break
    if add_console:
        try:
            console_handler = logging.StreamHandler()
            console_formatter = logging.Formatter(
                '%(levelname)s - %(message)s')
            console_handler.setFormatter(console_formatter)
            console_handler.setLevel(max(level, logging.WARNING))
            root_logger.addHandler(console_handler)
        except Exception as e:
            print(f"WARNING: Could not set up console logging: {e}")


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    if isinstance(level, int):
        return level
    return logging.INFO


def _configure_console_logging(level: Union[int, str] = logging.INFO):
    """
    Fallback: configure only console logging if file handler cannot be created.
    """
    root_logger = logging.getLogger()
    level = _resolve_level(level)
    root_logger.setLevel(level)

    for h in root_logger.handlers:
        if type(h) is logging.StreamHandler:
            return

    console_handler = logging.StreamHandler()
    console_formatter = logging.Formatter('%(levelname)s - %(message)s')
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)
