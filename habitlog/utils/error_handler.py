# habitlog/utils/error_handler.py
"""
Centralized error handling and validation for habitlog.
"""
import logging
from functools import wraps
from typing import Any

import typer
from rich.console import Console

console = Console()
logger = logging.getLogger(__name__)

MIN_TARGET_FREQUENCY = 1
MAX_TARGET_FREQUENCY = 7


class ValidationError(ValueError):
    """Raised when habit input fails validation."""
    pass


class HabitNotFoundError(LookupError):
    """Raised when a 1-based habit index resolves to nothing."""

    def __init__(self, index: Any):
        super().__init__(f"Habit #{index} not found")
        self.index = index


class PersistenceError(Exception):
    """Base class for habit file failures."""
    pass


class PersistenceReadError(PersistenceError):
    """Raised when the habit file cannot be read or parsed."""
    pass


class PersistenceWriteError(PersistenceError):
    """Raised when the habit file cannot be written."""
    pass


def handle_cli_errors(operation_name: str):
    """Decorator for consistent error reporting in CLI commands."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ValidationError as e:
                logger.warning(f"{operation_name} - Validation error: {e}")
                console.print(f"[red]✗ {e}[/red]")
                raise typer.Exit(code=1)
            except HabitNotFoundError as e:
                logger.warning(f"{operation_name} - {e}")
                console.print(f"[red]✗ {e}[/red]")
                raise typer.Exit(code=1)
            except typer.Exit:
                raise
            except Exception as e:
                logger.error(f"{operation_name} - Unexpected error: {e}", exc_info=True)
                console.print(f"[red]Unexpected error in {operation_name}[/red]")
                raise
        return wrapper
    return decorator


def validate_name(name: Any) -> str:
    """Strip a habit name and reject blank values."""
    if not isinstance(name, str):
        raise ValidationError("Habit name must be text")
    name = name.strip()
    if not name:
        raise ValidationError("Habit name is required")
    return name


def validate_target_frequency(value: Any) -> int:
    """Accept ints or numeric strings in [1, 7]."""
    if isinstance(value, bool):
        raise ValidationError("Target must be a whole number between 1-7")
    if isinstance(value, str):
        value = value.strip()
    try:
        target = int(value)
    except (ValueError, TypeError):
        raise ValidationError("Target must be a whole number between 1-7")
    if isinstance(value, float) and value != target:
        raise ValidationError("Target must be a whole number between 1-7")
    if not MIN_TARGET_FREQUENCY <= target <= MAX_TARGET_FREQUENCY:
        raise ValidationError(
            f"Target must be between {MIN_TARGET_FREQUENCY}-{MAX_TARGET_FREQUENCY}")
    return target


def safe_convert_to_int(value: Any, field_name: str) -> int:
    """Convert user input to an integer, raising ValidationError on junk."""
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: must be a valid integer")
