# habitlog/utils/db/persistence.py
'''
JSON snapshot of the profile and habit list.

Layout:
    {
      "userProfile": {"name", "joinDate", "totalHabits", "completedThisWeek"},
      "habits": [{"id", "name", "targetFrequency", "completions": [...], "createdAt"}]
    }
'''
from datetime import date, datetime
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from habitlog.utils.db.models import Habit, UserProfile, build_profile_summary
from habitlog.utils.error_handler import (
    PersistenceReadError, PersistenceWriteError, ValidationError,
)
from habitlog.utils.shared_utils import parse_iso_datetime, start_of_day, to_day, today_local

logger = logging.getLogger(__name__)


def habit_to_record(habit: Habit) -> Dict[str, Any]:
    return {
        "id": habit.id,
        "name": habit.name,
        "targetFrequency": habit.target_frequency,
        "completions": [start_of_day(day).isoformat() for day in habit.completions],
        "createdAt": habit.created_at.isoformat(),
    }


def serialize(profile: UserProfile, habits: List[Habit], today: Optional[date] = None) -> str:
    """
    Render the profile and habits as a JSON document.
    The profile counters are recomputed from `habits` at write time.
    """
    today = today or today_local()
    summary = build_profile_summary(profile, habits, today)
    data = {
        "userProfile": {
            "name": profile.name,
            "joinDate": profile.join_date.isoformat(),
            "totalHabits": summary.total_habits,
            "completedThisWeek": summary.completed_this_week,
        },
        "habits": [habit_to_record(h) for h in habits],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def _resolve_profile_name(raw: Dict[str, Any], default: UserProfile) -> str:
    name = raw.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return default.name


def _resolve_join_date(raw: Dict[str, Any], default: UserProfile) -> datetime:
    value = raw.get("joinDate")
    if value is None:
        return default.join_date
    try:
        return parse_iso_datetime(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unreadable joinDate {value!r}")
        return default.join_date


def profile_from_record(raw: Any, default: UserProfile) -> UserProfile:
    """
    Resolve each profile field on its own:
      name     -> stored non-blank string, else default.name
      joinDate -> stored ISO timestamp, else default.join_date
    Stored totalHabits/completedThisWeek are ignored; they are always derived.
    """
    if not isinstance(raw, dict):
        return UserProfile(name=default.name, join_date=default.join_date)
    return UserProfile(
        name=_resolve_profile_name(raw, default),
        join_date=_resolve_join_date(raw, default),
    )


def habit_from_record(raw: Dict[str, Any]) -> Habit:
    """
    Rebuild a Habit keeping its stored id and createdAt.
    Raises ValidationError for entries that cannot form a valid habit.
    """
    if not isinstance(raw, dict):
        raise ValidationError(f"Habit entry is not an object: {raw!r}")
    habit_id = raw.get("id")
    if habit_id is None or isinstance(habit_id, (dict, list)):
        raise ValidationError(f"Habit entry has no usable id: {raw!r}")

    completions_raw = raw.get("completions") or []
    if not isinstance(completions_raw, list):
        raise ValidationError(f"completions must be a list for habit {habit_id}")
    try:
        completions = [to_day(parse_iso_datetime(v)) for v in completions_raw]
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Bad completion date for habit {habit_id}: {e}")

    created_raw = raw.get("createdAt")
    if created_raw is None:
        logger.warning(f"Habit {habit_id} has no createdAt; using load time")
        created_at = datetime.now()
    else:
        try:
            created_at = parse_iso_datetime(created_raw)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Bad createdAt for habit {habit_id}: {e}")

    return Habit(
        id=habit_id,
        name=raw.get("name"),
        target_frequency=raw.get("targetFrequency"),
        completions=completions,
        created_at=created_at,
    )


def deserialize(raw: str, default_profile: UserProfile) -> Tuple[UserProfile, List[Habit]]:
    """
    Parse a JSON document produced by serialize().
    Raises PersistenceReadError when the document itself is unusable;
    individual bad habit entries are skipped with a warning.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise PersistenceReadError(f"Habit file is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise PersistenceReadError("Habit file must contain a JSON object")

    profile = profile_from_record(data.get("userProfile"), default_profile)

    entries = data.get("habits")
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise PersistenceReadError("'habits' must be a list")

    habits: List[Habit] = []
    for position, entry in enumerate(entries, start=1):
        try:
            habits.append(habit_from_record(entry))
        except ValidationError as e:
            logger.warning(f"Skipping habit entry #{position}: {e}")
    return profile, habits


def load_state(path: Path, default_profile: UserProfile) -> Tuple[UserProfile, List[Habit]]:
    """
    Load profile and habits from `path`.
    A missing file is a fresh install; any other failure is logged and yields empty state.
    """
    if not path.exists():
        logger.info(f"No habit file at {path}; starting fresh")
        return default_profile, []
    try:
        text = path.read_text(encoding="utf-8")
        profile, habits = deserialize(text, default_profile)
    except PersistenceReadError as e:
        logger.error(f"Failed to load habits from {path}: {e}", exc_info=True)
        return default_profile, []
    except Exception as e:
        logger.error(f"Failed to read habit file {path}: {e}", exc_info=True)
        return default_profile, []
    logger.info(f"Loaded {len(habits)} habit(s) from {path}")
    return profile, habits


def save_state(path: Path, profile: UserProfile, habits: List[Habit],
               today: Optional[date] = None) -> bool:
    """
    Write the snapshot to `path`.
    Returns False (after logging) on any failure; never raises.
    """
    try:
        text = serialize(profile, habits, today)
    except Exception as e:
        logger.error(f"Failed to serialize habits: {e}", exc_info=True)
        return False
    try:
        _write_text(path, text)
    except PersistenceWriteError as e:
        logger.error(str(e), exc_info=True)
        return False
    return True


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise PersistenceWriteError(f"Failed to write habits to {path}: {e}") from e
