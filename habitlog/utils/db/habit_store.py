# habitlog/utils/db/habit_store.py
'''
HabitTracker - owns the ordered habit list, its 1-based positional indices,
derived statistics and the JSON file that persists them.

Indices always refer to the current order and shift down after a delete;
callers must re-list before reusing an index across mutations.
'''
from datetime import date
import logging
from pathlib import Path
import random
import threading
from typing import List, Optional, Tuple

import habitlog.config.config_manager as cf
from habitlog.utils.db.models import (
    CompletionOutcome, CompletionResult, Habit, HabitFilter, HabitStats,
    ProfileSummary, UserProfile, build_profile_summary, compute_stats,
)
from habitlog.utils.db.persistence import load_state, save_state
from habitlog.utils.error_handler import HabitNotFoundError
from habitlog.utils.reminders import select_reminder
from habitlog.utils.shared_utils import DateLike, to_day, today_local

logger = logging.getLogger(__name__)

DEMO_HABITS = [
    ("Drink 8 glasses of water", 7),
    ("Read a book for 30 minutes", 5),
    ("Morning workout", 4),
    ("Meditate", 7),
    ("Practice programming", 5),
]


class HabitTracker:
    def __init__(self, data_file: Path, profile_name: str = cf.DEFAULT_PROFILE_NAME):
        self.data_file = Path(data_file)
        self._lock = threading.RLock()
        default_profile = UserProfile(name=profile_name)
        self._profile, self._habits = load_state(self.data_file, default_profile)

    @classmethod
    def from_config(cls) -> "HabitTracker":
        return cls(cf.get_data_file(), cf.get_profile_name())

    # ===== READ ACCESS =====

    @property
    def habits(self) -> List[Habit]:
        """Snapshot of the current habit order."""
        with self._lock:
            return list(self._habits)

    @property
    def profile(self) -> UserProfile:
        return self._profile

    def __len__(self) -> int:
        with self._lock:
            return len(self._habits)

    def get_habit(self, index: int) -> Habit:
        """Resolve a 1-based index against the current order."""
        with self._lock:
            if isinstance(index, bool) or not isinstance(index, int):
                raise HabitNotFoundError(index)
            if not 1 <= index <= len(self._habits):
                raise HabitNotFoundError(index)
            return self._habits[index - 1]

    def filter_habits(self, kind: HabitFilter = HabitFilter.ALL,
                      today: Optional[DateLike] = None) -> List[Tuple[int, Habit]]:
        """
        (original_index, habit) pairs matching `kind`, in list order.
        Indices point into the full list, not the filtered one.
        """
        kind = HabitFilter(kind)
        today = self._today(today)
        with self._lock:
            return [(i, h) for i, h in enumerate(self._habits, start=1)
                    if h.matches(kind, today)]

    def aggregate_stats(self, today: Optional[DateLike] = None) -> HabitStats:
        today = self._today(today)
        with self._lock:
            return compute_stats(self._habits, today)

    def profile_summary(self, today: Optional[DateLike] = None) -> ProfileSummary:
        today = self._today(today)
        with self._lock:
            return build_profile_summary(self._profile, self._habits, today)

    def pending_reminder(self, today: Optional[DateLike] = None,
                         rng: Optional[random.Random] = None) -> Optional[str]:
        today = self._today(today)
        with self._lock:
            return select_reminder(self._habits, today, rng)

    # ===== CRUD OPERATIONS =====

    def add_habit(self, name: str, target_frequency: int) -> Habit:
        """
        Append a new habit. The Habit constructor validates the input and
        raises ValidationError; numeric strings from prompts are accepted.
        """
        with self._lock:
            habit = Habit(name=name, target_frequency=target_frequency)
            self._habits.append(habit)
            self.save()
        logger.info(f"Added habit {habit.id} '{habit.name}' ({habit.target_frequency}x/week)")
        return habit

    def complete_habit(self, index: int, today: Optional[DateLike] = None) -> CompletionResult:
        today = self._today(today)
        with self._lock:
            habit = self.get_habit(index)
            if habit.mark_complete(today):
                self.save()
                outcome = CompletionOutcome.NEWLY_COMPLETED
                logger.info(f"Habit {habit.id} completed for {today.isoformat()}")
            else:
                outcome = CompletionOutcome.ALREADY_COMPLETED
        return CompletionResult(outcome=outcome, habit_name=habit.name, index=index)

    def delete_habit(self, index: int) -> str:
        with self._lock:
            habit = self.get_habit(index)
            del self._habits[index - 1]
            self.save()
        logger.info(f"Deleted habit {habit.id} '{habit.name}'")
        return habit.name

    def clear(self) -> None:
        with self._lock:
            self._habits = []
            self.save()
        logger.info("Cleared all habits")

    def seed_demo_data(self, today: Optional[DateLike] = None) -> List[Habit]:
        """Add the demo habits and complete the first two for today."""
        today = self._today(today)
        with self._lock:
            offset = len(self._habits)
            added = [self.add_habit(name, target) for name, target in DEMO_HABITS]
            self.complete_habit(offset + 1, today)
            self.complete_habit(offset + 2, today)
        return added

    # ===== FILE OPERATIONS =====

    def save(self) -> bool:
        """Persist the current state; failures are logged and leave memory authoritative."""
        with self._lock:
            ok = save_state(self.data_file, self._profile, self._habits)
        if not ok:
            logger.warning("Habit changes are kept in memory only for this operation")
        return ok

    @staticmethod
    def _today(today: Optional[DateLike]) -> date:
        return to_day(today) if today is not None else today_local()
