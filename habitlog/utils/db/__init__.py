# habitlog/utils/db/__init__.py

"""
Habit models and the JSON persistence layer.
The HabitTracker store lives in habitlog.utils.db.habit_store.
"""

from habitlog.utils.db.models import (
    CompletionOutcome,
    CompletionResult,
    Habit,
    HabitFilter,
    HabitStats,
    HabitStatus,
    ProfileSummary,
    UserProfile,
)
from habitlog.utils.db.persistence import (
    deserialize,
    load_state,
    save_state,
    serialize,
)
