# habitlog/utils/db/models.py
from enum import Enum
from typing import List, Optional, Union
from dataclasses import dataclass, field
from datetime import date, datetime
import uuid

from habitlog.utils.error_handler import validate_name, validate_target_frequency
from habitlog.utils.shared_utils import (
    DateLike, days_since, end_of_week, start_of_week, to_day,
)


class HabitStatus(Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class HabitFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class CompletionOutcome(Enum):
    NEWLY_COMPLETED = "newly_completed"
    ALREADY_COMPLETED = "already_completed"


def new_habit_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Habit:
    name: str
    target_frequency: int
    id: Union[str, int] = field(default_factory=new_habit_id)
    completions: List[date] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        self.name = validate_name(self.name)
        self.target_frequency = validate_target_frequency(self.target_frequency)
        # one entry per calendar day, first occurrence wins
        days: List[date] = []
        for value in self.completions:
            day = to_day(value)
            if day not in days:
                days.append(day)
        self.completions = days

    def is_completed_on(self, day: DateLike) -> bool:
        return to_day(day) in self.completions

    def mark_complete(self, today: DateLike) -> bool:
        """
        Record a completion for the calendar day of `today`.
        Returns True if newly completed, False if that day was already recorded.
        """
        day = to_day(today)
        if day in self.completions:
            return False
        self.completions.append(day)
        return True

    def weekly_completion_count(self, reference_date: DateLike) -> int:
        """
        Completions falling in the Monday-Sunday week containing `reference_date`.
        """
        week_start = start_of_week(reference_date)
        week_end = end_of_week(reference_date)
        return sum(1 for day in self.completions if week_start <= day <= week_end)

    def is_on_target(self, reference_date: DateLike) -> bool:
        return self.weekly_completion_count(reference_date) >= self.target_frequency

    def progress_percentage(self, reference_date: DateLike) -> int:
        ratio = min(self.weekly_completion_count(reference_date) / self.target_frequency, 1.0)
        return max(0, min(100, int(round(ratio * 100))))

    def status(self, reference_date: DateLike) -> HabitStatus:
        if self.is_on_target(reference_date):
            return HabitStatus.COMPLETED
        return HabitStatus.ACTIVE

    def matches(self, kind: HabitFilter, reference_date: DateLike) -> bool:
        if kind == HabitFilter.ALL:
            return True
        on_target = self.is_on_target(reference_date)
        return on_target if kind == HabitFilter.COMPLETED else not on_target


@dataclass
class UserProfile:
    name: str
    join_date: datetime = field(default_factory=datetime.now)


@dataclass
class ProfileSummary:
    name: str
    join_date: datetime
    days_joined: int
    total_habits: int
    completed_this_week: int


def build_profile_summary(profile: UserProfile, habits: List[Habit], today: DateLike,
                          now: Optional[datetime] = None) -> ProfileSummary:
    """
    Derive the profile counters from the current habits; nothing here is cached.
    """
    return ProfileSummary(
        name=profile.name,
        join_date=profile.join_date,
        days_joined=days_since(profile.join_date, now),
        total_habits=len(habits),
        completed_this_week=sum(1 for h in habits if h.is_on_target(today)),
    )


@dataclass
class HabitStats:
    total: int = 0
    active: int = 0
    completed: int = 0
    total_weekly_completions: int = 0
    names: List[str] = field(default_factory=list)


def compute_stats(habits: List[Habit], today: DateLike) -> HabitStats:
    stats = HabitStats()
    for habit in habits:
        weekly = habit.weekly_completion_count(today)
        stats.total += 1
        stats.total_weekly_completions += weekly
        if weekly >= habit.target_frequency:
            stats.completed += 1
        else:
            stats.active += 1
        stats.names.append(habit.name)
    return stats


@dataclass
class CompletionResult:
    outcome: CompletionOutcome
    habit_name: str
    index: int

    @property
    def success(self) -> bool:
        return self.outcome == CompletionOutcome.NEWLY_COMPLETED

    @property
    def message(self) -> str:
        if self.success:
            return f'Habit "{self.habit_name}" marked complete for today!'
        return f'Habit "{self.habit_name}" is already complete today!'
