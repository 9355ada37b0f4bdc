# habitlog/utils/shared_utils.py
'''
Date and time helpers shared by the habit model, the store and the CLI.
All calendar arithmetic uses the local clock.
'''

from datetime import date, datetime, time, timedelta
import math
from typing import Optional, Union

DateLike = Union[date, datetime]


def now_local() -> datetime:
    """
    Return the current local time as a naive datetime.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def to_day(value: DateLike) -> date:
    """
    Strip the time-of-day from a date or datetime.
    Aware datetimes are converted to local time first.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def start_of_week(reference: DateLike) -> date:
    """
    Monday of the week containing `reference` (Sunday belongs to the week that started six days earlier).
    """
    day = to_day(reference)
    return day - timedelta(days=day.weekday())


def end_of_week(reference: DateLike) -> date:
    return start_of_week(reference) + timedelta(days=6)


def start_of_day(value: DateLike) -> datetime:
    return datetime.combine(to_day(value), time.min)


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO-8601 string, accepting a trailing 'Z' and plain dates.
    Raises ValueError on anything else.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Not an ISO date string: {value!r}")
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def days_since(start: DateLike, now: Optional[datetime] = None) -> int:
    """
    Whole days elapsed since `start`, rounded up.
    """
    now = now or now_local()
    if not isinstance(start, datetime):
        start = start_of_day(start)
    if start.tzinfo is not None and now.tzinfo is None:
        now = now.astimezone()
    elif start.tzinfo is None and now.tzinfo is not None:
        start = start.astimezone()
    seconds = abs((now - start).total_seconds())
    return math.ceil(seconds / 86400)


def format_date_for_user(value: Optional[DateLike]) -> str:
    if value is None:
        return "-"
    return to_day(value).strftime("%d %b %Y")
