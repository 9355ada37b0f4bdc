# habitlog/utils/reminders.py
'''
Reminder selection and the background timer that drives it.
'''
import logging
import random
import threading
from typing import Callable, Iterable, List, Optional

from habitlog.utils.db.models import Habit
from habitlog.utils.shared_utils import DateLike

logger = logging.getLogger(__name__)


def reminder_candidates(habits: Iterable[Habit], today: DateLike) -> List[Habit]:
    """Habits with no completion recorded for today's calendar day."""
    return [h for h in habits if not h.is_completed_on(today)]


def select_reminder(habits: Iterable[Habit], today: DateLike,
                    rng: Optional[random.Random] = None) -> Optional[str]:
    """
    Pick one reminder candidate uniformly at random and return its name,
    or None when every habit is already done today.
    """
    candidates = reminder_candidates(habits, today)
    if not candidates:
        return None
    chooser = rng or random
    return chooser.choice(candidates).name


class ReminderScheduler:
    """
    Calls `check` every `interval` seconds on a daemon thread and hands any
    non-None result to `notify`.
    """

    def __init__(self, interval: float, check: Callable[[], Optional[str]],
                 notify: Callable[[str], None]):
        if interval <= 0:
            raise ValueError("Reminder interval must be positive")
        self.interval = interval
        self._check = check
        self._notify = notify
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Start the timer; returns False if it was already running."""
        if self.running:
            return False
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="habitlog-reminders", daemon=True)
        self._thread.start()
        logger.info(f"Reminder scheduler started (every {self.interval:g}s)")
        return True

    def stop(self, timeout: Optional[float] = None) -> bool:
        """Stop the timer; returns False if it was not running."""
        if self._thread is None:
            return False
        self._stop_event.set()
        self._thread.join(timeout)
        self._thread = None
        logger.info("Reminder scheduler stopped")
        return True

    def tick(self) -> Optional[str]:
        """Run one reminder check synchronously."""
        try:
            name = self._check()
            if name is not None:
                self._notify(name)
            return name
        except Exception as e:
            logger.error(f"Reminder check failed: {e}", exc_info=True)
            return None

    def _run(self):
        while not self._stop_event.wait(self.interval):
            self.tick()
