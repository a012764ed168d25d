"""Logging reminders.

Periodically checks today's log and nudges the user when nothing has been
logged for a while.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from daytracker.engine.timeclock import parse_clock_time, sort_activities
from daytracker.tracker.models import Day

logger = logging.getLogger(__name__)

REMINDER_TITLE = "Day Tracker Reminder"
IDLE_MESSAGE = "Gentle reminder: What have you been up to for the last hour? Don't forget to log it!"
EMPTY_DAY_MESSAGE = "Ready to start your day? Log your first activity!"

DEFAULT_INTERVAL_MINUTES = 20
DEFAULT_IDLE_THRESHOLD_MINUTES = 60


@dataclass(frozen=True)
class Reminder:
    """A reminder to show the user."""

    title: str
    body: str


Notifier = Callable[[Reminder], None]


class ReminderChecker:
    """Decides whether a reminder is due."""

    def __init__(
        self,
        enabled: bool = True,
        idle_threshold_minutes: int = DEFAULT_IDLE_THRESHOLD_MINUTES,
    ) -> None:
        """Initialize checker.

        Args:
            enabled: Whether the user allowed reminders
            idle_threshold_minutes: Idle time before nudging
        """
        self.enabled = enabled
        self._idle_threshold = timedelta(minutes=idle_threshold_minutes)

    def check(self, days: Iterable[Day], now: datetime) -> Reminder | None:
        """Check today's log.

        Args:
            days: Logged days
            now: Current local time

        Returns:
            Reminder to show, or None
        """
        if not self.enabled:
            return None

        today_key = now.date().isoformat()
        today = next((d for d in days if d.date == today_key), None)
        if today is None:
            return None

        if not today.activities:
            return Reminder(REMINDER_TITLE, EMPTY_DAY_MESSAGE)

        last = sort_activities(today.activities)[-1]
        started = parse_clock_time(last.start_time)
        if started is None:
            return None

        started_at = now.replace(hour=started.hour, minute=started.minute, second=0, microsecond=0)
        if now - started_at > self._idle_threshold:
            return Reminder(REMINDER_TITLE, IDLE_MESSAGE)
        return None


class ReminderScheduler:
    """Runs the reminder check on a background timer."""

    def __init__(
        self,
        checker: ReminderChecker,
        days_provider: Callable[[], Iterable[Day]],
        notifier: Notifier,
        interval_minutes: float = DEFAULT_INTERVAL_MINUTES,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._checker = checker
        self._days_provider = days_provider
        self._notifier = notifier
        self._interval = interval_minutes * 60
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> Reminder | None:
        """Run a single check and deliver any reminder."""
        try:
            reminder = self._checker.check(self._days_provider(), self._clock())
        except Exception as e:
            logger.error(f"Reminder check failed: {e}")
            return None

        if reminder:
            logger.info(f"Sending reminder: {reminder.body}")
            self._notifier(reminder)
        return reminder

    def _loop(self) -> None:
        while not self._stop_event.wait(self._interval):
            self.run_once()

    def start(self) -> None:
        """Start checking in the background."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="reminders", daemon=True)
        self._thread.start()
        logger.info(f"Reminders every {self._interval / 60:.0f} minutes")

    def stop(self) -> None:
        """Stop checking."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=1.0)
            self._thread = None


__all__ = [
    "EMPTY_DAY_MESSAGE",
    "IDLE_MESSAGE",
    "Notifier",
    "Reminder",
    "ReminderChecker",
    "ReminderScheduler",
]
