"""Consecutive-day streaks over the logged days.

Dates are handled as plain calendar dates, so no local timezone offset can
shift a day across a boundary. "Today" is always supplied by the caller;
when omitted it is the current UTC date.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

from daytracker.tracker.models import Day

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StreakResult:
    """Current and longest streak for a task filter."""

    current_streak: int
    longest_streak: int


@dataclass(frozen=True)
class TopStreak:
    """The task with the best longest streak."""

    task: str
    streak: int


def utc_today(now: datetime | None = None) -> date:
    """Calendar date of the given instant (or now) in UTC."""
    now = now or datetime.now(UTC)
    if now.tzinfo is not None:
        now = now.astimezone(UTC)
    return now.date()


def qualifying_dates(days: Iterable[Day], task: str | None) -> list[date]:
    """Sorted unique dates of days that count toward a streak.

    Args:
        days: Logged days
        task: Task name that must appear in a day, or None to count every day

    Returns:
        Ascending list of dates
    """
    dates: set[date] = set()
    for day in days:
        if task is not None and not day.has_task(task):
            continue
        try:
            dates.add(day.calendar_date)
        except ValueError:
            logger.warning(f"Skipping day with invalid date '{day.date}'")
    return sorted(dates)


def longest_run(dates: list[date]) -> int:
    """Length of the longest run of consecutive dates in a sorted list."""
    if not dates:
        return 0

    longest = current = 1
    for previous, following in zip(dates, dates[1:]):
        if following - previous == ONE_DAY:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def current_run(dates: list[date], today: date) -> int:
    """Length of the run ending at the latest date, if that date is today or yesterday."""
    if not dates or dates[-1] not in (today, today - ONE_DAY):
        return 0

    streak = 1
    for index in range(len(dates) - 1, 0, -1):
        if dates[index] - dates[index - 1] != ONE_DAY:
            break
        streak += 1
    return streak


def compute_streaks(
    days: Iterable[Day],
    task: str | None = None,
    today: date | None = None,
) -> StreakResult:
    """Compute current and longest streaks.

    A streak is a run of consecutive calendar dates. The current streak is
    only alive while its last date is today or yesterday.

    Args:
        days: Logged days
        task: Task filter, None for the overall streak
        today: Reference date for liveness (defaults to the UTC date now)

    Returns:
        StreakResult, (0, 0) when no day qualifies
    """
    today = today or utc_today()
    dates = qualifying_dates(days, task)
    return StreakResult(
        current_streak=current_run(dates, today),
        longest_streak=longest_run(dates),
    )


def top_streak(
    days: Iterable[Day],
    tasks: Iterable[str],
    today: date | None = None,
) -> TopStreak | None:
    """Find the task with the highest longest streak.

    Ties go to the task listed first. Returns None if no task has a streak.
    """
    days = list(days)
    best: TopStreak | None = None
    for task in tasks:
        longest = compute_streaks(days, task, today).longest_streak
        if longest > 0 and (best is None or longest > best.streak):
            best = TopStreak(task=task, streak=longest)
    return best


__all__ = [
    "StreakResult",
    "TopStreak",
    "compute_streaks",
    "current_run",
    "longest_run",
    "qualifying_dates",
    "top_streak",
    "utc_today",
]
