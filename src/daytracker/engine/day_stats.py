"""Per-day statistics.

Provides the productive / other / unaccounted time breakdown for one day
and the wake-up and bedtime markers.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from daytracker.tracker.models import Day, TaskCatalog

from .timeclock import compute_duration_minutes, format_duration, parse_clock_time, sort_activities

logger = logging.getLogger(__name__)

EARLY_WAKE_HOUR = 6
EARLY_SLEEP_HOUR = 22


@dataclass
class DayStats:
    """Time breakdown for a single day."""

    productive_minutes: int  # "work and growth" tasks
    other_minutes: int  # everything else with a duration
    logged_minutes: int
    day_minutes: int  # first start to last end (or last start)
    activity_count: int

    @property
    def unaccounted_minutes(self) -> int:
        return max(0, self.day_minutes - self.logged_minutes)

    @property
    def productive_ratio(self) -> float:
        return self.productive_minutes / self.day_minutes if self.day_minutes > 0 else 0.0

    @property
    def other_ratio(self) -> float:
        return self.other_minutes / self.day_minutes if self.day_minutes > 0 else 0.0

    def summary(self) -> str:
        """One-line summary for display."""
        if self.activity_count == 0:
            return "No activities logged."
        return (
            f"Day span {format_duration(self.day_minutes)}: "
            f"{format_duration(self.productive_minutes)} work & growth "
            f"({self.productive_ratio:.0%}), "
            f"{format_duration(self.other_minutes)} other, "
            f"{format_duration(self.unaccounted_minutes)} unaccounted."
        )


@dataclass(frozen=True)
class TimeMarker:
    """When a marker task (wake up, sleep) happened and whether it was early."""

    time: str
    early: bool


def compute_day_stats(day: Day, catalog: TaskCatalog) -> DayStats:
    """Compute the time breakdown for a day.

    Args:
        day: Day to analyze
        catalog: Task catalog deciding which tasks are productive or point-in-time

    Returns:
        DayStats with all totals in minutes
    """
    activities = sort_activities(day.activities)

    productive = other = logged = 0
    for activity in activities:
        duration = compute_duration_minutes(activity.start_time, activity.end_time)
        if duration <= 0:
            continue
        if catalog.is_productive(activity.task):
            productive += duration
        elif not catalog.is_point_in_time(activity.task):
            other += duration
        logged += duration

    day_minutes = 0
    if activities:
        first, last = activities[0], activities[-1]
        day_minutes = compute_duration_minutes(first.start_time, last.end_time or last.start_time)

    return DayStats(
        productive_minutes=productive,
        other_minutes=other,
        logged_minutes=logged,
        day_minutes=day_minutes,
        activity_count=len(activities),
    )


def _marker(day: Day, task: str, early_before_hour: int) -> TimeMarker | None:
    activity = next((a for a in day.activities if a.task == task), None)
    if activity is None:
        return None
    parsed = parse_clock_time(activity.start_time)
    if parsed is None:
        return None
    return TimeMarker(time=activity.start_time, early=parsed.hour < early_before_hour)


def wake_up_status(day: Day) -> TimeMarker | None:
    """Wake-up time for the day, early when before 6 AM."""
    return _marker(day, "Wake up", EARLY_WAKE_HOUR)


def sleep_status(day: Day) -> TimeMarker | None:
    """Bedtime for the day, early when before 10 PM."""
    return _marker(day, "Sleep", EARLY_SLEEP_HOUR)


def greeting(now: datetime) -> tuple[str, str]:
    """Title and subtitle greeting for the time of day."""
    if now.hour < 12:
        return "Good Morning!", "Seize the day and make it yours."
    if now.hour < 17:
        return "Good Afternoon!", "Keep up the great momentum."
    return "Good Evening!", "Time to reflect and unwind."


__all__ = [
    "DayStats",
    "TimeMarker",
    "compute_day_stats",
    "greeting",
    "sleep_status",
    "wake_up_status",
]
