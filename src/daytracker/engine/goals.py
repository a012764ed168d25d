"""Weekly goal progress.

Weeks start on Sunday.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from daytracker.tracker.models import Day, Goal


@dataclass(frozen=True)
class GoalProgress:
    """Progress toward a weekly goal."""

    goal: Goal
    completed: int
    days_left: int

    @property
    def remaining(self) -> int:
        return max(0, self.goal.frequency - self.completed)

    @property
    def achieved(self) -> bool:
        return self.completed >= self.goal.frequency

    @property
    def percentage(self) -> float:
        if self.goal.frequency <= 0:
            return 0.0
        return min(100.0, self.completed / self.goal.frequency * 100)


def _sunday_weekday(day: date) -> int:
    # date.weekday() is Monday=0; shift so Sunday=0
    return (day.weekday() + 1) % 7


def week_start(today: date) -> date:
    """The Sunday starting the week that contains today."""
    return today - timedelta(days=_sunday_weekday(today))


def days_left_in_week(today: date) -> int:
    """Days left in the week, counting today (7 on Sunday, 1 on Saturday)."""
    return 7 - _sunday_weekday(today)


def goal_progress(goal: Goal, days: Iterable[Day], today: date) -> int:
    """Count distinct dates this week, up to today, with an activity for the goal's task."""
    start = week_start(today)
    completed: set[str] = set()
    for day in days:
        try:
            day_date = day.calendar_date
        except ValueError:
            continue
        if start <= day_date <= today and day.has_task(goal.task):
            completed.add(day.date)
    return len(completed)


def evaluate_goal(goal: Goal, days: Iterable[Day], today: date) -> GoalProgress:
    """Progress and days left for a goal."""
    return GoalProgress(
        goal=goal,
        completed=goal_progress(goal, days, today),
        days_left=days_left_in_week(today),
    )


__all__ = [
    "GoalProgress",
    "days_left_in_week",
    "evaluate_goal",
    "goal_progress",
    "week_start",
]
