"""Unit tests for weekly goal progress."""

from datetime import date

import pytest

from daytracker.engine.goals import (
    days_left_in_week,
    evaluate_goal,
    goal_progress,
    week_start,
)
from daytracker.tracker.models import Activity, Day, Goal

# Wednesday; the week began on Sunday 2025-01-05
WEDNESDAY = date(2025, 1, 8)


def make_day(day_date: str, *tasks: str) -> Day:
    return Day(date=day_date, activities=[Activity(task=t, start_time="7:00 AM") for t in tasks])


class TestWeekBoundaries:
    """Test Sunday-based week arithmetic."""

    def test_week_start_is_sunday(self) -> None:
        assert week_start(WEDNESDAY) == date(2025, 1, 5)

    def test_week_start_on_sunday(self) -> None:
        assert week_start(date(2025, 1, 5)) == date(2025, 1, 5)

    def test_week_start_on_saturday(self) -> None:
        assert week_start(date(2025, 1, 11)) == date(2025, 1, 5)

    @pytest.mark.parametrize(
        ("today", "expected"),
        [(date(2025, 1, 5), 7), (WEDNESDAY, 4), (date(2025, 1, 11), 1)],
    )
    def test_days_left(self, today: date, expected: int) -> None:
        assert days_left_in_week(today) == expected


class TestGoalProgress:
    """Test counting goal completions."""

    @pytest.fixture
    def goal(self) -> Goal:
        return Goal(task="Exercise", frequency=3)

    def test_counts_days_this_week(self, goal: Goal) -> None:
        days = [
            make_day("2025-01-04", "Exercise"),  # previous Saturday
            make_day("2025-01-05", "Exercise"),
            make_day("2025-01-06", "Lunch"),
            make_day("2025-01-07", "Exercise", "Exercise"),
        ]

        assert goal_progress(goal, days, WEDNESDAY) == 2

    def test_ignores_future_days(self, goal: Goal) -> None:
        days = [make_day("2025-01-09", "Exercise")]

        assert goal_progress(goal, days, WEDNESDAY) == 0

    def test_evaluate_goal(self, goal: Goal) -> None:
        days = [make_day("2025-01-06", "Exercise")]

        progress = evaluate_goal(goal, days, WEDNESDAY)

        assert progress.completed == 1
        assert progress.remaining == 2
        assert progress.days_left == 4
        assert progress.achieved is False
        assert progress.percentage == pytest.approx(100 / 3)

    def test_overachieving_caps_percentage(self) -> None:
        goal = Goal(task="Exercise", frequency=1)
        days = [make_day("2025-01-06", "Exercise"), make_day("2025-01-07", "Exercise")]

        progress = evaluate_goal(goal, days, WEDNESDAY)

        assert progress.achieved is True
        assert progress.remaining == 0
        assert progress.percentage == 100.0
