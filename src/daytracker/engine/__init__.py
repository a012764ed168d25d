"""Time and streak engine.

Pure functions for clock-time parsing, durations, streaks, goal progress
and per-day statistics.
"""

from .day_stats import DayStats, TimeMarker, compute_day_stats, greeting, sleep_status, wake_up_status
from .goals import GoalProgress, days_left_in_week, evaluate_goal, goal_progress
from .streaks import StreakResult, TopStreak, compute_streaks, top_streak, utc_today
from .timeclock import (
    ClockTime,
    Duration,
    ParseError,
    calculate_duration,
    compute_duration_minutes,
    convert_to_24_hour,
    format_duration,
    format_to_12_hour,
    measure_duration,
    parse_clock_time,
    parse_clock_time_strict,
    sort_activities,
)

__all__ = [
    "ClockTime",
    "DayStats",
    "Duration",
    "GoalProgress",
    "ParseError",
    "StreakResult",
    "TimeMarker",
    "TopStreak",
    "calculate_duration",
    "compute_day_stats",
    "compute_duration_minutes",
    "compute_streaks",
    "convert_to_24_hour",
    "days_left_in_week",
    "evaluate_goal",
    "format_duration",
    "format_to_12_hour",
    "goal_progress",
    "greeting",
    "measure_duration",
    "parse_clock_time",
    "parse_clock_time_strict",
    "sleep_status",
    "sort_activities",
    "top_streak",
    "utc_today",
    "wake_up_status",
]
