"""Tracker module for the day tracker.

Provides the data model and the date-keyed day log.
"""

from .errors import DuplicateActivityError, DuplicateDayError, TrackerError
from .log import DayLog, GoalBook, available_tasks, default_end_time, suggest_next_task
from .models import DEFAULT_TASKS, Activity, Day, Goal, TaskCatalog, TaskDefinition

__all__ = [
    "DEFAULT_TASKS",
    "Activity",
    "Day",
    "DayLog",
    "DuplicateActivityError",
    "DuplicateDayError",
    "Goal",
    "GoalBook",
    "TaskCatalog",
    "TaskDefinition",
    "TrackerError",
    "available_tasks",
    "default_end_time",
    "suggest_next_task",
]
