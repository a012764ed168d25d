"""Date-keyed day log and goal book.

The log owns the in-memory Day collection. Dates are the keys, so a date
can never appear twice.
"""

import logging
from collections.abc import Iterable, Iterator
from datetime import date

from daytracker.engine.timeclock import add_minutes, format_to_12_hour, sort_activities

from .errors import DuplicateActivityError, DuplicateDayError
from .models import Activity, Day, Goal, TaskCatalog

logger = logging.getLogger(__name__)

ONCE_PER_DAY_TASKS = frozenset({"Wake up"})
DEFAULT_ACTIVITY_MINUTES = 30
QUICK_TASK_MINUTES = {"Washroom": 4}

# Morning routine: after logging the key task, the value is suggested next
MORNING_CHAIN = {
    "Wake up": "Washroom",
    "Washroom": "Exercise",
    "Exercise": "Take Bath",
}
MORNING_START_HOUR = 3
MORNING_END_HOUR = 9

SCRUM_TASK = "Office Meeting Scrum"


def default_end_time(task: str, start_24h: str) -> str:
    """Default "HH:MM" end time for a new activity starting at start_24h."""
    return add_minutes(start_24h, QUICK_TASK_MINUTES.get(task, DEFAULT_ACTIVITY_MINUTES))


def suggest_next_task(day: Day, start_24h: str) -> str | None:
    """Suggest the next step of the morning routine.

    Only applies between 3 AM and 9 AM, based on the last logged task.
    """
    hour = int(start_24h.split(":")[0])
    if not MORNING_START_HOUR <= hour < MORNING_END_HOUR or not day.activities:
        return None
    return MORNING_CHAIN.get(day.activities[-1].task)


def available_tasks(day: Day | None, catalog: TaskCatalog) -> list[str]:
    """Task names that can still be logged on a day.

    Once-per-day tasks already logged that day are left out.
    """
    if day is None:
        return catalog.names
    return catalog.options_excluding(t for t in ONCE_PER_DAY_TASKS if day.has_task(t))


def scrum_for(day_date: date) -> Activity | None:
    """Standing scrum meeting prefilled on weekdays."""
    weekday = day_date.weekday()
    if weekday <= 3:  # Monday to Thursday
        return Activity(task=SCRUM_TASK, start_time="12:30 PM", end_time="1:00 PM")
    if weekday == 4:
        return Activity(task=SCRUM_TASK, start_time="12:00 PM", end_time="12:30 PM")
    return None


class DayLog:
    """All logged days keyed by ISO date."""

    def __init__(self, days: Iterable[Day] = ()) -> None:
        self._days: dict[str, Day] = {}
        for day in days:
            if day.date in self._days:
                logger.warning(f"Dropping duplicate day {day.date}")
                continue
            self._days[day.date] = day

    def __contains__(self, day_date: object) -> bool:
        return day_date in self._days

    def __len__(self) -> int:
        return len(self._days)

    def __iter__(self) -> Iterator[Day]:
        return iter(self.days())

    def get(self, day_date: str) -> Day | None:
        return self._days.get(day_date)

    def require(self, day_date: str) -> Day:
        """Get a day or raise KeyError."""
        try:
            return self._days[day_date]
        except KeyError:
            raise KeyError(f"No day logged for {day_date}") from None

    def days(self) -> list[Day]:
        """Days newest first."""
        return sorted(self._days.values(), key=lambda d: d.date, reverse=True)

    def new_day(self, day_date: str) -> Day:
        """Create an unsaved day, prefilled with the weekday scrum.

        Raises:
            DuplicateDayError: If the date is already logged
            ValueError: If the date is not ISO formatted
        """
        if day_date in self._days:
            raise DuplicateDayError(day_date)
        scrum = scrum_for(date.fromisoformat(day_date))
        return Day(date=day_date, activities=[scrum] if scrum else [])

    def save_day(self, day: Day) -> None:
        """Insert or replace a day."""
        day.activities = sort_activities(day.activities)
        self._days[day.date] = day
        logger.info(f"Saved day {day.date} ({len(day.activities)} activities)")

    def delete_day(self, day_date: str) -> Day:
        """Remove a day.

        Raises:
            KeyError: If the date is not logged
        """
        day = self.require(day_date)
        del self._days[day_date]
        logger.info(f"Deleted day {day_date}")
        return day

    def add_activity(
        self,
        day_date: str,
        task: str,
        start_24h: str,
        end_24h: str | None,
        catalog: TaskCatalog,
    ) -> Activity:
        """Log an activity, creating the day if needed.

        Args:
            day_date: ISO date of the day
            task: Task name; unknown names are added to the catalog
            start_24h: Start time as "HH:MM"
            end_24h: End time as "HH:MM", ignored for point-in-time tasks
            catalog: Task catalog

        Returns:
            The new activity

        Raises:
            ValueError: If the task is empty or a time is malformed
            DuplicateActivityError: If a once-per-day task is already logged
        """
        task = task.strip()
        if not task:
            raise ValueError("Task name cannot be empty")

        day = self._days.get(day_date) or self.new_day(day_date)
        if task in ONCE_PER_DAY_TASKS and day.has_task(task):
            raise DuplicateActivityError(task, day_date)

        start_time = format_to_12_hour(start_24h)
        end_time = None
        if not catalog.is_point_in_time(task):
            end_time = format_to_12_hour(end_24h or default_end_time(task, start_24h))

        if catalog.add(task):
            logger.info(f"New task added: {task}")

        activity = Activity(task=task, start_time=start_time, end_time=end_time)
        day.activities.append(activity)
        self.save_day(day)
        logger.info(f"Added {task} at {activity.start_time} on {day_date}")
        return activity

    def update_activity(
        self,
        day_date: str,
        activity_id: int,
        start_24h: str,
        end_24h: str | None,
        catalog: TaskCatalog,
    ) -> Activity:
        """Change the times of an activity.

        Raises:
            KeyError: If the day or activity does not exist
            ParseError: If a time is malformed; the activity is left unchanged
        """
        day = self.require(day_date)
        activity = day.find(activity_id)
        if activity is None:
            raise KeyError(f"No activity {activity_id} on {day_date}")

        start_time = format_to_12_hour(start_24h)
        end_time = None
        if end_24h and not catalog.is_point_in_time(activity.task):
            end_time = format_to_12_hour(end_24h)

        activity.start_time, activity.end_time = start_time, end_time
        self.save_day(day)
        return activity

    def remove_activity(self, day_date: str, activity_id: int) -> Activity:
        """Remove an activity from a day.

        Raises:
            KeyError: If the day or activity does not exist
        """
        day = self.require(day_date)
        activity = day.find(activity_id)
        if activity is None:
            raise KeyError(f"No activity {activity_id} on {day_date}")
        day.activities = [a for a in day.activities if a.id != activity_id]
        logger.info(f"Removed: {activity.task}")
        return activity


class GoalBook:
    """The user's weekly goals."""

    def __init__(self, goals: Iterable[Goal] = ()) -> None:
        self._goals: list[Goal] = list(goals)

    def __iter__(self) -> Iterator[Goal]:
        return iter(self._goals)

    def __len__(self) -> int:
        return len(self._goals)

    def get(self, goal_id: int) -> Goal | None:
        return next((g for g in self._goals if g.id == goal_id), None)

    def add(self, task: str, frequency: int) -> Goal:
        """Add a weekly goal.

        Raises:
            ValueError: If the task is empty or frequency is not positive
        """
        task = task.strip()
        if not task:
            raise ValueError("Goal task cannot be empty")
        if frequency <= 0:
            raise ValueError("Goal frequency must be positive")
        goal = Goal(task=task, frequency=frequency)
        self._goals.append(goal)
        logger.info(f"Goal added: {task} {frequency}x per week")
        return goal

    def remove(self, goal_id: int) -> Goal:
        """Remove a goal.

        Raises:
            KeyError: If no goal has the id
        """
        goal = self.get(goal_id)
        if goal is None:
            raise KeyError(f"No goal {goal_id}")
        self._goals.remove(goal)
        logger.info(f"Goal removed: {goal.task}")
        return goal


__all__ = [
    "DEFAULT_ACTIVITY_MINUTES",
    "DayLog",
    "GoalBook",
    "available_tasks",
    "default_end_time",
    "scrum_for",
    "suggest_next_task",
]
