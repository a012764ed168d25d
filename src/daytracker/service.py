"""Tracker service.

Owns the in-memory day log, task catalog and goals, and mirrors every
mutation to the store.
"""

import logging
from datetime import date

from .engine.goals import GoalProgress, evaluate_goal
from .engine.streaks import StreakResult, compute_streaks
from .storage import DayStore
from .tracker.log import DayLog, GoalBook
from .tracker.models import Activity, Day, Goal, TaskCatalog

logger = logging.getLogger(__name__)


class TrackerService:
    """Day tracker state backed by a store.

    Loads everything on creation. A failed save leaves the in-memory state
    as it was after the mutation and re-raises.
    """

    def __init__(self, store: DayStore) -> None:
        """Initialize service.

        Args:
            store: Persistence backend
        """
        self._store = store
        self.log = DayLog(store.load_days())
        self.catalog: TaskCatalog = store.load_tasks()
        self.goals = GoalBook(store.load_goals())
        logger.debug(
            f"Loaded {len(self.log)} days, {len(self.catalog)} tasks, {len(self.goals)} goals"
        )

    def _persist_days(self) -> None:
        self._store.save_days(self.log.days())

    def days(self) -> list[Day]:
        """Days newest first."""
        return self.log.days()

    def create_day(self, day_date: str) -> Day:
        """Create and store a day, prefilled with the weekday scrum."""
        day = self.log.new_day(day_date)
        self.log.save_day(day)
        self._persist_days()
        return day

    def delete_day(self, day_date: str) -> Day:
        day = self.log.delete_day(day_date)
        self._persist_days()
        return day

    def log_activity(
        self,
        day_date: str,
        task: str,
        start_24h: str,
        end_24h: str | None = None,
    ) -> Activity:
        """Log an activity and store the day and any new task."""
        known_tasks = len(self.catalog)
        activity = self.log.add_activity(day_date, task, start_24h, end_24h, self.catalog)
        self._persist_days()
        if len(self.catalog) != known_tasks:
            self._store.save_tasks(self.catalog)
        return activity

    def edit_activity(
        self,
        day_date: str,
        activity_id: int,
        start_24h: str,
        end_24h: str | None = None,
    ) -> Activity:
        activity = self.log.update_activity(day_date, activity_id, start_24h, end_24h, self.catalog)
        self._persist_days()
        return activity

    def remove_activity(self, day_date: str, activity_id: int) -> Activity:
        activity = self.log.remove_activity(day_date, activity_id)
        self._persist_days()
        return activity

    def add_task(self, name: str, point_in_time: bool = False) -> bool:
        """Add a custom task to the catalog.

        Returns:
            True if the task was new
        """
        name = name.strip()
        if not name:
            raise ValueError("Task name cannot be empty")
        added = self.catalog.add(name)
        if point_in_time:
            self.catalog.update(name, point_in_time=True)
        if added or point_in_time:
            self._store.save_tasks(self.catalog)
        return added

    def add_goal(self, task: str, frequency: int) -> Goal:
        goal = self.goals.add(task, frequency)
        self._store.save_goals(list(self.goals))
        return goal

    def remove_goal(self, goal_id: int) -> Goal:
        goal = self.goals.remove(goal_id)
        self._store.save_goals(list(self.goals))
        return goal

    def streaks(self, task: str | None, today: date) -> StreakResult:
        return compute_streaks(self.log.days(), task, today)

    def goal_progress(self, today: date) -> list[GoalProgress]:
        """Progress of every goal for the week containing today."""
        days = self.log.days()
        return [evaluate_goal(goal, days, today) for goal in self.goals]


__all__ = ["TrackerService"]
