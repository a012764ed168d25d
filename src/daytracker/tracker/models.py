"""Data models for the day tracker.

Defines Activity, Day, Goal and the task catalog.
"""

import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

_last_id = 0


def next_activity_id() -> int:
    """Return a millisecond timestamp id, strictly greater than the last one issued."""
    global _last_id
    candidate = int(time.time() * 1000)
    _last_id = max(candidate, _last_id + 1)
    return _last_id


@dataclass
class Activity:
    """One logged action within a day.

    Attributes:
        id: Unique identifier, assigned at creation
        task: Task name from the catalog (free text allowed)
        start_time: 12-hour clock string (e.g., "7:05 AM")
        end_time: 12-hour clock string, None for point-in-time tasks
    """

    task: str
    start_time: str
    end_time: str | None = None
    id: int = field(default_factory=next_activity_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stored JSON shape."""
        return {
            "id": self.id,
            "task": self.task,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Activity":
        """Create from the stored JSON shape.

        Raises:
            KeyError: If task or startTime is missing
        """
        return cls(
            id=int(data["id"]) if data.get("id") is not None else next_activity_id(),
            task=str(data["task"]),
            start_time=str(data["startTime"]),
            end_time=data.get("endTime") or None,
        )


@dataclass
class Day:
    """All activities logged against one calendar date."""

    date: str  # ISO YYYY-MM-DD, primary key
    activities: list[Activity] = field(default_factory=list)

    @property
    def calendar_date(self) -> date:
        """The date as a datetime.date."""
        return date.fromisoformat(self.date)

    def has_task(self, task: str) -> bool:
        """Check whether any activity matches the task name exactly."""
        return any(a.task == task for a in self.activities)

    def find(self, activity_id: int) -> Activity | None:
        """Find an activity by id."""
        return next((a for a in self.activities if a.id == activity_id), None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stored JSON shape."""
        return {
            "date": self.date,
            "activities": [a.to_dict() for a in self.activities],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Day":
        """Create from the stored JSON shape.

        Raises:
            KeyError: If date is missing
            ValueError: If date is not an ISO date
        """
        day_date = str(data["date"])
        date.fromisoformat(day_date)
        return cls(
            date=day_date,
            activities=[Activity.from_dict(a) for a in data.get("activities", [])],
        )


@dataclass
class Goal:
    """A weekly target frequency for a task."""

    task: str
    frequency: int
    period: str = "week"
    id: int = field(default_factory=next_activity_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stored JSON shape."""
        return {
            "id": self.id,
            "task": self.task,
            "frequency": self.frequency,
            "period": self.period,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Goal":
        """Create from the stored JSON shape."""
        return cls(
            id=int(data["id"]),
            task=str(data["task"]),
            frequency=int(data["frequency"]),
            period=data.get("period", "week"),
        )


@dataclass(frozen=True)
class TaskDefinition:
    """A task in the catalog and how it is treated.

    Attributes:
        name: Display name, also the key activities refer to
        point_in_time: Task has no duration and therefore no end time
        productive: Counts toward "work and growth" time
        streak_tracked: Offered as a streak filter
        icon: Emoji shown next to the task
    """

    name: str
    point_in_time: bool = False
    productive: bool = False
    streak_tracked: bool = False
    icon: str = "🎯"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "point_in_time": self.point_in_time,
            "productive": self.productive,
            "streak_tracked": self.streak_tracked,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskDefinition":
        return cls(
            name=str(data["name"]),
            point_in_time=bool(data.get("point_in_time", False)),
            productive=bool(data.get("productive", False)),
            streak_tracked=bool(data.get("streak_tracked", False)),
            icon=data.get("icon", "🎯"),
        )


DEFAULT_TASKS: tuple[TaskDefinition, ...] = (
    TaskDefinition("Wake up", point_in_time=True, icon="☀️"),
    TaskDefinition("Washroom", icon="🚽"),
    TaskDefinition("Exercise", productive=True, streak_tracked=True, icon="🏋️"),
    TaskDefinition("Breakfast", icon="🥞"),
    TaskDefinition("Video call", productive=True, icon="💻"),
    TaskDefinition("Office work", productive=True, icon="💼"),
    TaskDefinition("Rest", icon="🧘"),
    TaskDefinition("Lunch", icon="🥪"),
    TaskDefinition("Sleep", point_in_time=True, icon="😴"),
    TaskDefinition("Small Nap", icon="🛌"),
    TaskDefinition("Read book", productive=True, streak_tracked=True, icon="📚"),
    TaskDefinition("Call", icon="📞"),
    TaskDefinition("Dinner", icon="🍽️"),
    TaskDefinition("Watch TV", icon="📺"),
    TaskDefinition("Editing youTube Video", icon="🎬"),
    TaskDefinition("Drink Water", point_in_time=True, icon="💧"),
    TaskDefinition("Office Meeting Scrum", productive=True, icon="🧑‍💻"),
    TaskDefinition("Take Bath", icon="🛀"),
    TaskDefinition("Self Learning", productive=True, streak_tracked=True, icon="🧠"),
)


class TaskCatalog:
    """Ordered, user-extensible set of task definitions."""

    def __init__(self, tasks: Iterable[TaskDefinition] = DEFAULT_TASKS) -> None:
        self._tasks: dict[str, TaskDefinition] = {}
        for task in tasks:
            self._tasks.setdefault(task.name, task)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "TaskCatalog":
        """Build a catalog from plain names, keeping known attributes for default tasks."""
        defaults = {t.name: t for t in DEFAULT_TASKS}
        return cls(defaults.get(name, TaskDefinition(name)) for name in names)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[TaskDefinition]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def names(self) -> list[str]:
        """Task names in catalog order."""
        return list(self._tasks)

    def get(self, name: str) -> TaskDefinition | None:
        return self._tasks.get(name)

    def add(self, task: str | TaskDefinition) -> bool:
        """Add a task if not already present.

        Returns:
            True if the task was added
        """
        definition = TaskDefinition(task) if isinstance(task, str) else task
        if definition.name in self._tasks:
            return False
        self._tasks[definition.name] = definition
        return True

    def update(self, name: str, **changes: Any) -> TaskDefinition:
        """Change attributes of an existing task.

        Raises:
            KeyError: If the task is not in the catalog
        """
        updated = replace(self._tasks[name], **changes)
        self._tasks[name] = updated
        return updated

    def is_point_in_time(self, name: str) -> bool:
        task = self._tasks.get(name)
        return task.point_in_time if task else False

    def is_productive(self, name: str) -> bool:
        task = self._tasks.get(name)
        return task.productive if task else False

    def icon(self, name: str) -> str:
        task = self._tasks.get(name)
        return task.icon if task else "🎯"

    @property
    def streak_tasks(self) -> list[str]:
        """Names of tasks offered as streak filters."""
        return [t.name for t in self._tasks.values() if t.streak_tracked]

    def options_excluding(self, names: Iterable[str]) -> list[str]:
        """Task names in catalog order, minus the given ones."""
        excluded = set(names)
        return [name for name in self._tasks if name not in excluded]


__all__ = [
    "DEFAULT_TASKS",
    "Activity",
    "Day",
    "Goal",
    "TaskCatalog",
    "TaskDefinition",
    "next_activity_id",
]
