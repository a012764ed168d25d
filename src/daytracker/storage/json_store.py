"""JSON file storage for the day tracker.

Keeps days, the task catalog and goals under named keys in a single JSON
file. Any read failure falls back to defaults so a damaged file never blocks
the tracker.
"""

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from daytracker.tracker.models import Day, Goal, TaskCatalog, TaskDefinition

from .errors import StorageError

logger = logging.getLogger(__name__)

DAYS_KEY = "dayTrackerData"
TASKS_KEY = "dayTrackerTasks"
TASK_DEFINITIONS_KEY = "dayTrackerTaskDefinitions"
GOALS_KEY = "dayTrackerGoals"


def default_data_path() -> Path:
    """Get the default data file path.

    Returns:
        Path to ~/.daytracker/data.json
    """
    return Path.home() / ".daytracker" / "data.json"


class JSONStore:
    """Day tracker storage backed by one JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: Data file path. Defaults to ~/.daytracker/data.json
        """
        self._path = path or default_data_path()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            logger.debug(f"Data file not found at {self._path}, using defaults")
            return {}

        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Could not parse data from {self._path}: {e}")
            return {}
        except OSError as e:
            logger.error(f"Could not read data from {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Unexpected data in {self._path}, using defaults")
            return {}
        return data

    def _write(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {key} to {self._path}: {e}") from e

        logger.debug(f"Saved {key} to {self._path}")

    def load_days(self) -> list[Day]:
        """Load all days. Malformed days are skipped."""
        raw = self._read().get(DAYS_KEY, [])
        if not isinstance(raw, list):
            logger.error(f"Could not parse {DAYS_KEY}, using empty log")
            return []

        days = []
        for item in raw:
            try:
                days.append(Day.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Skipping malformed day in {DAYS_KEY}: {e}")
        return days

    def save_days(self, days: list[Day]) -> None:
        """Replace all stored days."""
        self._write(DAYS_KEY, [day.to_dict() for day in days])

    def load_tasks(self) -> TaskCatalog:
        """Load the task catalog, or the default catalog if none can be read."""
        data = self._read()

        definitions = data.get(TASK_DEFINITIONS_KEY)
        if isinstance(definitions, list):
            try:
                return TaskCatalog(TaskDefinition.from_dict(d) for d in definitions)
            except (KeyError, TypeError) as e:
                logger.error(f"Could not parse {TASK_DEFINITIONS_KEY}: {e}")

        names = data.get(TASKS_KEY)
        if isinstance(names, list) and all(isinstance(n, str) for n in names):
            return TaskCatalog.from_names(names)

        if names is not None:
            logger.error(f"Could not parse {TASKS_KEY}, using default tasks")
        return TaskCatalog()

    def save_tasks(self, catalog: TaskCatalog) -> None:
        """Store the task catalog as names and as full definitions."""
        self._write(TASKS_KEY, catalog.names)
        self._write(TASK_DEFINITIONS_KEY, [t.to_dict() for t in catalog])

    def load_goals(self) -> list[Goal]:
        """Load goals. Malformed goals are skipped."""
        raw = self._read().get(GOALS_KEY, [])
        if not isinstance(raw, list):
            logger.error(f"Could not parse {GOALS_KEY}, using no goals")
            return []

        goals = []
        for item in raw:
            try:
                goals.append(Goal.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Skipping malformed goal in {GOALS_KEY}: {e}")
        return goals

    def save_goals(self, goals: list[Goal]) -> None:
        """Replace all stored goals."""
        self._write(GOALS_KEY, [goal.to_dict() for goal in goals])


__all__ = [
    "DAYS_KEY",
    "GOALS_KEY",
    "JSONStore",
    "TASKS_KEY",
    "TASK_DEFINITIONS_KEY",
    "default_data_path",
]
