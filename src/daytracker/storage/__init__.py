"""Storage module for the day tracker.

Provides JSON file and MongoDB persistence behind one protocol.
"""

from typing import Protocol

from daytracker.tracker.models import Day, Goal, TaskCatalog

from .errors import StorageError
from .json_store import JSONStore, default_data_path


class DayStore(Protocol):
    """Protocol for tracker persistence."""

    def load_days(self) -> list[Day]:
        """Load all days."""
        ...

    def save_days(self, days: list[Day]) -> None:
        """Replace all stored days."""
        ...

    def load_tasks(self) -> TaskCatalog:
        """Load the task catalog."""
        ...

    def save_tasks(self, catalog: TaskCatalog) -> None:
        """Store the task catalog."""
        ...

    def load_goals(self) -> list[Goal]:
        """Load all goals."""
        ...

    def save_goals(self, goals: list[Goal]) -> None:
        """Replace all stored goals."""
        ...


__all__ = [
    "DayStore",
    "JSONStore",
    "StorageError",
    "default_data_path",
]
