"""MongoDB storage for the day tracker.

Provides the same load/save contract as the JSON store, with retry on
connection failures.
"""

import logging
import time
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError

from daytracker.tracker.models import Day, Goal, TaskCatalog, TaskDefinition

from .errors import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TASKS_DOC_ID = "tasks"


def retry_on_connection_failure(
    max_retries: int = 3,
    base_delay: float = 0.5,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator for exponential backoff retry on connection failures.

    Args:
        max_retries: Maximum number of attempts.
        base_delay: Base delay in seconds (doubles each retry).
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except (ConnectionFailure, ServerSelectionTimeoutError) as e:
                    if attempt == max_retries - 1:
                        logger.error("Connection failed after %d attempts: %s", max_retries, e)
                        raise
                    delay = base_delay * (2**attempt)
                    logger.warning(
                        "Connection failed (attempt %d/%d), retrying in %.1fs: %s",
                        attempt + 1,
                        max_retries,
                        delay,
                        e,
                    )
                    time.sleep(delay)
            raise RuntimeError("Unexpected retry loop exit")

        return wrapper

    return decorator


class MongoDayStore:
    """Day tracker storage backed by MongoDB collections.

    Collections: days (unique on date), goals, settings (task catalog).
    """

    def __init__(self, database: Database[dict[str, Any]]) -> None:
        """Initialize the store.

        Args:
            database: MongoDB database holding the tracker collections.
        """
        self._days = database["days"]
        self._goals = database["goals"]
        self._settings = database["settings"]
        self._days.create_index([("date", ASCENDING)], unique=True)

    @classmethod
    def connect(
        cls,
        uri: str = "mongodb://localhost:27017",
        database: str = "daytracker",
        timeout_ms: int = 5000,
    ) -> "MongoDayStore":
        """Connect to a MongoDB server and open the tracker database."""
        client: MongoClient[dict[str, Any]] = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
        logger.info(f"Using MongoDB database '{database}'")
        return cls(client[database])

    @retry_on_connection_failure()
    def load_days(self) -> list[Day]:
        """Load all days, newest first. Malformed documents are skipped."""
        days = []
        for doc in self._days.find({}, {"_id": 0}).sort("date", DESCENDING):
            try:
                days.append(Day.from_dict(doc))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Skipping malformed day document: {e}")
        return days

    @retry_on_connection_failure()
    def save_days(self, days: list[Day]) -> None:
        """Replace all stored days."""
        try:
            dates = [day.date for day in days]
            self._days.delete_many({"date": {"$nin": dates}})
            for day in days:
                self._days.replace_one({"date": day.date}, day.to_dict(), upsert=True)
        except (ConnectionFailure, ServerSelectionTimeoutError):
            raise
        except PyMongoError as e:
            raise StorageError(f"Failed to save days: {e}") from e

    @retry_on_connection_failure()
    def load_tasks(self) -> TaskCatalog:
        """Load the task catalog, or the default catalog if none is stored."""
        doc = self._settings.find_one({"_id": TASKS_DOC_ID})
        if not doc or not isinstance(doc.get("definitions"), list):
            return TaskCatalog()
        try:
            return TaskCatalog(TaskDefinition.from_dict(d) for d in doc["definitions"])
        except (KeyError, TypeError) as e:
            logger.error(f"Could not parse stored tasks: {e}")
            return TaskCatalog()

    @retry_on_connection_failure()
    def save_tasks(self, catalog: TaskCatalog) -> None:
        """Store the task catalog."""
        self._settings.replace_one(
            {"_id": TASKS_DOC_ID},
            {"_id": TASKS_DOC_ID, "definitions": [t.to_dict() for t in catalog]},
            upsert=True,
        )

    @retry_on_connection_failure()
    def load_goals(self) -> list[Goal]:
        """Load all goals."""
        goals = []
        for doc in self._goals.find({}, {"_id": 0}).sort("id", ASCENDING):
            try:
                goals.append(Goal.from_dict(doc))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Skipping malformed goal document: {e}")
        return goals

    @retry_on_connection_failure()
    def save_goals(self, goals: list[Goal]) -> None:
        """Replace all stored goals."""
        self._goals.delete_many({})
        if goals:
            self._goals.insert_many([goal.to_dict() for goal in goals])


__all__ = ["MongoDayStore", "retry_on_connection_failure"]
