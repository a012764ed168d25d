"""Integration tests for the tracker service with real storage.

Tests the complete flow: log activities, persist, reload, compute streaks
and goal progress.
"""

from datetime import date
from pathlib import Path

import pytest
from mongomock import MongoClient

from daytracker.service import TrackerService
from daytracker.storage.json_store import JSONStore
from daytracker.storage.mongo_store import MongoDayStore
from daytracker.tracker.errors import DuplicateDayError


@pytest.fixture
def store(tmp_path: Path) -> JSONStore:
    return JSONStore(tmp_path / "data.json")


@pytest.fixture
def service(store: JSONStore) -> TrackerService:
    return TrackerService(store)


class TestTrackerFlow:
    """Test logging and reloading a week."""

    def test_activities_survive_reload(self, service: TrackerService, store: JSONStore) -> None:
        """Test that logged activities are persisted."""
        wake = service.log_activity("2025-01-04", "Wake up", "06:10")
        service.log_activity("2025-01-04", "Exercise", "06:30", "07:15")

        reloaded = TrackerService(store)
        day = reloaded.log.require("2025-01-04")

        assert [a.task for a in day.activities] == ["Wake up", "Exercise"]
        assert day.find(wake.id) is not None
        assert day.activities[0].end_time is None

    def test_new_task_persisted(self, service: TrackerService, store: JSONStore) -> None:
        service.log_activity("2025-01-04", "Gardening", "17:00")

        assert "Gardening" in TrackerService(store).catalog

    def test_custom_point_in_time_task(self, service: TrackerService, store: JSONStore) -> None:
        service.add_task("Take Vitamins", point_in_time=True)
        activity = service.log_activity("2025-01-04", "Take Vitamins", "08:00", "08:10")

        assert activity.end_time is None
        assert TrackerService(store).catalog.is_point_in_time("Take Vitamins")

    def test_edit_and_remove(self, service: TrackerService, store: JSONStore) -> None:
        activity = service.log_activity("2025-01-04", "Lunch", "13:00", "13:30")

        service.edit_activity("2025-01-04", activity.id, "12:30", "13:15")
        edited = TrackerService(store).log.require("2025-01-04").find(activity.id)
        assert edited is not None
        assert (edited.start_time, edited.end_time) == ("12:30 PM", "1:15 PM")

        service.remove_activity("2025-01-04", activity.id)
        assert TrackerService(store).log.require("2025-01-04").activities == []

    def test_create_and_delete_day(self, service: TrackerService, store: JSONStore) -> None:
        day = service.create_day("2025-01-06")

        assert [a.task for a in day.activities] == ["Office Meeting Scrum"]
        with pytest.raises(DuplicateDayError):
            service.create_day("2025-01-06")

        service.delete_day("2025-01-06")
        assert "2025-01-06" not in TrackerService(store).log

    def test_streaks_and_goals(self, service: TrackerService, store: JSONStore) -> None:
        """Test streaks and goal progress from persisted data."""
        for day_date in ("2025-01-05", "2025-01-06", "2025-01-07"):
            service.log_activity(day_date, "Exercise", "07:00")
        service.log_activity("2025-01-08", "Lunch", "13:00")
        service.add_goal("Exercise", 4)

        reloaded = TrackerService(store)
        streak = reloaded.streaks("Exercise", today=date(2025, 1, 8))
        progress = reloaded.goal_progress(today=date(2025, 1, 8))

        assert (streak.current_streak, streak.longest_streak) == (3, 3)
        assert reloaded.streaks(None, today=date(2025, 1, 8)).current_streak == 4
        assert len(progress) == 1
        assert progress[0].completed == 3
        assert progress[0].remaining == 1
        assert progress[0].days_left == 4

    def test_remove_goal(self, service: TrackerService, store: JSONStore) -> None:
        goal = service.add_goal("Read book", 2)

        service.remove_goal(goal.id)

        assert len(TrackerService(store).goals) == 0


class TestMongoFlow:
    """Test the service against the MongoDB store."""

    def test_reload(self) -> None:
        store = MongoDayStore(MongoClient()["daytracker_flow"])
        service = TrackerService(store)

        service.log_activity("2025-01-04", "Wake up", "06:10")
        service.log_activity("2025-01-05", "Read book", "21:00", "21:40")
        service.add_goal("Read book", 3)

        reloaded = TrackerService(store)

        assert [d.date for d in reloaded.days()] == ["2025-01-05", "2025-01-04"]
        assert reloaded.streaks("Read book", today=date(2025, 1, 5)).current_streak == 1
        assert [g.task for g in reloaded.goals] == ["Read book"]
