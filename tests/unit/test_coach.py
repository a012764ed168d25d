"""Unit tests for the AI coach features."""

import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from daytracker.ai.client import CoachResponse
from daytracker.ai.coach import CoachTemperatures, DayCoach, parse_plan
from daytracker.ai.errors import CoachResponseError, CoachTimeoutError, InsufficientDataError
from daytracker.tracker.models import Activity, Day, Goal

TASKS = ["Wake up", "Exercise", "Lunch", "Office work"]
NOW = datetime(2025, 1, 8, 7, 15)


def reply(text: str) -> CoachResponse:
    return CoachResponse(text=text, tokens_used=12, model="test-model", latency_ms=5)


def make_day(day_date: str) -> Day:
    return Day(
        date=day_date,
        activities=[
            Activity(task="Wake up", start_time="6:30 AM"),
            Activity(task="Exercise", start_time="7:00 AM", end_time="7:45 AM"),
        ],
    )


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def coach(client: MagicMock) -> DayCoach:
    return DayCoach(client, CoachTemperatures(suggestion=0.1))


class TestSuggestTask:
    """Tests for the current-task suggestion."""

    def test_returns_known_task(self, coach: DayCoach, client: MagicMock) -> None:
        client.complete.return_value = reply('"Exercise"')

        assert coach.suggest_task([make_day("2025-01-07")], TASKS, NOW) == "Exercise"
        assert client.complete.call_args[1]["temperature"] == 0.1

    def test_prompt_mentions_time_and_tasks(self, coach: DayCoach, client: MagicMock) -> None:
        client.complete.return_value = reply("Lunch")

        coach.suggest_task([make_day("2025-01-07")], TASKS, NOW)

        prompt = client.complete.call_args[0][0]
        assert "Wednesday 7:15 AM" in prompt
        assert "Office work" in prompt

    def test_rejects_unknown_task(self, coach: DayCoach, client: MagicMock) -> None:
        client.complete.return_value = reply("Skydiving")

        assert coach.suggest_task([make_day("2025-01-07")], TASKS, NOW) is None

    def test_no_days(self, coach: DayCoach, client: MagicMock) -> None:
        assert coach.suggest_task([], TASKS, NOW) is None
        client.complete.assert_not_called()

    def test_api_failure_is_quiet(self, coach: DayCoach, client: MagicMock) -> None:
        client.complete.side_effect = CoachTimeoutError("slow")

        assert coach.suggest_task([make_day("2025-01-07")], TASKS, NOW) is None

    def test_does_not_modify_days(self, coach: DayCoach, client: MagicMock) -> None:
        client.complete.return_value = reply("Lunch")
        days = [make_day("2025-01-07")]
        before = [d.to_dict() for d in days]

        coach.suggest_task(days, TASKS, NOW)

        assert [d.to_dict() for d in days] == before


class TestWeeklySummary:
    """Tests for the weekly summary."""

    def test_requires_two_days(self, coach: DayCoach, client: MagicMock) -> None:
        with pytest.raises(InsufficientDataError, match="at least 2 days"):
            coach.weekly_summary([make_day("2025-01-07")], TASKS, NOW)
        client.complete.assert_not_called()

    def test_ignores_days_outside_window(self, coach: DayCoach) -> None:
        days = [make_day("2024-12-01"), make_day("2025-01-07")]

        with pytest.raises(InsufficientDataError):
            coach.weekly_summary(days, TASKS, NOW)

    def test_summary_includes_durations(self, coach: DayCoach, client: MagicMock) -> None:
        client.complete.return_value = reply("Great week with **Exercise**.")

        summary = coach.weekly_summary([make_day("2025-01-06"), make_day("2025-01-07")], TASKS, NOW)

        assert summary == "Great week with **Exercise**."
        assert '"duration": "45m"' in client.complete.call_args[0][0]


class TestCoachingTip:
    """Tests for goal coaching tips."""

    def test_prompt_contains_progress(self, coach: DayCoach, client: MagicMock) -> None:
        client.complete.return_value = reply("Keep going!")

        tip = coach.coaching_tip(Goal(task="Exercise", frequency=4), progress=1, days_left=3)

        assert tip == "Keep going!"
        prompt = client.complete.call_args[0][0]
        assert '"Exercise" 4 times a week' in prompt
        assert "completed it 1 times" in prompt
        assert "3 days left" in prompt

    def test_empty_reply(self, coach: DayCoach, client: MagicMock) -> None:
        client.complete.return_value = reply("")

        with pytest.raises(CoachResponseError):
            coach.coaching_tip(Goal(task="Exercise", frequency=4), progress=1, days_left=3)


class TestDailyPlan:
    """Tests for the daily plan."""

    def test_parses_plan(self, coach: DayCoach, client: MagicMock) -> None:
        client.complete.return_value = reply(json.dumps({"plan": ["Exercise at 7", "Read 20 pages"]}))

        plan = coach.daily_plan([make_day("2025-01-07")], [Goal(task="Exercise", frequency=3)], NOW)

        assert plan == ["Exercise at 7", "Read 20 pages"]
        assert "JSON" in client.complete.call_args[1]["system"]

    def test_parse_plan_code_fence(self) -> None:
        assert parse_plan('```json\n{"plan": ["Walk"]}\n```') == ["Walk"]

    def test_parse_plan_bare_list(self) -> None:
        assert parse_plan('["Walk", "  ", "Read"]') == ["Walk", "Read"]

    @pytest.mark.parametrize("text", ["not json", '{"plan": "Walk"}', "[1, 2]"])
    def test_parse_plan_invalid(self, text: str) -> None:
        with pytest.raises(CoachResponseError):
            parse_plan(text)
