"""AI coach features.

Builds prompts from the logged days and interprets the replies: task
suggestions, weekly summaries, goal coaching tips and daily plans.
"""

import json
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Protocol

from daytracker.engine.timeclock import calculate_duration
from daytracker.tracker.models import Day, Goal

from .client import CoachResponse
from .errors import CoachError, CoachResponseError, InsufficientDataError

logger = logging.getLogger(__name__)

RECENT_DAYS = 5
SUMMARY_WINDOW_DAYS = 7
MIN_SUMMARY_DAYS = 2

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$")


class CompletionClient(Protocol):
    """Protocol for the API client used by the coach."""

    def complete(
        self,
        prompt: str,
        temperature: float = 0.7,
        system: str | None = None,
    ) -> CoachResponse:
        """Send one prompt and return the reply."""
        ...


@dataclass
class CoachTemperatures:
    """Sampling temperature per feature."""

    suggestion: float = 0.2
    summary: float = 0.7
    tip: float = 0.8
    plan: float = 0.7


def _recent(days: Iterable[Day], count: int = RECENT_DAYS) -> list[Day]:
    return sorted(days, key=lambda d: d.date)[-count:]


def _in_window(day: Day, start: date, end: date) -> bool:
    try:
        return start <= day.calendar_date <= end
    except ValueError:
        return False


def _describe_now(now: datetime) -> str:
    hour = now.hour % 12 or 12
    suffix = "PM" if now.hour >= 12 else "AM"
    return f"{now.strftime('%A')} {hour}:{now.minute:02d} {suffix}"


def parse_plan(text: str) -> list[str]:
    """Extract the list of plan items from a reply.

    Accepts {"plan": [...]} or a bare JSON array, optionally in a code fence.

    Raises:
        CoachResponseError: If the reply is not a list of strings
    """
    cleaned = _FENCE_PATTERN.sub("", text.strip())
    try:
        data: Any = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise CoachResponseError(f"Could not generate a plan: invalid JSON ({e})") from e

    if isinstance(data, dict):
        data = data.get("plan", [])
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise CoachResponseError("Could not generate a plan: expected a list of strings")
    return [item.strip() for item in data if item.strip()]


class DayCoach:
    """Produces AI suggestions from the logged days.

    Never modifies the days it is given.
    """

    def __init__(
        self,
        client: CompletionClient,
        temperatures: CoachTemperatures | None = None,
    ) -> None:
        self._client = client
        self._temperatures = temperatures or CoachTemperatures()

    def suggest_task(self, days: Iterable[Day], tasks: Sequence[str], now: datetime) -> str | None:
        """Predict the task the user is most likely doing now.

        Returns:
            A task name from the catalog, or None if there is no data, the
            call fails, or the reply is not a known task
        """
        recent = _recent(days)
        if not recent:
            return None

        log = [
            {
                "date": d.date,
                "activities": [{"task": a.task, "startTime": a.start_time} for a in d.activities],
            }
            for d in recent
        ]
        prompt = (
            "You are an AI assistant for a daily activity tracking app. Your goal is to predict "
            "the user's current activity based on their past behavior and the current time. "
            f"The current date and time is {_describe_now(now)}. "
            f"The user can choose from these tasks: {', '.join(tasks)}. "
            f"Here is a log of their activities from the past few days: {json.dumps(log)}. "
            "Based on this data, what is the single most likely task they are doing right now? "
            "Please respond with only the name of the task from the list, and nothing else."
        )

        try:
            response = self._client.complete(prompt, temperature=self._temperatures.suggestion)
        except CoachError as e:
            logger.error(f"Error fetching AI suggestion: {e}")
            return None

        suggestion = response.text.strip().strip('"').strip()
        if suggestion in tasks:
            return suggestion
        logger.debug(f"Ignoring suggestion outside the catalog: {suggestion!r}")
        return None

    def weekly_summary(self, days: Iterable[Day], tasks: Sequence[str], now: datetime) -> str:
        """Summarize the last week in a few encouraging sentences.

        Raises:
            InsufficientDataError: If fewer than two days were logged this week
            CoachError: If the call fails
        """
        today = now.date()
        start = today - timedelta(days=SUMMARY_WINDOW_DAYS)
        recent = sorted((d for d in days if _in_window(d, start, today)), key=lambda d: d.date)
        if len(recent) < MIN_SUMMARY_DAYS:
            raise InsufficientDataError("Track at least 2 days to get a summary.")

        log = [
            {
                "date": d.date,
                "activities": [
                    {
                        "task": a.task,
                        "startTime": a.start_time,
                        "duration": calculate_duration(a.start_time, a.end_time),
                    }
                    for a in d.activities
                ],
            }
            for d in recent
        ]
        prompt = (
            "You are a friendly and encouraging productivity coach. Analyze the user's activity "
            "log from the past week and provide a short, insightful summary (about 3-4 sentences). "
            "Highlight one positive achievement or consistent habit, and gently suggest one area "
            "for potential improvement or a pattern to be mindful of. "
            f"The user's available tasks are: {', '.join(tasks)}. "
            f"Here is their log: {json.dumps(log)}. "
            "Respond in a conversational and motivational tone. Use markdown for formatting, "
            "like bolding key tasks with **Task Name**."
        )

        response = self._client.complete(prompt, temperature=self._temperatures.summary)
        if not response.text:
            raise CoachResponseError("Could not generate summary.")
        return response.text

    def coaching_tip(self, goal: Goal, progress: int, days_left: int) -> str:
        """Short coaching tip for a weekly goal.

        Raises:
            CoachError: If the call fails
        """
        prompt = (
            "You are a motivational AI coach. The user has a goal to perform the task "
            f'"{goal.task}" {goal.frequency} times a week. So far, they have completed it '
            f"{progress} times. There are {days_left} days left in the week. Provide a short "
            "(2-3 sentences), encouraging, and actionable coaching tip. If they are on track, "
            "praise their effort. If they are behind, provide a gentle, motivational nudge "
            "without being critical."
        )

        response = self._client.complete(prompt, temperature=self._temperatures.tip)
        if not response.text:
            raise CoachResponseError("Could not get coaching tip.")
        return response.text

    def daily_plan(self, days: Iterable[Day], goals: Iterable[Goal], now: datetime) -> list[str]:
        """Suggest 3-5 key activities for today.

        Raises:
            CoachError: If the call fails or the reply is not a list
        """
        recent = [d.to_dict() for d in _recent(days)]
        prompt = (
            "You are a friendly and motivating productivity coach. Based on the user's past "
            "activity logs and their current goals, create a simple, suggested schedule for "
            f"today, which is a {now.strftime('%A')}. "
            f"The user's goals are: {json.dumps([g.to_dict() for g in goals])}. "
            f"Here is their activity log from the last few days: {json.dumps(recent)}. "
            "Suggest 3-5 key activities for them to focus on today. Keep each suggestion "
            "concise and actionable."
        )
        system = 'Respond only with a JSON object of the form {"plan": ["...", "..."]}.'

        response = self._client.complete(prompt, temperature=self._temperatures.plan, system=system)
        return parse_plan(response.text)


__all__ = [
    "CoachTemperatures",
    "CompletionClient",
    "DayCoach",
    "parse_plan",
]
