"""Clock-time parsing, formatting and duration arithmetic.

Times are wall-clock values written as 12-hour strings ("7:05 AM"). They carry
no calendar date, so durations assume an activity spans less than a day and
treat a negative difference as a midnight rollover.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from daytracker.tracker.models import Activity

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


class ParseError(ValueError):
    """Raised when a clock-time string is malformed."""

    def __init__(self, text: object, reason: str) -> None:
        super().__init__(f"Cannot parse clock time {text!r}: {reason}")
        self.text = text
        self.reason = reason


@dataclass(frozen=True, order=True)
class ClockTime:
    """A time of day on a 24-hour clock."""

    hour: int
    minute: int

    @property
    def minutes_since_midnight(self) -> int:
        """Minutes elapsed since 00:00."""
        return self.hour * 60 + self.minute

    def to_12_hour(self) -> str:
        """Format as "H:MM AM|PM"."""
        suffix = "PM" if self.hour >= 12 else "AM"
        return f"{self.hour % 12 or 12}:{self.minute:02d} {suffix}"

    def to_24_hour(self) -> str:
        """Format as "HH:MM"."""
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class Duration:
    """A duration that remembers whether its endpoints could be read.

    Attributes:
        minutes: Whole minutes, 0 when unknown
        known: False when either endpoint failed to parse
    """

    minutes: int
    known: bool = True

    def __str__(self) -> str:
        return format_duration(self.minutes)


def parse_clock_time_strict(text: str | None) -> ClockTime:
    """Parse a 12-hour clock string.

    Args:
        text: Time such as "7:05 AM" or "12:30 PM"

    Returns:
        Parsed ClockTime on a 24-hour clock

    Raises:
        ParseError: If the string is malformed or out of range
    """
    if not isinstance(text, str) or not text.strip():
        raise ParseError(text, "empty value")

    parts = text.strip().split()
    if len(parts) != 2:
        raise ParseError(text, "expected '<H:MM> <AM|PM>'")

    clock, marker = parts
    if marker not in ("AM", "PM"):
        raise ParseError(text, f"unknown marker {marker!r}")

    match = _CLOCK_PATTERN.match(clock)
    if not match:
        raise ParseError(text, "expected hour and minute separated by ':'")

    hour, minute = int(match.group(1)), int(match.group(2))
    if not 1 <= hour <= 12:
        raise ParseError(text, f"hour {hour} outside 1-12")
    if not 0 <= minute <= 59:
        raise ParseError(text, f"minute {minute} outside 0-59")

    if marker == "PM" and hour < 12:
        hour += 12
    elif marker == "AM" and hour == 12:
        hour = 0

    return ClockTime(hour=hour, minute=minute)


def parse_clock_time(text: str | None) -> ClockTime | None:
    """Parse a 12-hour clock string, returning None if it is malformed."""
    try:
        return parse_clock_time_strict(text)
    except ParseError as e:
        if text:
            logger.debug(str(e))
        return None


def parse_24_hour(text: str) -> ClockTime:
    """Parse an "HH:MM" string from a 24-hour time input.

    Raises:
        ParseError: If the string is malformed or out of range
    """
    match = _CLOCK_PATTERN.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise ParseError(text, "expected 'HH:MM'")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ParseError(text, "time out of range")
    return ClockTime(hour=hour, minute=minute)


def format_to_12_hour(time_24: str) -> str:
    """Convert "HH:MM" to "H:MM AM|PM".

    Raises:
        ParseError: If the input is not a valid 24-hour time
    """
    return parse_24_hour(time_24).to_12_hour()


def convert_to_24_hour(time_12: str | None) -> str:
    """Convert "H:MM AM|PM" to "HH:MM".

    Returns an empty string for a missing or unparseable time so that it can
    prefill a time input directly.
    """
    parsed = parse_clock_time(time_12)
    return parsed.to_24_hour() if parsed else ""


def measure_duration(start: str | None, end: str | None) -> Duration:
    """Measure the time between two clock strings.

    A missing end is a known zero (point-in-time task). An unparseable
    endpoint gives an unknown zero.
    """
    if not start or not end:
        return Duration(0)

    start_time = parse_clock_time(start)
    end_time = parse_clock_time(end)
    if start_time is None or end_time is None:
        return Duration(0, known=False)

    diff = end_time.minutes_since_midnight - start_time.minutes_since_midnight
    if diff < 0:
        diff += MINUTES_PER_DAY
    return Duration(diff)


def compute_duration_minutes(start: str | None, end: str | None) -> int:
    """Minutes from start to end, rolling over midnight, 0 if unknown."""
    return measure_duration(start, end).minutes


def format_duration(minutes: float) -> str:
    """Format minutes as "1h 5m", "1h", "45m" or "0m"."""
    if minutes < 1:
        return "0m"

    hours = int(minutes // 60)
    mins = round(minutes % 60)

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if mins > 0:
        parts.append(f"{mins}m")
    return " ".join(parts)


def calculate_duration(start: str | None, end: str | None) -> str:
    """Printable duration between two clock strings."""
    return format_duration(compute_duration_minutes(start, end))


def add_minutes(time_24: str, minutes: int) -> str:
    """Add minutes to an "HH:MM" time, wrapping past midnight."""
    base = parse_24_hour(time_24).minutes_since_midnight
    total = (base + minutes) % MINUTES_PER_DAY
    return ClockTime(hour=total // 60, minute=total % 60).to_24_hour()


def _sort_key(activity: "Activity") -> int:
    parsed = parse_clock_time(activity.start_time)
    return parsed.minutes_since_midnight if parsed else 0


def sort_activities(activities: Iterable["Activity"]) -> list["Activity"]:
    """Return activities ordered by start time.

    Unparseable start times sort as midnight; ties keep their input order.
    """
    return sorted(activities, key=_sort_key)


__all__ = [
    "MINUTES_PER_DAY",
    "ClockTime",
    "Duration",
    "ParseError",
    "add_minutes",
    "calculate_duration",
    "compute_duration_minutes",
    "convert_to_24_hour",
    "format_duration",
    "format_to_12_hour",
    "measure_duration",
    "parse_24_hour",
    "parse_clock_time",
    "parse_clock_time_strict",
    "sort_activities",
]
