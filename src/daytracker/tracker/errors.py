"""Error types for the day log."""


class TrackerError(Exception):
    """Base exception for day log errors."""

    pass


class DuplicateDayError(TrackerError):
    """Raised when a day is created for a date that already exists."""

    def __init__(self, day_date: str) -> None:
        super().__init__(f"Day {day_date} already exists")
        self.date = day_date


class DuplicateActivityError(TrackerError):
    """Raised when a once-per-day task is logged twice."""

    def __init__(self, task: str, day_date: str) -> None:
        super().__init__(f"You already logged {task} for {day_date}")
        self.task = task
        self.date = day_date


__all__ = [
    "DuplicateActivityError",
    "DuplicateDayError",
    "TrackerError",
]
