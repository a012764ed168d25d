"""Reminders module for the day tracker."""

from .notifier import Reminder, ReminderChecker, ReminderScheduler

__all__ = [
    "Reminder",
    "ReminderChecker",
    "ReminderScheduler",
]
