"""Configuration module for the day tracker.

This module provides configuration loading and profile management.
"""

from dataclasses import dataclass, field


@dataclass
class StorageConfig:
    """Persistence configuration."""

    backend: str = "json"  # json | mongo
    data_path: str = "~/.daytracker/data.json"
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "daytracker"


@dataclass
class AIConfig:
    """AI coach configuration."""

    enabled: bool = True
    model: str = "claude-3-5-haiku-latest"
    max_tokens: int = 500
    timeout_seconds: float = 30.0
    suggestion_temperature: float = 0.2
    summary_temperature: float = 0.7
    tip_temperature: float = 0.8
    plan_temperature: float = 0.7


@dataclass
class ReminderConfig:
    """Reminder configuration."""

    enabled: bool = False
    interval_minutes: int = 20
    idle_threshold_minutes: int = 60


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class TrackerConfig:
    """Main day tracker configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    ai: AIConfig = field(default_factory=AIConfig)
    reminders: ReminderConfig = field(default_factory=ReminderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


__all__ = [
    "AIConfig",
    "LoggingConfig",
    "ReminderConfig",
    "StorageConfig",
    "TrackerConfig",
]
