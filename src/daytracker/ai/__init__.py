"""AI coach module for the day tracker.

Provides task suggestions, weekly summaries, goal tips and daily plans
through a generative-language API.
"""

from .client import CoachClient, CoachClientConfig, CoachResponse
from .coach import CoachTemperatures, DayCoach, parse_plan
from .errors import (
    CoachAPIError,
    CoachAuthError,
    CoachConnectivityError,
    CoachError,
    CoachResponseError,
    CoachTimeoutError,
    InsufficientDataError,
)

__all__ = [
    "CoachAPIError",
    "CoachAuthError",
    "CoachClient",
    "CoachClientConfig",
    "CoachConnectivityError",
    "CoachError",
    "CoachResponse",
    "CoachResponseError",
    "CoachTemperatures",
    "CoachTimeoutError",
    "DayCoach",
    "InsufficientDataError",
    "parse_plan",
]
