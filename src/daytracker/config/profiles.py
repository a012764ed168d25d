"""Configuration profile management."""

import os
from enum import Enum

PROFILE_ENV_VAR = "DAYTRACKER_PROFILE"


class Profile(Enum):
    """Available configuration profiles."""

    DEV = "dev"
    PROD = "prod"
    TEST = "test"


def detect_profile() -> Profile:
    """Detect the configuration profile from the environment.

    Returns:
        Profile from DAYTRACKER_PROFILE, DEV when unset or unknown
    """
    value = os.environ.get(PROFILE_ENV_VAR, "").strip().lower()
    try:
        return Profile(value)
    except ValueError:
        return Profile.DEV


__all__ = ["PROFILE_ENV_VAR", "Profile", "detect_profile"]
