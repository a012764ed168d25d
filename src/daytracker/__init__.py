"""Day Tracker - personal daily activity tracker.

Day Tracker provides:
- Activity logging per calendar day
- Durations, streaks and productivity ratios
- Weekly goals
- AI suggestions and summaries

Usage:
    python -m daytracker --help
    python -m daytracker --profile prod streak --task Exercise
"""

__version__ = "0.1.0"

from .config import TrackerConfig
from .config.loader import load_config

__all__ = [
    "TrackerConfig",
    "__version__",
    "load_config",
]
