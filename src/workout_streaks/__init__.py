"""Workout streak and consistency engine."""

from .errors import ConfigurationError, UpstreamUnavailable, ValidationError
from .extraction import WorkoutLog
from .settings import UserSettings, default_user_settings, parse_user_settings
from .stats import LogStats, build_log_stats

__all__ = [
    "ConfigurationError",
    "LogStats",
    "UpstreamUnavailable",
    "UserSettings",
    "ValidationError",
    "WorkoutLog",
    "build_log_stats",
    "default_user_settings",
    "parse_user_settings",
]
