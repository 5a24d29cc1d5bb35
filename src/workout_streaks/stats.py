"""Log stats aggregation.

Pure assembly of extractor and calculator output into the values returned to
callers. Recomputed from scratch on every request, never persisted.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from .extraction import WorkoutDateSummary, WorkoutLog, extract_workout_dates
from .settings import UserSettings
from .streak import DEFAULT_BUFFER_POLICY, BufferPolicy, StreakResult, compute_streak


@dataclass(frozen=True)
class LogStats:
    total_logs: int
    exercises_today: int
    exercises_this_week: int
    dates_with_workouts: tuple[date, ...]
    streak: int
    buffer_days_used: int
    rest_days_buffer: int

    @property
    def buffer_active(self) -> bool:
        return self.buffer_days_used > 0

    @property
    def buffer_exhausted(self) -> bool:
        """All rest days are spent; a workout is needed today to keep the streak."""
        return self.buffer_days_used > 0 and self.buffer_days_used >= self.rest_days_buffer

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalLogs": self.total_logs,
            "exercisesToday": self.exercises_today,
            "exercisesThisWeek": self.exercises_this_week,
            "datesWithWorkouts": [d.isoformat() for d in self.dates_with_workouts],
            "streak": self.streak,
            "bufferDaysUsed": self.buffer_days_used,
            "restDaysBuffer": self.rest_days_buffer,
        }


@dataclass(frozen=True)
class ConsistencySummary:
    total_workout_days: int
    last_workout_date: date | None
    weekly_average_last_4_weeks: float
    weekly_average_last_12_weeks: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalWorkoutDays": self.total_workout_days,
            "lastWorkoutDate": (
                self.last_workout_date.isoformat() if self.last_workout_date else None
            ),
            "weeklyAverageLast4Weeks": self.weekly_average_last_4_weeks,
            "weeklyAverageLast12Weeks": self.weekly_average_last_12_weeks,
        }


def assemble_log_stats(
    summary: WorkoutDateSummary,
    streak: StreakResult,
    rest_days_buffer: int,
) -> LogStats:
    return LogStats(
        total_logs=summary.total_logs,
        exercises_today=summary.exercises_today,
        exercises_this_week=summary.exercises_this_week,
        dates_with_workouts=summary.dates_with_workouts,
        streak=streak.streak,
        buffer_days_used=streak.buffer_days_used,
        rest_days_buffer=rest_days_buffer,
    )


def build_log_stats(
    logs: Iterable[WorkoutLog],
    settings: UserSettings,
    now: datetime,
    policy: BufferPolicy = DEFAULT_BUFFER_POLICY,
) -> LogStats:
    """Compute LogStats for one user's logs as of ``now``."""
    summary = extract_workout_dates(logs, settings.timezone, now)
    streak = compute_streak(
        summary.dates_with_workouts,
        summary.today,
        settings.rest_days_buffer,
        policy,
    )
    return assemble_log_stats(summary, streak, settings.rest_days_buffer)


def build_consistency_summary(
    dates_desc: Iterable[date],
    today: date,
) -> ConsistencySummary:
    """Total training days and rolling average training days per week."""
    dates = {d for d in dates_desc if d <= today}

    def _avg_for_weeks(n_weeks: int) -> float:
        # n full weeks ending today (7n days)
        cutoff = today - timedelta(weeks=n_weeks)
        days_in_range = sum(1 for d in dates if d > cutoff)
        return round(days_in_range / n_weeks, 2)

    return ConsistencySummary(
        total_workout_days=len(dates),
        last_workout_date=max(dates) if dates else None,
        weekly_average_last_4_weeks=_avg_for_weeks(4),
        weekly_average_last_12_weeks=_avg_for_weeks(12),
    )
