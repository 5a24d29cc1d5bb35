"""Workout-date extraction.

Reduces one user's raw log records to the distinct calendar dates they
trained on, plus same-day and same-week exercise counts. "Now" is always
passed in by the caller.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from .dates import as_utc, normalize, resolve_timezone, week_bounds
from .errors import ValidationError

_LOG_ID_FIELDS: tuple[str, ...] = ("logId", "log_id", "id")
_EXERCISE_ID_FIELDS: tuple[str, ...] = ("exerciseId", "exercise_id")
_INSTANT_FIELDS: tuple[str, ...] = (
    "workoutInstant",
    "workout_instant",
    "workoutDate",
    "workout_date",
)
_USER_ID_FIELDS: tuple[str, ...] = ("userId", "user_id")


@dataclass(frozen=True)
class WorkoutLog:
    log_id: str
    exercise_id: str
    workout_instant: datetime
    user_id: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "WorkoutLog":
        """Build a WorkoutLog from a store/API record (camelCase or snake_case)."""
        exercise_id = _first_present(record, _EXERCISE_ID_FIELDS)
        if exercise_id is None or str(exercise_id).strip() == "":
            raise ValidationError("log record is missing exerciseId", field="exerciseId")

        raw_instant = _first_present(record, _INSTANT_FIELDS)
        if raw_instant is None:
            raise ValidationError(
                "log record is missing workoutInstant", field="workoutInstant"
            )

        log_id = _first_present(record, _LOG_ID_FIELDS)
        user_id = _first_present(record, _USER_ID_FIELDS)
        return cls(
            log_id="" if log_id is None else str(log_id),
            exercise_id=str(exercise_id),
            workout_instant=_parse_instant(raw_instant),
            user_id=None if user_id is None else str(user_id),
        )


@dataclass(frozen=True)
class WorkoutDateSummary:
    total_logs: int
    exercises_today: int
    exercises_this_week: int
    dates_with_workouts: tuple[date, ...]
    today: date


def _first_present(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _parse_instant(value: Any) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str):
        try:
            return as_utc(datetime.fromisoformat(value.strip()))
        except ValueError:
            pass
    raise ValidationError(
        f"workoutInstant is not an ISO-8601 timestamp: {value!r}",
        field="workoutInstant",
    )


def extract_workout_dates(
    logs: Iterable[WorkoutLog],
    tz: str | ZoneInfo,
    now: datetime,
) -> WorkoutDateSummary:
    """Summarize a user's logs by local calendar date.

    ``exercises_today`` and ``exercises_this_week`` count distinct exercise
    ids, not log records. The week runs Sunday through Saturday local time.
    """
    zone = tz if isinstance(tz, ZoneInfo) else resolve_timezone(tz)
    today = normalize(now, zone)
    week_start, week_end = week_bounds(today)

    total_logs = 0
    workout_dates: set[date] = set()
    today_exercises: set[str] = set()
    week_exercises: set[str] = set()

    for log in logs:
        total_logs += 1
        local_date = normalize(log.workout_instant, zone)
        workout_dates.add(local_date)
        if local_date == today:
            today_exercises.add(log.exercise_id)
        if week_start <= local_date <= week_end:
            week_exercises.add(log.exercise_id)

    return WorkoutDateSummary(
        total_logs=total_logs,
        exercises_today=len(today_exercises),
        exercises_this_week=len(week_exercises),
        dates_with_workouts=tuple(sorted(workout_dates, reverse=True)),
        today=today,
    )
