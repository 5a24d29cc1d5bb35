"""Streak calculation with a rest-day buffer.

Walks the distinct workout dates backward from today. A gap between two
workout days (or between the newest workout day and today) keeps the run
alive as long as the rest days it implies fit the user's buffer.

Two buffer policies are supported:

- ``cumulative`` (default): the buffer is a budget for the whole run. A gap
  is accepted only while the total rest days consumed stays within it, so
  ``buffer_days_used`` never exceeds the buffer.
- ``per_gap``: each gap is checked against the buffer on its own and the
  rest days of every accepted gap are summed. ``buffer_days_used`` can then
  exceed the buffer.

Example with a buffer of 2 and workouts on today, today-2 and today-5:
cumulative gives streak=3 / used=1, per_gap gives streak=6 / used=3.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Literal, get_args

from .dates import days_between
from .errors import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

BufferPolicy = Literal["cumulative", "per_gap"]

DEFAULT_BUFFER_POLICY: BufferPolicy = "cumulative"
BUFFER_POLICIES: tuple[str, ...] = get_args(BufferPolicy)


@dataclass(frozen=True)
class StreakResult:
    streak: int
    buffer_days_used: int


NO_STREAK = StreakResult(streak=0, buffer_days_used=0)


def validate_buffer_policy(value: str) -> BufferPolicy:
    normalized = str(value or "").strip().lower()
    if normalized not in BUFFER_POLICIES:
        raise ConfigurationError(
            f"Unknown buffer policy {value!r}. Expected one of {list(BUFFER_POLICIES)}.",
            field="buffer_policy",
        )
    return normalized  # type: ignore[return-value]


def compute_streak(
    sorted_dates_desc: Iterable[date],
    today: date,
    rest_days_buffer: int,
    policy: BufferPolicy = DEFAULT_BUFFER_POLICY,
) -> StreakResult:
    """Compute the current streak ending today.

    ``streak`` is the inclusive number of calendar days from the oldest
    workout day in the run through today. ``buffer_days_used`` counts the
    rest days consumed, including the days since the newest workout.
    Dates after ``today`` are ignored.
    """
    if rest_days_buffer < 0:
        raise ValidationError("rest_days_buffer must be >= 0", field="rest_days_buffer")
    policy = validate_buffer_policy(policy)

    # Copy: callers' collections are never reordered.
    dates = sorted({d for d in sorted_dates_desc if d <= today}, reverse=True)
    if not dates:
        return NO_STREAK

    gap_today = days_between(today, dates[0])
    if gap_today > rest_days_buffer:
        logger.debug(
            "Streak broken by inactivity: %d days since %s exceeds buffer %d",
            gap_today, dates[0], rest_days_buffer,
        )
        return NO_STREAK

    cursor = dates[0]
    buffer_used = gap_today

    for older in dates[1:]:
        rest_days_needed = days_between(cursor, older) - 1
        if rest_days_needed > rest_days_buffer:
            break
        if policy == "cumulative" and buffer_used + rest_days_needed > rest_days_buffer:
            break
        buffer_used += rest_days_needed
        cursor = older

    return StreakResult(
        streak=days_between(today, cursor) + 1,
        buffer_days_used=buffer_used,
    )
