"""Tests for the rest-day-buffer streak calculator."""

from datetime import date, timedelta

import pytest

from workout_streaks.errors import ConfigurationError, ValidationError
from workout_streaks.streak import (
    StreakResult,
    compute_streak,
    validate_buffer_policy,
)

TODAY = date(2026, 2, 11)


def _days(*offsets: int) -> list[date]:
    """Workout dates ``offset`` days before TODAY, most recent first."""
    return sorted((TODAY - timedelta(days=o) for o in offsets), reverse=True)


@pytest.fixture(params=["cumulative", "per_gap"])
def policy(request):
    return request.param


class TestBothPolicies:
    def test_empty(self, policy):
        assert compute_streak([], TODAY, 3, policy) == StreakResult(0, 0)

    def test_consecutive_days_without_buffer(self, policy):
        # R=0; workouts today and yesterday
        assert compute_streak(_days(0, 1), TODAY, 0, policy) == StreakResult(2, 0)

    def test_one_missed_day_within_buffer(self, policy):
        # R=1; workouts today and two days ago
        assert compute_streak(_days(0, 2), TODAY, 1, policy) == StreakResult(3, 1)

    def test_inactivity_beyond_buffer_breaks_streak(self, policy):
        # R=1; last workout three days ago
        assert compute_streak(_days(3), TODAY, 1, policy) == StreakResult(0, 0)

    def test_zero_buffer_needs_workout_today(self, policy):
        assert compute_streak(_days(1, 2, 3), TODAY, 0, policy) == StreakResult(0, 0)

    def test_yesterday_consumes_one_buffer_day(self, policy):
        assert compute_streak(_days(1), TODAY, 1, policy) == StreakResult(2, 1)

    def test_single_workout_today(self, policy):
        assert compute_streak(_days(0), TODAY, 0, policy) == StreakResult(1, 0)

    def test_long_consecutive_run(self, policy):
        assert compute_streak(_days(*range(10)), TODAY, 0, policy) == StreakResult(10, 0)

    def test_gap_beyond_buffer_ends_run(self, policy):
        # today, yesterday, then a 2-rest-day gap with R=1
        assert compute_streak(_days(0, 1, 4, 5), TODAY, 1, policy) == StreakResult(2, 0)

    def test_duplicate_dates_count_once(self, policy):
        dates = _days(0, 1) + _days(0, 1)
        assert compute_streak(dates, TODAY, 0, policy) == StreakResult(2, 0)

    def test_unsorted_input(self, policy):
        dates = [TODAY - timedelta(days=1), TODAY - timedelta(days=2), TODAY]
        assert compute_streak(dates, TODAY, 0, policy) == StreakResult(3, 0)

    def test_future_dates_are_ignored(self, policy):
        dates = [TODAY + timedelta(days=1), TODAY]
        assert compute_streak(dates, TODAY, 0, policy) == StreakResult(1, 0)

    def test_only_future_dates(self, policy):
        assert compute_streak([TODAY + timedelta(days=2)], TODAY, 5, policy) == StreakResult(0, 0)

    def test_input_is_not_mutated(self, policy):
        dates = [TODAY - timedelta(days=2), TODAY]
        compute_streak(dates, TODAY, 1, policy)
        assert dates == [TODAY - timedelta(days=2), TODAY]

    def test_negative_buffer_rejected(self, policy):
        with pytest.raises(ValidationError):
            compute_streak(_days(0), TODAY, -1, policy)

    def test_deterministic(self, policy):
        dates = _days(0, 2, 3, 6, 7, 9)
        first = compute_streak(dates, TODAY, 2, policy)
        assert all(compute_streak(dates, TODAY, 2, policy) == first for _ in range(5))


class TestCumulativePolicy:
    def test_spread_gaps_stop_when_budget_is_spent(self):
        # R=2; today, today-2 (1 rest day), today-5 (2 more) -> budget exceeded
        assert compute_streak(_days(0, 2, 5), TODAY, 2, "cumulative") == StreakResult(3, 1)

    def test_days_since_last_workout_count_against_budget(self):
        # R=2; two days idle already, so the 1-day gap before it no longer fits
        assert compute_streak(_days(2, 4), TODAY, 2, "cumulative") == StreakResult(3, 2)

    def test_budget_can_be_spent_exactly(self):
        assert compute_streak(_days(1, 3), TODAY, 2, "cumulative") == StreakResult(4, 2)

    def test_buffer_never_exceeds_rest_days(self):
        result = compute_streak(_days(0, 2, 4, 6, 8, 10), TODAY, 3, "cumulative")
        assert result.buffer_days_used <= 3
        assert result == StreakResult(7, 3)

    def test_is_default(self):
        assert compute_streak(_days(0, 2, 5), TODAY, 2) == StreakResult(3, 1)


class TestPerGapPolicy:
    def test_every_tolerated_gap_is_accepted(self):
        # R=2; gaps of 1 and 2 rest days are each within tolerance
        assert compute_streak(_days(0, 2, 5), TODAY, 2, "per_gap") == StreakResult(6, 3)

    def test_days_since_last_workout_plus_gap(self):
        assert compute_streak(_days(2, 4), TODAY, 2, "per_gap") == StreakResult(5, 3)

    def test_single_oversized_gap_still_breaks(self):
        assert compute_streak(_days(0, 2, 6), TODAY, 2, "per_gap") == StreakResult(3, 1)


class TestValidateBufferPolicy:
    def test_known_policies(self):
        assert validate_buffer_policy("cumulative") == "cumulative"
        assert validate_buffer_policy(" PER_GAP ") == "per_gap"

    def test_unknown_policy(self):
        with pytest.raises(ConfigurationError):
            validate_buffer_policy("weekly")

    def test_compute_streak_rejects_unknown_policy(self):
        with pytest.raises(ConfigurationError):
            compute_streak(_days(0), TODAY, 1, "weekly")  # type: ignore[arg-type]
