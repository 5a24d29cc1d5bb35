"""Stats service: fetch collaborators, then run the pure engine."""

import logging
import time
from datetime import datetime
from typing import Any

import psycopg

from .extraction import extract_workout_dates
from .settings import UserSettings, default_user_settings
from .stats import ConsistencySummary, LogStats, build_consistency_summary, build_log_stats
from .store import fetch_logs, fetch_settings
from .streak import DEFAULT_BUFFER_POLICY, BufferPolicy

logger = logging.getLogger(__name__)


async def load_settings(conn: psycopg.AsyncConnection[Any], user_id: str) -> UserSettings:
    settings = await fetch_settings(conn, user_id)
    if settings is None:
        logger.debug(
            "No stored settings; using defaults",
            extra={"streak_user_id": user_id},
        )
        return default_user_settings(user_id)
    return settings


async def get_log_stats(
    conn: psycopg.AsyncConnection[Any],
    user_id: str,
    now: datetime,
    policy: BufferPolicy = DEFAULT_BUFFER_POLICY,
) -> LogStats:
    """Compute LogStats for ``user_id`` as of ``now``.

    Store failures propagate as UpstreamUnavailable; bad stored settings as
    ConfigurationError or ValidationError. Nothing is downgraded to zeros.
    """
    t0 = time.monotonic()
    settings = await load_settings(conn, user_id)
    logs = await fetch_logs(conn, user_id)
    stats = build_log_stats(logs, settings, now, policy)

    logger.info(
        "Computed log stats: streak=%d buffer=%d/%d",
        stats.streak, stats.buffer_days_used, stats.rest_days_buffer,
        extra={
            "streak_user_id": user_id,
            "streak_total_logs": stats.total_logs,
            "streak_policy": policy,
            "streak_duration_ms": round((time.monotonic() - t0) * 1000, 2),
        },
    )
    return stats


async def get_consistency_summary(
    conn: psycopg.AsyncConnection[Any],
    user_id: str,
    now: datetime,
) -> ConsistencySummary:
    settings = await load_settings(conn, user_id)
    logs = await fetch_logs(conn, user_id)
    summary = extract_workout_dates(logs, settings.timezone, now)
    return build_consistency_summary(summary.dates_with_workouts, summary.today)
