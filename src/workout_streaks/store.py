"""Log and settings store adapters (psycopg).

These are the only I/O in the package. Driver failures surface as
UpstreamUnavailable; a missing settings row is returned as None so the
caller can apply defaults before the engine runs.
"""

import logging
from typing import Any

import psycopg
from psycopg.rows import dict_row

from .errors import UpstreamUnavailable
from .extraction import WorkoutLog
from .settings import UserSettings, parse_user_settings

logger = logging.getLogger(__name__)


async def fetch_logs(
    conn: psycopg.AsyncConnection[Any], user_id: str
) -> list[WorkoutLog]:
    """Load every workout log for a user. No ordering is assumed."""
    try:
        async with conn.cursor(row_factory=dict_row) as cur:
            await cur.execute(
                """
                SELECT id, user_id, exercise_id, workout_date
                FROM workout_logs
                WHERE user_id = %s
                """,
                (user_id,),
            )
            rows = await cur.fetchall()
    except psycopg.Error as exc:
        logger.warning(
            "Failed to load workout logs: %s", exc,
            extra={"streak_user_id": user_id},
        )
        raise UpstreamUnavailable(f"log store unavailable: {exc}") from exc

    return [WorkoutLog.from_record(row) for row in rows]


async def fetch_settings(
    conn: psycopg.AsyncConnection[Any], user_id: str
) -> UserSettings | None:
    """Load a user's settings, or None when the user has none stored."""
    try:
        async with conn.cursor(row_factory=dict_row) as cur:
            await cur.execute(
                """
                SELECT user_id, settings
                FROM user_settings
                WHERE user_id = %s
                LIMIT 1
                """,
                (user_id,),
            )
            row = await cur.fetchone()
    except psycopg.Error as exc:
        logger.warning(
            "Failed to load user settings: %s", exc,
            extra={"streak_user_id": user_id},
        )
        raise UpstreamUnavailable(f"settings store unavailable: {exc}") from exc

    if row is None:
        return None
    data = row.get("settings") or {}
    return parse_user_settings({**data, "user_id": str(row["user_id"])})


async def connect(database_url: str) -> psycopg.AsyncConnection[Any]:
    try:
        return await psycopg.AsyncConnection.connect(database_url)
    except psycopg.Error as exc:
        raise UpstreamUnavailable(f"database unavailable: {exc}") from exc
