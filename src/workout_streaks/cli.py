"""CLI interface for the workout streak engine."""

from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, NoReturn

import click

from .config import Config
from .errors import StreakEngineError
from .extraction import WorkoutLog, extract_workout_dates
from .logging import setup_logging
from .service import get_log_stats
from .settings import parse_user_settings
from .stats import build_consistency_summary, build_log_stats
from .store import connect
from .streak import BUFFER_POLICIES


def _fail(exc: StreakEngineError) -> NoReturn:
    click.echo(json.dumps({"error": exc.to_dict()}), err=True)
    sys.exit(1)


def _parse_now(value: str | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(
            f"not an ISO-8601 timestamp: {value!r}", param_hint="--now"
        ) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _load_logs(path: Path) -> list[WorkoutLog]:
    with path.open() as f:
        try:
            payload: Any = json.load(f)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"not valid JSON: {exc}", param_hint="LOGS_FILE") from None
    if isinstance(payload, dict):
        payload = payload.get("logs", [])
    if not isinstance(payload, list):
        raise click.BadParameter("expected a JSON list of log records", param_hint="LOGS_FILE")
    for index, record in enumerate(payload):
        if not isinstance(record, Mapping):
            raise click.BadParameter(
                f"log record {index} is not a JSON object", param_hint="LOGS_FILE"
            )
    return [WorkoutLog.from_record(record) for record in payload]


@click.group()
@click.pass_context
def main(ctx: click.Context):
    """Workout streak and consistency stats."""
    try:
        config = Config.from_env()
    except StreakEngineError as exc:
        _fail(exc)
    setup_logging(config)
    ctx.obj = config


_now_option = click.option(
    "--now", "now_value", type=str, default=None,
    help="Reference instant (ISO-8601). Defaults to the current UTC time.",
)
_policy_option = click.option(
    "--policy", type=click.Choice(BUFFER_POLICIES), default=None,
    help="Rest-day buffer policy. Defaults to STREAKS_BUFFER_POLICY.",
)


@main.command()
@click.argument("logs_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--timezone", "tz_name", default="UTC", show_default=True, help="IANA timezone.")
@click.option("--rest-days", type=int, default=0, show_default=True, help="Rest-day buffer.")
@_now_option
@_policy_option
@click.pass_obj
def stats(
    config: Config,
    logs_file: Path,
    tz_name: str,
    rest_days: int,
    now_value: str | None,
    policy: str | None,
):
    """Compute log stats from a JSON file of log records."""
    now = _parse_now(now_value)
    try:
        settings = parse_user_settings({"rest_days_buffer": rest_days, "timezone": tz_name})
        logs = _load_logs(logs_file)
        result = build_log_stats(logs, settings, now, policy or config.buffer_policy)
    except StreakEngineError as exc:
        _fail(exc)
    click.echo(json.dumps(result.to_dict(), indent=2))


@main.command()
@click.argument("logs_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--timezone", "tz_name", default="UTC", show_default=True, help="IANA timezone.")
@_now_option
def consistency(logs_file: Path, tz_name: str, now_value: str | None):
    """Total workout days and weekly averages from a JSON file of log records."""
    now = _parse_now(now_value)
    try:
        settings = parse_user_settings({"timezone": tz_name})
        summary = extract_workout_dates(_load_logs(logs_file), settings.timezone, now)
    except StreakEngineError as exc:
        _fail(exc)
    result = build_consistency_summary(summary.dates_with_workouts, summary.today)
    click.echo(json.dumps(result.to_dict(), indent=2))


@main.command("user-stats")
@click.argument("user_id")
@_now_option
@_policy_option
@click.pass_obj
def user_stats(config: Config, user_id: str, now_value: str | None, policy: str | None):
    """Compute log stats for a stored user (requires DATABASE_URL)."""
    now = _parse_now(now_value)
    try:
        database_url = config.require_database_url()
        result = asyncio.run(
            _user_stats(database_url, user_id, now, policy or config.buffer_policy)
        )
    except StreakEngineError as exc:
        _fail(exc)
    click.echo(json.dumps(result.to_dict(), indent=2))


async def _user_stats(database_url: str, user_id: str, now: datetime, policy: str):
    async with await connect(database_url) as conn:
        return await get_log_stats(conn, user_id, now, policy)  # type: ignore[arg-type]


if __name__ == "__main__":
    main()
