import logging
import os
from dataclasses import dataclass

from .errors import ConfigurationError
from .streak import DEFAULT_BUFFER_POLICY, BufferPolicy, validate_buffer_policy


@dataclass(frozen=True)
class Config:
    database_url: str | None = None
    log_format: str = "json"
    log_level: str = "INFO"
    buffer_policy: BufferPolicy = DEFAULT_BUFFER_POLICY

    @classmethod
    def from_env(cls) -> "Config":
        log_format = os.environ.get("STREAKS_LOG_FORMAT", "json").strip().lower()
        if log_format not in ("json", "text"):
            raise ConfigurationError(
                f"STREAKS_LOG_FORMAT must be 'json' or 'text', got {log_format!r}",
                field="STREAKS_LOG_FORMAT",
            )

        log_level = os.environ.get("STREAKS_LOG_LEVEL", "INFO").strip().upper()
        if log_level not in logging.getLevelNamesMapping():
            raise ConfigurationError(
                f"STREAKS_LOG_LEVEL is not a logging level: {log_level!r}",
                field="STREAKS_LOG_LEVEL",
            )

        return cls(
            database_url=os.environ.get("DATABASE_URL") or None,
            log_format=log_format,
            log_level=log_level,
            buffer_policy=validate_buffer_policy(
                os.environ.get("STREAKS_BUFFER_POLICY", DEFAULT_BUFFER_POLICY)
            ),
        )

    def require_database_url(self) -> str:
        if not self.database_url:
            raise ConfigurationError("DATABASE_URL must be set", field="DATABASE_URL")
        return self.database_url
