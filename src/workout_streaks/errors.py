"""Stable error taxonomy for the streak engine and its collaborators."""

from __future__ import annotations

from typing import Literal

ErrorClass = Literal[
    "configuration",
    "validation",
    "upstream",
    "other",
]

ERROR_CLASS_BY_CODE: dict[str, ErrorClass] = {
    "configuration_error": "configuration",
    "validation_error": "validation",
    "upstream_unavailable": "upstream",
}


class StreakEngineError(Exception):
    code = "streak_engine_error"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        if code is not None:
            self.code = code

    def to_dict(self) -> dict[str, str | None]:
        return {"code": self.code, "message": self.message, "field": self.field}


class ConfigurationError(StreakEngineError):
    """Unknown timezone identifier or unusable runtime configuration."""

    code = "configuration_error"


class ValidationError(StreakEngineError):
    """Malformed settings or log records reaching the engine."""

    code = "validation_error"


class UpstreamUnavailable(StreakEngineError):
    """Log or settings store could not be read."""

    code = "upstream_unavailable"


def classify_error_code(error_code: str | None) -> ErrorClass:
    normalized = str(error_code or "").strip().lower()
    if not normalized:
        return "other"
    return ERROR_CLASS_BY_CODE.get(normalized, "other")


def error_taxonomy_v1() -> dict[str, object]:
    return {
        "schema_version": "streak_error_taxonomy.v1",
        "classes": ["configuration", "validation", "upstream", "other"],
        "code_to_class": dict(ERROR_CLASS_BY_CODE),
    }
