"""User settings value type, validated once at the trust boundary.

Settings come from the settings store as loose JSON. They are parsed into a
frozen pydantic model here; nothing downstream re-validates them.
"""

from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, field_validator

from .dates import DEFAULT_TIMEZONE, normalize_timezone_name
from .errors import ConfigurationError, ValidationError

DEFAULT_REST_DAYS_BUFFER = 0

# Store keys (snake_case) and API keys (camelCase) both map onto model fields.
_FIELD_ALIASES: dict[str, str] = {
    "userId": "user_id",
    "restDaysBuffer": "rest_days_buffer",
    "restDays": "rest_days_buffer",
    "rest_days": "rest_days_buffer",
    "timeZone": "timezone",
    "time_zone": "timezone",
}


class UserSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    user_id: str | None = None
    rest_days_buffer: int = DEFAULT_REST_DAYS_BUFFER
    timezone: str = DEFAULT_TIMEZONE

    @field_validator("rest_days_buffer", mode="before")
    @classmethod
    def rest_days_is_integer(cls, v: Any) -> Any:
        if isinstance(v, bool) or (isinstance(v, float) and not v.is_integer()):
            raise ValueError("rest_days_buffer must be an integer")
        return v

    @field_validator("rest_days_buffer")
    @classmethod
    def rest_days_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("rest_days_buffer must be >= 0")
        return v

    @field_validator("timezone")
    @classmethod
    def timezone_is_known(cls, v: str) -> str:
        normalized = normalize_timezone_name(v)
        if normalized is None:
            raise ValueError(f"unknown timezone identifier: {v!r}")
        return normalized


def default_user_settings(user_id: str | None = None) -> UserSettings:
    """Settings used when the store has nothing for a user: (0, "UTC")."""
    return UserSettings(user_id=user_id)


def parse_user_settings(data: dict[str, Any]) -> UserSettings:
    """Validate raw settings into a UserSettings.

    Missing or null keys take their defaults. Raises ConfigurationError for an
    unknown timezone and ValidationError for anything else malformed.
    """
    normalized: dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        normalized[_FIELD_ALIASES.get(key, key)] = value

    try:
        return UserSettings.model_validate(normalized)
    except pydantic.ValidationError as exc:
        errors = exc.errors()
        for err in errors:
            if err["loc"] and err["loc"][0] == "timezone":
                raise ConfigurationError(
                    f"Unknown timezone identifier: {normalized.get('timezone')!r}",
                    field="timezone",
                ) from exc
        first = errors[0]
        field = str(first["loc"][0]) if first["loc"] else None
        raise ValidationError(
            "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in errors
            ),
            field=field,
        ) from exc
