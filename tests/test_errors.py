from __future__ import annotations

from workout_streaks.errors import (
    ConfigurationError,
    UpstreamUnavailable,
    ValidationError,
    classify_error_code,
    error_taxonomy_v1,
)


def test_error_codes_are_stable() -> None:
    assert ConfigurationError("x").code == "configuration_error"
    assert ValidationError("x").code == "validation_error"
    assert UpstreamUnavailable("x").code == "upstream_unavailable"


def test_classify_error_code_maps_known_classes() -> None:
    assert classify_error_code("configuration_error") == "configuration"
    assert classify_error_code("VALIDATION_ERROR") == "validation"
    assert classify_error_code("upstream_unavailable") == "upstream"


def test_classify_error_code_defaults_to_other() -> None:
    assert classify_error_code(None) == "other"
    assert classify_error_code("disk_full") == "other"


def test_to_dict_carries_field() -> None:
    err = ValidationError("rest_days_buffer must be >= 0", field="rest_days_buffer")
    assert err.to_dict() == {
        "code": "validation_error",
        "message": "rest_days_buffer must be >= 0",
        "field": "rest_days_buffer",
    }


def test_taxonomy_lists_every_code() -> None:
    taxonomy = error_taxonomy_v1()
    assert taxonomy["schema_version"] == "streak_error_taxonomy.v1"
    assert set(taxonomy["code_to_class"]) == {
        "configuration_error",
        "validation_error",
        "upstream_unavailable",
    }
