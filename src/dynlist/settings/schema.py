"""Schema helpers for the dynlist settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from dynlist.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_PREFETCH_MARGIN,
    DEFAULT_RETRY_LIMIT,
    SETTINGS_SCHEMA_ID,
    STORE_FAILURE_RATE,
    STORE_MAX_DELAY_SEC,
    STORE_MIN_DELAY_SEC,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "dynlist/settings.schema.json",
    "type": "object",
    "required": ["schema", "provider", "store"],
    "properties": {
        "schema": {"const": SETTINGS_SCHEMA_ID},
        "provider": {
            "type": "object",
            "properties": {
                "batch_size": {"type": "integer", "minimum": 1},
                "prefetch_margin": {"type": "integer", "minimum": 0},
                "retry_limit": {"type": "integer", "minimum": 0},
            },
            "additionalProperties": False,
        },
        "store": {
            "type": "object",
            "properties": {
                "min_delay": {"type": "number", "minimum": 0},
                "max_delay": {"type": "number", "minimum": 0},
                "failure_rate": {"type": "number", "minimum": 0, "maximum": 1},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": SETTINGS_SCHEMA_ID,
    "provider": {
        "batch_size": DEFAULT_BATCH_SIZE,
        "prefetch_margin": DEFAULT_PREFETCH_MARGIN,
        "retry_limit": DEFAULT_RETRY_LIMIT,
    },
    "store": {
        "min_delay": STORE_MIN_DELAY_SEC,
        "max_delay": STORE_MAX_DELAY_SEC,
        "failure_rate": STORE_FAILURE_RATE,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)
_SECTIONS = ("provider", "store")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                merged.setdefault(key, {}).update(value)
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
