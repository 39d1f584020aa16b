"""Configuration validation — exhaustive, non-raising field checks.

``validate_config`` never stops at the first problem: every field violation is
reported so that a form or command line can show them all at once.  Only
``ensure_valid_config`` (used by the engine) turns a non-empty list into a
single ``ConfigurationError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from voltiq_simulator.config.simulation import FIELD_BOUNDS, SimulationConfig

_RANGE_ERRORS = {"greater_than_equal", "less_than_equal", "greater_than", "less_than"}
_INTEGER_ERRORS = {"int_from_float", "int_parsing", "int_type"}
_NUMBER_ERRORS = {"float_parsing", "float_type"}


@dataclass(frozen=True)
class ConfigIssue:
    """One field-level problem found in a configuration."""

    field: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ConfigurationError(ValueError):
    """Raised when a simulator is built from an invalid configuration."""

    def __init__(self, issues: list[ConfigIssue]):
        self.issues = list(issues)
        lines = "\n".join(f"  - {issue}" for issue in self.issues)
        super().__init__(f"Invalid configuration:\n{lines}")


def _bounds_message(field: str) -> str | None:
    bounds = FIELD_BOUNDS.get(field)
    if bounds is None:
        return None
    low, high, unit = bounds
    return f"Must be between {low:g} and {high:g}{unit}"


def _to_issue(error: dict[str, Any]) -> ConfigIssue:
    """Translate one pydantic error entry into a ``ConfigIssue``."""
    field = ".".join(str(part) for part in error["loc"]) or "config"
    kind = error["type"]
    value = error.get("input")

    if kind in _INTEGER_ERRORS:
        message = "Must be an integer"
    elif kind in _RANGE_ERRORS:
        message = _bounds_message(field) or error["msg"]
    elif kind in _NUMBER_ERRORS:
        message = "Must be a number"
    elif kind == "finite_number":
        message = "Must be a finite number"
    elif kind == "extra_forbidden":
        message = "Unknown configuration field"
    else:
        message = error["msg"]
    return ConfigIssue(field=field, message=message, value=value)


def validate_config(config: SimulationConfig | Mapping[str, Any]) -> list[ConfigIssue]:
    """Check a configuration against its bounds.

    Accepts either a ``SimulationConfig`` or a plain mapping of field names to
    (possibly unparsed) values; missing fields take their defaults.

    Returns
    -------
    list[ConfigIssue]
        Every violation found, in field order.  Empty means valid.
    """
    if isinstance(config, SimulationConfig):
        data = config.model_dump()
    else:
        data = dict(config)

    try:
        SimulationConfig.model_validate(data)
    except ValidationError as exc:
        return [_to_issue(err) for err in exc.errors()]
    return []


def ensure_valid_config(config: SimulationConfig | Mapping[str, Any]) -> SimulationConfig:
    """Return a validated ``SimulationConfig`` or raise ``ConfigurationError``."""
    issues = validate_config(config)
    if issues:
        raise ConfigurationError(issues)
    if isinstance(config, SimulationConfig):
        return config
    return SimulationConfig.model_validate(dict(config))
