"""Configuration models and validation."""

from voltiq_simulator.config.simulation import (
    FIELD_BOUNDS,
    MAX_ARRIVAL_MULTIPLIER,
    MAX_CAR_EFFICIENCY,
    MAX_CHARGER_POWER_KW,
    MAX_CHARGERS,
    MIN_ARRIVAL_MULTIPLIER,
    MIN_CAR_EFFICIENCY,
    MIN_CHARGER_POWER_KW,
    MIN_CHARGERS,
    SimulationConfig,
)
from voltiq_simulator.config.validation import (
    ConfigIssue,
    ConfigurationError,
    ensure_valid_config,
    validate_config,
)

__all__ = [
    "SimulationConfig",
    "ConfigIssue",
    "ConfigurationError",
    "validate_config",
    "ensure_valid_config",
    "FIELD_BOUNDS",
    "MIN_CHARGERS",
    "MAX_CHARGERS",
    "MIN_CHARGER_POWER_KW",
    "MAX_CHARGER_POWER_KW",
    "MIN_CAR_EFFICIENCY",
    "MAX_CAR_EFFICIENCY",
    "MIN_ARRIVAL_MULTIPLIER",
    "MAX_ARRIVAL_MULTIPLIER",
]
