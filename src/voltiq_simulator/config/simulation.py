"""Station configuration — the single input of one simulation run."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

MIN_CHARGERS = 1
MAX_CHARGERS = 30

MIN_CHARGER_POWER_KW = 3.7
MAX_CHARGER_POWER_KW = 350.0
"""Upper bound covers DC fast charging."""

MIN_CAR_EFFICIENCY = 10.0
MAX_CAR_EFFICIENCY = 30.0

MIN_ARRIVAL_MULTIPLIER = 0.2
MAX_ARRIVAL_MULTIPLIER = 2.0

FIELD_BOUNDS: dict[str, tuple[float, float, str]] = {
    "num_chargers": (MIN_CHARGERS, MAX_CHARGERS, ""),
    "charger_power_kw": (MIN_CHARGER_POWER_KW, MAX_CHARGER_POWER_KW, " kW"),
    "car_efficiency_kwh_per_100km": (MIN_CAR_EFFICIENCY, MAX_CAR_EFFICIENCY, " kWh/100km"),
    "arrival_multiplier": (MIN_ARRIVAL_MULTIPLIER, MAX_ARRIVAL_MULTIPLIER, ""),
}
"""field → (min, max, unit suffix) used for human-readable bound messages."""


class SimulationConfig(BaseModel):
    """One charging station: identical chargers plus a traffic level.

    The default instance is the reference station (20 chargers × 11 kW,
    18 kWh/100km cars, nominal traffic).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        allow_inf_nan=False,
        coerce_numbers_to_str=True,
    )

    num_chargers: int = Field(
        default=20, ge=MIN_CHARGERS, le=MAX_CHARGERS,
        description="Number of charge points at the station",
    )
    charger_power_kw: float = Field(
        default=11.0, ge=MIN_CHARGER_POWER_KW, le=MAX_CHARGER_POWER_KW,
        description="Rated power of every charge point (kW)",
    )
    car_efficiency_kwh_per_100km: float = Field(
        default=18.0, ge=MIN_CAR_EFFICIENCY, le=MAX_CAR_EFFICIENCY,
        description="Vehicle consumption (kWh per 100 km)",
    )
    arrival_multiplier: float = Field(
        default=1.0, ge=MIN_ARRIVAL_MULTIPLIER, le=MAX_ARRIVAL_MULTIPLIER,
        description="Scales every hourly arrival probability. "
                    "0.2 = very quiet site, 2.0 = twice the nominal traffic.",
    )
    seed: str | None = Field(
        default=None,
        description="Optional seed for reproducible runs. "
                    "None or empty = seeded from the wall clock (non-reproducible).",
    )

    @field_validator(
        "num_chargers", "charger_power_kw", "car_efficiency_kwh_per_100km", "arrival_multiplier",
        mode="before",
    )
    @classmethod
    def _reject_booleans(cls, value: Any, info: ValidationInfo) -> Any:
        # Lax mode would read True as 1.
        if isinstance(value, bool):
            kind = "int_type" if info.field_name == "num_chargers" else "float_type"
            raise PydanticCustomError(kind, "Input should be a number, not a boolean")
        return value

    @field_validator("seed", mode="before")
    @classmethod
    def _empty_seed_is_unseeded(cls, value: Any) -> Any:
        return None if value == "" else value

    @property
    def theoretical_max_power_kw(self) -> float:
        """Power drawn if every charger is busy at once."""
        return self.num_chargers * self.charger_power_kw
