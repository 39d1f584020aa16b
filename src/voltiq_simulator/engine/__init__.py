"""Engine — random source, time model, tables, tick loop, and result builder."""

from voltiq_simulator.engine.metrics import (
    average_daily_profile,
    build_result,
    day_profile,
    hash_config,
    peak_day_index,
    summarize_sessions,
)
from voltiq_simulator.engine.random_source import RandomSource
from voltiq_simulator.engine.simulator import (
    ChargerState,
    ChargingSimulator,
    calculate_charging_duration,
    calculate_energy_needed,
    run_reference_simulation,
    run_simulation,
)
from voltiq_simulator.engine.sweep import sweep_num_chargers
from voltiq_simulator.engine.tables import (
    ARRIVAL_PROBABILITIES,
    CHARGING_DEMANDS,
    EXPECTED_RANGES,
)
from voltiq_simulator.engine.timeline import (
    MINUTES_PER_TICK,
    TICKS_PER_DAY,
    TICKS_PER_HOUR,
    TICKS_PER_YEAR,
    tick_to_hour,
    tick_to_timestamp,
)

__all__ = [
    "ChargingSimulator",
    "ChargerState",
    "run_simulation",
    "run_reference_simulation",
    "calculate_energy_needed",
    "calculate_charging_duration",
    "RandomSource",
    "build_result",
    "hash_config",
    "average_daily_profile",
    "peak_day_index",
    "day_profile",
    "summarize_sessions",
    "sweep_num_chargers",
    "ARRIVAL_PROBABILITIES",
    "CHARGING_DEMANDS",
    "EXPECTED_RANGES",
    "MINUTES_PER_TICK",
    "TICKS_PER_HOUR",
    "TICKS_PER_DAY",
    "TICKS_PER_YEAR",
    "tick_to_hour",
    "tick_to_timestamp",
]
