"""Result builder — turns the finished per-tick series into a SimulationResult.

Rounding happens here and only here: the engine keeps full precision, and the
rounded figures are never fed back into further computation.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timezone

import numpy as np

from voltiq_simulator.config.simulation import SimulationConfig
from voltiq_simulator.engine.timeline import DAYS_PER_YEAR, HOURS_PER_TICK, TICKS_PER_DAY
from voltiq_simulator.models.results import (
    ChargingSession,
    SessionSummary,
    SimulationMetadata,
    SimulationResult,
)

POWER_DECIMALS = 2
RATIO_DECIMALS = 4

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return sign + "".join(reversed(digits))


def hash_config(config: SimulationConfig) -> str:
    """Fingerprint a configuration (32-bit ×31 string hash, base 36).

    Identical inputs give identical fingerprints; this is a cache key, not a
    security primitive.
    """
    text = json.dumps(config.model_dump(mode="json"), separators=(",", ":"))
    h = 0
    for char in text:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return _to_base36(h)


def build_result(
    config: SimulationConfig,
    power_demand: np.ndarray,
    energy_consumed: np.ndarray,
    sessions: list[ChargingSession],
    computation_time_ms: float,
    seed_used: str,
) -> SimulationResult:
    """Aggregate a finished run into headline metrics.

    Parameters
    ----------
    config : SimulationConfig
        The validated configuration the run used.
    power_demand : np.ndarray
        Station power per tick (kW).
    energy_consumed : np.ndarray
        Metered energy per tick (kWh).
    sessions : list[ChargingSession]
        Every session created during the run, in creation order.
    computation_time_ms : float
        Wall time spent in the tick loop.
    seed_used : str
        Seed string the random source was built from.
    """
    total_energy = float(np.sum(energy_consumed))
    theoretical_max = config.theoretical_max_power_kw
    actual_max = float(np.max(power_demand)) if power_demand.size else 0.0
    concurrency_factor = actual_max / theoretical_max

    average_power = float(np.mean(power_demand)) if power_demand.size else 0.0
    average_concurrency = average_power / theoretical_max

    return SimulationResult(
        total_energy_kwh=round(total_energy, POWER_DECIMALS),
        theoretical_max_power_kw=round(theoretical_max, POWER_DECIMALS),
        actual_max_power_kw=round(actual_max, POWER_DECIMALS),
        concurrency_factor=round(concurrency_factor, RATIO_DECIMALS),
        power_demand_per_tick=power_demand.tolist(),
        charging_sessions=sessions,
        metadata=SimulationMetadata(
            computation_time_ms=round(computation_time_ms, 2),
            timestamp=datetime.now(timezone.utc).isoformat(),
            config_hash=hash_config(config),
            seed_used=seed_used,
            average_power_kw=round(average_power, POWER_DECIMALS),
            average_concurrency=round(average_concurrency, RATIO_DECIMALS),
        ),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Post-processing helpers (report, API, dashboard)
# ═══════════════════════════════════════════════════════════════════════════

def _by_day(power_demand: Sequence[float] | np.ndarray) -> np.ndarray:
    series = np.asarray(power_demand, dtype=np.float64)
    return series.reshape(DAYS_PER_YEAR, TICKS_PER_DAY)


def average_daily_profile(power_demand: Sequence[float] | np.ndarray) -> np.ndarray:
    """Mean station power (kW) for each of the 96 ticks of a day."""
    return _by_day(power_demand).mean(axis=0)


def peak_day_index(power_demand: Sequence[float] | np.ndarray) -> int:
    """0-based day containing the highest energy throughput."""
    return int(_by_day(power_demand).sum(axis=1).argmax())


def day_profile(power_demand: Sequence[float] | np.ndarray, day: int) -> np.ndarray:
    """Station power (kW) for the 96 ticks of one 0-based day."""
    if not 0 <= day < DAYS_PER_YEAR:
        raise ValueError(f"day must be in [0, {DAYS_PER_YEAR}), got {day}")
    return _by_day(power_demand)[day]


def summarize_sessions(sessions: Sequence[ChargingSession]) -> SessionSummary:
    """Count and averages over a session list (zeros when empty)."""
    count = len(sessions)
    if count == 0:
        return SessionSummary(
            session_count=0,
            average_duration_ticks=0.0,
            average_duration_hours=0.0,
            average_energy_kwh=0.0,
            average_distance_km=0.0,
        )

    durations = np.fromiter((s.duration_ticks for s in sessions), dtype=np.float64, count=count)
    energies = np.fromiter((s.energy_needed_kwh for s in sessions), dtype=np.float64, count=count)
    distances = np.fromiter((s.distance_km for s in sessions), dtype=np.float64, count=count)
    avg_ticks = float(durations.mean())
    return SessionSummary(
        session_count=count,
        average_duration_ticks=round(avg_ticks, 2),
        average_duration_hours=round(avg_ticks * HOURS_PER_TICK, 2),
        average_energy_kwh=round(float(energies.mean()), POWER_DECIMALS),
        average_distance_km=round(float(distances.mean()), 1),
    )
