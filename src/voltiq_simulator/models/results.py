"""Result types — the contract between engine, CLI, API, and dashboard.

All headline numbers are rounded for presentation (2 decimals for kW / kWh,
4 for ratios).  The per-tick series is exposed unrounded.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ChargingSession(BaseModel):
    """One vehicle plugged into one charger — immutable once created."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    """``"{arrival_tick}-{charger_id}"`` — unique within a run."""

    charger_id: int
    arrival_tick: int
    departure_tick: int
    """First tick the charger is free again (exclusive end)."""

    energy_needed_kwh: float
    """Requested energy = distance / 100 × car efficiency."""

    distance_km: float

    @property
    def duration_ticks(self) -> int:
        return self.departure_tick - self.arrival_tick


class SimulationMetadata(BaseModel):
    """Run bookkeeping and secondary utilisation metrics."""

    computation_time_ms: float
    timestamp: str
    """ISO-8601 UTC time the result was built."""

    config_hash: str
    """Non-cryptographic fingerprint of the input configuration."""

    seed_used: str
    """Seed string actually fed to the random source.  Re-running with
    ``seed=seed_used`` reproduces the result, even for unseeded runs."""

    average_power_kw: float
    average_concurrency: float
    """average_power_kw / theoretical_max_power_kw."""


class SimulationResult(BaseModel):
    """Complete output of one year-long simulation."""

    total_energy_kwh: float
    """Metered energy (Σ per-tick delivery), not the requested total."""

    theoretical_max_power_kw: float
    """num_chargers × charger_power_kw."""

    actual_max_power_kw: float
    """Highest instantaneous station power observed."""

    concurrency_factor: float
    """actual_max_power_kw / theoretical_max_power_kw, in [0, 1]."""

    power_demand_per_tick: list[float]
    """Station power (kW) for each of the 35 040 ticks."""

    charging_sessions: list[ChargingSession]
    metadata: SimulationMetadata


class SessionSummary(BaseModel):
    """Averages over a run's session list."""

    session_count: int
    average_duration_ticks: float
    average_duration_hours: float
    average_energy_kwh: float
    average_distance_km: float


class SweepPoint(BaseModel):
    """One station size in a charger-count sweep."""

    num_chargers: int
    theoretical_max_power_kw: float
    actual_max_power_kw: float
    concurrency_factor: float
    average_concurrency: float
    total_energy_kwh: float
