"""Simulation engine — one station, one year, 15-minute ticks.

Each tick runs three phases in this order:
  1. release   — chargers whose session has ended become idle
  2. arrivals  — every idle charger gets an independent arrival trial
  3. recording — station power and metered energy for the tick

Chargers are visited in index order in every phase.  That order is part of
the reproducibility contract: it fixes which draw from the random source
feeds which decision.

Entry points:
  - ``ChargingSimulator(config).run()``
  - ``run_simulation(config=None, **overrides)``
  - ``run_reference_simulation(seed)`` — 20 × 11 kW reference station
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

from voltiq_simulator.config.simulation import SimulationConfig
from voltiq_simulator.config.validation import ensure_valid_config
from voltiq_simulator.engine.metrics import build_result, hash_config
from voltiq_simulator.engine.random_source import RandomSource
from voltiq_simulator.engine.tables import ARRIVAL_PROBABILITIES, CHARGING_DEMANDS
from voltiq_simulator.engine.timeline import (
    HOURS_PER_TICK,
    TICKS_PER_HOUR,
    TICKS_PER_YEAR,
    tick_to_hour,
)
from voltiq_simulator.models.results import ChargingSession, SimulationResult

logger = logging.getLogger(__name__)


def calculate_energy_needed(distance_km: float, efficiency_kwh_per_100km: float) -> float:
    """Energy (kWh) to cover *distance_km*."""
    return (distance_km / 100.0) * efficiency_kwh_per_100km


def calculate_charging_duration(energy_kwh: float, charger_power_kw: float) -> int:
    """Charging time in whole ticks, rounded up."""
    return math.ceil((energy_kwh / charger_power_kw) * TICKS_PER_HOUR)


@dataclass
class ChargerState:
    """One physical charge point.

    ``occupied`` is always ``current_session is not None``; ``available_at``
    only means something while occupied.
    """

    id: int
    occupied: bool = False
    current_session: ChargingSession | None = None
    available_at: int = 0

    def occupy(self, session: ChargingSession) -> None:
        self.occupied = True
        self.current_session = session
        self.available_at = session.departure_tick

    def release(self) -> None:
        self.occupied = False
        self.current_session = None


class ChargingSimulator:
    """Time-stepped occupancy model for a station of identical chargers.

    Construction validates the configuration and raises
    ``ConfigurationError`` listing every problem; nothing can fail after that.
    An instance is single-caller: ``run()`` is not reentrant.
    """

    def __init__(self, config: SimulationConfig | Mapping[str, Any]):
        self.config = ensure_valid_config(config)
        self.random = RandomSource(self.config.seed)
        self.seed_used = self.random.seed
        self._has_run = False
        self._reset()

    def _reset(self) -> None:
        self.chargers = [ChargerState(id=i) for i in range(self.config.num_chargers)]
        self.sessions: list[ChargingSession] = []
        self.power_demand = np.zeros(TICKS_PER_YEAR, dtype=np.float64)
        self.energy_consumed = np.zeros(TICKS_PER_YEAR, dtype=np.float64)

    def run(self) -> SimulationResult:
        """Simulate the full year and build the result.

        A second call starts over from the same seed and returns the same
        numbers.
        """
        if self._has_run:
            self.random = RandomSource(self.seed_used)
            self._reset()
        self._has_run = True

        logger.debug(
            "starting run config_hash=%s seed=%s chargers=%d power_kw=%s",
            hash_config(self.config), self.seed_used,
            self.config.num_chargers, self.config.charger_power_kw,
        )
        start = time.perf_counter()

        for tick in range(TICKS_PER_YEAR):
            self._release_completed(tick)
            self._handle_arrivals(tick)
            self._record_tick(tick)

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        result = build_result(
            self.config,
            self.power_demand,
            self.energy_consumed,
            self.sessions,
            elapsed_ms,
            self.seed_used,
        )
        logger.info(
            "run complete sessions=%d energy_kwh=%.2f peak_kw=%.2f elapsed_ms=%.1f",
            len(self.sessions), result.total_energy_kwh,
            result.actual_max_power_kw, elapsed_ms,
        )
        return result

    # ── Phase 1 ────────────────────────────────────────────────────────
    def _release_completed(self, tick: int) -> None:
        for charger in self.chargers:
            if charger.occupied and charger.available_at <= tick:
                charger.release()

    # ── Phase 2 ────────────────────────────────────────────────────────
    def _handle_arrivals(self, tick: int) -> None:
        hourly = ARRIVAL_PROBABILITIES[tick_to_hour(tick)]
        # Hourly probability spread over the hour's four ticks.
        p = (hourly / TICKS_PER_HOUR) * self.config.arrival_multiplier

        for charger in self.chargers:
            if charger.occupied:
                continue
            if not self.random.bernoulli(p):
                continue
            distance_km = self.random.sample(CHARGING_DEMANDS)
            if distance_km == 0:
                continue
            self._start_session(charger, tick, distance_km)

    def _start_session(self, charger: ChargerState, arrival_tick: int, distance_km: float) -> None:
        energy_kwh = calculate_energy_needed(distance_km, self.config.car_efficiency_kwh_per_100km)
        duration = calculate_charging_duration(energy_kwh, self.config.charger_power_kw)
        session = ChargingSession(
            session_id=f"{arrival_tick}-{charger.id}",
            charger_id=charger.id,
            arrival_tick=arrival_tick,
            departure_tick=arrival_tick + duration,
            energy_needed_kwh=energy_kwh,
            distance_km=distance_km,
        )
        self.sessions.append(session)
        charger.occupy(session)

    # ── Phase 3 ────────────────────────────────────────────────────────
    def _record_tick(self, tick: int) -> None:
        power_kw = self.config.charger_power_kw
        full_tick_kwh = power_kw * HOURS_PER_TICK
        total_power = 0.0
        total_energy = 0.0

        for charger in self.chargers:
            session = charger.current_session
            if not charger.occupied or session is None:
                continue
            total_power += power_kw

            # Duration recomputed from the requested energy, not taken from
            # the rounded-up tick count.
            exact_ticks = (session.energy_needed_kwh / power_kw) * TICKS_PER_HOUR
            fraction = exact_ticks - math.floor(exact_ticks)
            ticks_remaining = session.departure_tick - tick

            if ticks_remaining > 1:
                total_energy += full_tick_kwh
            elif ticks_remaining == 1 and fraction > 0:
                total_energy += power_kw * fraction * HOURS_PER_TICK
            elif ticks_remaining == 1:
                total_energy += full_tick_kwh

        self.power_demand[tick] = total_power
        self.energy_consumed[tick] = total_energy


def run_simulation(
    config: SimulationConfig | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> SimulationResult:
    """Run one simulation, merging *overrides* onto *config* (or the defaults)."""
    if config is None:
        base: dict[str, Any] = {}
    elif isinstance(config, SimulationConfig):
        base = config.model_dump()
    else:
        base = dict(config)
    base.update(overrides)
    return ChargingSimulator(base).run()


def run_reference_simulation(seed: str | None = None) -> SimulationResult:
    """The reference station: 20 chargers × 11 kW with default traffic."""
    return run_simulation(seed=seed)
