"""Shared test fixtures — reference station configs and a cached seeded run."""

from __future__ import annotations

import pytest

from voltiq_simulator.config import SimulationConfig
from voltiq_simulator.engine.simulator import ChargingSimulator
from voltiq_simulator.models.results import SimulationResult


@pytest.fixture
def reference_config() -> SimulationConfig:
    """20 chargers × 11 kW, 18 kWh/100km, nominal traffic, fixed seed."""
    return SimulationConfig(
        num_chargers=20,
        charger_power_kw=11.0,
        car_efficiency_kwh_per_100km=18.0,
        arrival_multiplier=1.0,
        seed="test-seed-123",
    )


@pytest.fixture
def single_charger_config() -> SimulationConfig:
    return SimulationConfig(num_chargers=1, seed="edge-test-1")


@pytest.fixture(scope="session")
def reference_run() -> tuple[ChargingSimulator, SimulationResult]:
    """One full seeded reference run, shared across tests (a run takes ~1 s)."""
    simulator = ChargingSimulator(SimulationConfig(seed="integrity-test"))
    result = simulator.run()
    return simulator, result


@pytest.fixture
def reference_result(reference_run) -> SimulationResult:
    return reference_run[1]
