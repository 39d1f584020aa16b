"""Result models — simulation output contracts."""

from voltiq_simulator.models.results import (
    ChargingSession,
    SessionSummary,
    SimulationMetadata,
    SimulationResult,
    SweepPoint,
)

__all__ = [
    "ChargingSession",
    "SessionSummary",
    "SimulationMetadata",
    "SimulationResult",
    "SweepPoint",
]
