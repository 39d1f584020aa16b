"""Plain-text report — human-readable summary of one simulation result.

Shared by the CLI and the ``/simulate/report`` endpoint.  Formats numbers,
never changes them.
"""

from __future__ import annotations

from voltiq_simulator.config.simulation import SimulationConfig
from voltiq_simulator.engine.metrics import peak_day_index, summarize_sessions
from voltiq_simulator.engine.tables import EXPECTED_RANGES, expected_charging_distance_km
from voltiq_simulator.models.results import SimulationResult


def _is_reference_station(config: SimulationConfig) -> bool:
    default = SimulationConfig()
    return (
        config.num_chargers == default.num_chargers
        and config.charger_power_kw == default.charger_power_kw
        and config.car_efficiency_kwh_per_100km == default.car_efficiency_kwh_per_100km
        and config.arrival_multiplier == default.arrival_multiplier
    )


def range_warnings(config: SimulationConfig, result: SimulationResult) -> list[str]:
    """Headline metrics outside the reference station's observed ranges.

    Only meaningful for the reference configuration; empty otherwise.
    """
    if not _is_reference_station(config):
        return []
    observed = {
        "actual_max_power_kw": result.actual_max_power_kw,
        "concurrency_factor": result.concurrency_factor,
    }
    warnings = []
    for name, (low, high) in EXPECTED_RANGES.items():
        value = observed[name]
        if not low <= value <= high:
            warnings.append(f"{name} = {value} is outside the expected range [{low}, {high}]")
    return warnings


def generate_report(config: SimulationConfig, result: SimulationResult) -> str:
    """Render the summary block printed by the CLI.

    Covers:
      1. Station configuration
      2. Energy and power headline metrics
      3. Session statistics
      4. Run metadata (and reference-range warnings, if any)
    """
    sessions = summarize_sessions(result.charging_sessions)
    meta = result.metadata
    peak_day = peak_day_index(result.power_demand_per_tick)

    sections: list[str] = []

    sections.append("=" * 60)
    sections.append("STATION")
    sections.append("=" * 60)
    sections.append(
        f"Chargers: {config.num_chargers} × {config.charger_power_kw:g} kW\n"
        f"Car efficiency: {config.car_efficiency_kwh_per_100km:g} kWh/100km\n"
        f"Arrival multiplier: {config.arrival_multiplier:g}"
    )

    sections.append("")
    sections.append("=" * 60)
    sections.append("ENERGY & POWER")
    sections.append("=" * 60)
    sections.append(
        f"Total energy delivered: {result.total_energy_kwh:,.2f} kWh\n"
        f"Actual max power: {result.actual_max_power_kw:,.2f} kW\n"
        f"Theoretical max power: {result.theoretical_max_power_kw:,.2f} kW\n"
        f"Concurrency factor: {result.concurrency_factor * 100:.2f} %\n"
        f"Average power: {meta.average_power_kw:,.2f} kW\n"
        f"Average concurrency: {meta.average_concurrency * 100:.2f} %\n"
        f"Busiest day: Day {peak_day + 1}"
    )

    sections.append("")
    sections.append("=" * 60)
    sections.append("SESSIONS")
    sections.append("=" * 60)
    sections.append(f"Sessions created: {sessions.session_count:,}")
    sections.append(
        f"Expected distance per arrival: {expected_charging_distance_km():.1f} km "
        f"(0-km arrivals included)"
    )
    if sessions.session_count:
        sections.append(
            f"Average session duration: {sessions.average_duration_ticks:.1f} ticks "
            f"({sessions.average_duration_hours:.1f} hours)\n"
            f"Average energy per session: {sessions.average_energy_kwh:.1f} kWh\n"
            f"Average distance per session: {sessions.average_distance_km:.1f} km"
        )

    sections.append("")
    sections.append("=" * 60)
    sections.append("RUN")
    sections.append("=" * 60)
    sections.append(
        f"Computation time: {meta.computation_time_ms:.0f} ms\n"
        f"Seed: {meta.seed_used}\n"
        f"Config hash: {meta.config_hash}"
    )

    warnings = range_warnings(config, result)
    if warnings:
        sections.append("")
        sections.append("Warnings:")
        sections.extend(f"  - {w}" for w in warnings)

    return "\n".join(sections)
