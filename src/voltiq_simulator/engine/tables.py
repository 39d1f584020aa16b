"""Reference probability tables — hourly arrivals and charging demand.

Both tables are fixed data.  They are checked once at import: a table whose
probabilities do not sum to 1 (±1e-4) is a packaging bug and fails loudly.

Arrival table
    Probability that an EV shows up at a free charger during each hour of
    the day.  Low overnight (0.94 %), rising through the day, peaking at
    10.38 % between 16:00 and 19:00.

Demand table
    Distance (km) the arriving driver wants to recharge for.  34.34 % of
    arrivals do not charge at all (0 km): they park, look, and leave.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

PROBABILITY_TOLERANCE = 1e-4

ARRIVAL_PROBABILITIES: tuple[float, ...] = (
    0.0094,  # 00:00
    0.0094,  # 01:00
    0.0094,  # 02:00
    0.0094,  # 03:00
    0.0094,  # 04:00
    0.0094,  # 05:00
    0.0094,  # 06:00
    0.0094,  # 07:00
    0.0283,  # 08:00 morning increase
    0.0283,  # 09:00
    0.0566,  # 10:00 midday
    0.0566,  # 11:00
    0.0566,  # 12:00
    0.0755,  # 13:00 afternoon rise
    0.0755,  # 14:00
    0.0755,  # 15:00
    0.1038,  # 16:00 peak
    0.1038,  # 17:00 peak
    0.1038,  # 18:00 peak
    0.0472,  # 19:00 evening decline
    0.0472,  # 20:00
    0.0472,  # 21:00
    0.0094,  # 22:00 night
    0.0094,  # 23:00
)
"""Index = hour of day (0–23)."""

CHARGING_DEMANDS: tuple[tuple[int, float], ...] = (
    (0, 0.3434),    # arrives but does not charge
    (5, 0.0490),
    (10, 0.0980),
    (20, 0.1176),
    (30, 0.0882),
    (50, 0.1176),
    (100, 0.1078),
    (200, 0.0490),
    (300, 0.0294),
)
"""Ordered ``(distance_km, probability)`` pairs; order matters for sampling."""

EXPECTED_RANGES: dict[str, tuple[float, float]] = {
    "actual_max_power_kw": (77.0, 121.0),
    "concurrency_factor": (0.35, 0.55),
}
"""Observed ranges for the reference station (20 chargers × 11 kW, defaults)."""


def check_distribution(name: str, probabilities: Sequence[float]) -> None:
    """Raise ``ValueError`` unless *probabilities* form a distribution."""
    if any(p < 0 for p in probabilities):
        raise ValueError(f"{name}: probabilities must be non-negative")
    # Table entries have four decimals; rounding keeps float noise off the boundary.
    total = round(math.fsum(probabilities), 9)
    if abs(total - 1.0) > PROBABILITY_TOLERANCE:
        raise ValueError(f"{name}: probabilities sum to {total:.6f}, not 1.0")


def expected_charging_distance_km() -> float:
    """Mean requested distance per arrival (0-km arrivals included)."""
    return math.fsum(km * p for km, p in CHARGING_DEMANDS)


check_distribution("ARRIVAL_PROBABILITIES", ARRIVAL_PROBABILITIES)
check_distribution("CHARGING_DEMANDS", [p for _, p in CHARGING_DEMANDS])

if len(ARRIVAL_PROBABILITIES) != 24:
    raise ValueError("ARRIVAL_PROBABILITIES must have one entry per hour")
