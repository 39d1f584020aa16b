"""Charger-count sweep — how utilisation changes with station size.

Runs the engine once per station size, sequentially, with every other input
(seed included) held at the base configuration.  With a fixed traffic
pattern, the concurrency factor trends down as chargers are added: it gets
harder for all of them to be busy at the same moment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from voltiq_simulator.config.simulation import SimulationConfig
from voltiq_simulator.config.validation import ensure_valid_config
from voltiq_simulator.engine.simulator import ChargingSimulator
from voltiq_simulator.models.results import SweepPoint

logger = logging.getLogger(__name__)

DEFAULT_CHARGER_COUNTS: tuple[int, ...] = (5, 10, 15, 20, 25)


def sweep_num_chargers(
    base: SimulationConfig | Mapping[str, Any] | None = None,
    counts: Iterable[int] = DEFAULT_CHARGER_COUNTS,
) -> list[SweepPoint]:
    """Simulate each station size in *counts* and collect utilisation.

    Raises ``ConfigurationError`` before any run if the base configuration
    or one of the counts is invalid.
    """
    base_config = ensure_valid_config(base if base is not None else {})
    configs = [
        ensure_valid_config({**base_config.model_dump(), "num_chargers": n})
        for n in counts
    ]

    points: list[SweepPoint] = []
    for config in configs:
        result = ChargingSimulator(config).run()
        points.append(SweepPoint(
            num_chargers=config.num_chargers,
            theoretical_max_power_kw=result.theoretical_max_power_kw,
            actual_max_power_kw=result.actual_max_power_kw,
            concurrency_factor=result.concurrency_factor,
            average_concurrency=result.metadata.average_concurrency,
            total_energy_kwh=result.total_energy_kwh,
        ))
        logger.debug(
            "sweep point chargers=%d concurrency=%.4f",
            config.num_chargers, result.concurrency_factor,
        )
    return points
