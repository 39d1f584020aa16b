"""Tests for engine/metrics.py — result aggregation and post-processing."""

from __future__ import annotations

import numpy as np
import pytest

from voltiq_simulator.config import SimulationConfig
from voltiq_simulator.engine.metrics import (
    _to_base36,
    average_daily_profile,
    build_result,
    day_profile,
    hash_config,
    peak_day_index,
    summarize_sessions,
)
from voltiq_simulator.engine.timeline import TICKS_PER_DAY, TICKS_PER_YEAR
from voltiq_simulator.models.results import ChargingSession


def _session(arrival: int, departure: int, energy: float, km: float, charger: int = 0):
    return ChargingSession(
        session_id=f"{arrival}-{charger}",
        charger_id=charger,
        arrival_tick=arrival,
        departure_tick=departure,
        energy_needed_kwh=energy,
        distance_km=km,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Config hash
# ═══════════════════════════════════════════════════════════════════════════

class TestHashConfig:

    @pytest.mark.parametrize("value, expected", [
        (0, "0"),
        (35, "z"),
        (36, "10"),
        (-36, "-10"),
        (1295, "zz"),
    ])
    def test_base36(self, value, expected):
        assert _to_base36(value) == expected

    def test_stable_for_equal_configs(self):
        a = SimulationConfig(num_chargers=10, seed="x")
        b = SimulationConfig(num_chargers=10, seed="x")
        assert hash_config(a) == hash_config(b)

    def test_changes_with_any_field(self):
        base = hash_config(SimulationConfig())
        assert hash_config(SimulationConfig(num_chargers=21)) != base
        assert hash_config(SimulationConfig(seed="other")) != base
        assert hash_config(SimulationConfig(arrival_multiplier=1.5)) != base

    def test_fits_in_signed_32_bits(self):
        value = int(hash_config(SimulationConfig()), 36)
        assert -(2 ** 31) <= value < 2 ** 31


# ═══════════════════════════════════════════════════════════════════════════
# build_result
# ═══════════════════════════════════════════════════════════════════════════

class TestBuildResult:

    def _arrays(self):
        power = np.zeros(TICKS_PER_YEAR)
        energy = np.zeros(TICKS_PER_YEAR)
        power[10:14] = 22.0
        power[200] = 44.0
        energy[10:14] = 5.5
        energy[200] = 11.0
        return power, energy

    def test_headline_metrics(self):
        config = SimulationConfig(num_chargers=4, seed="hand")
        power, energy = self._arrays()
        result = build_result(config, power, energy, [], 12.3456, "hand")

        assert result.total_energy_kwh == pytest.approx(33.0)
        assert result.theoretical_max_power_kw == 44.0
        assert result.actual_max_power_kw == 44.0
        assert result.concurrency_factor == 1.0
        assert result.metadata.computation_time_ms == 12.35
        assert result.metadata.seed_used == "hand"
        assert result.metadata.config_hash == hash_config(config)

    def test_averages(self):
        config = SimulationConfig(num_chargers=4)
        power, energy = self._arrays()
        result = build_result(config, power, energy, [], 1.0, "s")
        mean_power = (4 * 22.0 + 44.0) / TICKS_PER_YEAR
        assert result.metadata.average_power_kw == round(mean_power, 2)
        assert result.metadata.average_concurrency == round(mean_power / 44.0, 4)

    def test_idle_year(self):
        config = SimulationConfig(num_chargers=1)
        zeros = np.zeros(TICKS_PER_YEAR)
        result = build_result(config, zeros, zeros, [], 1.0, "idle")
        assert result.total_energy_kwh == 0
        assert result.actual_max_power_kw == 0
        assert result.concurrency_factor == 0

    def test_ratio_rounded_to_four_places(self):
        config = SimulationConfig(num_chargers=3, charger_power_kw=11)
        power = np.zeros(TICKS_PER_YEAR)
        power[0] = 11.0
        result = build_result(config, power, np.zeros(TICKS_PER_YEAR), [], 1.0, "r")
        assert result.concurrency_factor == 0.3333

    def test_series_and_sessions_passed_through(self):
        config = SimulationConfig(num_chargers=1)
        power, energy = self._arrays()
        sessions = [_session(10, 14, 22.0, 100)]
        result = build_result(config, power, energy, sessions, 1.0, "p")
        assert len(result.power_demand_per_tick) == TICKS_PER_YEAR
        assert result.power_demand_per_tick[200] == 44.0
        assert result.charging_sessions == sessions


# ═══════════════════════════════════════════════════════════════════════════
# Daily profiles
# ═══════════════════════════════════════════════════════════════════════════

class TestProfiles:

    def test_average_day(self):
        series = np.tile(np.arange(TICKS_PER_DAY, dtype=float), 365)
        profile = average_daily_profile(series)
        assert profile.shape == (TICKS_PER_DAY,)
        assert np.allclose(profile, np.arange(TICKS_PER_DAY))

    def test_peak_day(self):
        series = np.zeros(TICKS_PER_YEAR)
        series[TICKS_PER_DAY * 42 + 5] = 100.0
        assert peak_day_index(series) == 42
        assert peak_day_index(series.tolist()) == 42

    def test_day_profile(self):
        series = np.arange(TICKS_PER_YEAR, dtype=float)
        day = day_profile(series, 2)
        assert day[0] == 2 * TICKS_PER_DAY
        assert len(day) == TICKS_PER_DAY

    @pytest.mark.parametrize("day", [-1, 365])
    def test_day_profile_out_of_range(self, day):
        with pytest.raises(ValueError, match="day must be"):
            day_profile(np.zeros(TICKS_PER_YEAR), day)


# ═══════════════════════════════════════════════════════════════════════════
# Session summary
# ═══════════════════════════════════════════════════════════════════════════

class TestSummarizeSessions:

    def test_empty(self):
        summary = summarize_sessions([])
        assert summary.session_count == 0
        assert summary.average_duration_ticks == 0
        assert summary.average_energy_kwh == 0

    def test_averages(self):
        sessions = [
            _session(0, 4, 9.0, 50),
            _session(10, 12, 3.6, 20, charger=1),
        ]
        summary = summarize_sessions(sessions)
        assert summary.session_count == 2
        assert summary.average_duration_ticks == 3.0
        assert summary.average_duration_hours == 0.75
        assert summary.average_energy_kwh == 6.3
        assert summary.average_distance_km == 35.0
