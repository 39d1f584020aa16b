"""Voltiq Charging Station Simulator — Streamlit Dashboard.

Layout: sidebar inputs → main area with three tabs (Power | Sessions | Capacity).
The dashboard only formats results; every number comes from the engine.

Run with:
    streamlit run src/voltiq_simulator/dashboard/app.py
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from voltiq_simulator.config.simulation import (
    MAX_ARRIVAL_MULTIPLIER,
    MAX_CAR_EFFICIENCY,
    MAX_CHARGER_POWER_KW,
    MAX_CHARGERS,
    MIN_ARRIVAL_MULTIPLIER,
    MIN_CAR_EFFICIENCY,
    MIN_CHARGER_POWER_KW,
    MIN_CHARGERS,
    SimulationConfig,
)
from voltiq_simulator.config.validation import ConfigurationError
from voltiq_simulator.engine.metrics import (
    average_daily_profile,
    day_profile,
    peak_day_index,
    summarize_sessions,
)
from voltiq_simulator.engine.simulator import ChargingSimulator
from voltiq_simulator.engine.sweep import sweep_num_chargers
from voltiq_simulator.engine.tables import ARRIVAL_PROBABILITIES, expected_charging_distance_km
from voltiq_simulator.engine.timeline import MINUTES_PER_TICK, TICKS_PER_DAY
from voltiq_simulator.models.results import SimulationResult

# ---------------------------------------------------------------------------
# Defaults: single source of truth for sidebar values
# ---------------------------------------------------------------------------
_DEF = SimulationConfig()

st.set_page_config(page_title="Voltiq Station Simulator", page_icon="⚡", layout="wide")

_PLOT_LAYOUT = dict(
    height=320,
    margin=dict(l=20, r=20, t=30, b=20),
    plot_bgcolor="rgba(0,0,0,0)",
    paper_bgcolor="rgba(0,0,0,0)",
    font=dict(family="Inter", size=11),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _tick_labels() -> list[str]:
    """HH:MM for each tick of a day."""
    return [
        f"{(t * MINUTES_PER_TICK) // 60:02d}:{(t * MINUTES_PER_TICK) % 60:02d}"
        for t in range(TICKS_PER_DAY)
    ]


# ---------------------------------------------------------------------------
# SIDEBAR: Inputs
# ---------------------------------------------------------------------------
st.sidebar.header("Station Inputs")

with st.sidebar.expander("Station", expanded=True):
    num_chargers = st.slider("Charge points", MIN_CHARGERS, MAX_CHARGERS, _DEF.num_chargers)
    charger_power = st.number_input(
        "Power per charge point (kW)", MIN_CHARGER_POWER_KW, MAX_CHARGER_POWER_KW,
        _DEF.charger_power_kw, 0.1,
    )

with st.sidebar.expander("Traffic & Vehicles", expanded=True):
    efficiency = st.slider(
        "Car consumption (kWh/100km)", MIN_CAR_EFFICIENCY, MAX_CAR_EFFICIENCY,
        _DEF.car_efficiency_kwh_per_100km, 0.5,
    )
    multiplier = st.slider(
        "Arrival multiplier", MIN_ARRIVAL_MULTIPLIER, MAX_ARRIVAL_MULTIPLIER,
        _DEF.arrival_multiplier, 0.05,
        help="Scales every hourly arrival probability (1.0 = nominal traffic)",
    )

with st.sidebar.expander("Simulation"):
    seed = st.text_input("Seed", "voltiq", help="Leave empty for a non-reproducible run")

run_clicked = st.sidebar.button("Run Simulation", type="primary", use_container_width=True)

try:
    config = SimulationConfig(
        num_chargers=num_chargers,
        charger_power_kw=charger_power,
        car_efficiency_kwh_per_100km=efficiency,
        arrival_multiplier=multiplier,
        seed=seed or None,
    )
except ValueError as exc:
    st.error(str(exc))
    st.stop()

if not run_clicked and "result" not in st.session_state:
    st.title("Voltiq Charging Station Simulator")
    st.info("Configure the station in the sidebar and press **Run Simulation**.")
    st.stop()

# ---------------------------------------------------------------------------
# RUN ENGINE
# ---------------------------------------------------------------------------
if run_clicked:
    try:
        with st.spinner("Simulating 35 040 ticks…"):
            st.session_state["result"] = ChargingSimulator(config).run()
        st.session_state["config"] = config
        st.session_state.pop("sweep", None)
    except ConfigurationError as exc:
        st.error(str(exc))
        st.stop()

result: SimulationResult = st.session_state["result"]
config = st.session_state["config"]
meta = result.metadata

# ---------------------------------------------------------------------------
# Headline metrics
# ---------------------------------------------------------------------------
st.title("Voltiq Charging Station Simulator")
st.caption(
    f"{config.num_chargers} × {config.charger_power_kw:g} kW · seed `{meta.seed_used}` · "
    f"config `{meta.config_hash}` · computed in {meta.computation_time_ms:.0f} ms"
)

m1, m2, m3, m4 = st.columns(4)
m1.metric("Energy Delivered", f"{result.total_energy_kwh:,.0f} kWh")
m2.metric("Actual Max Power", f"{result.actual_max_power_kw:,.1f} kW",
          help=f"Theoretical max: {result.theoretical_max_power_kw:,.1f} kW")
m3.metric("Concurrency Factor", f"{result.concurrency_factor * 100:.1f} %",
          help="Actual max power / theoretical max power")
m4.metric("Average Concurrency", f"{meta.average_concurrency * 100:.1f} %",
          help=f"Average power: {meta.average_power_kw:,.1f} kW")

power_tab, sessions_tab, capacity_tab = st.tabs(["Power", "Sessions", "Capacity"])

# ═══════════════════════════════════════════════════════════════════════════
# POWER TAB
# ═══════════════════════════════════════════════════════════════════════════
with power_tab:
    labels = _tick_labels()
    peak_day = peak_day_index(result.power_demand_per_tick)

    st.subheader("Daily Power Profile")
    fig_day = go.Figure()
    fig_day.add_trace(go.Scatter(
        x=labels, y=average_daily_profile(result.power_demand_per_tick),
        name="Average day", line=dict(color="#6c5ce7"),
    ))
    fig_day.add_trace(go.Scatter(
        x=labels, y=day_profile(result.power_demand_per_tick, peak_day),
        name=f"Busiest day (Day {peak_day + 1})", line=dict(color="#e17055", dash="dot"),
    ))
    fig_day.update_layout(xaxis_title="Time of day", yaxis_title="Power (kW)", **_PLOT_LAYOUT)
    st.plotly_chart(fig_day, use_container_width=True)

    st.subheader("Weekly Energy")
    series = np.asarray(result.power_demand_per_tick, dtype=np.float64)
    daily_kwh = series.reshape(-1, TICKS_PER_DAY).sum(axis=1) * (MINUTES_PER_TICK / 60)
    weekly = pd.Series(daily_kwh).groupby(np.arange(daily_kwh.size) // 7).sum()
    fig_week = go.Figure(go.Bar(x=weekly.index + 1, y=weekly.values, marker_color="#00b894"))
    fig_week.update_layout(xaxis_title="Week", yaxis_title="Energy (kWh)", **_PLOT_LAYOUT)
    st.plotly_chart(fig_week, use_container_width=True)

    with st.expander("Arrival probability by hour"):
        st.bar_chart(pd.DataFrame(
            {"probability": ARRIVAL_PROBABILITIES}, index=range(24),
        ))

# ═══════════════════════════════════════════════════════════════════════════
# SESSIONS TAB
# ═══════════════════════════════════════════════════════════════════════════
with sessions_tab:
    summary = summarize_sessions(result.charging_sessions)
    s1, s2, s3 = st.columns(3)
    s1.metric("Sessions", f"{summary.session_count:,}")
    s2.metric("Avg Duration", f"{summary.average_duration_hours:.1f} h")
    s3.metric("Avg Energy", f"{summary.average_energy_kwh:.1f} kWh")
    st.caption(
        f"Demand table mean: {expected_charging_distance_km():.1f} km per arrival "
        f"(0-km arrivals included); charged sessions average "
        f"{summary.average_distance_km:.1f} km."
    )

    if result.charging_sessions:
        df = pd.DataFrame([s.model_dump() for s in result.charging_sessions])
        counts = df["distance_km"].value_counts().sort_index()
        fig_dist = go.Figure(go.Bar(
            x=[f"{km:g} km" for km in counts.index], y=counts.values, marker_color="#0984e3",
        ))
        fig_dist.update_layout(xaxis_title="Requested distance", yaxis_title="Sessions", **_PLOT_LAYOUT)
        st.plotly_chart(fig_dist, use_container_width=True)

        per_charger = df.groupby("charger_id")["energy_needed_kwh"].sum()
        st.markdown("**Requested energy per charge point (kWh)**")
        st.bar_chart(per_charger)

# ═══════════════════════════════════════════════════════════════════════════
# CAPACITY TAB
# ═══════════════════════════════════════════════════════════════════════════
with capacity_tab:
    st.subheader("Concurrency vs. Station Size")
    st.caption("Same traffic and seed, 5 → 25 charge points. Runs five full simulations.")
    if st.button("Run charger sweep", key="sweep_run"):
        with st.spinner("Simulating 5 station sizes…"):
            points = sweep_num_chargers(config)
        st.session_state["sweep"] = pd.DataFrame([p.model_dump() for p in points])

    if "sweep" in st.session_state:
        sweep_df = st.session_state["sweep"]
        fig_sweep = go.Figure()
        fig_sweep.add_trace(go.Scatter(
            x=sweep_df["num_chargers"], y=sweep_df["concurrency_factor"] * 100,
            mode="lines+markers", name="Concurrency factor", line=dict(color="#6c5ce7"),
        ))
        fig_sweep.add_trace(go.Scatter(
            x=sweep_df["num_chargers"], y=sweep_df["average_concurrency"] * 100,
            mode="lines+markers", name="Average concurrency", line=dict(color="#fdcb6e"),
        ))
        fig_sweep.update_layout(xaxis_title="Charge points", yaxis_title="%", **_PLOT_LAYOUT)
        st.plotly_chart(fig_sweep, use_container_width=True)
        st.dataframe(sweep_df, use_container_width=True, hide_index=True)
