"""Time model — 15-minute ticks over a 365-day year.

Tick 0 is Day 1, 00:00.  All functions are pure and accept any non-negative
tick; within the simulation horizon ticks run 0 … ``TICKS_PER_YEAR − 1``.
"""

from __future__ import annotations

MINUTES_PER_TICK = 15
TICKS_PER_HOUR = 4
HOURS_PER_TICK = 1.0 / TICKS_PER_HOUR
TICKS_PER_DAY = 96
DAYS_PER_YEAR = 365
TICKS_PER_YEAR = TICKS_PER_DAY * DAYS_PER_YEAR
"""35 040 ticks — the length of every per-tick series."""


def tick_to_hour(tick: int) -> int:
    """Hour of day (0–23) the tick falls in."""
    return (tick % TICKS_PER_DAY) // TICKS_PER_HOUR


def tick_to_day(tick: int) -> int:
    """0-based day of year."""
    return tick // TICKS_PER_DAY


def tick_to_timestamp(tick: int) -> str:
    """Render a tick as ``"Day 1, 00:15"`` (1-based day). Diagnostics only."""
    day = tick_to_day(tick) + 1
    tick_of_day = tick % TICKS_PER_DAY
    hour = tick_of_day // TICKS_PER_HOUR
    minute = (tick_of_day % TICKS_PER_HOUR) * MINUTES_PER_TICK
    return f"Day {day}, {hour:02d}:{minute:02d}"
