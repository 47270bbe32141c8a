"""
Battery power budget for duty-cycled devices.
"""

from dataclasses import dataclass
from typing import Iterable

import numpy as np

SECONDS_PER_HOUR = 3600.0


@dataclass
class PowerPhase:
    """One operating mode: current draw (A) for ``time`` seconds per cycle."""
    current: float
    time: float
    enabled: bool = True


def average_current(phases: Iterable[PowerPhase]) -> float:
    """
    Time-weighted average current over the enabled phases.

    Returns 0 when the enabled phases add up to no time.
    """
    active = [p for p in phases if p.enabled]
    if not active:
        return 0.0
    currents = np.array([p.current for p in active], dtype=float)
    times = np.array([p.time for p in active], dtype=float)
    total_time = times.sum()
    if total_time <= 0.0:
        return 0.0
    return float(np.dot(currents, times) / total_time)


def capacity_for_runtime(runtime: float, current: float) -> float:
    """Battery capacity (Ah) to run ``runtime`` seconds at ``current`` amps."""
    return runtime * current / SECONDS_PER_HOUR


def runtime_for_capacity(capacity: float, current: float) -> float:
    """Runtime (s) of a ``capacity`` Ah battery; 0 when nothing is drawn."""
    if current <= 0.0:
        return 0.0
    return capacity * SECONDS_PER_HOUR / current
