"""
Sweep Analyzer Module
=====================

This module evaluates a flight configuration across a range of one
parameter, locates viability transitions and exports the results.

Classes:
--------
- SweepConfig: Field, range and step count of a sweep
- SweepPoint: One evaluated step (value, aerodynamics, structure, verdict)
- SweepSequence: Lazy, restartable sequential sweep
- SweepSolver: Parallel sweep engine with progress and cancellation

Usage:
------
    from human_flight.flight_analyzer import FlightConfiguration
    from human_flight.sweep_analyzer import sweep, find_transition

    base = FlightConfiguration()
    for value, aero, structure, verdict in sweep(base, "wing_span_m", (1.5, 8.0), 14):
        print(f"{value:.2f} m: {verdict.status.value}")

    motor_w = find_transition(base, "motor_power_w", (0, 10000), "climb_rate_ms", 0.0)
"""

from .config import SweepConfig, SweepLimits, SweepPoint, DEFAULT_LIMITS
from .sweep_solver import (
    SweepProgress,
    SweepSequence,
    SweepSolver,
    sweep,
    find_transition,
    results_to_dataframe,
    export_results_csv,
)

__all__ = [
    "SweepConfig",
    "SweepLimits",
    "SweepPoint",
    "DEFAULT_LIMITS",
    "SweepProgress",
    "SweepSequence",
    "SweepSolver",
    "sweep",
    "find_transition",
    "results_to_dataframe",
    "export_results_csv",
]
