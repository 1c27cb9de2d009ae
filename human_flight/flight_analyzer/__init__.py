"""
Flight Analyzer Module
======================

This module decides whether a human-flight apparatus (wings, pilot,
optional motor) can get airborne and sustain flight. It integrates:
- Wing geometry for two- and four-wing layouts
- Aerodynamic performance (lift, drag, stall, power, climb)
- Structural integrity (spar sizing, deflection, flutter, safety factor)
- A tri-state viability verdict

Key Classes:
------------
- FlightConfiguration: Validated, immutable analysis input
- FlightSolver: Pipeline from configuration to verdict
- FlightAnalysis: Results of every pipeline stage
- Verdict: VIABLE / TAKEOFF_ONLY / NON_VIABLE with critical issues

Example Usage:
-------------
    from human_flight.flight_analyzer import FlightConfiguration, Material, evaluate

    config = FlightConfiguration(
        pilot_mass_kg=80,
        wing_span_m=6.0,
        wing_chord_m=1.0,
        material=Material.CARBON_FIBER,
        forward_speed_ms=10.0,
    )

    analysis = evaluate(config)
    print(analysis.verdict.status)
    for issue in analysis.verdict.critical_issues:
        print(issue.message)

Units Convention:
----------------
- Velocity: m/s
- Force: Newtons (N)
- Power: Watts (W)
- Area: m²
- Mass: kg
- Density: kg/m³
- Flapping amplitude: degrees
"""

from .config import (
    FlightAnalyzerConfig,
    DEFAULT_CONFIG,
    AIR_DENSITY_SEA_LEVEL,
    GRAVITY,
)
from .materials import Material, MaterialProperties, get_material, list_materials
from .parameters import FlightConfiguration, WingCount, PARAMETER_BOUNDS, SWEEPABLE_FIELDS
from .geometry import WingGeometry, wing_geometry
from .aerodynamics import AerodynamicResult, analyze_aerodynamics
from .structures import StructuralResult, analyze_structure, compute_structural_mass
from .viability import (
    ViabilityStatus,
    IssueKind,
    CriticalIssue,
    InfoMetric,
    Verdict,
    judge,
)
from .flight_solver import FlightAnalysis, FlightSolver, evaluate

__all__ = [
    "FlightAnalyzerConfig",
    "DEFAULT_CONFIG",
    "AIR_DENSITY_SEA_LEVEL",
    "GRAVITY",
    "Material",
    "MaterialProperties",
    "get_material",
    "list_materials",
    "FlightConfiguration",
    "WingCount",
    "PARAMETER_BOUNDS",
    "SWEEPABLE_FIELDS",
    "WingGeometry",
    "wing_geometry",
    "AerodynamicResult",
    "analyze_aerodynamics",
    "StructuralResult",
    "analyze_structure",
    "compute_structural_mass",
    "ViabilityStatus",
    "IssueKind",
    "CriticalIssue",
    "InfoMetric",
    "Verdict",
    "judge",
    "FlightAnalysis",
    "FlightSolver",
    "evaluate",
]
