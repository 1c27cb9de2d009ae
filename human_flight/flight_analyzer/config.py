"""
Flight Analyzer Configuration Module
====================================

This module contains the physical constants and the fixed reference
coefficients used by the aerodynamic, structural and viability analyses.

All analyses assume sea-level, steady-state conditions. Air density can be
overridden per flight configuration, but there is no altitude model.

Physical Constants:
------------------
- AIR_DENSITY_SEA_LEVEL: Standard air density at sea level (1.225 kg/m³)
- GRAVITY: Gravitational acceleration (9.81 m/s²)
- AIR_DYNAMIC_VISCOSITY: Dynamic viscosity of air at 15°C (1.81e-5 Pa·s)

Usage:
------
    from human_flight.flight_analyzer.config import FlightAnalyzerConfig

    config = FlightAnalyzerConfig(limit_load_factor=3.0)
    analysis = evaluate(configuration, config=config)
"""

from dataclasses import dataclass


# =============================================================================
# Physical Constants
# =============================================================================

# Standard air density at sea level (kg/m³)
# ISA conditions: 15°C, 101325 Pa
AIR_DENSITY_SEA_LEVEL = 1.225

# Gravitational acceleration (m/s²)
GRAVITY = 9.81

# Dynamic viscosity of air at 15°C (Pa·s)
AIR_DYNAMIC_VISCOSITY = 1.81e-5

# First root of the cantilever bending frequency equation (β₁L)
CANTILEVER_MODE_CONSTANT = 1.875


@dataclass
class FlightAnalyzerConfig:
    """
    Reference coefficients and judgement margins for the flight analyzer.

    The defaults describe a generic low-speed cambered airfoil on a box-spar
    wing. Only the functional shape of each model is fixed; every
    coefficient here can be tuned without touching the solver code.

    Attributes:
    ----------
    lift_coefficient : float
        Cruise lift coefficient. 0.6 is roughly 2π × 0.1 rad.

    max_lift_coefficient : float
        Lift coefficient at the stall, used for the stall speed.

    zero_lift_drag_coefficient : float
        Parasitic drag coefficient (C_D0).

    oswald_efficiency : float
        Span efficiency factor for induced drag. Typical: 0.7-0.9.

    limit_load_factor : float
        Manoeuvre load factor the wing is sized for (g).

    design_safety_factor : float
        Safety factor the spar wall is sized to reach at the limit load.

    min_safety_factor : float
        Safety factor required for a viable verdict.

    min_flutter_margin : float
        Flutter speed / airspeed ratio required for a viable verdict.
    """

    # -------------------------------------------------------------------------
    # Aerodynamic Coefficients
    # -------------------------------------------------------------------------

    lift_coefficient: float = 0.6
    max_lift_coefficient: float = 1.2
    zero_lift_drag_coefficient: float = 0.03
    oswald_efficiency: float = 0.8

    # Flapping-induced airspeed: k × f × amplitude(rad) × chord
    flapping_velocity_coefficient: float = 1.0

    # Flapping power: k × ρ × S × f³ × amplitude(rad)² × panel_span³
    flapping_power_coefficient: float = 0.1

    # Reynolds number boundaries between flow regimes
    laminar_reynolds_limit: float = 5.0e5
    turbulent_reynolds_limit: float = 3.0e6

    # -------------------------------------------------------------------------
    # Wing Geometry
    # -------------------------------------------------------------------------

    # Panel length of a four-wing layout relative to the configured span
    four_wing_panel_span_ratio: float = 0.6

    # -------------------------------------------------------------------------
    # Structural Model
    # -------------------------------------------------------------------------

    # Spar box depth and width as fractions of the chord
    thickness_to_chord: float = 0.12
    spar_width_fraction: float = 0.25

    # Skin gauge, applied to upper and lower surfaces (m)
    skin_thickness_m: float = 0.00025

    # Minimum manufacturable spar wall (m)
    min_wall_thickness_m: float = 0.0005

    # Ribs, fittings and bracing on top of spar + skin
    secondary_structure_factor: float = 1.15

    # Root moment arm as a fraction of panel span (0.5 uniform, 1/3 triangular)
    load_distribution_factor: float = 0.5

    limit_load_factor: float = 2.5
    design_safety_factor: float = 1.5

    # Critical reduced frequency k = ω(c/2)/V for bending flutter onset
    flutter_reduced_frequency: float = 0.1

    # -------------------------------------------------------------------------
    # Takeoff
    # -------------------------------------------------------------------------

    # Duration of the burst effort available to reach lift-off (s)
    takeoff_burst_duration_s: float = 10.0

    # -------------------------------------------------------------------------
    # Viability Margins
    # -------------------------------------------------------------------------

    min_lift_to_weight: float = 1.0
    min_safety_factor: float = 1.5
    min_flutter_margin: float = 1.2

    # Airspeed must exceed this multiple of the stall speed
    stall_speed_margin: float = 1.2

    # -------------------------------------------------------------------------
    # Numerical Floors
    # -------------------------------------------------------------------------

    min_airspeed_ms: float = 0.1
    min_wing_area_m2: float = 1.0e-3
    degenerate_tolerance: float = 1.0e-9


# Default configuration instance
DEFAULT_CONFIG = FlightAnalyzerConfig()
