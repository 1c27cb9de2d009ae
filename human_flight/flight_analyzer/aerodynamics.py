"""
Aerodynamic Analysis Module
===========================

Derives lift, drag, stall speed, power required and climb rate for a
flight configuration using steady, sea-level, closed-form relations.

Model:
------
    V     = forward_speed - wind_speed + k_v·f·θ·c     effective airspeed
    q     = ½·ρ·V²
    L     = q·S·C_L
    C_L,w = W / (q·S)                                  lift coefficient carrying W
    C_D   = C_D0 + C_L,w² / (π·AR·e)                   parasitic + induced
    D     = q·S·C_D
    V_s   = sqrt(2·W / (ρ·S·C_Lmax))

Power Terms:
-----------
    drag      D·V
    flapping  k_p·ρ·S·f³·θ²·L_panel³
    climb     W·climb_rate when climbing

    climb_rate            = (sustained + motor - level power) / W
    unassisted climb_rate = (sustained - level power) / W

Induced drag is taken at the lift coefficient that holds the weight at the
current airspeed, so an under-lifted wing pays for the missing lift in
drag power and level power grows with weight.

The takeoff check asks whether burst plus motor power can hold the flyer
at stall speed while accelerating it to lift-off within a short burst.

Units Convention:
----------------
SI throughout: m, kg, N, W, m/s, Pa. Amplitude enters as degrees and is
converted to radians internally.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Optional

from .config import FlightAnalyzerConfig, DEFAULT_CONFIG, GRAVITY, AIR_DYNAMIC_VISCOSITY
from .geometry import wing_geometry
from .parameters import FlightConfiguration
from .structures import compute_structural_mass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AerodynamicResult:
    """
    Aerodynamic performance at the configured flight condition.

    Attributes:
    ----------
    total_wing_area_m2 : float
        Summed planform area (m²)

    aspect_ratio : float
        Per-pair aspect ratio

    lift_n, drag_n : float
        Aerodynamic forces at cruise (N)

    lift_to_weight_ratio : float
        Cruise lift / total weight

    stall_speed_ms : float
        Airspeed at which C_Lmax just carries the weight (m/s)

    power_required_w : float
        Sum of drag, flapping and climb power (W)

    reynolds_number : float
        Chord Reynolds number at the effective airspeed

    climb_rate_ms : float
        Steady climb rate on sustained + motor power (m/s), negative for sink
    """
    total_wing_area_m2: float
    aspect_ratio: float
    lift_n: float
    drag_n: float
    lift_to_weight_ratio: float
    stall_speed_ms: float
    power_required_w: float
    reynolds_number: float
    climb_rate_ms: float

    # Power breakdown
    drag_power_w: float = 0.0
    flapping_power_w: float = 0.0
    climb_power_w: float = 0.0
    available_power_w: float = 0.0
    unassisted_climb_rate_ms: float = 0.0

    # Flight condition
    raw_airspeed_ms: float = 0.0
    effective_airspeed_ms: float = 0.0
    flapping_velocity_ms: float = 0.0
    dynamic_pressure_pa: float = 0.0
    lift_coefficient: float = 0.0
    weight_lift_coefficient: float = 0.0
    drag_coefficient: float = 0.0
    flow_regime: str = ""

    # Mass
    structural_mass_kg: float = 0.0
    total_mass_kg: float = 0.0
    weight_n: float = 0.0

    # Takeoff
    takeoff_power_required_w: float = 0.0
    takeoff_power_available_w: float = 0.0
    takeoff_feasible: bool = False

    # Numerical floors applied
    airspeed_floored: bool = False
    area_floored: bool = False

    @property
    def level_power_w(self) -> float:
        """Power to hold level flight at the configured airspeed (W)."""
        return self.drag_power_w + self.flapping_power_w

    def to_dict(self) -> dict:
        """Convert result to dictionary for export."""
        return asdict(self)


# =============================================================================
# Elementary Relations
# =============================================================================

def flapping_velocity(
    frequency_hz: float,
    amplitude_deg: float,
    chord_m: float,
    coefficient: float = DEFAULT_CONFIG.flapping_velocity_coefficient
) -> float:
    """Mean airspeed contribution of the flapping stroke (m/s)."""
    return coefficient * frequency_hz * math.radians(amplitude_deg) * chord_m


def dynamic_pressure(air_density: float, airspeed: float) -> float:
    """q = ½ρV² (Pa)."""
    return 0.5 * air_density * airspeed ** 2


def drag_coefficient(
    lift_coefficient: float,
    aspect_ratio: float,
    config: FlightAnalyzerConfig = DEFAULT_CONFIG
) -> float:
    """
    Total drag coefficient: parasitic plus induced.

    C_D = C_D0 + C_L² / (π·AR·e)
    """
    induced = lift_coefficient ** 2 / (math.pi * aspect_ratio * config.oswald_efficiency)
    return config.zero_lift_drag_coefficient + induced


def stall_speed(weight_n: float, air_density: float, wing_area_m2: float,
                max_lift_coefficient: float) -> float:
    """Speed at which the maximum lift coefficient just carries the weight (m/s)."""
    return math.sqrt(2.0 * weight_n / (air_density * wing_area_m2 * max_lift_coefficient))


def reynolds_number(air_density: float, airspeed: float, chord_m: float) -> float:
    """Chord Reynolds number Re = ρVc/μ."""
    return air_density * airspeed * chord_m / AIR_DYNAMIC_VISCOSITY


def flow_regime(reynolds: float, config: FlightAnalyzerConfig = DEFAULT_CONFIG) -> str:
    """Classify the boundary layer from the Reynolds number."""
    if reynolds < config.laminar_reynolds_limit:
        return "laminar"
    if reynolds < config.turbulent_reynolds_limit:
        return "transitional"
    return "turbulent"


# =============================================================================
# Aerodynamic Analysis
# =============================================================================

def analyze_aerodynamics(
    configuration: FlightConfiguration,
    structural_mass_kg: Optional[float] = None,
    config: Optional[FlightAnalyzerConfig] = None
) -> AerodynamicResult:
    """
    Compute aerodynamic performance for a configuration.

    Parameters:
    ----------
    configuration : FlightConfiguration
        Flight configuration

    structural_mass_kg : float, optional
        Wing structural mass (kg). Estimated from the configuration when
        omitted.

    config : FlightAnalyzerConfig, optional
        Analyzer coefficients

    Returns:
    -------
    AerodynamicResult
        Finite results for every valid configuration. Non-positive airspeed
        is floored and flagged rather than raised.
    """
    config = config if config is not None else DEFAULT_CONFIG
    rho = configuration.air_density

    if structural_mass_kg is None:
        structural_mass_kg = compute_structural_mass(configuration, config)

    geometry = wing_geometry(configuration, config)
    area = geometry.total_area_m2

    total_mass = configuration.pilot_mass_kg + structural_mass_kg
    weight = total_mass * GRAVITY

    # -------------------------------------------------------------------------
    # Flight condition
    # -------------------------------------------------------------------------

    v_flap = flapping_velocity(
        configuration.flapping_frequency_hz,
        configuration.flapping_amplitude_deg,
        configuration.wing_chord_m,
        config.flapping_velocity_coefficient,
    )
    raw_airspeed = configuration.forward_speed_ms - configuration.wind_speed_ms + v_flap

    airspeed_floored = raw_airspeed <= config.min_airspeed_ms
    if airspeed_floored:
        logger.debug("Airspeed %.3f m/s floored to %.3f m/s", raw_airspeed, config.min_airspeed_ms)
    airspeed = max(raw_airspeed, config.min_airspeed_ms)

    q = dynamic_pressure(rho, airspeed)

    # -------------------------------------------------------------------------
    # Forces
    # -------------------------------------------------------------------------

    cl = config.lift_coefficient
    lift = q * area * cl

    # Induced drag at the lift coefficient that carries the weight
    cl_weight = weight / (q * area)
    cd = drag_coefficient(cl_weight, geometry.aspect_ratio, config)
    drag = q * area * cd

    v_stall = stall_speed(weight, rho, area, config.max_lift_coefficient)

    # -------------------------------------------------------------------------
    # Power budget
    # -------------------------------------------------------------------------

    theta = math.radians(configuration.flapping_amplitude_deg)
    drag_power = drag * airspeed
    flap_power = (
        config.flapping_power_coefficient * rho * area
        * configuration.flapping_frequency_hz ** 3 * theta ** 2
        * geometry.panel_span_m ** 3
    )
    level_power = drag_power + flap_power

    available = configuration.sustained_power_w + configuration.motor_power_w
    climb_rate = (available - level_power) / weight
    unassisted_climb_rate = (configuration.sustained_power_w - level_power) / weight
    climb_power = weight * climb_rate if climb_rate > 0.0 else 0.0

    # -------------------------------------------------------------------------
    # Takeoff (burst effort)
    # -------------------------------------------------------------------------

    cd_stall = drag_coefficient(config.max_lift_coefficient, geometry.aspect_ratio, config)
    stall_hold_power = weight * cd_stall / config.max_lift_coefficient * v_stall
    liftoff_ground_speed = max(v_stall + configuration.wind_speed_ms, 0.0)
    acceleration_power = (
        0.5 * total_mass * liftoff_ground_speed ** 2 / config.takeoff_burst_duration_s
    )
    takeoff_required = stall_hold_power + flap_power + acceleration_power
    takeoff_available = configuration.burst_power_w + configuration.motor_power_w

    reynolds = reynolds_number(rho, airspeed, configuration.wing_chord_m)

    return AerodynamicResult(
        total_wing_area_m2=area,
        aspect_ratio=geometry.aspect_ratio,
        lift_n=lift,
        drag_n=drag,
        lift_to_weight_ratio=lift / weight,
        stall_speed_ms=v_stall,
        power_required_w=level_power + climb_power,
        reynolds_number=reynolds,
        climb_rate_ms=climb_rate,
        drag_power_w=drag_power,
        flapping_power_w=flap_power,
        climb_power_w=climb_power,
        available_power_w=available,
        unassisted_climb_rate_ms=unassisted_climb_rate,
        raw_airspeed_ms=raw_airspeed,
        effective_airspeed_ms=airspeed,
        flapping_velocity_ms=v_flap,
        dynamic_pressure_pa=q,
        lift_coefficient=cl,
        weight_lift_coefficient=cl_weight,
        drag_coefficient=cd,
        flow_regime=flow_regime(reynolds, config),
        structural_mass_kg=structural_mass_kg,
        total_mass_kg=total_mass,
        weight_n=weight,
        takeoff_power_required_w=takeoff_required,
        takeoff_power_available_w=takeoff_available,
        takeoff_feasible=takeoff_available >= takeoff_required,
        airspeed_floored=airspeed_floored,
        area_floored=geometry.area_floored,
    )
