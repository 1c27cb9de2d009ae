"""
Structural Analysis Module
==========================

Estimates wing structural mass and checks the wing against bending
failure, excessive deflection and bending flutter.

Each wing panel is treated as a cantilever box spar (root fixed, tip free)
carrying a uniformly distributed share of the lift. The spar wall is sized
so the root stress at the limit load factor meets the design safety factor,
subject to a minimum manufacturable gauge and the solid-section limit.

Beam Relations:
--------------
    I  = (b·h³ - (b - 2t)·(h - 2t)³) / 12       box section
    Z  = I / (h/2)                              section modulus
    σ  = M / Z                                  root bending stress
    δ  = F·L³ / (8·E·I)                         tip deflection, uniform load
    ω  = 1.875² · sqrt(E·I / (m'·L⁴))           first bending mode
    V_f = ω · c / (2·k)                         flutter onset speed

Mass Scaling:
------------
Wing mass grows linearly with span while the spar sits at minimum gauge
or is solid, and with span² while its wall is strength-sized. In the
sized range the wing loading W/S, and with it the stall speed, stops
falling at the saturation span

    s* = sqrt(σ·c / (45.85·ρ_m·g))

(thin-wall box of depth 0.12c and width 0.25c, two panels). s* lies above
the 8 m span bound for every tabulated material at chords of 1 m and up.

Failure Semantics:
-----------------
Degenerate inputs (zero stiffness, strength, span, chord or dynamic
pressure) never raise. The result is flagged degenerate and the safety
factor and flutter margin carry the 0.0 sentinel, which every downstream
check reads as unsafe.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Optional

from scipy import optimize

from .config import FlightAnalyzerConfig, DEFAULT_CONFIG, GRAVITY, CANTILEVER_MODE_CONSTANT
from .geometry import WingGeometry, wing_geometry
from .materials import MaterialProperties, get_material
from .parameters import FlightConfiguration

logger = logging.getLogger(__name__)


# Value reported for safety factor and flutter margin when undefined
SENTINEL_VALUE = 0.0


@dataclass(frozen=True)
class SparSizing:
    """Sized spar cross-section for one panel."""
    depth_m: float
    width_m: float
    wall_thickness_m: float
    moment_of_inertia_m4: float
    section_modulus_m3: float
    section_area_m2: float
    solid: bool = False


@dataclass(frozen=True)
class StructuralResult:
    """
    Structural state of the wing at the analysed condition.

    Attributes:
    ----------
    structural_mass_kg : float
        Wing mass: spar, skin and secondary structure (kg)

    load_factor_g : float
        Load factor at which root stress reaches the tensile strength (g)

    wing_deflection_m : float
        Tip deflection under cruise lift (m)

    flutter_speed_ms : float
        Bending flutter onset speed (m/s)

    flutter_margin : float
        flutter_speed / forward_speed. 0.0 when undefined.

    safety_factor : float
        tensile_strength / peak root stress. 0.0 when undefined.

    degenerate : bool
        True when the inputs made the beam model undefined
    """
    structural_mass_kg: float
    load_factor_g: float
    wing_deflection_m: float
    flutter_speed_ms: float
    flutter_margin: float
    safety_factor: float

    spar_wall_thickness_m: float = 0.0
    moment_of_inertia_m4: float = 0.0
    peak_root_stress_pa: float = 0.0
    forward_speed_ms: float = 0.0
    material: str = ""
    degenerate: bool = False

    def to_dict(self) -> dict:
        """Convert result to dictionary for export."""
        return asdict(self)


# =============================================================================
# Section Properties
# =============================================================================

def box_moment_of_inertia(width: float, depth: float, wall: float) -> float:
    """Second moment of area of a rectangular box about its bending axis (m⁴)."""
    inner_width = max(width - 2.0 * wall, 0.0)
    inner_depth = max(depth - 2.0 * wall, 0.0)
    return (width * depth ** 3 - inner_width * inner_depth ** 3) / 12.0


def box_section_area(width: float, depth: float, wall: float) -> float:
    """Material cross-section area of a rectangular box (m²)."""
    inner_width = max(width - 2.0 * wall, 0.0)
    inner_depth = max(depth - 2.0 * wall, 0.0)
    return width * depth - inner_width * inner_depth


def size_spar_wall(
    required_modulus: float,
    width: float,
    depth: float,
    min_wall: float
) -> float:
    """
    Find the thinnest box wall that reaches a required section modulus.

    Parameters:
    ----------
    required_modulus : float
        Section modulus the spar must provide (m³)

    width, depth : float
        Outer box dimensions (m)

    min_wall : float
        Minimum manufacturable wall (m)

    Returns:
    -------
    float
        Wall thickness (m). The minimum gauge when that already suffices,
        the solid-section value when even a solid section falls short.
    """
    max_wall = min(width, depth) / 2.0
    min_wall = min(min_wall, max_wall)

    def modulus_shortfall(wall: float) -> float:
        return box_moment_of_inertia(width, depth, wall) / (depth / 2.0) - required_modulus

    if modulus_shortfall(min_wall) >= 0.0:
        return min_wall
    if modulus_shortfall(max_wall) <= 0.0:
        return max_wall

    return optimize.brentq(modulus_shortfall, min_wall, max_wall, xtol=1e-9)


def size_spar(
    configuration: FlightConfiguration,
    geometry: WingGeometry,
    material: MaterialProperties,
    config: FlightAnalyzerConfig
) -> SparSizing:
    """
    Size the spar of one panel for the limit load.

    The design load is the pilot weight at the limit load factor, shared
    equally by the panels. Wing weight is carried as inertia relief and
    does not add to the bending load.
    """
    depth = config.thickness_to_chord * geometry.chord_m
    width = config.spar_width_fraction * geometry.chord_m
    max_wall = min(width, depth) / 2.0

    panel_load = (
        config.limit_load_factor * configuration.pilot_mass_kg * GRAVITY
        / geometry.panel_count
    )
    design_moment = panel_load * geometry.panel_span_m * config.load_distribution_factor

    if material.tensile_strength_pa <= config.degenerate_tolerance:
        wall = max_wall
    else:
        required_modulus = design_moment * config.design_safety_factor / material.tensile_strength_pa
        wall = size_spar_wall(required_modulus, width, depth, config.min_wall_thickness_m)

    inertia = box_moment_of_inertia(width, depth, wall)
    modulus = inertia / (depth / 2.0) if depth > 0.0 else 0.0

    return SparSizing(
        depth_m=depth,
        width_m=width,
        wall_thickness_m=wall,
        moment_of_inertia_m4=inertia,
        section_modulus_m3=modulus,
        section_area_m2=box_section_area(width, depth, wall),
        solid=wall >= max_wall,
    )


# =============================================================================
# Mass Estimate
# =============================================================================

def _wing_mass(
    geometry: WingGeometry,
    spar: SparSizing,
    material: MaterialProperties,
    config: FlightAnalyzerConfig
) -> float:
    spar_volume = spar.section_area_m2 * geometry.panel_span_m * geometry.panel_count
    skin_volume = 2.0 * geometry.total_area_m2 * config.skin_thickness_m
    return config.secondary_structure_factor * material.density_kg_m3 * (spar_volume + skin_volume)


def compute_structural_mass(
    configuration: FlightConfiguration,
    config: Optional[FlightAnalyzerConfig] = None,
    material: Optional[MaterialProperties] = None
) -> float:
    """
    Estimate the wing structural mass.

    Grows with wing area and material density, and with the spar wall a
    weaker material needs to carry the design load. Independent of the
    aerodynamic condition.

    Parameters:
    ----------
    configuration : FlightConfiguration
        Flight configuration

    config : FlightAnalyzerConfig, optional
        Analyzer coefficients

    material : MaterialProperties, optional
        Override for the configured material's constants

    Returns:
    -------
    float
        Structural mass (kg)
    """
    config = config if config is not None else DEFAULT_CONFIG
    material = material if material is not None else get_material(configuration.material)

    geometry = wing_geometry(configuration, config)
    spar = size_spar(configuration, geometry, material, config)
    return _wing_mass(geometry, spar, material, config)


# =============================================================================
# Structural Analysis
# =============================================================================

def analyze_structure(
    configuration: FlightConfiguration,
    dynamic_pressure: float,
    config: Optional[FlightAnalyzerConfig] = None,
    material: Optional[MaterialProperties] = None,
    structural_mass_kg: Optional[float] = None
) -> StructuralResult:
    """
    Analyse wing strength, stiffness and flutter at a dynamic pressure.

    Parameters:
    ----------
    configuration : FlightConfiguration
        Flight configuration

    dynamic_pressure : float
        Dynamic pressure from the aerodynamic analysis (Pa), so both
        analyses see the same load condition. The flutter margin is taken
        against the configured forward speed, not the wind- and
        flapping-adjusted airspeed.

    config : FlightAnalyzerConfig, optional
        Analyzer coefficients

    material : MaterialProperties, optional
        Override for the configured material's constants

    structural_mass_kg : float, optional
        Precomputed structural mass (kg)

    Returns:
    -------
    StructuralResult
        Structural state. Never raises for degenerate inputs.
    """
    config = config if config is not None else DEFAULT_CONFIG
    material = material if material is not None else get_material(configuration.material)
    tol = config.degenerate_tolerance

    geometry = wing_geometry(configuration, config)
    spar = size_spar(configuration, geometry, material, config)
    mass = (
        structural_mass_kg if structural_mass_kg is not None
        else _wing_mass(geometry, spar, material, config)
    )

    span = geometry.panel_span_m
    stiffness = material.elastic_modulus_pa * spar.moment_of_inertia_m4
    mass_per_span = mass / (geometry.panel_count * span) if span > tol else 0.0

    degenerate = (
        material.elastic_modulus_pa <= tol
        or material.tensile_strength_pa <= tol
        or span <= tol
        or geometry.chord_m <= tol
        or spar.section_modulus_m3 <= tol ** 2
        or mass_per_span <= tol
        or dynamic_pressure <= tol
        or configuration.air_density <= tol
    )
    if degenerate:
        logger.debug("Degenerate structural inputs for %s", configuration)
        return StructuralResult(
            structural_mass_kg=mass,
            load_factor_g=0.0,
            wing_deflection_m=0.0,
            flutter_speed_ms=0.0,
            flutter_margin=SENTINEL_VALUE,
            safety_factor=SENTINEL_VALUE,
            spar_wall_thickness_m=spar.wall_thickness_m,
            moment_of_inertia_m4=spar.moment_of_inertia_m4,
            material=material.name,
            degenerate=True,
        )

    pilot_weight = configuration.pilot_mass_kg * GRAVITY
    cruise_lift = dynamic_pressure * geometry.total_area_m2 * config.lift_coefficient
    moment_arm = span * config.load_distribution_factor

    # Load factor at which the root reaches ultimate strength
    moment_1g = pilot_weight / geometry.panel_count * moment_arm
    load_factor = material.tensile_strength_pa * spar.section_modulus_m3 / moment_1g

    # Peak root stress: limit manoeuvre or actual cruise lift, whichever is larger
    peak_panel_load = max(config.limit_load_factor * pilot_weight, cruise_lift) / geometry.panel_count
    peak_stress = peak_panel_load * moment_arm / spar.section_modulus_m3
    safety_factor = material.tensile_strength_pa / peak_stress

    # Tip deflection under cruise lift
    cruise_panel_load = cruise_lift / geometry.panel_count
    deflection = cruise_panel_load * span ** 3 / (8.0 * stiffness)

    # Bending flutter
    omega = CANTILEVER_MODE_CONSTANT ** 2 * math.sqrt(stiffness / (mass_per_span * span ** 4))
    flutter_speed = omega * geometry.chord_m / (2.0 * config.flutter_reduced_frequency)
    flutter_margin = flutter_speed / configuration.forward_speed_ms

    return StructuralResult(
        structural_mass_kg=mass,
        load_factor_g=load_factor,
        wing_deflection_m=deflection,
        flutter_speed_ms=flutter_speed,
        flutter_margin=flutter_margin,
        safety_factor=safety_factor,
        spar_wall_thickness_m=spar.wall_thickness_m,
        moment_of_inertia_m4=spar.moment_of_inertia_m4,
        peak_root_stress_pa=peak_stress,
        forward_speed_ms=configuration.forward_speed_ms,
        material=material.name,
        degenerate=False,
    )
