"""
Flight Evaluation Module
========================

Runs the full analysis pipeline for one configuration:

    structural mass → aerodynamics → structure → verdict

Structural mass depends only on the configuration, so the pipeline runs
once with no iteration. The aerodynamic dynamic pressure is handed to the
structural analysis so both see the same load condition.

Classes:
--------
- FlightAnalysis: Dataclass holding every stage's result
- FlightSolver: Pipeline bound to a set of analyzer coefficients

Usage:
------
    from human_flight.flight_analyzer import FlightConfiguration, evaluate

    analysis = evaluate(FlightConfiguration(motor_power_w=3000))
    print(analysis.summary())
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .aerodynamics import AerodynamicResult, analyze_aerodynamics
from .config import FlightAnalyzerConfig, DEFAULT_CONFIG
from .parameters import FlightConfiguration
from .structures import StructuralResult, analyze_structure, compute_structural_mass
from .viability import Verdict, judge


@dataclass(frozen=True)
class FlightAnalysis:
    """
    Complete analysis of one configuration.

    Attributes:
    ----------
    configuration : FlightConfiguration
        Input that was analysed

    aerodynamics : AerodynamicResult
        Aerodynamic performance

    structure : StructuralResult
        Structural state

    verdict : Verdict
        Viability verdict
    """
    configuration: FlightConfiguration
    aerodynamics: AerodynamicResult
    structure: StructuralResult
    verdict: Verdict

    def summary(self) -> str:
        """Generate a formatted summary string."""
        cfg = self.configuration
        aero = self.aerodynamics
        struct = self.structure

        return (
            f"Flight Analysis @ {aero.effective_airspeed_ms:.1f} m/s airspeed\n"
            f"{'='*50}\n"
            f"Wings: {cfg.wing_count.value}, {cfg.wing_span_m:.2f} m x {cfg.wing_chord_m:.2f} m, "
            f"{cfg.material.value}\n"
            f"Mass: {aero.total_mass_kg:.1f} kg ({aero.structural_mass_kg:.1f} kg structure)\n"
            f"{'='*50}\n"
            f"Area: {aero.total_wing_area_m2:.2f} m², AR {aero.aspect_ratio:.1f}\n"
            f"Lift/Weight: {aero.lift_to_weight_ratio:.2f}\n"
            f"Stall Speed: {aero.stall_speed_ms:.1f} m/s\n"
            f"Power Required: {aero.power_required_w:.0f} W "
            f"(drag {aero.drag_power_w:.0f}, flap {aero.flapping_power_w:.0f}, "
            f"climb {aero.climb_power_w:.0f})\n"
            f"Climb Rate: {aero.climb_rate_ms:+.2f} m/s "
            f"({aero.unassisted_climb_rate_ms:+.2f} m/s without motor)\n"
            f"Reynolds: {aero.reynolds_number:.3g} ({aero.flow_regime})\n"
            f"{'='*50}\n"
            f"Safety Factor: {struct.safety_factor:.2f}\n"
            f"Load Factor: {struct.load_factor_g:.1f} g\n"
            f"Tip Deflection: {struct.wing_deflection_m * 1000:.0f} mm\n"
            f"Flutter: {struct.flutter_speed_ms:.1f} m/s (margin {struct.flutter_margin:.2f})\n"
            f"{'='*50}\n"
            f"{self.verdict.summary()}\n"
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Flatten into one record for tables and CSV export.

        Configuration fields keep their names; result fields are prefixed
        with "aero_" and "struct_".
        """
        record = self.configuration.to_dict()
        for key, value in self.aerodynamics.to_dict().items():
            record[f"aero_{key}"] = value
        for key, value in self.structure.to_dict().items():
            record[f"struct_{key}"] = value
        record["status"] = self.verdict.status.value
        record["critical_issues"] = "; ".join(
            issue.kind.value for issue in self.verdict.critical_issues
        )
        return record


class FlightSolver:
    """
    Analysis pipeline bound to one set of analyzer coefficients.

    Stateless apart from its configuration, so one solver may be shared
    between threads.

    Example:
    -------
        solver = FlightSolver(FlightAnalyzerConfig(min_safety_factor=2.0))
        analysis = solver.evaluate(FlightConfiguration(material="wood"))
    """

    def __init__(self, config: Optional[FlightAnalyzerConfig] = None):
        """
        Initialize the FlightSolver.

        Parameters:
        ----------
        config : FlightAnalyzerConfig, optional
            Analyzer coefficients
        """
        self.config = config if config is not None else DEFAULT_CONFIG

    def evaluate(self, configuration: FlightConfiguration) -> FlightAnalysis:
        """
        Analyse one configuration.

        Parameters:
        ----------
        configuration : FlightConfiguration
            Flight configuration

        Returns:
        -------
        FlightAnalysis
            Aerodynamic, structural and verdict results
        """
        structural_mass = compute_structural_mass(configuration, self.config)
        aero = analyze_aerodynamics(configuration, structural_mass, self.config)
        structure = analyze_structure(
            configuration,
            aero.dynamic_pressure_pa,
            self.config,
            structural_mass_kg=structural_mass,
        )
        verdict = judge(aero, structure, self.config)

        return FlightAnalysis(
            configuration=configuration,
            aerodynamics=aero,
            structure=structure,
            verdict=verdict,
        )


def evaluate(
    configuration: FlightConfiguration,
    config: Optional[FlightAnalyzerConfig] = None
) -> FlightAnalysis:
    """Analyse one configuration with the given (or default) coefficients."""
    return FlightSolver(config).evaluate(configuration)
