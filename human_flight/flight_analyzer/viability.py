"""
Viability Judge
===============

Combines aerodynamic and structural results into a tri-state verdict.

Statuses:
---------
- VIABLE:       cruise lift carries the weight and sustained human power
                alone holds level flight, with structural and flutter margin
- TAKEOFF_ONLY: burst (and motor) power reaches lift-off and powered flight
                is possible, but sustained human power alone cannot hold
                the cruise condition
- NON_VIABLE:   structure fails or lacks margin, flutter, degenerate
                structure, the flyer cannot get airborne, or a lift
                deficit that sustained plus motor power cannot climb out of

Every check runs on every call, so the critical-issue list holds all
violated constraints in a fixed order, not only the first.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .aerodynamics import AerodynamicResult
from .config import FlightAnalyzerConfig, DEFAULT_CONFIG
from .structures import StructuralResult


class ViabilityStatus(Enum):
    """Flight viability verdict."""
    VIABLE = "viable"
    TAKEOFF_ONLY = "takeoff_only"
    NON_VIABLE = "non_viable"


class IssueKind(Enum):
    """Kinds of violated constraint, in reporting order."""
    DEGENERATE_AIRSPEED = "degenerate_airspeed"
    DEGENERATE_GEOMETRY = "degenerate_geometry"
    LIFT_DEFICIT = "lift_deficit"
    STALL_MARGIN = "stall_margin"
    NEGATIVE_CLIMB = "negative_climb"
    TAKEOFF_INFEASIBLE = "takeoff_infeasible"
    STRUCTURAL_FAILURE = "structural_failure"
    SAFETY_MARGIN = "safety_margin"
    FLUTTER = "flutter"
    FLUTTER_MARGIN = "flutter_margin"


# Issues that make a configuration non-viable regardless of performance
_STRUCTURAL_KINDS = frozenset({
    IssueKind.DEGENERATE_GEOMETRY,
    IssueKind.STRUCTURAL_FAILURE,
    IssueKind.SAFETY_MARGIN,
    IssueKind.FLUTTER,
    IssueKind.FLUTTER_MARGIN,
})


@dataclass(frozen=True)
class CriticalIssue:
    """
    One violated constraint.

    Attributes:
    ----------
    kind : IssueKind
        Constraint category

    metric : str
        Name of the result field that was checked

    value : float
        Observed value

    threshold : float
        Limit the value had to meet

    message : str
        Human-readable description with the numeric margin
    """
    kind: IssueKind
    metric: str
    value: float
    threshold: float
    message: str

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "metric": self.metric,
            "value": self.value,
            "threshold": self.threshold,
            "message": self.message,
        }


@dataclass(frozen=True)
class InfoMetric:
    """An informational figure reported alongside the verdict."""
    name: str
    value: object
    unit: str = ""

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value, "unit": self.unit}


@dataclass(frozen=True)
class Verdict:
    """Viability verdict with every critical issue and the supporting metrics."""
    status: ViabilityStatus
    critical_issues: List[CriticalIssue] = field(default_factory=list)
    metrics: List[InfoMetric] = field(default_factory=list)

    @property
    def is_viable(self) -> bool:
        return self.status == ViabilityStatus.VIABLE

    def issue_kinds(self) -> List[IssueKind]:
        """Kinds of the critical issues, in reporting order."""
        return [issue.kind for issue in self.critical_issues]

    def summary(self) -> str:
        """Generate a formatted summary string."""
        lines = [f"Verdict: {self.status.value.upper()}"]
        if self.critical_issues:
            lines.append("Critical issues:")
            lines.extend(f"  - {issue.message}" for issue in self.critical_issues)
        else:
            lines.append("No critical issues")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert verdict to dictionary for export."""
        return {
            "status": self.status.value,
            "critical_issues": [issue.to_dict() for issue in self.critical_issues],
            "metrics": [metric.to_dict() for metric in self.metrics],
        }


# =============================================================================
# Checks
# =============================================================================

def _collect_issues(
    aero: AerodynamicResult,
    structure: StructuralResult,
    config: FlightAnalyzerConfig
) -> List[CriticalIssue]:
    issues = []

    if aero.airspeed_floored:
        issues.append(CriticalIssue(
            IssueKind.DEGENERATE_AIRSPEED, "effective_airspeed_ms",
            aero.raw_airspeed_ms, config.min_airspeed_ms,
            f"Effective airspeed {aero.raw_airspeed_ms:.2f} m/s is not positive; "
            f"floored to {config.min_airspeed_ms:g} m/s (tailwind exceeds forward speed)",
        ))

    if aero.area_floored or structure.degenerate:
        issues.append(CriticalIssue(
            IssueKind.DEGENERATE_GEOMETRY, "total_wing_area_m2",
            aero.total_wing_area_m2, config.min_wing_area_m2,
            "Wing geometry or material constants are degenerate; "
            "structural margins are undefined and treated as failed",
        ))

    if aero.lift_to_weight_ratio < config.min_lift_to_weight:
        issues.append(CriticalIssue(
            IssueKind.LIFT_DEFICIT, "lift_to_weight_ratio",
            aero.lift_to_weight_ratio, config.min_lift_to_weight,
            f"Lift/weight {aero.lift_to_weight_ratio:.2f} below "
            f"{config.min_lift_to_weight:.2f}: cruise lift {aero.lift_n:.0f} N "
            f"vs weight {aero.weight_n:.0f} N",
        ))

    min_airspeed = config.stall_speed_margin * aero.stall_speed_ms
    if aero.effective_airspeed_ms < min_airspeed:
        issues.append(CriticalIssue(
            IssueKind.STALL_MARGIN, "effective_airspeed_ms",
            aero.effective_airspeed_ms, min_airspeed,
            f"Airspeed {aero.effective_airspeed_ms:.1f} m/s below "
            f"{config.stall_speed_margin:g}x stall speed "
            f"({aero.stall_speed_ms:.1f} m/s stall, {min_airspeed:.1f} m/s required)",
        ))

    if aero.unassisted_climb_rate_ms < 0.0:
        message = (
            f"Sink rate {-aero.unassisted_climb_rate_ms:.2f} m/s on sustained power: "
            f"level flight needs {aero.level_power_w:.0f} W"
        )
        if aero.climb_rate_ms != aero.unassisted_climb_rate_ms:
            message += f" ({aero.climb_rate_ms:+.2f} m/s with motor)"
        issues.append(CriticalIssue(
            IssueKind.NEGATIVE_CLIMB, "unassisted_climb_rate_ms",
            aero.unassisted_climb_rate_ms, 0.0, message,
        ))

    if not aero.takeoff_feasible:
        issues.append(CriticalIssue(
            IssueKind.TAKEOFF_INFEASIBLE, "takeoff_power_available_w",
            aero.takeoff_power_available_w, aero.takeoff_power_required_w,
            f"Takeoff needs {aero.takeoff_power_required_w:.0f} W, burst + motor "
            f"provide {aero.takeoff_power_available_w:.0f} W",
        ))

    if structure.safety_factor < 1.0:
        issues.append(CriticalIssue(
            IssueKind.STRUCTURAL_FAILURE, "safety_factor",
            structure.safety_factor, 1.0,
            f"Safety factor {structure.safety_factor:.2f} below 1.0: "
            f"wing root fails under peak load",
        ))
    elif structure.safety_factor < config.min_safety_factor:
        issues.append(CriticalIssue(
            IssueKind.SAFETY_MARGIN, "safety_factor",
            structure.safety_factor, config.min_safety_factor,
            f"Safety factor {structure.safety_factor:.2f} below required "
            f"{config.min_safety_factor:.2f}",
        ))

    if structure.flutter_margin < 1.0:
        issues.append(CriticalIssue(
            IssueKind.FLUTTER, "flutter_margin",
            structure.flutter_margin, 1.0,
            f"Flutter margin {structure.flutter_margin:.2f} below 1.0: flutter onset "
            f"{structure.flutter_speed_ms:.1f} m/s under forward speed "
            f"{structure.forward_speed_ms:.1f} m/s",
        ))
    elif structure.flutter_margin < config.min_flutter_margin:
        issues.append(CriticalIssue(
            IssueKind.FLUTTER_MARGIN, "flutter_margin",
            structure.flutter_margin, config.min_flutter_margin,
            f"Flutter margin {structure.flutter_margin:.2f} below required "
            f"{config.min_flutter_margin:.2f}",
        ))

    return issues


def _collect_metrics(aero: AerodynamicResult, structure: StructuralResult) -> List[InfoMetric]:
    return [
        InfoMetric("total_mass", aero.total_mass_kg, "kg"),
        InfoMetric("structural_mass", structure.structural_mass_kg, "kg"),
        InfoMetric("aspect_ratio", aero.aspect_ratio),
        InfoMetric("reynolds_number", aero.reynolds_number),
        InfoMetric("flow_regime", aero.flow_regime),
        InfoMetric("power_required", aero.power_required_w, "W"),
        InfoMetric("drag_power", aero.drag_power_w, "W"),
        InfoMetric("flapping_power", aero.flapping_power_w, "W"),
        InfoMetric("climb_power", aero.climb_power_w, "W"),
        InfoMetric("available_power", aero.available_power_w, "W"),
        InfoMetric("climb_rate", aero.climb_rate_ms, "m/s"),
        InfoMetric("unassisted_climb_rate", aero.unassisted_climb_rate_ms, "m/s"),
        InfoMetric("takeoff_power_required", aero.takeoff_power_required_w, "W"),
        InfoMetric("takeoff_power_available", aero.takeoff_power_available_w, "W"),
        InfoMetric("load_factor", structure.load_factor_g, "g"),
        InfoMetric("wing_deflection", structure.wing_deflection_m, "m"),
        InfoMetric("flutter_speed", structure.flutter_speed_ms, "m/s"),
    ]


def judge(
    aerodynamics: AerodynamicResult,
    structure: StructuralResult,
    config: Optional[FlightAnalyzerConfig] = None
) -> Verdict:
    """
    Judge whether a configuration can fly.

    Parameters:
    ----------
    aerodynamics : AerodynamicResult
        Output of analyze_aerodynamics

    structure : StructuralResult
        Output of analyze_structure

    config : FlightAnalyzerConfig, optional
        Margins and thresholds

    Returns:
    -------
    Verdict
        Status, every critical issue and the informational metrics
    """
    config = config if config is not None else DEFAULT_CONFIG

    issues = _collect_issues(aerodynamics, structure, config)
    kinds = {issue.kind for issue in issues}

    # A lift deficit is survivable only while powered flight still climbs
    uncovered_lift_deficit = (
        IssueKind.LIFT_DEFICIT in kinds and aerodynamics.climb_rate_ms < 0.0
    )
    sustained = (
        aerodynamics.lift_to_weight_ratio >= config.min_lift_to_weight
        and aerodynamics.unassisted_climb_rate_ms >= 0.0
        and IssueKind.STALL_MARGIN not in kinds
        and IssueKind.DEGENERATE_AIRSPEED not in kinds
    )

    if (kinds & _STRUCTURAL_KINDS
            or IssueKind.TAKEOFF_INFEASIBLE in kinds
            or uncovered_lift_deficit):
        status = ViabilityStatus.NON_VIABLE
    elif sustained:
        status = ViabilityStatus.VIABLE
    else:
        status = ViabilityStatus.TAKEOFF_ONLY

    return Verdict(
        status=status,
        critical_issues=issues,
        metrics=_collect_metrics(aerodynamics, structure),
    )
