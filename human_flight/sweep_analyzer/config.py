"""
Sweep Analyzer Configuration Module
===================================

Configuration dataclasses for parameter sweeps: which field varies, over
what range, in how many steps, and the processing limits of the worker
pool that evaluates them.

Classes:
--------
- SweepLimits: Safety and processing limits
- SweepConfig: One sweep request
- SweepPoint: One evaluated sweep step

Constants:
----------
- DEFAULT_LIMITS: Default processing limits
"""

import math
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Tuple

import numpy as np

from ..flight_analyzer.aerodynamics import AerodynamicResult
from ..flight_analyzer.parameters import PARAMETER_BOUNDS, SWEEPABLE_FIELDS
from ..flight_analyzer.structures import StructuralResult
from ..flight_analyzer.viability import Verdict


# =============================================================================
# Safety Limits
# =============================================================================

@dataclass
class SweepLimits:
    """
    Processing limits for a sweep.

    Attributes:
    ----------
    max_steps : int
        Maximum number of sweep steps (hard limit)

    max_workers : int
        Maximum number of concurrent workers

    use_processes : bool
        Evaluate steps in worker processes instead of threads

    update_interval : float
        Minimum seconds between progress updates
    """
    max_steps: int = 10_000
    max_workers: int = field(default_factory=lambda: min(os.cpu_count() or 4, 8))
    use_processes: bool = False
    update_interval: float = 0.1


# Default limits instance
DEFAULT_LIMITS = SweepLimits()


# =============================================================================
# Sweep Request
# =============================================================================

@dataclass
class SweepConfig:
    """
    A sweep of one numeric configuration field.

    Attributes:
    ----------
    varying_field : str
        Name of the FlightConfiguration field to vary

    start, stop : float
        Range ends; order does not matter, values come out ascending

    steps : int
        Number of evenly spaced values, ends included

    limits : SweepLimits
        Processing limits
    """
    varying_field: str = "wing_span_m"
    start: float = 1.5
    stop: float = 8.0
    steps: int = 20
    limits: SweepLimits = field(default_factory=SweepLimits)

    def get_values(self) -> List[float]:
        """Evenly spaced values from the low end to the high end of the range."""
        low, high = sorted((self.start, self.stop))
        return [float(value) for value in np.linspace(low, high, self.steps)]

    def validate(self) -> Tuple[bool, str]:
        """
        Validate the sweep request.

        Returns:
        -------
        Tuple[bool, str]
            (is_valid, error_message)
        """
        errors = []

        if self.varying_field not in SWEEPABLE_FIELDS:
            errors.append(
                f"Unknown sweep field '{self.varying_field}' "
                f"(choose from {', '.join(SWEEPABLE_FIELDS)})"
            )
        elif not (math.isfinite(self.start) and math.isfinite(self.stop)):
            errors.append("Sweep range must be finite")
        else:
            low, high = PARAMETER_BOUNDS[self.varying_field]
            if min(self.start, self.stop) < low or max(self.start, self.stop) > high:
                errors.append(
                    f"Sweep range [{self.start:g}, {self.stop:g}] outside "
                    f"{self.varying_field} bounds [{low:g}, {high:g}]"
                )

        if self.steps < 1:
            errors.append("Step count must be at least 1")
        elif self.steps > self.limits.max_steps:
            errors.append(
                f"Step count ({self.steps:,}) exceeds limit ({self.limits.max_steps:,})"
            )

        if self.limits.max_workers < 1:
            errors.append("max_workers must be at least 1")

        if errors:
            return False, "; ".join(errors)
        return True, ""


# =============================================================================
# Result Tuple
# =============================================================================

class SweepPoint(NamedTuple):
    """One sweep step: the swept value and the three analysis results."""
    value: float
    aerodynamics: AerodynamicResult
    structure: StructuralResult
    verdict: Verdict

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into one record for tables and CSV export."""
        record: Dict[str, Any] = {"value": self.value, "status": self.verdict.status.value}
        for key, value in self.aerodynamics.to_dict().items():
            record[f"aero_{key}"] = value
        for key, value in self.structure.to_dict().items():
            record[f"struct_{key}"] = value
        record["critical_issues"] = "; ".join(
            issue.kind.value for issue in self.verdict.critical_issues
        )
        return record
