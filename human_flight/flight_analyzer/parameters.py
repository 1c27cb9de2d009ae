"""
Flight Configuration Module
===========================

Defines the immutable input record for one flight analysis: pilot, power
sources, wing layout, material, flight condition and wind.

Every numeric field has documented bounds. Construction rejects values
outside them with a ValueError; FlightConfiguration.clamped() builds a
configuration with out-of-range values pulled back into range instead.

Sign Convention:
---------------
wind_speed_ms is positive for a tailwind (air moving with the flyer) and
negative for a headwind. Effective airspeed is forward_speed - wind_speed.

Usage:
------
    from human_flight.flight_analyzer import FlightConfiguration, Material

    config = FlightConfiguration(pilot_mass_kg=75, material=Material.WOOD)
    faster = config.replace(forward_speed_ms=14.0)
"""

import logging
from dataclasses import dataclass, fields, replace as dataclass_replace
from enum import Enum
from typing import Any, Dict, Tuple

from .config import AIR_DENSITY_SEA_LEVEL
from .materials import Material

logger = logging.getLogger(__name__)


class WingCount(Enum):
    """Wing topology."""
    TWO = "two"      # One pair of panels, span per side
    FOUR = "four"    # Two tandem pairs of shorter panels


# =============================================================================
# Parameter Bounds
# =============================================================================

# (minimum, maximum) for every numeric field
PARAMETER_BOUNDS: Dict[str, Tuple[float, float]] = {
    "pilot_mass_kg": (50.0, 120.0),
    "sustained_power_w": (50.0, 600.0),
    "burst_power_w": (100.0, 2000.0),
    "motor_power_w": (0.0, 10000.0),
    "wing_span_m": (1.5, 8.0),
    "wing_chord_m": (0.3, 3.0),
    "forward_speed_ms": (3.0, 35.0),
    "flapping_frequency_hz": (0.0, 5.0),
    "flapping_amplitude_deg": (0.0, 90.0),
    "wind_speed_ms": (-10.0, 10.0),
    "air_density": (0.5, 1.5),
}

# Numeric fields that a sweep may vary
SWEEPABLE_FIELDS = tuple(PARAMETER_BOUNDS.keys())


@dataclass(frozen=True)
class FlightConfiguration:
    """
    Input parameters for one flight analysis.

    Attributes:
    ----------
    pilot_mass_kg : float
        Pilot mass (kg)

    sustained_power_w : float
        Power the pilot can hold indefinitely (W)

    burst_power_w : float
        Short-duration peak pilot power, used for takeoff (W).
        Must not be below sustained_power_w.

    motor_power_w : float
        Continuous auxiliary motor power (W). 0 for human-only.

    wing_count : WingCount
        TWO or FOUR

    wing_span_m : float
        Span of one wing panel (m)

    wing_chord_m : float
        Mean chord (m)

    material : Material
        Wing structural material

    forward_speed_ms : float
        Configured cruise speed through the ground frame (m/s)

    flapping_frequency_hz : float
        Flapping frequency (Hz). 0 for a fixed wing.

    flapping_amplitude_deg : float
        Flapping stroke amplitude (degrees)

    wind_speed_ms : float
        Wind speed (m/s), positive for a tailwind

    air_density : float
        Air density override (kg/m³). Default sea level.
    """
    pilot_mass_kg: float = 80.0
    sustained_power_w: float = 300.0
    burst_power_w: float = 1000.0
    motor_power_w: float = 0.0
    wing_count: WingCount = WingCount.TWO
    wing_span_m: float = 6.0
    wing_chord_m: float = 1.0
    material: Material = Material.CARBON_FIBER
    forward_speed_ms: float = 10.0
    flapping_frequency_hz: float = 1.0
    flapping_amplitude_deg: float = 30.0
    wind_speed_ms: float = 0.0
    air_density: float = AIR_DENSITY_SEA_LEVEL

    def __post_init__(self):
        """Coerce enum fields and reject out-of-range values."""
        if not isinstance(self.wing_count, WingCount):
            object.__setattr__(self, "wing_count", WingCount(self.wing_count))
        if not isinstance(self.material, Material):
            object.__setattr__(self, "material", Material(self.material))

        is_valid, error_msg = self.validate()
        if not is_valid:
            raise ValueError(f"Invalid flight configuration: {error_msg}")

    def validate(self) -> Tuple[bool, str]:
        """
        Validate field bounds and the power ordering.

        Returns:
        -------
        Tuple[bool, str]
            (is_valid, error_message)
        """
        errors = []

        for name, (low, high) in PARAMETER_BOUNDS.items():
            value = getattr(self, name)
            if value != value:  # NaN
                errors.append(f"{name} is not a number")
            elif value < low or value > high:
                errors.append(f"{name}={value:g} outside [{low:g}, {high:g}]")

        if self.sustained_power_w > self.burst_power_w:
            errors.append(
                f"sustained_power_w ({self.sustained_power_w:g}) exceeds "
                f"burst_power_w ({self.burst_power_w:g})"
            )

        if errors:
            return False, "; ".join(errors)
        return True, ""

    @classmethod
    def clamped(cls, **values: Any) -> "FlightConfiguration":
        """
        Build a configuration, clamping numeric fields into bounds.

        Burst power is raised to the sustained power if it falls below it.
        Each adjustment is logged as a warning.

        Parameters:
        ----------
        **values
            Field values; omitted fields take their defaults.

        Returns:
        -------
        FlightConfiguration
            A valid configuration
        """
        adjusted = dict(values)

        for name, (low, high) in PARAMETER_BOUNDS.items():
            if name not in adjusted:
                continue
            value = float(adjusted[name])
            bounded = min(max(value, low), high)
            if bounded != value:
                logger.warning("Clamped %s from %g to %g", name, value, bounded)
            adjusted[name] = bounded

        sustained = adjusted.get("sustained_power_w", cls.sustained_power_w)
        burst = adjusted.get("burst_power_w", cls.burst_power_w)
        if sustained > burst:
            logger.warning(
                "Raised burst_power_w from %g to sustained power %g", burst, sustained
            )
            adjusted["burst_power_w"] = sustained

        return cls(**adjusted)

    def replace(self, **changes: Any) -> "FlightConfiguration":
        """Return a copy with the given fields changed (validated)."""
        return dataclass_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary with enum values as strings."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = value.value if isinstance(value, Enum) else value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlightConfiguration":
        """Build from a dictionary produced by to_dict(); unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})
