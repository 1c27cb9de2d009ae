"""
Wing Geometry
=============

Resolves the wing topology of a flight configuration into panels.

Layouts:
--------
- TWO:  a single pair of panels, each wing_span_m long
- FOUR: two tandem pairs of shorter panels, each
        four_wing_panel_span_ratio × wing_span_m long

Aspect ratio is taken per lifting pair (pair span² / pair area), which
reduces to the usual tip-to-tip definition for the two-wing layout.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import FlightAnalyzerConfig, DEFAULT_CONFIG
from .parameters import FlightConfiguration, WingCount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WingGeometry:
    """
    Panel layout derived from a configuration.

    Attributes:
    ----------
    panel_count : int
        Number of cantilever wing panels (2 or 4)

    panel_span_m : float
        Root-to-tip length of one panel (m)

    total_area_m2 : float
        Summed planform area of all panels (m²), floored at a small epsilon

    pair_span_m : float
        Tip-to-tip span of one lifting pair (m)

    aspect_ratio : float
        pair_span² / pair_area

    area_floored : bool
        True when the raw area was at or below the floor
    """
    wing_count: WingCount
    panel_count: int
    panel_span_m: float
    chord_m: float
    total_area_m2: float
    pair_span_m: float
    aspect_ratio: float
    area_floored: bool = False


def wing_geometry(
    configuration: FlightConfiguration,
    config: Optional[FlightAnalyzerConfig] = None
) -> WingGeometry:
    """
    Compute the panel layout for a configuration.

    Parameters:
    ----------
    configuration : FlightConfiguration
        Flight configuration

    config : FlightAnalyzerConfig, optional
        Analyzer coefficients

    Returns:
    -------
    WingGeometry
        Panel layout
    """
    config = config if config is not None else DEFAULT_CONFIG

    if configuration.wing_count == WingCount.FOUR:
        panel_count = 4
        panel_span = configuration.wing_span_m * config.four_wing_panel_span_ratio
    else:
        panel_count = 2
        panel_span = configuration.wing_span_m

    chord = configuration.wing_chord_m
    raw_area = panel_count * panel_span * chord

    area_floored = raw_area <= config.min_wing_area_m2
    if area_floored:
        logger.debug("Wing area %g m² floored to %g m²", raw_area, config.min_wing_area_m2)
    total_area = max(raw_area, config.min_wing_area_m2)

    pair_span = 2.0 * panel_span
    pair_area = total_area * 2.0 / panel_count
    aspect_ratio = pair_span ** 2 / pair_area

    return WingGeometry(
        wing_count=configuration.wing_count,
        panel_count=panel_count,
        panel_span_m=panel_span,
        chord_m=chord,
        total_area_m2=total_area,
        pair_span_m=pair_span,
        aspect_ratio=aspect_ratio,
        area_floored=area_floored,
    )
