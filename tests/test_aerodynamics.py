"""
Aerodynamic Analysis Tests
==========================

Validates the closed-form aerodynamic relations and the properties every
aerodynamic result must hold: finite values across the configuration
bounds, idempotence, and monotonic response to span and pilot mass.
"""

import itertools
import math
import sys
from pathlib import Path
import unittest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from human_flight.flight_analyzer import (
    FlightConfiguration,
    Material,
    WingCount,
    analyze_aerodynamics,
    compute_structural_mass,
    wing_geometry,
    evaluate,
    GRAVITY,
)
from human_flight.flight_analyzer.aerodynamics import (
    drag_coefficient,
    flapping_velocity,
    stall_speed,
    reynolds_number,
)
from human_flight.flight_analyzer.config import DEFAULT_CONFIG, AIR_DYNAMIC_VISCOSITY


def _float_fields(result) -> dict:
    return {
        key: value for key, value in result.to_dict().items()
        if isinstance(value, float)
    }


class TestWingGeometry(unittest.TestCase):
    """Two- and four-wing panel layouts."""

    def test_two_wing_layout(self):
        geometry = wing_geometry(FlightConfiguration(wing_span_m=6.0, wing_chord_m=1.0))
        self.assertEqual(geometry.panel_count, 2)
        self.assertAlmostEqual(geometry.total_area_m2, 12.0)
        self.assertAlmostEqual(geometry.pair_span_m, 12.0)
        self.assertAlmostEqual(geometry.aspect_ratio, 12.0)

    def test_four_wing_layout(self):
        geometry = wing_geometry(FlightConfiguration(
            wing_count=WingCount.FOUR, wing_span_m=5.0, wing_chord_m=1.0
        ))
        self.assertEqual(geometry.panel_count, 4)
        self.assertAlmostEqual(geometry.panel_span_m, 3.0)
        self.assertAlmostEqual(geometry.total_area_m2, 12.0)
        self.assertAlmostEqual(geometry.aspect_ratio, 6.0)

    def test_four_wings_lower_aspect_ratio(self):
        two = wing_geometry(FlightConfiguration(wing_count=WingCount.TWO))
        four = wing_geometry(FlightConfiguration(wing_count=WingCount.FOUR))
        self.assertLess(four.aspect_ratio, two.aspect_ratio)
        self.assertGreater(four.total_area_m2, two.total_area_m2)


class TestAerodynamicRelations(unittest.TestCase):
    """Elementary relations against hand calculations."""

    def setUp(self):
        self.config = FlightConfiguration()
        self.result = analyze_aerodynamics(self.config)

    def test_flapping_velocity(self):
        # 1 Hz × 30° (0.5236 rad) × 1 m chord
        self.assertAlmostEqual(flapping_velocity(1.0, 30.0, 1.0), math.pi / 6, places=9)
        self.assertEqual(flapping_velocity(0.0, 45.0, 2.0), 0.0)

    def test_effective_airspeed(self):
        expected = 10.0 + math.pi / 6
        self.assertAlmostEqual(self.result.effective_airspeed_ms, expected, places=9)
        self.assertAlmostEqual(self.result.dynamic_pressure_pa, 0.5 * 1.225 * expected ** 2, places=9)

    def test_lift(self):
        expected = self.result.dynamic_pressure_pa * 12.0 * DEFAULT_CONFIG.lift_coefficient
        self.assertAlmostEqual(self.result.lift_n, expected, places=6)

    def test_drag_coefficient_includes_induced(self):
        # C_D = 0.03 + 0.36 / (π × 12 × 0.8)
        self.assertAlmostEqual(drag_coefficient(0.6, 12.0), 0.03 + 0.36 / (math.pi * 9.6), places=12)

    def test_induced_drag_at_weight_lift_coefficient(self):
        r = self.result
        cl_weight = r.weight_n / (r.dynamic_pressure_pa * 12.0)
        self.assertAlmostEqual(r.weight_lift_coefficient, cl_weight, places=12)
        self.assertAlmostEqual(r.drag_coefficient, drag_coefficient(cl_weight, 12.0), places=12)
        self.assertAlmostEqual(r.drag_n, r.dynamic_pressure_pa * 12.0 * r.drag_coefficient, places=9)

    def test_heavier_flyer_needs_more_drag_power(self):
        light = analyze_aerodynamics(self.config, structural_mass_kg=5.0)
        heavy = analyze_aerodynamics(self.config, structural_mass_kg=25.0)
        self.assertEqual(light.lift_n, heavy.lift_n)
        self.assertGreater(heavy.drag_power_w, light.drag_power_w)

    def test_stall_speed(self):
        weight = self.result.weight_n
        expected = math.sqrt(2 * weight / (1.225 * 12.0 * 1.2))
        self.assertAlmostEqual(self.result.stall_speed_ms, expected, places=9)
        self.assertAlmostEqual(stall_speed(weight, 1.225, 12.0, 1.2), expected, places=12)

    def test_reynolds_number(self):
        expected = 1.225 * self.result.effective_airspeed_ms * 1.0 / AIR_DYNAMIC_VISCOSITY
        self.assertAlmostEqual(self.result.reynolds_number, expected, places=3)
        self.assertEqual(self.result.flow_regime, "transitional")
        self.assertAlmostEqual(reynolds_number(1.225, 10.0, 0.5), 1.225 * 5.0 / 1.81e-5)

    def test_weight_includes_structure(self):
        structural = compute_structural_mass(self.config)
        self.assertAlmostEqual(self.result.structural_mass_kg, structural)
        self.assertAlmostEqual(self.result.total_mass_kg, 80.0 + structural)
        self.assertAlmostEqual(self.result.weight_n, (80.0 + structural) * GRAVITY)

    def test_structural_mass_override(self):
        result = analyze_aerodynamics(self.config, structural_mass_kg=10.0)
        self.assertAlmostEqual(result.total_mass_kg, 90.0)

    def test_power_components_sum(self):
        r = self.result
        self.assertAlmostEqual(
            r.power_required_w,
            r.drag_power_w + r.flapping_power_w + r.climb_power_w,
            places=6,
        )
        self.assertAlmostEqual(r.drag_power_w, r.drag_n * r.effective_airspeed_ms, places=6)

    def test_climb_rate_from_power_balance(self):
        r = self.result
        expected = (300.0 - r.level_power_w) / r.weight_n
        self.assertAlmostEqual(r.climb_rate_ms, expected, places=9)
        self.assertEqual(r.climb_power_w, 0.0)

    def test_positive_climb_counts_climb_power(self):
        r = analyze_aerodynamics(self.config.replace(motor_power_w=6000.0))
        self.assertGreater(r.climb_rate_ms, 0.0)
        self.assertAlmostEqual(r.climb_power_w, r.weight_n * r.climb_rate_ms, places=6)
        self.assertAlmostEqual(r.power_required_w, r.available_power_w, places=6)

    def test_no_flapping_no_flapping_power(self):
        r = analyze_aerodynamics(self.config.replace(flapping_frequency_hz=0.0))
        self.assertEqual(r.flapping_power_w, 0.0)
        self.assertEqual(r.flapping_velocity_ms, 0.0)
        self.assertAlmostEqual(r.effective_airspeed_ms, 10.0)

    def test_flapping_power_scales_with_frequency_cubed(self):
        one = analyze_aerodynamics(self.config.replace(flapping_frequency_hz=1.0))
        two = analyze_aerodynamics(self.config.replace(flapping_frequency_hz=2.0))
        self.assertAlmostEqual(two.flapping_power_w / one.flapping_power_w, 8.0, places=9)

    def test_flapping_power_scales_with_amplitude_squared(self):
        small = analyze_aerodynamics(self.config.replace(flapping_amplitude_deg=20.0))
        large = analyze_aerodynamics(self.config.replace(flapping_amplitude_deg=40.0))
        self.assertAlmostEqual(large.flapping_power_w / small.flapping_power_w, 4.0, places=9)


class TestWind(unittest.TestCase):
    """Headwind raises airspeed, tailwind lowers it."""

    def test_headwind_increases_airspeed(self):
        calm = analyze_aerodynamics(FlightConfiguration(wind_speed_ms=0.0))
        headwind = analyze_aerodynamics(FlightConfiguration(wind_speed_ms=-5.0))
        tailwind = analyze_aerodynamics(FlightConfiguration(wind_speed_ms=5.0))
        self.assertAlmostEqual(headwind.effective_airspeed_ms - calm.effective_airspeed_ms, 5.0)
        self.assertAlmostEqual(calm.effective_airspeed_ms - tailwind.effective_airspeed_ms, 5.0)
        self.assertGreater(headwind.lift_n, calm.lift_n)

    def test_tailwind_beyond_forward_speed_is_floored(self):
        r = analyze_aerodynamics(FlightConfiguration(forward_speed_ms=3.0, wind_speed_ms=10.0))
        self.assertTrue(r.airspeed_floored)
        self.assertLess(r.raw_airspeed_ms, 0.0)
        self.assertEqual(r.effective_airspeed_ms, DEFAULT_CONFIG.min_airspeed_ms)
        for key, value in _float_fields(r).items():
            self.assertTrue(math.isfinite(value), key)


class TestResultProperties(unittest.TestCase):
    """Properties that hold for every configuration."""

    def test_finite_across_bounds(self):
        grid = itertools.product(
            list(Material),
            list(WingCount),
            (1.5, 8.0),      # span
            (0.3, 3.0),      # chord
            (3.0, 35.0),     # forward speed
            (-10.0, 10.0),   # wind
        )
        for material, wings, span, chord, speed, wind in grid:
            config = FlightConfiguration(
                material=material, wing_count=wings, wing_span_m=span,
                wing_chord_m=chord, forward_speed_ms=speed, wind_speed_ms=wind,
            )
            analysis = evaluate(config)
            for result in (analysis.aerodynamics, analysis.structure):
                for key, value in _float_fields(result).items():
                    self.assertTrue(math.isfinite(value), f"{key} for {config}")

    def test_idempotent(self):
        config = FlightConfiguration(material=Material.WOOD, wing_count=WingCount.FOUR)
        self.assertEqual(evaluate(config), evaluate(config))
        self.assertEqual(analyze_aerodynamics(config), analyze_aerodynamics(config))

    def test_span_increases_area_and_lowers_stall_speed(self):
        # Wing loading only turns back up past sqrt(σ·c / (45.85·ρ·g)),
        # beyond the 8 m span bound for every material at a 1 m chord
        for material in Material:
            base = FlightConfiguration(material=material, wing_chord_m=1.0)
            results = [
                analyze_aerodynamics(base.replace(wing_span_m=float(span)))
                for span in np.linspace(1.5, 8.0, 14)
            ]
            areas = [r.total_wing_area_m2 for r in results]
            stalls = [r.stall_speed_ms for r in results]
            self.assertTrue(all(b > a for a, b in zip(areas, areas[1:])), material)
            self.assertTrue(all(b < a for a, b in zip(stalls, stalls[1:])), material)

    def test_pilot_mass_raises_stall_speed_and_lowers_climb(self):
        base = FlightConfiguration()
        results = [
            analyze_aerodynamics(base.replace(pilot_mass_kg=float(mass)))
            for mass in np.linspace(50.0, 120.0, 8)
        ]
        stalls = [r.stall_speed_ms for r in results]
        climbs = [r.climb_rate_ms for r in results]
        self.assertTrue(all(b > a for a, b in zip(stalls, stalls[1:])))
        self.assertTrue(all(b < a for a, b in zip(climbs, climbs[1:])))

    def test_motor_power_raises_climb_rate(self):
        base = FlightConfiguration()
        low = analyze_aerodynamics(base)
        high = analyze_aerodynamics(base.replace(motor_power_w=1000.0))
        self.assertAlmostEqual(
            high.climb_rate_ms - low.climb_rate_ms, 1000.0 / low.weight_n, places=9
        )
        self.assertEqual(high.unassisted_climb_rate_ms, low.unassisted_climb_rate_ms)


if __name__ == "__main__":
    unittest.main()
