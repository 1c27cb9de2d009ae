"""
Viability Judge Tests
=====================

Validates the verdict rules, the completeness and order of the critical
issue list, and the reference scenarios:

- 80 kg pilot, 6 m × 1 m carbon wings, 300 W, 10 m/s: cannot fly
- Same with a 3000 W motor: gets airborne, cannot hold cruise
- Long, thin wood wing at 35 m/s: flutters
"""

import dataclasses
import sys
from pathlib import Path
import unittest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from human_flight.flight_analyzer import (
    FlightConfiguration,
    IssueKind,
    Material,
    MaterialProperties,
    ViabilityStatus,
    analyze_aerodynamics,
    analyze_structure,
    evaluate,
    judge,
)
from human_flight.sweep_analyzer import find_transition


# Light wood wing with lift to spare; level flight needs roughly 430 W
WOOD_GLIDER = dict(
    pilot_mass_kg=50.0,
    material=Material.WOOD,
    wing_span_m=8.0,
    wing_chord_m=2.0,
    forward_speed_ms=8.0,
    flapping_frequency_hz=0.0,
)


class TestReferenceScenarios(unittest.TestCase):
    """Scenarios with known outcomes."""

    def test_human_powered_baseline_is_non_viable(self):
        analysis = evaluate(FlightConfiguration(
            pilot_mass_kg=80.0,
            wing_span_m=6.0,
            wing_chord_m=1.0,
            material=Material.CARBON_FIBER,
            sustained_power_w=300.0,
            forward_speed_ms=10.0,
        ))
        verdict = analysis.verdict

        self.assertEqual(verdict.status, ViabilityStatus.NON_VIABLE)
        self.assertLess(analysis.aerodynamics.lift_to_weight_ratio, 0.75)
        kinds = verdict.issue_kinds()
        self.assertIn(IssueKind.LIFT_DEFICIT, kinds)
        self.assertIn(IssueKind.STALL_MARGIN, kinds)
        self.assertIn(IssueKind.NEGATIVE_CLIMB, kinds)
        self.assertIn(IssueKind.TAKEOFF_INFEASIBLE, kinds)

        stall_issue = verdict.critical_issues[kinds.index(IssueKind.STALL_MARGIN)]
        self.assertIn("stall speed", stall_issue.message)
        self.assertAlmostEqual(
            stall_issue.threshold, 1.2 * analysis.aerodynamics.stall_speed_ms, places=9
        )

    def test_motor_makes_takeoff_possible(self):
        base = FlightConfiguration()
        analysis = evaluate(base.replace(motor_power_w=3000.0))
        aero = analysis.aerodynamics

        self.assertTrue(aero.takeoff_feasible)
        self.assertGreater(aero.climb_rate_ms, 0.0)
        self.assertLess(aero.unassisted_climb_rate_ms, 0.0)
        self.assertLess(aero.lift_to_weight_ratio, 1.0)
        self.assertEqual(analysis.verdict.status, ViabilityStatus.TAKEOFF_ONLY)
        self.assertNotIn(IssueKind.TAKEOFF_INFEASIBLE, analysis.verdict.issue_kinds())

    def test_lift_deficit_without_powered_climb_is_non_viable(self):
        # Burst power covers takeoff, nothing covers the cruise lift deficit
        analysis = evaluate(FlightConfiguration(burst_power_w=2000.0))
        aero = analysis.aerodynamics

        self.assertTrue(aero.takeoff_feasible)
        self.assertLess(aero.lift_to_weight_ratio, 1.0)
        self.assertLess(aero.climb_rate_ms, 0.0)
        self.assertEqual(analysis.verdict.status, ViabilityStatus.NON_VIABLE)
        kinds = analysis.verdict.issue_kinds()
        self.assertIn(IssueKind.LIFT_DEFICIT, kinds)
        self.assertNotIn(IssueKind.TAKEOFF_INFEASIBLE, kinds)

    def test_long_wood_wing_flutter(self):
        analysis = evaluate(FlightConfiguration(
            material=Material.WOOD,
            wing_span_m=8.0,
            wing_chord_m=0.3,
            forward_speed_ms=35.0,
        ))
        self.assertLess(analysis.structure.flutter_margin, 1.0)
        self.assertIn(IssueKind.FLUTTER, analysis.verdict.issue_kinds())
        self.assertEqual(analysis.verdict.status, ViabilityStatus.NON_VIABLE)


class TestClimbBoundary(unittest.TestCase):
    """TAKEOFF_ONLY becomes VIABLE where the climb rate on sustained power reaches zero."""

    def setUp(self):
        self.base = FlightConfiguration(**WOOD_GLIDER)

    def test_short_of_sustained_power_takeoff_only(self):
        analysis = evaluate(self.base)
        self.assertGreaterEqual(analysis.aerodynamics.lift_to_weight_ratio, 1.0)
        self.assertLess(analysis.aerodynamics.unassisted_climb_rate_ms, 0.0)
        self.assertTrue(analysis.aerodynamics.takeoff_feasible)
        self.assertEqual(analysis.verdict.status, ViabilityStatus.TAKEOFF_ONLY)
        self.assertEqual(analysis.verdict.issue_kinds(), [IssueKind.NEGATIVE_CLIMB])

    def test_enough_sustained_power_viable(self):
        analysis = evaluate(self.base.replace(sustained_power_w=500.0))
        self.assertEqual(analysis.verdict.status, ViabilityStatus.VIABLE)
        self.assertEqual(analysis.verdict.critical_issues, [])
        self.assertTrue(analysis.verdict.is_viable)

    def test_motor_alone_does_not_make_viable(self):
        analysis = evaluate(self.base.replace(motor_power_w=3000.0))
        self.assertGreater(analysis.aerodynamics.climb_rate_ms, 0.0)
        self.assertLess(analysis.aerodynamics.unassisted_climb_rate_ms, 0.0)
        self.assertEqual(analysis.verdict.status, ViabilityStatus.TAKEOFF_ONLY)

    def test_transition_at_zero_sustained_climb(self):
        boundary = find_transition(
            self.base, "sustained_power_w", (300.0, 600.0), "unassisted_climb_rate_ms", 0.0
        )
        self.assertIsNotNone(boundary)
        self.assertGreater(boundary, 350.0)
        self.assertLess(boundary, 550.0)

        below = evaluate(self.base.replace(sustained_power_w=boundary - 20.0))
        above = evaluate(self.base.replace(sustained_power_w=boundary + 20.0))
        self.assertEqual(below.verdict.status, ViabilityStatus.TAKEOFF_ONLY)
        self.assertEqual(above.verdict.status, ViabilityStatus.VIABLE)


class TestIssueCompleteness(unittest.TestCase):
    """Every violated constraint is reported, in a fixed order."""

    def test_lift_and_structure_reported_together(self):
        analysis = evaluate(FlightConfiguration(
            material=Material.WOOD, wing_span_m=8.0, wing_chord_m=0.3, forward_speed_ms=10.0
        ))
        self.assertLess(analysis.aerodynamics.lift_to_weight_ratio, 1.0)
        self.assertLess(analysis.structure.safety_factor, 1.0)

        kinds = analysis.verdict.issue_kinds()
        for kind in (IssueKind.LIFT_DEFICIT, IssueKind.STRUCTURAL_FAILURE, IssueKind.FLUTTER):
            self.assertIn(kind, kinds)
        self.assertNotIn(IssueKind.SAFETY_MARGIN, kinds)

    def test_issue_order_is_fixed(self):
        order = list(IssueKind)
        analysis = evaluate(FlightConfiguration(
            material=Material.WOOD, wing_span_m=8.0, wing_chord_m=0.3, forward_speed_ms=10.0
        ))
        positions = [order.index(kind) for kind in analysis.verdict.issue_kinds()]
        self.assertEqual(positions, sorted(positions))

    def test_margins_reported_with_values(self):
        config = FlightConfiguration()
        aero = analyze_aerodynamics(config)
        structure = analyze_structure(config, aero.dynamic_pressure_pa)
        weak = dataclasses.replace(structure, safety_factor=1.2, flutter_margin=1.1)

        verdict = judge(aero, weak)
        by_kind = {issue.kind: issue for issue in verdict.critical_issues}
        self.assertEqual(by_kind[IssueKind.SAFETY_MARGIN].value, 1.2)
        self.assertEqual(by_kind[IssueKind.SAFETY_MARGIN].threshold, 1.5)
        self.assertEqual(by_kind[IssueKind.FLUTTER_MARGIN].value, 1.1)
        self.assertIn("1.20", by_kind[IssueKind.SAFETY_MARGIN].message)

    def test_insufficient_margin_is_non_viable(self):
        config = FlightConfiguration(**WOOD_GLIDER).replace(sustained_power_w=500.0)
        aero = analyze_aerodynamics(config)
        structure = analyze_structure(config, aero.dynamic_pressure_pa)

        self.assertEqual(judge(aero, structure).status, ViabilityStatus.VIABLE)
        thin = dataclasses.replace(structure, safety_factor=1.3)
        self.assertEqual(judge(aero, thin).status, ViabilityStatus.NON_VIABLE)

    def test_degenerate_structure(self):
        config = FlightConfiguration()
        aero = analyze_aerodynamics(config)
        void = MaterialProperties("Void", 1600.0, 600e6, 0.0)
        structure = analyze_structure(config, aero.dynamic_pressure_pa, material=void)

        verdict = judge(aero, structure)
        kinds = verdict.issue_kinds()
        self.assertEqual(verdict.status, ViabilityStatus.NON_VIABLE)
        self.assertIn(IssueKind.DEGENERATE_GEOMETRY, kinds)
        self.assertIn(IssueKind.STRUCTURAL_FAILURE, kinds)
        self.assertIn(IssueKind.FLUTTER, kinds)

    def test_degenerate_airspeed_reported_first(self):
        analysis = evaluate(FlightConfiguration(forward_speed_ms=3.0, wind_speed_ms=10.0))
        kinds = analysis.verdict.issue_kinds()
        self.assertEqual(kinds[0], IssueKind.DEGENERATE_AIRSPEED)
        self.assertEqual(analysis.verdict.status, ViabilityStatus.NON_VIABLE)


class TestVerdictRecord(unittest.TestCase):
    """Verdict metrics and export."""

    def setUp(self):
        self.analysis = evaluate(FlightConfiguration())

    def test_metrics_reported(self):
        names = [metric.name for metric in self.analysis.verdict.metrics]
        for name in ("aspect_ratio", "reynolds_number", "power_required", "wing_deflection"):
            self.assertIn(name, names)

    def test_to_dict(self):
        data = self.analysis.verdict.to_dict()
        self.assertEqual(data["status"], "non_viable")
        self.assertEqual(len(data["critical_issues"]), len(self.analysis.verdict.critical_issues))
        self.assertIn("kind", data["critical_issues"][0])

    def test_summary_mentions_status(self):
        self.assertIn("NON_VIABLE", self.analysis.verdict.summary())
        self.assertIn("Lift/Weight", self.analysis.summary())

    def test_flat_record(self):
        record = self.analysis.to_dict()
        self.assertEqual(record["material"], "carbon_fiber")
        self.assertIn("aero_lift_n", record)
        self.assertIn("struct_safety_factor", record)
        self.assertIn("lift_deficit", record["critical_issues"])


if __name__ == "__main__":
    unittest.main()
