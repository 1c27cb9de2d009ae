"""
Command Line Tests
==================

Smoke tests for the human-flight command.
"""

import io
import os
import sys
import tempfile
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
import unittest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from human_flight.cli import main


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCommandLine(unittest.TestCase):

    def test_single_analysis(self):
        code, out, _ = _run(["--pilot-mass-kg", "80", "--motor-power-w", "3000"])
        self.assertEqual(code, 0)
        self.assertIn("TAKEOFF_ONLY", out)

    def test_out_of_range_rejected(self):
        code, _, err = _run(["--wing-span-m", "20"])
        self.assertEqual(code, 1)
        self.assertIn("wing_span_m", err)

    def test_clamp(self):
        code, out, _ = _run(["--wing-span-m", "20", "--clamp"])
        self.assertEqual(code, 0)
        self.assertIn("8.00 m", out)

    def test_sweep_to_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "span.csv")
            code, out, _ = _run(["--sweep", "wing_span_m", "2", "6", "3", "--csv", path])
            self.assertEqual(code, 0)
            self.assertTrue(os.path.exists(path))
        self.assertIn("non_viable", out)

    def test_find_transition(self):
        code, out, _ = _run([
            "--pilot-mass-kg", "60", "--wing-span-m", "8", "--wing-chord-m", "1.5",
            "--forward-speed-ms", "14", "--flapping-frequency-hz", "0",
            "--find-transition", "motor_power_w", "0", "5000", "climb_rate_ms", "0",
        ])
        self.assertEqual(code, 0)
        self.assertIn("crosses", out)


if __name__ == "__main__":
    unittest.main()
