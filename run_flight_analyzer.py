#!/usr/bin/env python3
"""
Human Flight Analyzer Launcher
==============================

Launch script for the command line flight analyzer.

This tool decides whether a human-flight apparatus can fly by combining:
- Wing geometry for two- and four-wing layouts
- Aerodynamic performance (lift, drag, stall speed, power, climb rate)
- Structural checks (spar sizing, deflection, flutter, safety factor)
- A VIABLE / TAKEOFF_ONLY / NON_VIABLE verdict

Usage:
------
    python run_flight_analyzer.py --pilot-mass-kg 80 --motor-power-w 3000
    python run_flight_analyzer.py --sweep wing_span_m 1.5 8 14 --csv span.csv

Requirements:
------------
    - Python 3.8+
    - numpy
    - scipy
    - pandas
"""

import importlib.util
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))


def check_dependencies():
    """Check that all required packages are installed."""
    missing = [
        name for name in ("numpy", "scipy", "pandas")
        if importlib.util.find_spec(name) is None
    ]

    if missing:
        print("Missing required packages:")
        for pkg in missing:
            print(f"  - {pkg}")
        print("\nInstall with: pip install -e .")
        sys.exit(1)


if __name__ == "__main__":
    check_dependencies()

    from human_flight.cli import main

    sys.exit(main())
