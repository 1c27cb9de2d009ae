"""
Human Flight Analyzer - Main Package
====================================

Closed-form flight and structural analysis for human-powered and
motor-assisted flying apparatus.

This package provides modules for:
- Flight Analysis (flight_analyzer): aerodynamics, structures and the
  viability verdict for one configuration
- Sweep Analysis (sweep_analyzer): parameter sweeps, transition search
  and tabular export
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
