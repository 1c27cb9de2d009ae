"""
Command Line Interface
======================

Analyse one configuration, sweep a parameter, or search for a viability
transition from the terminal.

Usage:
------
    human-flight --pilot-mass-kg 80 --wing-span-m 6 --forward-speed-ms 10
    human-flight --material wood --sweep wing_span_m 1.5 8 14 --csv span.csv
    human-flight --find-transition motor_power_w 0 10000 climb_rate_ms 0
"""

import argparse
import logging
import sys
from dataclasses import fields
from typing import List, Optional

from . import __version__
from .flight_analyzer import (
    FlightConfiguration,
    Material,
    WingCount,
    SWEEPABLE_FIELDS,
    evaluate,
)
from .sweep_analyzer import SweepConfig, SweepSolver, export_results_csv, find_transition


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="human-flight",
        description="Flight and structural viability analysis for human-flight apparatus",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    group = parser.add_argument_group("configuration")
    for f in fields(FlightConfiguration):
        option = "--" + f.name.replace("_", "-")
        if f.name == "wing_count":
            group.add_argument(option, choices=[w.value for w in WingCount], default=f.default.value)
        elif f.name == "material":
            group.add_argument(option, choices=[m.value for m in Material], default=f.default.value)
        else:
            group.add_argument(option, type=float, default=f.default, metavar="X")

    parser.add_argument(
        "--clamp", action="store_true", help="Clamp out-of-range values instead of rejecting"
    )
    parser.add_argument(
        "--sweep", nargs=4, metavar=("FIELD", "START", "STOP", "STEPS"),
        help=f"Sweep one field ({', '.join(SWEEPABLE_FIELDS)})",
    )
    parser.add_argument("--workers", type=int, default=None, help="Sweep worker count")
    parser.add_argument("--processes", action="store_true", help="Sweep in worker processes")
    parser.add_argument("--csv", metavar="PATH", help="Export sweep results to CSV")
    parser.add_argument(
        "--find-transition", nargs=5, metavar=("FIELD", "LOW", "HIGH", "METRIC", "LEVEL"),
        help="Find where a result metric crosses a level",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _configuration_from_args(args: argparse.Namespace) -> FlightConfiguration:
    values = {f.name: getattr(args, f.name) for f in fields(FlightConfiguration)}
    if args.clamp:
        return FlightConfiguration.clamped(**values)
    return FlightConfiguration(**values)


def _run_sweep(base: FlightConfiguration, args: argparse.Namespace) -> None:
    field_name, start, stop, steps = args.sweep
    sweep_config = SweepConfig(field_name, float(start), float(stop), int(steps))
    if args.workers is not None:
        sweep_config.limits.max_workers = args.workers
    sweep_config.limits.use_processes = args.processes

    points = SweepSolver(base, sweep_config).run_sweep(
        progress_callback=lambda p: print(f"\r  {p.percent_complete:5.1f}%", end="")
    )
    print()

    print(f"{field_name:>24}  {'L/W':>6}  {'climb':>7}  {'SF':>6}  {'flutter':>7}  status")
    for point in points:
        print(
            f"{point.value:>24.3f}  {point.aerodynamics.lift_to_weight_ratio:>6.2f}  "
            f"{point.aerodynamics.climb_rate_ms:>7.2f}  {point.structure.safety_factor:>6.2f}  "
            f"{point.structure.flutter_margin:>7.2f}  {point.verdict.status.value}"
        )

    if args.csv:
        export_results_csv(points, args.csv)
        print(f"\nExported {len(points)} rows to {args.csv}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        base = _configuration_from_args(args)

        if args.find_transition:
            field_name, low, high, metric, level = args.find_transition
            value = find_transition(
                base, field_name, (float(low), float(high)), metric, float(level)
            )
            if value is None:
                print(f"No {metric} crossing of {level} for {field_name} in [{low}, {high}]")
            else:
                print(f"{metric} crosses {level} at {field_name} = {value:.4f}")
            return 0

        if args.sweep:
            _run_sweep(base, args)
            return 0

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(evaluate(base).summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
