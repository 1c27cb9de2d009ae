"""
Sweep Solver Module
===================

Evaluates a flight configuration across a range of one parameter.

The SweepSolver class handles:
- Building the evenly spaced value grid for the swept field
- Evaluating each step in a thread or process pool
- Progress tracking and cancellation
- Re-ordering results by ascending swept value

Module functions:
- sweep: lazy, restartable sequential sweep
- find_transition: locate where a result metric crosses a level
- results_to_dataframe / export_results_csv: tabular export

Usage:
------
    from human_flight.sweep_analyzer import SweepSolver, SweepConfig

    solver = SweepSolver(base, SweepConfig("wing_span_m", 1.5, 8.0, steps=40))

    def on_progress(progress):
        print(f"{progress.percent_complete:.0f}%")

    points = solver.run_sweep(progress_callback=on_progress)
    export_results_csv(points, "span_sweep.csv")
"""

import logging
import threading
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

import pandas as pd
from scipy import optimize

from ..flight_analyzer.config import FlightAnalyzerConfig, DEFAULT_CONFIG
from ..flight_analyzer.flight_solver import FlightAnalysis, FlightSolver
from ..flight_analyzer.parameters import FlightConfiguration
from ..flight_analyzer.viability import ViabilityStatus
from .config import SweepConfig, SweepLimits, SweepPoint

logger = logging.getLogger(__name__)


# =============================================================================
# Worker
# =============================================================================

def _evaluate_step(
    work_item: Tuple[FlightConfiguration, str, float, FlightAnalyzerConfig]
) -> SweepPoint:
    """
    Evaluate one sweep step.

    Module-level so it can be pickled into worker processes; receives the
    work item as a tuple.
    """
    base, varying_field, value, analyzer_config = work_item
    analysis = FlightSolver(analyzer_config).evaluate(base.replace(**{varying_field: value}))
    return SweepPoint(value, analysis.aerodynamics, analysis.structure, analysis.verdict)


def _checked_config(config: SweepConfig) -> SweepConfig:
    is_valid, error = config.validate()
    if not is_valid:
        raise ValueError(f"Invalid sweep configuration: {error}")
    return config


def _check_range_ends(base: FlightConfiguration, varying_field: str, low: float, high: float):
    """
    Reject a range whose ends break a cross-field rule of the base.

    Field bounds are checked by SweepConfig.validate. The remaining rule,
    sustained power not above burst power, is monotone in either power
    field, so a range that passes at both ends passes at every step.
    """
    for value in (low, high):
        try:
            base.replace(**{varying_field: value})
        except ValueError as error:
            raise ValueError(
                f"Invalid sweep range for {varying_field} at {value:g}: {error}"
            ) from error


# =============================================================================
# Lazy Sweep
# =============================================================================

class SweepSequence:
    """
    Lazy, finite and restartable sequence of sweep points.

    Nothing is evaluated until iteration; each new iteration re-evaluates
    from the first value, so two passes yield equal points.
    """

    def __init__(
        self,
        base: FlightConfiguration,
        sweep_config: SweepConfig,
        analyzer_config: Optional[FlightAnalyzerConfig] = None
    ):
        self.base = base
        self.sweep_config = _checked_config(sweep_config)
        self.analyzer_config = analyzer_config if analyzer_config is not None else DEFAULT_CONFIG
        self._values = self.sweep_config.get_values()
        _check_range_ends(base, self.varying_field, self._values[0], self._values[-1])

    @property
    def varying_field(self) -> str:
        return self.sweep_config.varying_field

    @property
    def values(self) -> List[float]:
        """Swept values in ascending order."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[SweepPoint]:
        for value in self._values:
            yield _evaluate_step((self.base, self.varying_field, value, self.analyzer_config))


def sweep(
    base: FlightConfiguration,
    varying_field: str,
    value_range: Tuple[float, float],
    steps: int,
    config: Optional[FlightAnalyzerConfig] = None
) -> SweepSequence:
    """
    Sweep one field of a configuration across a range.

    Parameters:
    ----------
    base : FlightConfiguration
        Configuration whose other fields stay fixed

    varying_field : str
        Numeric field to vary (see SWEEPABLE_FIELDS)

    value_range : Tuple[float, float]
        Range ends, within the field's bounds

    steps : int
        Number of evenly spaced values, ends included

    config : FlightAnalyzerConfig, optional
        Analyzer coefficients

    Returns:
    -------
    SweepSequence
        Lazy sequence of (value, aerodynamics, structure, verdict) points in
        ascending value order. Degenerate steps are kept, not dropped.

    Raises:
    ------
    ValueError
        If the field, range or step count is invalid
    """
    start, stop = value_range
    return SweepSequence(base, SweepConfig(varying_field, start, stop, steps), config)


# =============================================================================
# Parallel Sweep
# =============================================================================

@dataclass
class SweepProgress:
    """Progress information for a running sweep."""
    current: int = 0
    total: int = 0
    current_value: float = 0.0
    elapsed_seconds: float = 0.0
    estimated_remaining_seconds: float = 0.0
    viable_count: int = 0
    takeoff_only_count: int = 0
    non_viable_count: int = 0
    is_running: bool = False
    is_cancelled: bool = False

    @property
    def percent_complete(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.current / self.total) * 100.0

    @property
    def rate_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.current / self.elapsed_seconds


class SweepSolver:
    """
    Parallel sweep engine.

    Steps are independent and pure, so they run in a worker pool without
    locking. Only the progress record is shared, behind a lock.

    Example:
    -------
        solver = SweepSolver(base, SweepConfig("motor_power_w", 0, 5000, 26))
        points = solver.run_sweep()
        viable = [p.value for p in points if p.verdict.is_viable]
    """

    def __init__(
        self,
        base: FlightConfiguration,
        sweep_config: SweepConfig,
        analyzer_config: Optional[FlightAnalyzerConfig] = None
    ):
        """
        Initialize the sweep solver.

        Parameters:
        ----------
        base : FlightConfiguration
            Configuration whose other fields stay fixed

        sweep_config : SweepConfig
            Field, range, step count and processing limits

        analyzer_config : FlightAnalyzerConfig, optional
            Analyzer coefficients
        """
        self.base = base
        self.sweep_config = sweep_config
        self.analyzer_config = analyzer_config if analyzer_config is not None else DEFAULT_CONFIG

        self.progress = SweepProgress()
        self._cancel_event = threading.Event()
        self._lock = threading.Lock()

    @property
    def limits(self) -> SweepLimits:
        return self.sweep_config.limits

    def run_sweep(
        self,
        progress_callback: Optional[Callable[[SweepProgress], None]] = None
    ) -> List[SweepPoint]:
        """
        Run the sweep in a worker pool.

        Parameters:
        ----------
        progress_callback : Callable, optional
            Function called with SweepProgress updates

        Returns:
        -------
        List[SweepPoint]
            Completed points in ascending value order. After cancel() only
            the points finished so far are returned.

        Raises:
        ------
        ValueError
            If the sweep configuration is invalid
        """
        values = _checked_config(self.sweep_config).get_values()
        _check_range_ends(self.base, self.sweep_config.varying_field, values[0], values[-1])
        total = len(values)

        self._cancel_event.clear()
        self.progress = SweepProgress(total=total, is_running=True)

        work_items = [
            (self.base, self.sweep_config.varying_field, value, self.analyzer_config)
            for value in values
        ]
        num_workers = max(1, min(self.limits.max_workers, total))
        executor_class = ProcessPoolExecutor if self.limits.use_processes else ThreadPoolExecutor

        logger.info(
            "Sweeping %s over %d steps with %d %s",
            self.sweep_config.varying_field, total, num_workers,
            "processes" if self.limits.use_processes else "threads",
        )

        completed: Dict[int, SweepPoint] = {}
        start_time = time.time()
        last_update_time = 0.0

        try:
            with executor_class(max_workers=num_workers) as executor:
                future_to_index = {
                    executor.submit(_evaluate_step, item): index
                    for index, item in enumerate(work_items)
                }

                for future in as_completed(future_to_index):
                    if self._cancel_event.is_set():
                        self.progress.is_cancelled = True
                        for pending in future_to_index:
                            pending.cancel()
                        break

                    index = future_to_index[future]
                    try:
                        point = future.result()
                    except Exception:
                        logger.exception(
                            "Sweep step %s=%g failed",
                            self.sweep_config.varying_field, values[index],
                        )
                        raise

                    completed[index] = point

                    with self._lock:
                        self._record(point, len(completed), start_time)

                    current_time = time.time()
                    if current_time - last_update_time >= self.limits.update_interval:
                        last_update_time = current_time
                        if progress_callback:
                            progress_callback(self.progress)

        finally:
            self.progress.is_running = False
            self.progress.elapsed_seconds = time.time() - start_time

            if progress_callback:
                progress_callback(self.progress)

        logger.info(
            "Sweep finished: %d/%d steps in %.2f s%s",
            len(completed), total, self.progress.elapsed_seconds,
            " (cancelled)" if self.progress.is_cancelled else "",
        )
        return [completed[index] for index in sorted(completed)]

    def _record(self, point: SweepPoint, done: int, start_time: float):
        progress = self.progress
        progress.current = done
        progress.current_value = point.value
        progress.elapsed_seconds = time.time() - start_time

        status = point.verdict.status
        if status == ViabilityStatus.VIABLE:
            progress.viable_count += 1
        elif status == ViabilityStatus.TAKEOFF_ONLY:
            progress.takeoff_only_count += 1
        else:
            progress.non_viable_count += 1

        if progress.elapsed_seconds > 0:
            rate = progress.current / progress.elapsed_seconds
            progress.estimated_remaining_seconds = (progress.total - progress.current) / rate

    def cancel(self):
        """Request cancellation of a running sweep."""
        self._cancel_event.set()


# =============================================================================
# Transition Search
# =============================================================================

def _metric_value(analysis: FlightAnalysis, metric: str) -> float:
    for result in (analysis.aerodynamics, analysis.structure):
        if hasattr(result, metric):
            return float(getattr(result, metric))
    raise ValueError(f"Unknown result metric '{metric}'")


def find_transition(
    base: FlightConfiguration,
    varying_field: str,
    bracket: Tuple[float, float],
    metric: str = "climb_rate_ms",
    level: float = 0.0,
    config: Optional[FlightAnalyzerConfig] = None,
    xtol: float = 1e-6
) -> Optional[float]:
    """
    Find the field value where a result metric crosses a level.

    Typical uses are the climb-rate zero (TAKEOFF_ONLY to VIABLE), the
    lift-to-weight ratio reaching 1.0, or the flutter margin reaching 1.0.

    Parameters:
    ----------
    base : FlightConfiguration
        Configuration whose other fields stay fixed

    varying_field : str
        Numeric field to vary

    bracket : Tuple[float, float]
        Search interval, within the field's bounds

    metric : str
        Name of an AerodynamicResult or StructuralResult field

    level : float
        Crossing level

    config : FlightAnalyzerConfig, optional
        Analyzer coefficients

    xtol : float
        Absolute tolerance on the returned value

    Returns:
    -------
    float or None
        Crossing value, or None if the metric does not change sign
        relative to the level across the bracket

    Raises:
    ------
    ValueError
        If the field, bracket or metric is invalid
    """
    low, high = sorted(bracket)
    _checked_config(SweepConfig(varying_field, low, high, steps=2))
    _check_range_ends(base, varying_field, low, high)
    solver = FlightSolver(config)

    def offset(value: float) -> float:
        analysis = solver.evaluate(base.replace(**{varying_field: value}))
        return _metric_value(analysis, metric) - level

    f_low = offset(low)
    f_high = offset(high)
    if f_low == 0.0:
        return low
    if f_high == 0.0:
        return high
    if f_low * f_high > 0.0:
        logger.debug("No %s crossing of %g for %s in [%g, %g]",
                     metric, level, varying_field, low, high)
        return None

    return optimize.brentq(offset, low, high, xtol=xtol)


# =============================================================================
# Export
# =============================================================================

def results_to_dataframe(points: Sequence[SweepPoint]) -> pd.DataFrame:
    """
    Tabulate sweep points, one row per step.

    Columns: value, status, aero_* and struct_* result fields and the
    semicolon-joined critical issue kinds.
    """
    return pd.DataFrame([point.to_dict() for point in points])


def export_results_csv(points: Sequence[SweepPoint], filepath: str):
    """
    Export sweep points to a CSV file.

    Parameters:
    ----------
    points : Sequence[SweepPoint]
        Points to export

    filepath : str
        Output file path
    """
    results_to_dataframe(points).to_csv(filepath, index=False)
    logger.info("Exported %d sweep points to %s", len(points), filepath)
