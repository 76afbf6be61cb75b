"""Combine several runs of one test into a representative average run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from contracts import RunData
from exceptions import EmptyRunError, RunLengthMismatchError


@dataclass(frozen=True)
class AggregateRun:
    """Per-frame average of several runs.

    Attributes:
        series: Mean sample per frame slot across all runs
        avg_ms: Mean of each run's own average
        runtime: Mean of each run's own run time
        run_count: Number of runs combined
    """

    series: Tuple[float, ...]
    avg_ms: float
    runtime: float
    run_count: int


def _order_free_mean(values: np.ndarray) -> np.ndarray:
    # Summing in sorted order makes the result independent of run order
    return np.sort(values, axis=0).sum(axis=0) / values.shape[0]


def aggregate(runs: Sequence[RunData]) -> AggregateRun:
    """Average runs frame by frame.

    Raises:
        EmptyRunError: If there are no runs or the runs have no samples
        RunLengthMismatchError: If the runs differ in sample count
    """
    if not runs:
        raise EmptyRunError("No runs to aggregate")

    lengths = [run.sample_count for run in runs]
    if len(set(lengths)) > 1:
        raise RunLengthMismatchError(f"Cannot aggregate runs of different lengths: {lengths}", lengths=lengths)
    if lengths[0] == 0:
        raise EmptyRunError("Runs have no recorded samples")

    matrix = np.array([run.raw_samples for run in runs], dtype=np.float64)
    series = _order_free_mean(matrix)

    averages = np.array([run.avg_ms for run in runs], dtype=np.float64)
    runtimes = np.array([run.run_time for run in runs], dtype=np.float64)

    return AggregateRun(
        series=tuple(float(v) for v in series),
        avg_ms=float(_order_free_mean(averages)),
        runtime=float(_order_free_mean(runtimes)),
        run_count=len(runs),
    )
