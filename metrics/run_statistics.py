"""Summary statistics for a single benchmark run."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from contracts import FrameSample, RunData
from exceptions import EmptyRunError


@dataclass(frozen=True)
class RunStatistics:
    avg_ms: float
    min_frame: FrameSample
    max_frame: FrameSample
    runtime: float


def compute_statistics(run: RunData) -> RunStatistics:
    """Compute mean, fastest and slowest frame of a run.

    Ties resolve to the lowest frame index.

    Raises:
        EmptyRunError: If the run has no samples
    """
    if not run.raw_samples:
        raise EmptyRunError("Run has no recorded samples")

    samples = np.asarray(run.raw_samples, dtype=np.float64)
    # argmin/argmax return the first occurrence
    min_index = int(np.argmin(samples))
    max_index = int(np.argmax(samples))
    min_ms = float(samples[min_index])
    max_ms = float(samples[max_index])

    # Rounding can leave the mean an ulp outside the sample range
    avg_ms = min(max(float(samples.mean()), min_ms), max_ms)

    return RunStatistics(
        avg_ms=avg_ms,
        min_frame=FrameSample(frame_index=min_index, ms=min_ms),
        max_frame=FrameSample(frame_index=max_index, ms=max_ms),
        runtime=float(run.run_time),
    )
