"""Frame-time statistics and multi-run aggregation."""

from .aggregate import AggregateRun, aggregate
from .run_statistics import RunStatistics, compute_statistics

__all__ = ["AggregateRun", "RunStatistics", "aggregate", "compute_statistics"]
