"""Core data contracts for recorded benchmark results."""

from __future__ import annotations

from dataclasses import dataclass, fields
from functools import cached_property
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple

from exceptions import EmptyRunError, RunLengthMismatchError

if TYPE_CHECKING:
    from metrics.run_statistics import RunStatistics


@dataclass(frozen=True)
class FrameSample:
    frame_index: int
    ms: float


@dataclass(frozen=True)
class RunData:
    """One benchmark execution.

    Attributes:
        raw_samples: Milliseconds per frame, in frame order
        run_time: Total wall time of the run in seconds
    """

    raw_samples: Tuple[float, ...]
    run_time: float

    @cached_property
    def statistics(self) -> "RunStatistics":
        from metrics.run_statistics import compute_statistics

        return compute_statistics(self)

    @property
    def avg_ms(self) -> float:
        return self.statistics.avg_ms

    @property
    def min_frame(self) -> FrameSample:
        return self.statistics.min_frame

    @property
    def max_frame(self) -> FrameSample:
        return self.statistics.max_frame

    @property
    def sample_count(self) -> int:
        return len(self.raw_samples)


# Display order and labels for the Info panel
INFO_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("benchmark_name", "Benchmark"),
    ("scene", "Scene"),
    ("platform", "Platform"),
    ("graphics_api", "Graphics API"),
    ("cpu", "CPU"),
    ("gpu", "GPU"),
    ("os", "OS"),
    ("quality", "Quality"),
    ("resolution", "Resolution"),
    ("engine_version", "Engine Version"),
    ("date", "Date"),
)


@dataclass(frozen=True)
class TestInfo:
    """Descriptive metadata recorded alongside a test."""

    __test__ = False  # not a pytest test class

    benchmark_name: str = ""
    scene: str = ""
    platform: str = ""
    graphics_api: str = ""
    cpu: str = ""
    gpu: str = ""
    os: str = ""
    quality: str = ""
    resolution: str = ""
    engine_version: str = ""
    date: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TestInfo":
        known = {f.name for f in fields(cls)}
        values = {key: str(value) for key, value in data.items() if key in known and value is not None}
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name, _ in INFO_FIELDS}

    def rows(self) -> list[tuple[str, str]]:
        """Return (label, value) pairs in display order."""
        return [(label, getattr(self, name)) for name, label in INFO_FIELDS]


def split_columns(rows: list[tuple[str, str]]) -> tuple[list[tuple[str, str]], list[tuple[str, str]]]:
    """Split info rows into two columns, the first one row longer."""
    half = len(rows) // 2 + 1 if rows else 0
    return rows[:half], rows[half:]


@dataclass(frozen=True)
class PerfBasic:
    """A named performance test and all of its recorded runs.

    Attributes:
        info: Test metadata
        frames: Declared frame budget of the test
        run_data: Recorded runs, all with the same sample count
    """

    info: TestInfo
    frames: int
    run_data: Tuple[RunData, ...]

    def __post_init__(self) -> None:
        if not self.run_data:
            raise EmptyRunError(f"Test '{self.info.benchmark_name}' has no recorded runs")
        lengths = [run.sample_count for run in self.run_data]
        if len(set(lengths)) > 1:
            raise RunLengthMismatchError(
                f"Runs of '{self.info.benchmark_name}' have different sample counts: {lengths}",
                lengths=lengths,
            )

    @property
    def run_count(self) -> int:
        return len(self.run_data)

    def run_labels(self) -> list[str]:
        """Labels for the Display selector, aggregate first."""
        return ["Smooth all runs"] + [f"Run {i}" for i in range(1, self.run_count + 1)]


@dataclass(frozen=True)
class PerfResults:
    file_name: str
    perf_stats: Tuple[PerfBasic, ...]


@dataclass(frozen=True)
class Selection:
    """Which file, test and run the viewer is showing.

    ``run_index`` of ``None`` selects the average of all runs.
    """

    file_index: int = 0
    test_index: int = 0
    run_index: Optional[int] = None

    @property
    def is_aggregate(self) -> bool:
        return self.run_index is None
