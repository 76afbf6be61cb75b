"""Series and summary numbers the graph host renders for a selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from app.results.store import BenchmarkResultStore, NoData, ResultView
from contracts import FrameSample, Selection


@dataclass(frozen=True)
class SeriesStats:
    """Summary numbers shown under the graph.

    min_frame and max_frame are None for the average of all runs, which
    has no single fastest or slowest frame.
    """

    avg_ms: float
    runtime: float
    min_frame: Optional[FrameSample] = None
    max_frame: Optional[FrameSample] = None


@dataclass(frozen=True)
class SeriesView:
    series: Tuple[float, ...]
    stats: SeriesStats
    total_frames: int
    show_markers: bool


def series_for_view(view: ResultView) -> SeriesView:
    """Build the render series for a resolved selection."""
    run = view.run
    if run is None:
        combined = view.aggregate
        return SeriesView(
            series=combined.series,
            stats=SeriesStats(avg_ms=combined.avg_ms, runtime=combined.runtime),
            total_frames=len(combined.series),
            show_markers=False,
        )

    stats = run.statistics
    return SeriesView(
        series=run.raw_samples,
        stats=SeriesStats(
            avg_ms=stats.avg_ms,
            runtime=stats.runtime,
            min_frame=stats.min_frame,
            max_frame=stats.max_frame,
        ),
        # Markers align to the declared budget, not the sample count
        total_frames=view.perf.frames,
        show_markers=True,
    )


def compute_series_to_render(store: BenchmarkResultStore, selection: Selection) -> Union[SeriesView, NoData]:
    """Resolve a selection and return what the graph should draw.

    Raises:
        NotLoadedError: If the store has not been loaded
        IndexError: If the selection is out of range
        DataIntegrityError: If the selected data cannot be summarized
    """
    view = store.select_view(selection)
    if isinstance(view, NoData):
        return view
    return series_for_view(view)


def _format_frame(label: str, frame: Optional[FrameSample]) -> str:
    if frame is None:
        return f"{label}: n/a"
    return f"{label}: {frame.ms:.2f}ms (@frame: {frame.frame_index})"


def format_summary(stats: SeriesStats) -> list[str]:
    """Summary lines in display order: runtime, average, minimum, maximum."""
    return [
        f"Runtime: {stats.runtime:.2f}s",
        f"Average: {stats.avg_ms:.2f}ms",
        _format_frame("Minimum(fastest)", stats.min_frame),
        _format_frame("Maximum(slowest)", stats.max_frame),
    ]
