"""Frame-time graph as a list of draw commands.

The Qt widget only paints what ``render`` returns, so everything about the
graph layout can be tested without a display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from app.results.series import SeriesView, compute_series_to_render
from app.results.store import BenchmarkResultStore, NoData
from contracts import Selection
from exceptions import DataIntegrityError
from log_config.logger import get_logger
from ui.geometry import Point, PlotRect, gridlines, project_frame_index_to_x, project_series

logger = get_logger(__name__)

# RGBA, 0-255
Color = Tuple[int, int, int, int]

BACKGROUND_COLOR: Color = (0, 0, 0, 255)
GRIDLINE_COLOR: Color = (255, 255, 255, 128)
LABEL_COLOR: Color = (220, 220, 220, 255)
SERIES_COLOR: Color = (33, 150, 243, 255)
MAX_MARKER_COLOR: Color = (255, 0, 0, 128)
MIN_MARKER_COLOR: Color = (0, 255, 0, 128)

LABEL_WIDTH = 80


@dataclass(frozen=True)
class BoxCommand:
    rect: PlotRect
    color: Color


@dataclass(frozen=True)
class LineCommand:
    start: Point
    end: Point
    color: Color
    dotted: bool = False


@dataclass(frozen=True)
class PolylineCommand:
    points: Tuple[Point, ...]
    color: Color


@dataclass(frozen=True)
class TextCommand:
    rect: PlotRect
    text: str
    color: Color


DrawCommand = Union[BoxCommand, LineCommand, PolylineCommand, TextCommand]


@dataclass(frozen=True)
class GraphPlaceholder:
    """Shown in place of the graph when there is nothing valid to draw."""

    message: str


@dataclass(frozen=True)
class GraphStyle:
    gridline_count: int = 5
    padding_px: float = 20.0
    label_gutter_px: float = 40.0
    line_height_px: float = 16.0


def value_range(view: SeriesView) -> Tuple[float, float]:
    """Vertical axis range: zero to twice the average frame time."""
    return 0.0, view.stats.avg_ms * 2.0


def render(view: SeriesView, bounds: PlotRect, style: GraphStyle = GraphStyle()) -> list[DrawCommand]:
    """Lay out the graph for a series inside the given widget bounds.

    Args:
        view: Series and statistics to draw
        bounds: Full area available to the graph
        style: Gridline count and spacing

    Returns:
        Draw commands in paint order

    Raises:
        DegenerateSeriesError: If the series has fewer than two samples or
            markers are requested for a non-positive frame budget
    """
    plot = bounds.inset(style.padding_px, style.label_gutter_px)
    ms_min, ms_max = value_range(view)

    commands: list[DrawCommand] = [BoxCommand(plot, BACKGROUND_COLOR)]

    for line in gridlines(plot, ms_min, ms_max, style.gridline_count):
        commands.append(LineCommand((plot.x_min, line.y), (plot.x_max, line.y), GRIDLINE_COLOR, dotted=True))
        label_top = line.y - style.line_height_px * 0.5
        commands.append(
            TextCommand(
                PlotRect.from_size(plot.x_max, label_top, LABEL_WIDTH, style.line_height_px),
                line.label,
                LABEL_COLOR,
            )
        )

    points = project_series(plot, view.series, ms_min, ms_max)
    commands.append(PolylineCommand(tuple(points), SERIES_COLOR))

    if view.show_markers and view.stats.max_frame is not None and view.stats.min_frame is not None:
        for frame, color in ((view.stats.max_frame, MAX_MARKER_COLOR), (view.stats.min_frame, MIN_MARKER_COLOR)):
            x = project_frame_index_to_x(plot, frame.frame_index, view.total_frames)
            commands.append(LineCommand((x, plot.y_min), (x, plot.y_max), color))

    return commands


def render_selection(
    store: BenchmarkResultStore,
    selection: Selection,
    bounds: PlotRect,
    style: GraphStyle = GraphStyle(),
) -> Union[list[DrawCommand], GraphPlaceholder]:
    """Render a selection, turning missing or invalid data into a placeholder.

    Raises:
        NotLoadedError: If the store has not been loaded
        IndexError: If the selection is out of range
    """
    try:
        view = compute_series_to_render(store, selection)
        if isinstance(view, NoData):
            return GraphPlaceholder(view.message)
        return render(view, bounds, style)
    except DataIntegrityError as e:
        logger.warning(f"Cannot render selection {selection}: {e}")
        return GraphPlaceholder(f"Invalid data: {e}")


__all__ = [
    "BoxCommand",
    "Color",
    "DrawCommand",
    "GraphPlaceholder",
    "GraphStyle",
    "LineCommand",
    "PolylineCommand",
    "TextCommand",
    "render",
    "render_selection",
    "value_range",
]
