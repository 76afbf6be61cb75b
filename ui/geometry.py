"""Coordinate mapping from frame-time data to plot pixels.

Pixel space follows Qt: x grows to the right, y grows downward. Nothing
here clamps, so a value outside the axis range maps outside the plot
rectangle and callers decide whether to clip.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from exceptions import DegenerateSeriesError

# Type aliases
Point = tuple[float, float]


@dataclass(frozen=True)
class PlotRect:
    """Axis-aligned plot area in pixels."""

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> "PlotRect":
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def inset(self, padding: float, right_gutter: float = 0.0) -> "PlotRect":
        """Shrink the rect on all sides, leaving extra room on the right for labels.

        Args:
            padding: Pixels removed from every edge
            right_gutter: Additional pixels removed from the right edge

        Returns:
            The inner plot rectangle
        """
        return PlotRect(
            self.x_min + padding,
            self.y_min + padding,
            self.x_max - padding - right_gutter,
            self.y_max - padding,
        )


@dataclass(frozen=True)
class Gridline:
    y: float
    value_ms: float

    @property
    def label(self) -> str:
        return f"{self.value_ms:.1f}ms"


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b (unclamped)."""
    return a + (b - a) * t


def lerp_value(ms: float, ms_min: float, ms_max: float) -> float:
    """Inverse of lerp: where ms sits between ms_min and ms_max.

    Returns 0.0 for an empty range.
    """
    if ms_max == ms_min:
        return 0.0
    return (ms - ms_min) / (ms_max - ms_min)


def project_point(
    rect: PlotRect,
    index: int,
    value: float,
    total_points: int,
    ms_min: float,
    ms_max: float,
) -> Point:
    """Map a (sample index, ms value) pair to a pixel position.

    Raises:
        DegenerateSeriesError: If the series has fewer than two points
    """
    if total_points <= 1:
        raise DegenerateSeriesError(f"Cannot plot a series of {total_points} point(s)")
    x = lerp(rect.x_min, rect.x_max, index / (total_points - 1))
    y = rect.y_max - rect.height * lerp_value(value, ms_min, ms_max)
    return (x, y)


def project_series(rect: PlotRect, values: Sequence[float], ms_min: float, ms_max: float) -> list[Point]:
    """Project every sample of a series into the plot."""
    total = len(values)
    return [project_point(rect, i, value, total, ms_min, ms_max) for i, value in enumerate(values)]


def project_frame_index_to_x(rect: PlotRect, frame_index: int, total_frames: int) -> float:
    """Horizontal position of a frame on the declared frame budget timeline.

    Uses frame_index / total_frames, so markers align to the budget rather
    than to the recorded sample array.

    Raises:
        DegenerateSeriesError: If the frame budget is not positive
    """
    if total_frames <= 0:
        raise DegenerateSeriesError(f"Invalid frame budget: {total_frames}")
    return lerp(rect.x_min, rect.x_max, frame_index / total_frames)


def gridlines(rect: PlotRect, ms_min: float, ms_max: float, count: int) -> list[Gridline]:
    """Evenly spaced horizontal gridlines from the bottom (ms_min) to the top (ms_max).

    Args:
        rect: Plot rectangle
        ms_min: Value at the bottom edge
        ms_max: Value at the top edge
        count: Number of lines, both edges included

    Returns:
        Gridlines ordered bottom to top
    """
    if count < 2:
        raise ValueError(f"Need at least two gridlines, got {count}")
    steps = count - 1
    return [
        Gridline(
            y=lerp(rect.y_max, rect.y_min, i / steps),
            value_ms=lerp(ms_min, ms_max, i / steps),
        )
        for i in range(count)
    ]


__all__ = [
    "Point",
    "PlotRect",
    "Gridline",
    "lerp",
    "lerp_value",
    "project_point",
    "project_series",
    "project_frame_index_to_x",
    "gridlines",
]
