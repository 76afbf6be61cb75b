"""UI widgets module."""

from ui.widgets.frame_time_graph import FrameTimeGraph

__all__ = ["FrameTimeGraph"]
