"""Widget that paints the frame-time graph."""

from __future__ import annotations

from typing import Callable, Optional, Union

from PySide6 import QtCore, QtGui, QtWidgets

from ui.geometry import PlotRect
from ui.graph_render import (
    BoxCommand,
    Color,
    DrawCommand,
    GraphPlaceholder,
    LineCommand,
    PolylineCommand,
    TextCommand,
)

GraphSource = Callable[[PlotRect], Union[list[DrawCommand], GraphPlaceholder]]


def _qcolor(color: Color) -> QtGui.QColor:
    return QtGui.QColor(*color)


def _qrect(rect: PlotRect) -> QtCore.QRectF:
    return QtCore.QRectF(rect.x_min, rect.y_min, rect.width, rect.height)


class FrameTimeGraph(QtWidgets.QWidget):
    """Frame-time line graph.

    The widget asks its source for draw commands on every paint, passing its
    current size, so resizing relays the graph out.
    """

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None, height: int = 500):
        super().__init__(parent)
        self._source: Optional[GraphSource] = None
        self.setMinimumHeight(height)
        self.setSizePolicy(QtWidgets.QSizePolicy.Policy.Expanding, QtWidgets.QSizePolicy.Policy.Fixed)

    def set_source(self, source: Optional[GraphSource]) -> None:
        self._source = source
        self.update()

    def current_output(self) -> Union[list[DrawCommand], GraphPlaceholder]:
        """What the next paint will draw."""
        if self._source is None:
            return GraphPlaceholder("No data")
        return self._source(PlotRect.from_size(0, 0, self.width(), self.height()))

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        """Paint the graph or its placeholder text."""
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)

        output = self.current_output()
        if isinstance(output, GraphPlaceholder):
            painter.setPen(QtCore.Qt.GlobalColor.gray)
            painter.drawText(
                QtCore.QRect(0, 0, self.width(), self.height()),
                QtCore.Qt.AlignmentFlag.AlignCenter,
                output.message,
            )
            painter.end()
            return

        for command in output:
            paint_command(painter, command)
        painter.end()


def paint_command(painter: QtGui.QPainter, command: DrawCommand) -> None:
    """Paint a single draw command."""
    if isinstance(command, BoxCommand):
        painter.fillRect(_qrect(command.rect), _qcolor(command.color))
    elif isinstance(command, LineCommand):
        style = QtCore.Qt.PenStyle.DotLine if command.dotted else QtCore.Qt.PenStyle.SolidLine
        painter.setPen(QtGui.QPen(_qcolor(command.color), 1, style))
        painter.drawLine(QtCore.QPointF(*command.start), QtCore.QPointF(*command.end))
    elif isinstance(command, PolylineCommand):
        painter.setPen(QtGui.QPen(_qcolor(command.color), 2))
        painter.drawPolyline(QtGui.QPolygonF([QtCore.QPointF(x, y) for x, y in command.points]))
    elif isinstance(command, TextCommand):
        painter.setPen(_qcolor(command.color))
        painter.drawText(
            _qrect(command.rect),
            QtCore.Qt.AlignmentFlag.AlignLeft | QtCore.Qt.AlignmentFlag.AlignVCenter,
            command.text,
        )


__all__ = ["FrameTimeGraph", "GraphSource", "paint_command"]
