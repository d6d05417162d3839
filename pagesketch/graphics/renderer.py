"""
Page Renderer for PageSketch

Draws a page (background, shapes, draft, texts) onto a QImage surface.
The same routine serves live redraw and export, so both produce the same
pixels for the same model.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, Optional
import logging

from PyQt6.QtCore import QLineF, QPointF, QRectF, Qt
from PyQt6.QtGui import QColor, QImage, QPainter, QPen

from ..core.geometry import BoundingBox, Point
from ..core.page import Page
from ..core.shapes import HandleKind, Shape
from ..core.text import TextItem, TextLayout

logger = logging.getLogger(__name__)


SELECTION_COLOR = "blue"
CARET_COLOR = "red"
SELECTION_DASH = [5.0, 3.0]


def _rect(box: BoundingBox) -> QRectF:
    return QRectF(box.min_x, box.min_y, box.width, box.height)


class Renderer:
    """
    Full-redraw page renderer.

    Args:
        metrics: text metrics shared with the hit tester and text editor
    """

    def __init__(self, metrics):
        self.metrics = metrics

    def render(self, surface: Optional[QImage], page: Optional[Page],
               draft: Optional[Shape] = None) -> bool:
        """
        Clear ``surface`` and draw ``page`` onto it.

        Returns:
            False (and draws nothing) when there is no usable surface or page
        """
        if surface is None or surface.isNull():
            logger.debug("No drawing surface attached; skipping render pass")
            return False
        if page is None:
            logger.debug("No current page; skipping render pass")
            return False

        surface.fill(Qt.GlobalColor.transparent)
        painter = QPainter(surface)
        if not painter.isActive():
            logger.debug("Could not begin painting on surface; skipping render pass")
            return False
        try:
            self.paint_page(painter, page, draft)
        finally:
            painter.end()
        return True

    def paint_page(self, painter: QPainter, page: Page,
                   draft: Optional[Shape] = None) -> None:
        """Paint background, shapes, draft and texts, in that order."""
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        painter.drawImage(QRectF(0, 0, page.width, page.height), page.background)

        for shape in page.shapes:
            self.paint_shape(painter, shape, page.background_color)
        if draft is not None:
            self.paint_shape(painter, draft, page.background_color)
        for text in page.texts:
            self.paint_text(painter, text)

    @contextmanager
    def _rotated(self, painter: QPainter, center: Point, angle: float) -> Iterator[None]:
        """Rotate the painter about ``center``; restored on exit."""
        painter.save()
        try:
            painter.translate(center.x, center.y)
            painter.rotate(angle)
            painter.translate(-center.x, -center.y)
            yield
        finally:
            painter.restore()

    def paint_shape(self, painter: QPainter, shape: Shape, background_color: str) -> None:
        with self._rotated(painter, shape.center(), shape.angle):
            shape.paint(painter, background_color)
            if shape.selected:
                self._paint_selection(painter, shape.bounding_box(), shape.handle_rects())

    def paint_text(self, painter: QPainter, text: TextItem) -> None:
        layout = TextLayout(text, self.metrics)
        with self._rotated(painter, layout.center(), text.angle):
            painter.setFont(self.metrics.font(text.font_size))
            painter.setPen(QColor(text.color))
            for index, line in enumerate(layout.lines):
                painter.drawText(QPointF(text.x, layout.baseline(index)), line)

            if text.selected:
                self._paint_selection(painter, layout.box(), layout.handle_rects())
                if text.cursor_index is not None:
                    self._paint_caret(painter, layout, text.cursor_index)

    def _paint_selection(self, painter: QPainter, box: BoundingBox,
                         handles: Dict[HandleKind, BoundingBox]) -> None:
        painter.save()
        painter.setBrush(Qt.BrushStyle.NoBrush)
        pen = QPen(QColor(SELECTION_COLOR))
        pen.setWidthF(1.0)
        pen.setDashPattern(SELECTION_DASH)
        painter.setPen(pen)
        painter.drawRect(_rect(box))

        pen.setStyle(Qt.PenStyle.SolidLine)
        painter.setPen(pen)
        for handle in handles.values():
            painter.drawRect(_rect(handle))
        painter.restore()

    def _paint_caret(self, painter: QPainter, layout: TextLayout, cursor_index: int) -> None:
        line, offset = layout.caret_position(cursor_index)
        x = layout.text.x + offset
        top = layout.line_top(line)
        painter.save()
        pen = QPen(QColor(CARET_COLOR))
        pen.setWidthF(1.0)
        painter.setPen(pen)
        painter.drawLine(QLineF(x, top, x, top + layout.line_height))
        painter.restore()
