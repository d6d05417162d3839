"""
PageSketch Text Items

A TextItem stores its content as one flat string; lines (split on "\\n")
exist only for caret addressing and layout. TextLayout derives every
measured quantity (box, rotation center, caret position) from a text item
and a text-metrics object.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .geometry import BoundingBox, Point, point_in_rotated_rect
from .shapes import HandleKind, rotate_handle_rect


LINE_HEIGHT_FACTOR = 1.2
TEXT_BOX_MARGIN = 6


@dataclass
class TextItem:
    """
    One text block.

    ``x`` is the left edge and ``y`` the baseline of the first line.
    ``cursor_index`` is only set while the item is being edited and always
    lies within [0, len(content)].
    """
    id: int
    content: str
    x: float
    y: float
    color: str = "black"
    font_size: float = 16
    angle: float = 0.0
    selected: bool = False
    cursor_index: Optional[int] = None

    handle_kinds = (HandleKind.ROTATE,)

    @property
    def lines(self) -> List[str]:
        return self.content.split("\n")

    @property
    def line_height(self) -> float:
        return self.font_size * LINE_HEIGHT_FACTOR

    def origin(self) -> Point:
        return Point(self.x, self.y)

    def move_origin_to(self, target: Point) -> None:
        self.x = target.x
        self.y = target.y

    def place_caret(self, index: int) -> None:
        """Set the caret, clamped into [0, len(content)]."""
        self.cursor_index = max(0, min(index, len(self.content)))

    def clear_caret(self) -> None:
        self.cursor_index = None


class TextLayout:
    """
    Measured geometry of a TextItem.

    Args:
        text: the item to lay out
        metrics: object with ``width(text, font_size) -> float``
    """

    def __init__(self, text: TextItem, metrics):
        self.text = text
        self.metrics = metrics
        self.lines = text.lines
        self.line_height = text.line_height
        self.max_width = max(metrics.width(line, text.font_size) for line in self.lines)
        self.total_height = len(self.lines) * self.line_height

    def center(self) -> Point:
        """Rotation pivot of the text block."""
        t = self.text
        return Point(t.x + self.max_width / 2,
                     t.y - t.font_size + self.total_height / 2)

    def box(self) -> BoundingBox:
        """Selection/hit box: glyph area plus a fixed margin."""
        t = self.text
        left = t.x - TEXT_BOX_MARGIN
        top = t.y - t.font_size - TEXT_BOX_MARGIN
        width = self.max_width + TEXT_BOX_MARGIN * 2
        height = (self.total_height + TEXT_BOX_MARGIN * 2
                  - (self.line_height - t.font_size))
        return BoundingBox(left, top, left + width, top + height)

    def line_top(self, line_index: int) -> float:
        return self.text.y + line_index * self.line_height - self.text.font_size

    def baseline(self, line_index: int) -> float:
        return self.text.y + line_index * self.line_height

    def contains_point(self, point: Point) -> bool:
        return self.box().contains(point)

    def handle_rects(self) -> Dict[HandleKind, BoundingBox]:
        return {HandleKind.ROTATE: rotate_handle_rect(self.box())}

    def hit_handle(self, point: Point) -> Optional[HandleKind]:
        center = self.center()
        for handle, rect in self.handle_rects().items():
            if point_in_rotated_rect(point, rect, center, self.text.angle):
                return handle
        return None

    def caret_position(self, cursor_index: int) -> Tuple[int, float]:
        """
        Locate a flat caret index.

        Returns:
            (line index, x offset from the text's left edge)
        """
        remaining = cursor_index
        for i, line in enumerate(self.lines):
            if remaining <= len(line):
                return i, self.metrics.width(line[:remaining], self.text.font_size)
            remaining = max(0, remaining - len(line) - 1)
        last = len(self.lines) - 1
        return last, self.metrics.width(self.lines[last], self.text.font_size)
