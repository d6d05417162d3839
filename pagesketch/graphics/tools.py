"""
Drawing Tools for PageSketch

Tool identifiers and the factory that seeds a draft shape when a drawing
tool is pressed on empty space.
"""

from enum import Enum
from typing import Optional

from ..core.geometry import Point
from ..core.shapes import (
    BoxShape, CircleShape, FreehandShape, LineShape, RectangleShape, Shape,
    TriangleShape
)


class ToolType(Enum):
    """Types of editing tools."""
    PENCIL = "pencil"
    ERASER = "eraser"
    LINE = "line"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    TEXT = "text"
    IMAGE = "image"

    @property
    def is_freehand(self) -> bool:
        return self in (ToolType.PENCIL, ToolType.ERASER)

    @property
    def is_drawing(self) -> bool:
        """True for tools that paint a draft shape while the pointer is down."""
        return self.is_freehand or self in _BOX_TOOLS


_BOX_TOOLS = {
    ToolType.LINE: LineShape,
    ToolType.RECTANGLE: RectangleShape,
    ToolType.CIRCLE: CircleShape,
    ToolType.TRIANGLE: TriangleShape,
}


def create_draft(tool: ToolType, shape_id: int, point: Point, color: str,
                 stroke_width: float, background_color: str) -> Optional[Shape]:
    """
    Create the draft shape for a drawing tool pressed at ``point``.

    Freehand tools start a one-point path; the others start a zero-size
    box at ``point``. Eraser strokes take ``background_color``.

    Returns:
        The draft shape, or None if ``tool`` does not draw
    """
    if tool.is_freehand:
        eraser = tool == ToolType.ERASER
        return FreehandShape(
            shape_id, [point],
            color=background_color if eraser else color,
            stroke_width=stroke_width,
            eraser=eraser
        )
    shape_class = _BOX_TOOLS.get(tool)
    if shape_class is None:
        return None
    return shape_class(shape_id, point.x, point.y, point.x, point.y,
                       color=color, stroke_width=stroke_width)


def extend_draft(draft: Shape, point: Point) -> None:
    """Grow a draft shape to follow the pointer."""
    if isinstance(draft, FreehandShape):
        draft.append_point(point)
    elif isinstance(draft, BoxShape):
        draft.set_corner(point.x, point.y)
