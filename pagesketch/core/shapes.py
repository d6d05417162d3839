"""
PageSketch Core Shapes Module

Defines the drawn primitives: freehand strokes (pencil and eraser), lines,
rectangles, circles, triangles and embedded images.

Every shape exposes the same polymorphic surface used by the hit tester,
the interaction controller and the renderer:
- bounding_box(): axis-aligned box used for body hit-testing
- center(): rotation pivot
- origin(): reference point for move offsets
- handle_rects(): un-rotated handle squares for the operations it supports
- translate(): move in place
- paint(): draw the primitive on a QPainter (rotation is applied by the caller)
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, Tuple

from PyQt6.QtCore import QLineF, QPointF, QRectF, Qt
from PyQt6.QtGui import QColor, QImage, QPainter, QPen, QPolygonF

from .geometry import (
    BoundingBox, Point, bounding_box_of, normalized_rect, point_in_rotated_rect
)


HANDLE_SIZE = 10          # px, square hot zone for rotate/resize handles
MIN_RESIZE = 50           # px, smallest width/height a resize may produce
MAX_RESIZE = 2000         # px, largest width/height a resize may produce
IMAGE_INSERT_SIZE = 100   # px, edge of a freshly inserted image


class ShapeKind(Enum):
    """Kinds of drawn primitives."""
    FREEHAND = "freehand"
    LINE = "line"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    IMAGE = "image"


class HandleKind(Enum):
    """Manipulation handles drawn on a selected entity."""
    ROTATE = "rotate"
    RESIZE = "resize"


def rotate_handle_rect(box: BoundingBox) -> BoundingBox:
    """Rotate handle: 10x10 square inside the box's top-right corner."""
    return BoundingBox(box.max_x - HANDLE_SIZE, box.min_y,
                       box.max_x, box.min_y + HANDLE_SIZE)


def resize_handle_rect(box: BoundingBox) -> BoundingBox:
    """Resize handle: 10x10 square inside the box's bottom-right corner."""
    return BoundingBox(box.max_x - HANDLE_SIZE, box.max_y - HANDLE_SIZE,
                       box.max_x, box.max_y)


def stroke_pen(color: str, width: float,
               cap: Qt.PenCapStyle = Qt.PenCapStyle.FlatCap) -> QPen:
    """Solid pen with round joins, as used for every stroked primitive."""
    pen = QPen(QColor(color))
    pen.setWidthF(float(width))
    pen.setCapStyle(cap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return pen


class Shape(ABC):
    """
    Abstract base class for all shapes.

    Every shape must implement:
    - bounding_box(): axis-aligned box of the stored geometry
    - origin(): the point move offsets are measured from
    - translate(): shift the geometry in place
    - paint(): draw the primitive in the shape's own (un-rotated) frame
    """

    kind: ShapeKind
    handle_kinds: Tuple[HandleKind, ...] = (HandleKind.ROTATE,)

    def __init__(self, shape_id: int, color: str = "black",
                 stroke_width: float = 3.0, angle: float = 0.0):
        self.id: int = shape_id
        self.color: str = color
        self.stroke_width: float = stroke_width
        self.angle: float = angle  # degrees, accumulates without wrapping
        self.selected: bool = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} angle={self.angle}>"

    @abstractmethod
    def bounding_box(self) -> BoundingBox:
        """Return the axis-aligned bounding box of the stored geometry."""
        pass

    @abstractmethod
    def origin(self) -> Point:
        """Reference point for move offsets."""
        pass

    @abstractmethod
    def translate(self, dx: float, dy: float) -> None:
        """Shift the shape in place."""
        pass

    @abstractmethod
    def paint(self, painter: QPainter, background_color: str) -> None:
        """Draw the primitive. The caller has already applied rotation."""
        pass

    @property
    def resizable(self) -> bool:
        return HandleKind.RESIZE in self.handle_kinds

    def center(self) -> Point:
        """Rotation pivot: center of the bounding box."""
        return self.bounding_box().center

    def contains_point(self, point: Point) -> bool:
        """Body hit test. Rotation is deliberately ignored here."""
        return self.bounding_box().contains(point)

    def move_origin_to(self, target: Point) -> None:
        """Translate so that origin() lands on ``target``."""
        current = self.origin()
        self.translate(target.x - current.x, target.y - current.y)

    def handle_rects(self) -> Dict[HandleKind, BoundingBox]:
        """Un-rotated handle squares for the operations this shape supports."""
        box = self.bounding_box()
        rects = {HandleKind.ROTATE: rotate_handle_rect(box)}
        if self.resizable:
            rects[HandleKind.RESIZE] = resize_handle_rect(box)
        return rects

    def hit_handle(self, point: Point) -> Optional[HandleKind]:
        """
        Return the handle under ``point``, taking the shape's rotation into
        account, or None.
        """
        center = self.center()
        for handle, rect in self.handle_rects().items():
            if point_in_rotated_rect(point, rect, center, self.angle):
                return handle
        return None

    def rotate_by(self, degrees: float) -> None:
        self.angle += degrees


class FreehandShape(Shape):
    """
    A pencil or eraser stroke: an ordered polyline.

    Eraser strokes are painted with the page background color, whatever
    color was selected when they were drawn.
    """

    kind = ShapeKind.FREEHAND

    def __init__(self, shape_id: int, path: List[Point], color: str = "black",
                 stroke_width: float = 3.0, eraser: bool = False,
                 angle: float = 0.0):
        if not path:
            raise ValueError("freehand shapes need at least one point")
        super().__init__(shape_id, color, stroke_width, angle)
        self.path: List[Point] = [p.copy() for p in path]
        self.eraser = eraser

    def append_point(self, point: Point) -> None:
        self.path.append(point.copy())

    def bounding_box(self) -> BoundingBox:
        return bounding_box_of(self.path)

    def origin(self) -> Point:
        return self.bounding_box().top_left

    def translate(self, dx: float, dy: float) -> None:
        for p in self.path:
            p.x += dx
            p.y += dy

    def paint(self, painter: QPainter, background_color: str) -> None:
        color = background_color if self.eraser else self.color
        painter.setPen(stroke_pen(color, self.stroke_width, Qt.PenCapStyle.RoundCap))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolyline(QPolygonF([QPointF(p.x, p.y) for p in self.path]))


class BoxShape(Shape):
    """
    A shape defined by a start corner (x1, y1) and a drag corner (x2, y2).

    Corners are stored as drawn: x2 < x1 or y2 < y1 encode direction and
    are never normalized.
    """

    def __init__(self, shape_id: int, x1: float, y1: float, x2: float, y2: float,
                 color: str = "black", stroke_width: float = 3.0,
                 angle: float = 0.0):
        super().__init__(shape_id, color, stroke_width, angle)
        self.x1 = x1
        self.y1 = y1
        self.x2 = x2
        self.y2 = y2

    def __repr__(self) -> str:
        return (f"<{type(self).__name__} id={self.id} "
                f"({self.x1}, {self.y1})-({self.x2}, {self.y2}) angle={self.angle}>")

    @property
    def corners(self) -> Tuple[float, float, float, float]:
        return self.x1, self.y1, self.x2, self.y2

    def bounding_box(self) -> BoundingBox:
        return normalized_rect(self.x1, self.y1, self.x2, self.y2)

    def center(self) -> Point:
        return Point((self.x1 + self.x2) / 2, (self.y1 + self.y2) / 2)

    def origin(self) -> Point:
        return Point(self.x1, self.y1)

    def translate(self, dx: float, dy: float) -> None:
        self.x1 += dx
        self.y1 += dy
        self.x2 += dx
        self.y2 += dy

    def set_corner(self, x2: float, y2: float) -> None:
        """Move the drag corner without any size limits (used while drawing)."""
        self.x2 = x2
        self.y2 = y2

    def resize_corner(self) -> Tuple[str, str]:
        """
        Names of the stored coordinates under the resize handle.

        The handle sits at the bottom-right of the normalized box, which is
        (x2, y2) only for shapes drawn down-right.
        """
        return ("x2" if self.x2 >= self.x1 else "x1",
                "y2" if self.y2 >= self.y1 else "y1")

    def corner_point(self, corner: Tuple[str, str]) -> Point:
        return Point(getattr(self, corner[0]), getattr(self, corner[1]))

    def resize_to(self, x: float, y: float,
                  corner: Tuple[str, str] = ("x2", "y2")) -> bool:
        """
        Move one stored corner as a resize; the opposite coordinates stay put.

        The resulting width and height must both stay within
        [MIN_RESIZE, MAX_RESIZE]; otherwise nothing changes.

        Returns:
            True if the corner was moved
        """
        if not self.resizable:
            return False
        x_name, y_name = corner
        other_x = self.x1 if x_name == "x2" else self.x2
        other_y = self.y1 if y_name == "y2" else self.y2
        width = abs(x - other_x)
        height = abs(y - other_y)
        if not (MIN_RESIZE <= width <= MAX_RESIZE and MIN_RESIZE <= height <= MAX_RESIZE):
            return False
        setattr(self, x_name, x)
        setattr(self, y_name, y)
        return True

    def _rect(self) -> QRectF:
        return QRectF(QPointF(self.x1, self.y1), QPointF(self.x2, self.y2)).normalized()


class LineShape(BoxShape):
    kind = ShapeKind.LINE

    def paint(self, painter: QPainter, background_color: str) -> None:
        painter.setPen(stroke_pen(self.color, self.stroke_width))
        painter.drawLine(QLineF(self.x1, self.y1, self.x2, self.y2))


class RectangleShape(BoxShape):
    kind = ShapeKind.RECTANGLE
    handle_kinds = (HandleKind.ROTATE, HandleKind.RESIZE)

    def paint(self, painter: QPainter, background_color: str) -> None:
        painter.setPen(stroke_pen(self.color, self.stroke_width))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(self._rect())


class CircleShape(BoxShape):
    """Ellipse inscribed in the corner box."""

    kind = ShapeKind.CIRCLE
    handle_kinds = (HandleKind.ROTATE, HandleKind.RESIZE)

    def paint(self, painter: QPainter, background_color: str) -> None:
        painter.setPen(stroke_pen(self.color, self.stroke_width))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawEllipse(self._rect())


class TriangleShape(BoxShape):
    """
    Isosceles triangle: apex at the start corner, base through the drag
    corner mirrored about the apex's x.
    """

    kind = ShapeKind.TRIANGLE
    handle_kinds = (HandleKind.ROTATE, HandleKind.RESIZE)

    def vertices(self) -> List[Point]:
        return [
            Point(self.x1, self.y1),
            Point(self.x2, self.y2),
            Point(self.x1 * 2 - self.x2, self.y2),
        ]

    def paint(self, painter: QPainter, background_color: str) -> None:
        painter.setPen(stroke_pen(self.color, self.stroke_width))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolygon(QPolygonF([QPointF(p.x, p.y) for p in self.vertices()]))


class ImageShape(BoxShape):
    """
    A decoded raster drawn scaled into its corner box.

    The image runs from (x1, y1) towards (x2, y2), so a box whose drag
    corner lies left of or above its start corner shows it mirrored.
    """

    kind = ShapeKind.IMAGE
    handle_kinds = (HandleKind.ROTATE, HandleKind.RESIZE)

    def __init__(self, shape_id: int, image: QImage, x1: float, y1: float,
                 x2: float, y2: float, angle: float = 0.0):
        super().__init__(shape_id, x1, y1, x2, y2, color="#000", stroke_width=1,
                         angle=angle)
        self.image = image

    @classmethod
    def centered_at(cls, shape_id: int, image: QImage, point: Point,
                    size: float = IMAGE_INSERT_SIZE) -> 'ImageShape':
        half = size / 2
        return cls(shape_id, image, point.x - half, point.y - half,
                   point.x + half, point.y + half)

    def paint(self, painter: QPainter, background_color: str) -> None:
        if self.image is None or self.image.isNull():
            return
        rect = self._rect()
        flip_x = -1 if self.x2 < self.x1 else 1
        flip_y = -1 if self.y2 < self.y1 else 1
        painter.save()
        try:
            center = rect.center()
            painter.translate(center)
            painter.scale(flip_x, flip_y)
            painter.translate(-center)
            painter.drawImage(rect, self.image)
        finally:
            painter.restore()
