"""
PageSketch Geometry

Point and rectangle math shared by the hit tester, controller and renderer.
All coordinates are page-local pixels, origin top-left, y grows downward.
"""

from dataclasses import dataclass
from typing import Iterable
import math


@dataclass
class Point:
    """A 2D point."""
    x: float
    y: float

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def copy(self) -> 'Point':
        return Point(self.x, self.y)


@dataclass
class BoundingBox:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2
        )

    @property
    def top_left(self) -> Point:
        return Point(self.min_x, self.min_y)

    def contains(self, point: Point) -> bool:
        """Check if point is inside bounding box (edges included)."""
        return (self.min_x <= point.x <= self.max_x and
                self.min_y <= point.y <= self.max_y)


def rotate_point(center: Point, point: Point, angle_radians: float) -> Point:
    """Rotate ``point`` about ``center`` by ``angle_radians``.

    Positive angles turn clockwise on screen because y grows downward,
    matching the drawing surface's rotate().
    """
    cos_a = math.cos(angle_radians)
    sin_a = math.sin(angle_radians)
    dx = point.x - center.x
    dy = point.y - center.y
    return Point(
        center.x + dx * cos_a - dy * sin_a,
        center.y + dx * sin_a + dy * cos_a
    )


def bounding_box_of(points: Iterable[Point]) -> BoundingBox:
    """
    Axis-aligned bounds of a non-empty point sequence.

    Raises:
        ValueError: if ``points`` is empty
    """
    points = list(points)
    if not points:
        raise ValueError("bounding_box_of() needs at least one point")
    return BoundingBox(
        min_x=min(p.x for p in points),
        min_y=min(p.y for p in points),
        max_x=max(p.x for p in points),
        max_y=max(p.y for p in points)
    )


def normalized_rect(x1: float, y1: float, x2: float, y2: float) -> BoundingBox:
    """
    Normalize two (possibly reversed) corners into left/top/right/bottom.

    Only used for hit-testing and selection drawing; stored shape geometry
    keeps its original corners.
    """
    return BoundingBox(
        min_x=min(x1, x2),
        min_y=min(y1, y2),
        max_x=max(x1, x2),
        max_y=max(y1, y2)
    )


def point_in_rotated_rect(point: Point, rect: BoundingBox,
                          center: Point, angle_degrees: float) -> bool:
    """
    Test ``point`` against ``rect`` after ``rect`` has been rotated by
    ``angle_degrees`` about ``center``.

    The point is taken back into the un-rotated frame instead of rotating
    the rectangle.
    """
    local = rotate_point(center, point, -math.radians(angle_degrees))
    return rect.contains(local)


def pointer_angle(center: Point, point: Point) -> float:
    """Angle of ``point`` around ``center`` in radians (atan2(dy, dx))."""
    return math.atan2(point.y - center.y, point.x - center.x)


def is_valid_coordinate(x, y) -> bool:
    """True when both values are finite numbers."""
    if x is None or y is None:
        return False
    try:
        return math.isfinite(x) and math.isfinite(y)
    except TypeError:
        return False
