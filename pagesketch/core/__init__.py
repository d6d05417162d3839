"""
PageSketch Core Module

Contains the core data structures:
- Geometry: Point, BoundingBox and rotation helpers
- Shapes: freehand, line, rectangle, circle, triangle, image
- TextItem: multi-line caret-addressed text
- Page / Document: pages with shapes, texts and a background raster
"""

# Import order matters - geometry first, then shapes, text, page, document
from .geometry import (
    Point, BoundingBox, rotate_point, bounding_box_of, normalized_rect,
    point_in_rotated_rect
)
from .shapes import (
    ShapeKind, HandleKind, Shape, FreehandShape, BoxShape, LineShape,
    RectangleShape, CircleShape, TriangleShape, ImageShape
)
from .text import TextItem, TextLayout
from .page import Page
from .document import Document, IdAllocator

__all__ = [
    'Point', 'BoundingBox', 'rotate_point', 'bounding_box_of',
    'normalized_rect', 'point_in_rotated_rect',
    'ShapeKind', 'HandleKind', 'Shape', 'FreehandShape', 'BoxShape',
    'LineShape', 'RectangleShape', 'CircleShape', 'TriangleShape', 'ImageShape',
    'TextItem', 'TextLayout',
    'Page',
    'Document', 'IdAllocator',
]
