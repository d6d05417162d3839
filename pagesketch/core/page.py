"""
PageSketch Page Model

A page owns its background raster plus ordered shape and text lists.
List order is z-order: later entries paint on top and are hit-tested first.
Texts always composite above shapes.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from PyQt6.QtGui import QColor, QImage

from .shapes import Shape
from .text import TextItem


DEFAULT_BACKGROUND_COLOR = "#f9f8f8"
SURFACE_FORMAT = QImage.Format.Format_ARGB32_Premultiplied

Entity = Union[Shape, TextItem]


@dataclass
class Page:
    """
    One page of the document.

    The background is an opaque raster (blank fill, imported image or
    rendered PDF page); its pixel size is the page size.
    """
    background: QImage
    shapes: List[Shape] = field(default_factory=list)
    texts: List[TextItem] = field(default_factory=list)
    background_color: str = DEFAULT_BACKGROUND_COLOR

    @classmethod
    def blank(cls, width: int, height: int,
              color: str = DEFAULT_BACKGROUND_COLOR) -> 'Page':
        """Create a page whose background is a solid fill."""
        image = QImage(width, height, SURFACE_FORMAT)
        image.fill(QColor(color))
        return cls(background=image, background_color=color)

    @property
    def width(self) -> int:
        return self.background.width()

    @property
    def height(self) -> int:
        return self.background.height()

    def add_shape(self, shape: Shape) -> None:
        """Append a shape on top of the existing ones."""
        self.shapes.append(shape)

    def add_text(self, text: TextItem) -> None:
        """Append a text item on top of the existing ones."""
        self.texts.append(text)

    def clear_selection(self) -> None:
        """Deselect every shape and text; text carets are dropped too."""
        for shape in self.shapes:
            shape.selected = False
        for text in self.texts:
            text.selected = False
            text.clear_caret()

    def selected_shape(self) -> Optional[Shape]:
        for shape in self.shapes:
            if shape.selected:
                return shape
        return None

    def selected_text(self) -> Optional[TextItem]:
        for text in self.texts:
            if text.selected:
                return text
        return None
