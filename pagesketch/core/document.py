"""
PageSketch Document Model

The Document class is the root container for all editing state: the
ordered pages, the current-page pointer and the id allocator.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import itertools
import logging

from .page import Entity, Page
from .shapes import Shape
from .text import TextItem

logger = logging.getLogger(__name__)


class IdAllocator:
    """
    Monotonic id sequences scoped to one document.

    Shapes and texts draw from two independent sequences; ids are never
    reused, not even across pages.
    """

    def __init__(self):
        self._shape_ids = itertools.count(1)
        self._text_ids = itertools.count(1)

    def next_shape_id(self) -> int:
        return next(self._shape_ids)

    def next_text_id(self) -> int:
        return next(self._text_ids)


@dataclass
class Document:
    """
    The root document.

    A Document contains Pages; each Page owns its Shapes and TextItems.
    At most one shape or text is selected across the whole document.
    """
    pages: List[Page] = field(default_factory=list)
    current_page_index: int = -1
    ids: IdAllocator = field(default_factory=IdAllocator)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def current_page(self) -> Optional[Page]:
        if 0 <= self.current_page_index < len(self.pages):
            return self.pages[self.current_page_index]
        return None

    def add_page(self, page: Page) -> int:
        """
        Append a page. The first page ever added becomes current.

        Returns:
            Index of the new page
        """
        self.pages.append(page)
        if self.current_page_index < 0:
            self.current_page_index = 0
        index = len(self.pages) - 1
        logger.info(f"Added page {index} ({page.width}x{page.height})")
        return index

    def go_to_page(self, index: int) -> bool:
        """
        Make ``index`` the current page.

        Out-of-range indices are ignored.

        Returns:
            True if the current page changed
        """
        if not isinstance(index, int) or not 0 <= index < len(self.pages):
            logger.debug(f"Ignoring navigation to page {index!r}")
            return False
        if index == self.current_page_index:
            return False
        self.current_page_index = index
        return True

    def clear_selection(self) -> None:
        """Deselect everything on every page."""
        for page in self.pages:
            page.clear_selection()

    def select(self, entity: Entity) -> None:
        """Select ``entity`` exclusively, clearing every other selection."""
        self.clear_selection()
        entity.selected = True

    def selected_shape(self) -> Optional[Shape]:
        for page in self.pages:
            shape = page.selected_shape()
            if shape is not None:
                return shape
        return None

    def selected_text(self) -> Optional[TextItem]:
        for page in self.pages:
            text = page.selected_text()
            if text is not None:
                return text
        return None
