"""
Editor Session for PageSketch

The single entry point a host application talks to. It owns the document,
the interaction controller and the renderer, receives page-local pointer
and keyboard input, redraws the attached surface after every mutation and
exposes page management and export.
"""

from functools import wraps
from pathlib import Path
from typing import Optional, Union
import logging

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QImage

from .core.document import Document
from .core.geometry import Point, is_valid_coordinate
from .core.page import Page
from .errors import ExportError, PageLoadError
from .graphics.controller import InteractionController
from .graphics.metrics import QtTextMetrics, TextMetrics
from .graphics.renderer import Renderer
from .graphics.tools import ToolType
from .io.exporter import export_document_pdf, export_page_png
from .io.page_loader import load_image, load_pages
from .io.raster import new_surface
from .settings import EditorSettings

logger = logging.getLogger(__name__)


def _input_handler(method):
    """Input handlers never raise; failures are logged and treated as no-ops."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except Exception:
            logger.exception(f"Error in {method.__name__}; input ignored")
            return False
    return wrapper


class EditorSession(QObject):
    """
    Editing session over one document.

    Signals:
        changed: emitted after any model mutation (and its redraw)
        page_changed(int): emitted when the current page changes
    """

    changed = pyqtSignal()
    page_changed = pyqtSignal(int)

    def __init__(self, settings: Optional[EditorSettings] = None,
                 metrics: Optional[TextMetrics] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.settings = settings if settings is not None else EditorSettings()
        self.metrics = metrics if metrics is not None else QtTextMetrics()
        self.document = Document()
        self.controller = InteractionController(self.document, self.settings, self.metrics)
        self.renderer = Renderer(self.metrics)
        self._surface: Optional[QImage] = None

    # Surface and redraw

    @property
    def surface(self) -> Optional[QImage]:
        return self._surface

    def attach_surface(self, surface: Optional[QImage]) -> bool:
        """Attach the surface live redraws paint on, and redraw."""
        self._surface = surface
        return self.redraw()

    def create_surface(self) -> Optional[QImage]:
        """Create and attach a surface sized to the current page."""
        page = self.document.current_page
        if page is None:
            return None
        self.attach_surface(new_surface(page.width, page.height))
        return self._surface

    def redraw(self) -> bool:
        """Full redraw of the current page, including any draft shape."""
        return self.renderer.render(self._surface, self.document.current_page,
                                    self.controller.draft)

    def _mutated(self, changed: bool) -> bool:
        if changed:
            self.redraw()
            self.changed.emit()
        return changed

    # Pages

    @property
    def current_page(self) -> Optional[Page]:
        return self.document.current_page

    def add_page(self, page: Page) -> int:
        """Append a decoded page; the first one becomes current."""
        was_empty = self.document.current_page is None
        index = self.document.add_page(page)
        if was_empty:
            self.page_changed.emit(self.document.current_page_index)
        self._mutated(True)
        return index

    def add_blank_page(self) -> int:
        width, height = self.settings.blank_page_size
        return self.add_page(Page.blank(width, height, self.settings.background_color))

    def import_file(self, filepath: Union[str, Path]) -> int:
        """
        Import an image (one page) or a PDF (one page per PDF page).

        Decode failures leave the document untouched.

        Returns:
            Number of pages added
        """
        try:
            pages = load_pages(filepath, self.settings.background_color)
        except PageLoadError as e:
            logger.warning(f"Import failed: {e}")
            return 0
        for page in pages:
            self.add_page(page)
        return len(pages)

    @_input_handler
    def go_to_page(self, index: int) -> bool:
        """Switch pages; out-of-range indices are ignored."""
        if not isinstance(index, int) or not 0 <= index < self.document.page_count:
            logger.debug(f"Ignoring navigation to page {index!r}")
            return False
        if index == self.document.current_page_index:
            return False
        self.controller.finish_interaction()
        self.document.clear_selection()
        self.document.go_to_page(index)
        self.page_changed.emit(index)
        return self._mutated(True)

    # Tool state

    def set_tool(self, tool: Union[ToolType, str]) -> None:
        self.settings.tool = ToolType(tool)

    def set_color(self, color: str) -> None:
        self.settings.color = color

    def set_stroke_width(self, value) -> int:
        return self.settings.set_stroke_width(value)

    def set_font_size(self, value) -> int:
        return self.settings.set_font_size(value)

    def set_pending_image(self, image: Union[QImage, str, Path]) -> bool:
        """
        Load the image the image tool inserts on its next click.

        Returns:
            False if the image could not be decoded
        """
        if not isinstance(image, QImage):
            try:
                image = load_image(image)
            except PageLoadError as e:
                logger.warning(f"Cannot use image for insertion: {e}")
                return False
        if image.isNull():
            return False
        self.controller.pending_image = image
        return True

    # Pointer and keyboard input

    def _point(self, x, y) -> Optional[Point]:
        if not is_valid_coordinate(x, y):
            logger.debug(f"Ignoring pointer event without a position ({x!r}, {y!r})")
            return None
        return Point(float(x), float(y))

    @_input_handler
    def pointer_down(self, x, y) -> bool:
        point = self._point(x, y)
        if point is None:
            return False
        return self._mutated(self.controller.pointer_down(point))

    @_input_handler
    def pointer_move(self, x, y) -> bool:
        point = self._point(x, y)
        if point is None:
            return False
        return self._mutated(self.controller.pointer_move(point))

    @_input_handler
    def pointer_up(self) -> bool:
        return self._mutated(self.controller.pointer_exit())

    @_input_handler
    def pointer_leave(self) -> bool:
        return self._mutated(self.controller.pointer_exit())

    @_input_handler
    def key_down(self, key: str) -> bool:
        return self._mutated(self.controller.key_down(key))

    # Export

    def export_current_page_png(self) -> bytes:
        """
        Raises:
            ExportError: if there is no current page
        """
        page = self.document.current_page
        if page is None:
            raise ExportError("No current page to export")
        return export_page_png(page, self.renderer)

    def export_all_pages_pdf(self) -> bytes:
        """
        Raises:
            ExportError: if the document has no pages
        """
        return export_document_pdf(self.document.pages, self.renderer)

    def save_png(self, filepath: Union[str, Path]) -> bool:
        """Write the current page as PNG. Returns True if successful."""
        return self._write(filepath, self.export_current_page_png)

    def save_pdf(self, filepath: Union[str, Path]) -> bool:
        """Write all pages as one PDF. Returns True if successful."""
        return self._write(filepath, self.export_all_pages_pdf)

    def _write(self, filepath, produce) -> bool:
        try:
            payload = produce()
            Path(filepath).write_bytes(payload)
        except (ExportError, OSError) as e:
            logger.error(f"Error exporting to {filepath}: {e}")
            return False
        logger.info(f"Saved {filepath}")
        return True
