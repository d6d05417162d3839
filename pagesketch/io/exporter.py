"""
Exporter for PageSketch

Flattens pages into rasters with the live renderer and assembles PNG
byte streams and multi-page PDF documents. Pixel sizes convert to PDF
points at 96 px = 72 pt; each PDF page is portrait or landscape according
to its own width and height.
"""

from typing import Sequence
import logging

from PyQt6.QtCore import QBuffer, QIODevice, QMarginsF, QRectF, QSizeF
from PyQt6.QtGui import QImage, QPageLayout, QPageSize, QPainter, QPdfWriter

from ..core.page import Page
from ..errors import ExportError
from .raster import new_surface

logger = logging.getLogger(__name__)


PX_PER_INCH = 96
PT_PER_INCH = 72


def px_to_pt(px: float) -> float:
    """Convert surface pixels to PDF points."""
    return px * PT_PER_INCH / PX_PER_INCH


def export_page_to_raster(page: Page, renderer) -> QImage:
    """
    Draw ``page`` into a fresh surface sized to its background.

    Uses the same drawing routine as live redraw.
    """
    surface = new_surface(page.width, page.height)
    renderer.render(surface, page)
    return surface


def raster_to_png(image: QImage) -> bytes:
    """Encode a raster as PNG bytes."""
    buffer = QBuffer()
    if not buffer.open(QIODevice.OpenModeFlag.WriteOnly):
        raise ExportError("Cannot open in-memory buffer for PNG encoding")
    try:
        if not image.save(buffer, "PNG"):
            raise ExportError("PNG encoding failed")
    finally:
        buffer.close()
    return bytes(buffer.data())


def export_page_png(page: Page, renderer) -> bytes:
    """Flatten one page and encode it as PNG."""
    return raster_to_png(export_page_to_raster(page, renderer))


def page_layout_for(width_px: float, height_px: float) -> QPageLayout:
    """
    Margin-free PDF page layout matching a page's pixel size.

    The page size is given in portrait form and the orientation flips it
    when the page is wider than tall.
    """
    width_pt = px_to_pt(width_px)
    height_pt = px_to_pt(height_px)
    landscape = width_px > height_px
    portrait_size = QSizeF(min(width_pt, height_pt), max(width_pt, height_pt))
    page_size = QPageSize(portrait_size, QPageSize.Unit.Point, "",
                          QPageSize.SizeMatchPolicy.ExactMatch)
    orientation = (QPageLayout.Orientation.Landscape if landscape
                   else QPageLayout.Orientation.Portrait)
    return QPageLayout(page_size, orientation, QMarginsF(0, 0, 0, 0),
                       QPageLayout.Unit.Point)


def export_document_pdf(pages: Sequence[Page], renderer,
                        title: str = "PageSketch") -> bytes:
    """
    Assemble every page, in order, into one PDF document.

    Raises:
        ExportError: if there are no pages or the PDF writer cannot start
    """
    if not pages:
        raise ExportError("Document has no pages to export")

    buffer = QBuffer()
    if not buffer.open(QIODevice.OpenModeFlag.WriteOnly):
        raise ExportError("Cannot open in-memory buffer for PDF output")

    writer = QPdfWriter(buffer)
    writer.setResolution(PX_PER_INCH)
    writer.setTitle(title)
    writer.setCreator("PageSketch")

    painter = None
    try:
        for index, page in enumerate(pages):
            raster = export_page_to_raster(page, renderer)
            writer.setPageLayout(page_layout_for(page.width, page.height))
            if painter is None:
                painter = QPainter()
                if not painter.begin(writer):
                    raise ExportError("Cannot start PDF writer")
            elif not writer.newPage():
                raise ExportError(f"Cannot add PDF page {index + 1}")
            painter.drawImage(QRectF(0, 0, page.width, page.height), raster)
    finally:
        if painter is not None and painter.isActive():
            painter.end()
        buffer.close()

    payload = bytes(buffer.data())
    logger.info(f"Exported {len(pages)} pages to PDF ({len(payload)} bytes)")
    return payload
