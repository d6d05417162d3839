"""
Page Loader for PageSketch

Decodes imported files into pages: raster images become one page each,
PDF documents one page per PDF page (rendered at 96 dpi). Also decodes
images for insertion with the image tool.
"""

from pathlib import Path
from typing import List, Union
import logging

import fitz  # PyMuPDF
from PIL import Image
from PyQt6.QtGui import QImage

from ..core.page import DEFAULT_BACKGROUND_COLOR, SURFACE_FORMAT, Page
from ..errors import PageLoadError
from .raster import pil_to_qimage

logger = logging.getLogger(__name__)


IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg"}
PDF_SUFFIXES = {".pdf"}
PDF_RENDER_DPI = 96.0
PDF_POINTS_PER_INCH = 72.0


def load_image(filepath: Union[str, Path]) -> QImage:
    """
    Decode an image file.

    Raises:
        PageLoadError: if the file is missing or not a decodable image
    """
    try:
        with Image.open(filepath) as img:
            img.load()
            return pil_to_qimage(img)
    except (OSError, ValueError) as e:
        raise PageLoadError(f"Cannot decode image {filepath}: {e}") from e


def load_image_page(filepath: Union[str, Path],
                    background_color: str = DEFAULT_BACKGROUND_COLOR) -> Page:
    """A page whose background is the decoded image."""
    return Page(background=load_image(filepath), background_color=background_color)


def load_pdf_pages(filepath: Union[str, Path], dpi: float = PDF_RENDER_DPI,
                   background_color: str = DEFAULT_BACKGROUND_COLOR) -> List[Page]:
    """
    Render every page of a PDF file into a page background.

    Raises:
        PageLoadError: if the file cannot be opened or has no pages
    """
    zoom = dpi / PDF_POINTS_PER_INCH
    try:
        doc = fitz.open(str(filepath))
    except (RuntimeError, ValueError, OSError) as e:
        raise PageLoadError(f"Cannot open PDF {filepath}: {e}") from e

    pages = []
    with doc:
        if doc.needs_pass:
            raise PageLoadError(f"PDF {filepath} is password protected")
        for index, pdf_page in enumerate(doc):
            try:
                pix = pdf_page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
            except (RuntimeError, ValueError) as e:
                raise PageLoadError(
                    f"Cannot render page {index + 1} of {filepath}: {e}"
                ) from e
            image = QImage(pix.samples, pix.width, pix.height, pix.stride,
                           QImage.Format.Format_RGB888)
            pages.append(Page(background=image.convertToFormat(SURFACE_FORMAT),
                              background_color=background_color))

    if not pages:
        raise PageLoadError(f"PDF {filepath} has no pages")
    logger.info(f"Rendered {len(pages)} pages from {filepath}")
    return pages


def load_pages(filepath: Union[str, Path],
               background_color: str = DEFAULT_BACKGROUND_COLOR) -> List[Page]:
    """
    Decode a supported file into pages, dispatching on its suffix.

    Raises:
        PageLoadError: unsupported suffix or decode failure
    """
    suffix = Path(filepath).suffix.lower()
    if suffix in PDF_SUFFIXES:
        return load_pdf_pages(filepath, background_color=background_color)
    if suffix in IMAGE_SUFFIXES:
        return [load_image_page(filepath, background_color)]
    raise PageLoadError(f"Unsupported file type: {suffix or filepath}")
