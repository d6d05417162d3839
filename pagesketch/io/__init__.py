"""
PageSketch I/O Module

Handles page import and export.
"""

from .page_loader import load_image, load_image_page, load_pdf_pages, load_pages
from .exporter import (
    export_page_to_raster, export_page_png, export_document_pdf, px_to_pt
)
from .raster import new_surface, pil_to_qimage, qimage_to_array

__all__ = [
    'load_image', 'load_image_page', 'load_pdf_pages', 'load_pages',
    'export_page_to_raster', 'export_page_png', 'export_document_pdf', 'px_to_pt',
    'new_surface', 'pil_to_qimage', 'qimage_to_array',
]
