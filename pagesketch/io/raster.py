"""
Raster Conversion for PageSketch

Conversions between Pillow images, numpy arrays and the QImage surfaces
the renderer paints on.
"""

import numpy as np
from PIL import Image
from PyQt6.QtGui import QImage

from ..core.page import SURFACE_FORMAT


def new_surface(width: int, height: int) -> QImage:
    """A transparent drawing surface of the given pixel size."""
    surface = QImage(max(1, int(width)), max(1, int(height)), SURFACE_FORMAT)
    surface.fill(0)
    return surface


def array_to_qimage(data: np.ndarray) -> QImage:
    """
    Convert an RGBA (h, w, 4) uint8 array to a surface-format QImage.

    The result owns its pixels.
    """
    data = np.ascontiguousarray(data, dtype=np.uint8)
    if data.ndim != 3 or data.shape[2] != 4:
        raise ValueError(f"expected an (h, w, 4) RGBA array, got shape {data.shape}")
    height, width = data.shape[:2]
    buffer = data.tobytes()
    image = QImage(buffer, width, height, width * 4, QImage.Format.Format_RGBA8888)
    return image.convertToFormat(SURFACE_FORMAT)


def pil_to_qimage(image: Image.Image) -> QImage:
    """Convert any Pillow image to a surface-format QImage."""
    return array_to_qimage(np.asarray(image.convert("RGBA"), dtype=np.uint8))


def qimage_to_array(image: QImage) -> np.ndarray:
    """
    Copy a QImage's pixels into an RGBA (h, w, 4) uint8 array.

    Premultiplied surfaces are un-premultiplied on the way.
    """
    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width, height = rgba.width(), rgba.height()
    bits = rgba.constBits()
    bits.setsize(rgba.sizeInBytes())
    rows = np.frombuffer(bits, dtype=np.uint8).reshape(height, rgba.bytesPerLine())
    return rows[:, :width * 4].reshape(height, width, 4).copy()
