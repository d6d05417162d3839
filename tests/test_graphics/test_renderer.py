"""
Tests for the page renderer.

Renders onto offscreen surfaces and inspects individual pixels.
"""

import os
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
from PyQt6.QtGui import QColor, QGuiApplication, QImage

from pagesketch.core.geometry import Point
from pagesketch.core.page import DEFAULT_BACKGROUND_COLOR, Page
from pagesketch.core.shapes import FreehandShape, ImageShape, RectangleShape
from pagesketch.core.text import TextItem
from pagesketch.graphics.metrics import FixedAdvanceMetrics
from pagesketch.graphics.renderer import Renderer
from pagesketch.io.raster import new_surface, qimage_to_array

_app = None


def setUpModule():
    global _app
    _app = QGuiApplication.instance() or QGuiApplication([])


def pixel(surface: QImage, x: int, y: int) -> str:
    return surface.pixelColor(x, y).name()


class TestRenderer(unittest.TestCase):
    """Test Renderer.render."""

    def setUp(self):
        self.renderer = Renderer(FixedAdvanceMetrics())
        self.page = Page.blank(400, 300)
        self.surface = new_surface(400, 300)

    def test_skips_without_surface_or_page(self):
        self.assertFalse(self.renderer.render(None, self.page))
        self.assertFalse(self.renderer.render(QImage(), self.page))
        self.assertFalse(self.renderer.render(self.surface, None))

    def test_background(self):
        self.assertTrue(self.renderer.render(self.surface, self.page))
        self.assertEqual(pixel(self.surface, 0, 0), DEFAULT_BACKGROUND_COLOR)
        self.assertEqual(pixel(self.surface, 399, 299), DEFAULT_BACKGROUND_COLOR)

    def test_rectangle_stroke(self):
        self.page.add_shape(RectangleShape(1, 20, 20, 120, 120, color="red", stroke_width=4))
        self.renderer.render(self.surface, self.page)
        self.assertEqual(pixel(self.surface, 20, 70), "#ff0000")
        self.assertEqual(pixel(self.surface, 70, 70), DEFAULT_BACKGROUND_COLOR)

    def test_rotation_about_center(self):
        rect = RectangleShape(1, 100, 180, 300, 220, color="black", stroke_width=4)
        self.page.add_shape(rect)
        self.renderer.render(self.surface, self.page)
        self.assertEqual(pixel(self.surface, 200, 180), "#000000")

        rect.rotate_by(90)
        self.renderer.render(self.surface, self.page)
        self.assertEqual(pixel(self.surface, 200, 180), DEFAULT_BACKGROUND_COLOR)
        self.assertEqual(pixel(self.surface, 220, 200), "#000000")

    def test_rotation_round_trip(self):
        rect = RectangleShape(1, 60, 40, 260, 160, color="green", stroke_width=3)
        self.page.add_shape(rect)
        self.renderer.render(self.surface, self.page)
        before = qimage_to_array(self.surface)

        rect.rotate_by(37)
        self.renderer.render(self.surface, self.page)
        self.assertFalse(np.array_equal(qimage_to_array(self.surface), before))

        rect.rotate_by(-37)
        self.renderer.render(self.surface, self.page)
        np.testing.assert_array_equal(qimage_to_array(self.surface), before)

    def test_eraser_paints_background_color(self):
        self.page.add_shape(RectangleShape(1, 20, 20, 120, 120, color="red", stroke_width=4))
        self.page.add_shape(FreehandShape(2, [Point(20, 40), Point(20, 100)],
                                          color="red", stroke_width=10, eraser=True))
        self.renderer.render(self.surface, self.page)
        self.assertEqual(pixel(self.surface, 20, 70), DEFAULT_BACKGROUND_COLOR)

    def test_draft_is_drawn(self):
        draft = RectangleShape(9, 200, 100, 300, 200, color="blue", stroke_width=4)
        self.renderer.render(self.surface, self.page, draft)
        self.assertEqual(pixel(self.surface, 200, 150), "#0000ff")
        self.renderer.render(self.surface, self.page)
        self.assertEqual(pixel(self.surface, 200, 150), DEFAULT_BACKGROUND_COLOR)

    def _two_column_image(self) -> QImage:
        image = QImage(2, 2, QImage.Format.Format_ARGB32_Premultiplied)
        for y in range(2):
            image.setPixelColor(0, y, QColor("red"))
            image.setPixelColor(1, y, QColor("blue"))
        return image

    def test_image_drawn_as_stored(self):
        self.page.add_shape(ImageShape(1, self._two_column_image(), 100, 100, 200, 200))
        self.renderer.render(self.surface, self.page)
        self.assertEqual(pixel(self.surface, 110, 150), "#ff0000")
        self.assertEqual(pixel(self.surface, 190, 150), "#0000ff")

    def test_image_mirrored_when_drawn_leftward(self):
        self.page.add_shape(ImageShape(1, self._two_column_image(), 200, 100, 100, 200))
        self.renderer.render(self.surface, self.page)
        self.assertEqual(pixel(self.surface, 110, 150), "#0000ff")
        self.assertEqual(pixel(self.surface, 190, 150), "#ff0000")

    def test_caret_drawn_for_selected_text(self):
        text = TextItem(1, "", 50.5, 100, selected=True, cursor_index=0)
        self.page.add_text(text)
        self.renderer.render(self.surface, self.page)
        # caret spans the first line: y 84..103.2
        self.assertEqual(pixel(self.surface, 50, 95), "#ff0000")

        text.selected = False
        text.clear_caret()
        self.renderer.render(self.surface, self.page)
        self.assertEqual(pixel(self.surface, 50, 95), DEFAULT_BACKGROUND_COLOR)


if __name__ == '__main__':
    unittest.main()
