"""
Tests for editor settings clamping and QSettings persistence.
"""

import tempfile
import unittest
from pathlib import Path

from PyQt6.QtCore import QSettings

from pagesketch.graphics.tools import ToolType
from pagesketch.settings import (
    MAX_FONT_SIZE, MIN_FONT_SIZE, PALETTE, EditorSettings, default_qsettings
)


class TestEditorSettings(unittest.TestCase):
    """Test EditorSettings."""

    def test_defaults(self):
        settings = EditorSettings()
        self.assertEqual(settings.tool, ToolType.PENCIL)
        self.assertEqual(settings.rotate_step, 15)
        self.assertEqual(settings.background_color, "#f9f8f8")
        self.assertIn(settings.color, PALETTE)

    def test_default_store(self):
        qsettings = default_qsettings()
        self.assertEqual(qsettings.organizationName(), "PageSketch")
        self.assertEqual(qsettings.applicationName(), "PageSketch")

    def test_stroke_width_floor(self):
        settings = EditorSettings()
        self.assertEqual(settings.set_stroke_width(0), 1)
        self.assertEqual(settings.set_stroke_width(-4), 1)
        self.assertEqual(settings.set_stroke_width("7"), 7)
        self.assertEqual(settings.set_stroke_width("wide"), 1)

    def test_font_size_clamp(self):
        settings = EditorSettings()
        self.assertEqual(settings.set_font_size(4), MIN_FONT_SIZE)
        self.assertEqual(settings.set_font_size(500), MAX_FONT_SIZE)
        self.assertEqual(settings.set_font_size(30), 30)

    def test_persistence_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = str(Path(tmp) / "editor.ini")
            stored = EditorSettings(tool=ToolType.CIRCLE, color="green",
                                    stroke_width=9, font_size=40)
            stored.save(QSettings(path, QSettings.Format.IniFormat))

            restored = EditorSettings()
            restored.load(QSettings(path, QSettings.Format.IniFormat))
            self.assertEqual(restored.tool, ToolType.CIRCLE)
            self.assertEqual(restored.color, "green")
            self.assertEqual(restored.stroke_width, 9)
            self.assertEqual(restored.font_size, 40)

    def test_garbled_values_keep_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            qsettings = QSettings(str(Path(tmp) / "editor.ini"), QSettings.Format.IniFormat)
            qsettings.setValue("editor/tool", "spraycan")
            qsettings.setValue("editor/font_size", "huge")
            settings = EditorSettings()
            settings.load(qsettings)
            self.assertEqual(settings.tool, ToolType.PENCIL)
            self.assertEqual(settings.font_size, MIN_FONT_SIZE)


if __name__ == '__main__':
    unittest.main()
