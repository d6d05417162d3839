"""
Tests for caret text editing.

Uses FixedAdvanceMetrics so every character advances by half the font
size (8 px at 16 px), independent of installed fonts.
"""

import unittest

from pagesketch.core.document import Document
from pagesketch.core.geometry import Point
from pagesketch.core.page import Page
from pagesketch.core.text import TextItem
from pagesketch.graphics.metrics import FixedAdvanceMetrics
from pagesketch.graphics.text_editor import TextEditor, is_printable


class TestKeyHandling(unittest.TestCase):
    """Test TextEditor.handle_key."""

    def setUp(self):
        self.editor = TextEditor(FixedAdvanceMetrics())
        self.text = TextItem(1, "abc", 0, 20, selected=True, cursor_index=3)

    def test_insert_at_caret(self):
        self.text.cursor_index = 1
        self.assertTrue(self.editor.handle_key(self.text, "X"))
        self.assertEqual(self.text.content, "aXbc")
        self.assertEqual(self.text.cursor_index, 2)

    def test_enter_inserts_newline(self):
        self.text.cursor_index = 2
        self.editor.handle_key(self.text, "Enter")
        self.assertEqual(self.text.content, "ab\nc")
        self.assertEqual(self.text.lines, ["ab", "c"])
        self.assertEqual(self.text.cursor_index, 3)

    def test_backspace(self):
        self.assertTrue(self.editor.handle_key(self.text, "Backspace"))
        self.assertEqual(self.text.content, "ab")
        self.assertEqual(self.text.cursor_index, 2)

    def test_backspace_at_start_is_noop(self):
        self.text.cursor_index = 0
        self.assertFalse(self.editor.handle_key(self.text, "Backspace"))
        self.assertEqual(self.text.content, "abc")

    def test_arrows_clamp(self):
        self.assertFalse(self.editor.handle_key(self.text, "ArrowRight"))
        self.assertEqual(self.text.cursor_index, 3)
        for _ in range(5):
            self.editor.handle_key(self.text, "ArrowLeft")
        self.assertEqual(self.text.cursor_index, 0)

    def test_ignored_keys(self):
        for key in ("Shift", "Control", "Tab", "F5", "ArrowUp", "Escape"):
            self.assertFalse(self.editor.handle_key(self.text, key))
        self.assertEqual(self.text.content, "abc")
        self.assertEqual(self.text.cursor_index, 3)

    def test_caret_stays_in_range(self):
        """After any key sequence the caret lies within [0, len(content)]."""
        for key in ["Backspace"] * 5 + ["a", "ArrowLeft", "Enter", "ArrowRight",
                                        "ArrowRight", "b", "Backspace"]:
            self.editor.handle_key(self.text, key)
            self.assertGreaterEqual(self.text.cursor_index, 0)
            self.assertLessEqual(self.text.cursor_index, len(self.text.content))

    def test_is_printable(self):
        self.assertTrue(is_printable("a"))
        self.assertTrue(is_printable(" "))
        self.assertFalse(is_printable("Enter"))
        self.assertFalse(is_printable(""))
        self.assertFalse(is_printable(None))


class TestStartText(unittest.TestCase):
    """Test creating a text from the first keystroke."""

    def setUp(self):
        self.editor = TextEditor(FixedAdvanceMetrics())
        self.document = Document()
        self.page = Page.blank(400, 300)
        self.document.add_page(self.page)

    def test_printable_key_creates_selected_text(self):
        text = self.editor.start_text(self.document, self.page, Point(40, 60),
                                      "H", "red", 24)
        self.assertIsNotNone(text)
        self.assertEqual(text.content, "H")
        self.assertEqual((text.x, text.y), (40, 60))
        self.assertEqual(text.font_size, 24)
        self.assertTrue(text.selected)
        self.assertEqual(text.cursor_index, 1)
        self.assertEqual(self.page.texts, [text])

    def test_non_printable_keys_create_nothing(self):
        for key in ("Enter", "Backspace", "ArrowLeft", "Shift"):
            self.assertIsNone(self.editor.start_text(
                self.document, self.page, Point(0, 0), key, "red", 16))
        self.assertEqual(self.page.texts, [])


class TestCaretFromClick(unittest.TestCase):
    """Test TextEditor.caret_index_at."""

    def setUp(self):
        self.editor = TextEditor(FixedAdvanceMetrics())
        # line 0 spans y 84..103.2, line 1 spans y 103.2..122.4
        self.text = TextItem(1, "ab\ncd", 100, 100, font_size=16)

    def test_click_on_second_line(self):
        index = self.editor.caret_index_at(self.text, Point(105, 110))
        self.assertEqual(index, 4)

    def test_click_on_first_line(self):
        self.assertEqual(self.editor.caret_index_at(self.text, Point(95, 90)), 0)
        self.assertEqual(self.editor.caret_index_at(self.text, Point(103, 90)), 1)
        self.assertEqual(self.editor.caret_index_at(self.text, Point(110, 90)), 2)

    def test_click_past_line_end(self):
        self.assertEqual(self.editor.caret_index_at(self.text, Point(300, 90)), 2)

    def test_click_outside_every_line(self):
        self.assertEqual(self.editor.caret_index_at(self.text, Point(105, 200)), 5)


if __name__ == '__main__':
    unittest.main()
