"""
Caret Text Editing for PageSketch

Keystroke-driven editing of a TextItem's flat content string. Keys are
identified by their DOM-style names ("ArrowLeft", "Enter", "a", ...).
"""

from typing import Optional
import logging

from ..core.document import Document
from ..core.geometry import Point
from ..core.page import Page
from ..core.text import TextItem, TextLayout

logger = logging.getLogger(__name__)


KEY_LEFT = "ArrowLeft"
KEY_RIGHT = "ArrowRight"
KEY_ENTER = "Enter"
KEY_BACKSPACE = "Backspace"

# Non-character keys that must never reach character insertion.
IGNORED_KEYS = frozenset({
    "Shift", "Control", "Alt", "AltGraph", "Meta", "OS", "Hyper", "Super",
    "CapsLock", "NumLock", "ScrollLock", "Fn", "FnLock",
    "Tab", "Escape", "ContextMenu", "Pause", "PrintScreen", "Insert", "Delete",
    "ArrowUp", "ArrowDown", "Home", "End", "PageUp", "PageDown",
    "F1", "F2", "F3", "F4", "F5", "F6", "F7", "F8", "F9", "F10", "F11", "F12",
    "Dead", "Unidentified", "Process", "Compose",
    "AudioVolumeUp", "AudioVolumeDown", "AudioVolumeMute",
    "MediaPlayPause", "MediaTrackNext", "MediaTrackPrevious", "MediaStop",
})


def is_printable(key: str) -> bool:
    """A single character that is not in the ignore set."""
    return isinstance(key, str) and len(key) == 1 and key not in IGNORED_KEYS


class TextEditor:
    """
    Edits the selected text item in response to keystrokes and clicks.

    Args:
        metrics: text metrics shared with the renderer
    """

    def __init__(self, metrics):
        self.metrics = metrics

    def handle_key(self, text: TextItem, key: str) -> bool:
        """
        Apply one keystroke to ``text``.

        Returns:
            True if content or caret changed
        """
        if not isinstance(key, str) or key in IGNORED_KEYS:
            return False

        content = text.content
        cursor = text.cursor_index if text.cursor_index is not None else len(content)
        cursor = max(0, min(cursor, len(content)))

        if key == KEY_LEFT:
            if cursor > 0:
                text.cursor_index = cursor - 1
                return True
            return False
        if key == KEY_RIGHT:
            if cursor < len(content):
                text.cursor_index = cursor + 1
                return True
            return False
        if key == KEY_ENTER:
            self._insert(text, cursor, "\n")
            return True
        if key == KEY_BACKSPACE:
            if cursor == 0:
                return False
            text.content = content[:cursor - 1] + content[cursor:]
            text.cursor_index = cursor - 1
            return True
        if len(key) == 1:
            self._insert(text, cursor, key)
            return True

        logger.debug(f"Ignoring key {key!r}")
        return False

    def _insert(self, text: TextItem, cursor: int, value: str) -> None:
        text.content = text.content[:cursor] + value + text.content[cursor:]
        text.cursor_index = cursor + len(value)

    def start_text(self, document: Document, page: Page, position: Point,
                   key: str, color: str, font_size: float) -> Optional[TextItem]:
        """
        Create a text item at ``position`` from the first keystroke typed
        after clicking empty space with the text tool.

        Only printable characters create text; Enter, Backspace, arrows and
        ignored keys do nothing.

        Returns:
            The new, selected text item, or None
        """
        if not is_printable(key):
            return None
        text = TextItem(
            id=document.ids.next_text_id(),
            content=key,
            x=position.x,
            y=position.y,
            color=color,
            font_size=font_size,
        )
        page.add_text(text)
        document.select(text)
        text.place_caret(1)
        logger.debug(f"Created text {text.id} at ({position.x}, {position.y})")
        return text

    def caret_index_at(self, text: TextItem, point: Point) -> int:
        """
        Flat caret index for a click at ``point`` on ``text``.

        The line is chosen by the click's y against each line's band; a
        click outside every band puts the caret at the end of the content.
        Within the line, the caret lands before the first character whose
        left edge lies right of the click, or at the end of the line.
        """
        layout = TextLayout(text, self.metrics)
        lines = layout.lines

        preceding = 0
        line_index = -1
        for i, line in enumerate(lines):
            top = layout.line_top(i)
            if top <= point.y <= top + layout.line_height:
                line_index = i
                break
            preceding += len(line) + 1

        if line_index < 0:
            return len(text.content)

        line = lines[line_index]
        column = len(line)
        for c in range(len(line)):
            if point.x < text.x + self.metrics.width(line[:c], text.font_size):
                column = c
                break
        return preceding + column
