"""
Editor Settings for PageSketch

User-selectable editing state (tool, color, stroke width, font size) and
fixed editing constants, persisted through QSettings.
"""

from dataclasses import dataclass
from typing import Tuple
import logging

from PyQt6.QtCore import QSettings

from .core.page import DEFAULT_BACKGROUND_COLOR
from .graphics.tools import ToolType

logger = logging.getLogger(__name__)


PALETTE = ("red", "yellow", "green", "blue", "black", "white")

MIN_STROKE_WIDTH = 1
MIN_FONT_SIZE = 16
MAX_FONT_SIZE = 72


@dataclass
class EditorSettings:
    """Settings for shape and text creation."""
    tool: ToolType = ToolType.PENCIL
    color: str = "black"
    stroke_width: int = 3
    font_size: int = 16

    background_color: str = DEFAULT_BACKGROUND_COLOR  # blank pages and eraser
    rotate_step: float = 15.0                          # degrees per rotate key
    rotate_key: str = "r"
    blank_page_size: Tuple[int, int] = (800, 600)      # px

    def set_stroke_width(self, value) -> int:
        """Set the stroke width; anything below 1 (or unparsable) becomes 1."""
        try:
            value = int(value)
        except (TypeError, ValueError):
            value = MIN_STROKE_WIDTH
        self.stroke_width = max(MIN_STROKE_WIDTH, value)
        return self.stroke_width

    def set_font_size(self, value) -> int:
        """Set the font size, clamped to [16, 72]; unparsable input gives 16."""
        try:
            value = int(value)
        except (TypeError, ValueError):
            value = MIN_FONT_SIZE
        self.font_size = max(MIN_FONT_SIZE, min(value, MAX_FONT_SIZE))
        return self.font_size

    def load(self, settings: QSettings) -> None:
        """Restore user-facing values; missing or garbled entries keep defaults."""
        tool = settings.value("editor/tool")
        if tool is not None:
            try:
                self.tool = ToolType(tool)
            except ValueError:
                logger.warning(f"Ignoring unknown stored tool {tool!r}")

        color = settings.value("editor/color")
        if isinstance(color, str) and color:
            self.color = color

        stroke_width = settings.value("editor/stroke_width")
        if stroke_width is not None:
            self.set_stroke_width(stroke_width)

        font_size = settings.value("editor/font_size")
        if font_size is not None:
            self.set_font_size(font_size)

    def save(self, settings: QSettings) -> None:
        """Store user-facing values."""
        settings.setValue("editor/tool", self.tool.value)
        settings.setValue("editor/color", self.color)
        settings.setValue("editor/stroke_width", self.stroke_width)
        settings.setValue("editor/font_size", self.font_size)
        settings.sync()


def default_qsettings() -> QSettings:
    return QSettings("PageSketch", "PageSketch")
