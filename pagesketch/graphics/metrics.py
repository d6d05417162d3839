"""
Text Metrics for PageSketch

Text width measurement shared by the hit tester, the text editor and the
renderer so that caret placement and drawn glyphs agree.
"""

from abc import ABC, abstractmethod
from typing import Dict

from PyQt6.QtGui import QFont, QFontMetricsF


FONT_FAMILY = "sans-serif"


class TextMetrics(ABC):
    """Measures rendered text width for a pixel font size."""

    def font(self, font_size: float) -> QFont:
        """Font used to draw text at ``font_size`` pixels."""
        font = QFont(FONT_FAMILY)
        font.setStyleHint(QFont.StyleHint.SansSerif)
        font.setPixelSize(max(1, int(round(font_size))))
        return font

    @abstractmethod
    def width(self, text: str, font_size: float) -> float:
        """Horizontal advance of ``text`` in pixels."""
        pass


class QtTextMetrics(TextMetrics):
    """Measures with QFontMetricsF; requires a QGuiApplication."""

    def __init__(self):
        self._cache: Dict[int, QFontMetricsF] = {}

    def _metrics(self, font_size: float) -> QFontMetricsF:
        key = max(1, int(round(font_size)))
        metrics = self._cache.get(key)
        if metrics is None:
            metrics = QFontMetricsF(self.font(font_size))
            self._cache[key] = metrics
        return metrics

    def width(self, text: str, font_size: float) -> float:
        if not text:
            return 0.0
        return self._metrics(font_size).horizontalAdvance(text)


class FixedAdvanceMetrics(TextMetrics):
    """
    Every character advances by ``ratio * font_size`` pixels.

    Deterministic regardless of installed fonts; useful headless.
    """

    def __init__(self, ratio: float = 0.5):
        self.ratio = ratio

    def width(self, text: str, font_size: float) -> float:
        return len(text) * font_size * self.ratio
