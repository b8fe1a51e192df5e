"""Glyph metrics: measured widths of document text and single glyphs."""

from abc import ABC, abstractmethod
import logging
from unicodedata import combining, east_asian_width

from tablealign.document import Document
from tablealign.errors import NoRenderSurfaceError

logger = logging.getLogger(__package__)


class GlyphMetrics(ABC):
    """Measures rendered widths in abstract linear units ("pixels").

    Implementations are bound to the document whose text they measure.
    """

    @abstractmethod
    def measure_width(self, start: int, end: int) -> int:
        """Return the rendered width of the document text in ``[start, end)``."""

    @abstractmethod
    def measure_glyph(self, char: str) -> int:
        """Return the rendered width of a single glyph, e.g. a bar or space."""

    @abstractmethod
    def has_render_surface(self) -> bool:
        """Return True if measurements can be made at all."""


def glyph_cells(char: str) -> int:
    """Return number of monospace cells a glyph occupies.

    East Asian wide and fullwidth glyphs take two cells, combining marks
    and zero-width characters none, everything else one.
    """
    if combining(char) or char in "\u200b\u200c\u200d\ufeff":
        return 0
    if east_asian_width(char) in ("W", "F"):
        return 2
    return 1


class MonospaceMetrics(GlyphMetrics):
    """Metrics for a fixed-pitch rendering, e.g. a terminal or a test.

    Attributes:
        document: Document whose text is measured.
        unit: Width of one monospace cell.
        surface: Whether a render surface is deemed available.
    """

    def __init__(self, document: Document, unit: int = 1, surface: bool = True):
        self.document = document
        self.unit = unit
        self.surface = surface

    def measure_width(self, start: int, end: int) -> int:
        self._check_surface()
        if end <= start:
            return 0
        return sum(glyph_cells(ch) for ch in self.document.text(start, end)) * self.unit

    def measure_glyph(self, char: str) -> int:
        self._check_surface()
        return glyph_cells(char) * self.unit

    def has_render_surface(self) -> bool:
        return self.surface

    def _check_surface(self) -> None:
        """Raise if there is nothing to measure against."""
        if not self.surface:
            raise NoRenderSurfaceError("Monospace metrics have no render surface")
