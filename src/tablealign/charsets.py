"""Box-drawing charsets used by box-drawn tables."""

from enum import IntEnum
import logging
from typing import Iterator, Optional

logger = logging.getLogger(__package__)

GRID_SIZE = 12


class RuleRow(IntEnum):
    """Which horizontal rule of a box-drawn table a separator row is."""

    TOP = 0
    MIDDLE = 1
    BOTTOM = 2


class RulePart(IntEnum):
    """Position of a glyph within one row of the charset grid."""

    LEFT = 0
    RULE = 1
    JUNCTION = 2
    RIGHT = 3


class BoxCharset:
    """Set of corner/edge/junction/rule glyphs used to draw a box table.

    The grid is a 12-character string holding three rows of four glyphs,
    top rule, middle rule and bottom rule, each laid out as
    left corner, horizontal rule, junction, right corner::

        ┌─┬┐
        ├─┼┤
        └─┴┘

    Attributes:
        name: Name the charset is registered under.
        grid: The 12 grid glyphs.
        vertical: Glyph used for vertical edges on data rows.
    """

    def __init__(self, name: str, grid: str, vertical: str) -> None:
        if len(grid) != GRID_SIZE:
            raise ValueError(
                f"Charset '{name}' needs {GRID_SIZE} grid glyphs, got {len(grid)}"
            )
        if len(vertical) != 1:
            raise ValueError(f"Charset '{name}' needs a single vertical glyph")
        self.name = name
        self.grid = grid
        self.vertical = vertical

    def glyph(self, row: RuleRow, part: RulePart) -> str:
        """Return the glyph at the given grid position."""
        return self.grid[row * 4 + part]

    @property
    def rule(self) -> str:
        """Horizontal rule glyph."""
        return self.glyph(RuleRow.MIDDLE, RulePart.RULE)

    def border_glyphs(self) -> set[str]:
        """Return every corner and junction glyph, i.e. all non-rule glyphs."""
        return {
            self.glyph(row, part)
            for row in RuleRow
            for part in (RulePart.LEFT, RulePart.JUNCTION, RulePart.RIGHT)
        }

    def opens_rule(self, text: str) -> bool:
        """Return True if ``text`` (indent stripped) starts a rule of this charset.

        The first glyph must be a left corner and the second must continue the
        same grid row with a rule, junction or right corner glyph.
        """
        if len(text) < 2:
            return False
        for row in RuleRow:
            if text[0] != self.glyph(row, RulePart.LEFT):
                continue
            if text[1] in (
                self.glyph(row, RulePart.RULE),
                self.glyph(row, RulePart.JUNCTION),
                self.glyph(row, RulePart.RIGHT),
            ):
                return True
        return False

    def __repr__(self) -> str:
        return f"BoxCharset({self.name!r})"


ASCII_CHARSET = BoxCharset("ascii", "+-+++-+++-++", "|")
UNICODE_CHARSET = BoxCharset("unicode", "┌─┬┐├─┼┤└─┴┘", "│")


class CharsetRegistry:
    """Name to charset mapping, searched in registration order.

    The Unicode charset is always available, since box tables are rendered
    with its refined glyphs whatever charset the source uses.
    """

    def __init__(self, charsets: Optional[list[BoxCharset]] = None) -> None:
        self._charsets: dict[str, BoxCharset] = {}
        for charset in charsets or [ASCII_CHARSET, UNICODE_CHARSET]:
            self.register(charset)

    def register(self, charset: BoxCharset) -> None:
        """Add or replace a charset."""
        if charset.name in self._charsets:
            logger.debug(f"Replacing box charset '{charset.name}'")
        self._charsets[charset.name] = charset

    def get(self, name: str) -> Optional[BoxCharset]:
        """Return charset registered under ``name``, or None."""
        return self._charsets.get(name)

    @property
    def target(self) -> BoxCharset:
        """Charset whose glyphs are drawn when rendering box tables."""
        return self._charsets.get(UNICODE_CHARSET.name, UNICODE_CHARSET)

    def match_rule(self, text: str) -> Optional[BoxCharset]:
        """Return the first charset whose rule is opened by ``text``, or None."""
        for charset in self:
            if charset.opens_rule(text):
                return charset
        return None

    def __iter__(self) -> Iterator[BoxCharset]:
        return iter(self._charsets.values())

    def __len__(self) -> int:
        return len(self._charsets)
