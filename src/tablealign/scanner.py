"""Locate tables in a document and classify their syntax."""

from enum import StrEnum, auto
import logging
from typing import Iterator, Optional

import regex as re

from tablealign.charsets import BoxCharset, RulePart, RuleRow
from tablealign.document import Document
from tablealign.preferences import LayoutConfig

logger = logging.getLogger(__package__)

PIPE = "|"
# One cell of a pipe-table separator row, e.g. "---", ":--:" or " --- ".
# A dash padded with blanks on its own, like "| - |", is data.
RULE_CELL_REGEX = re.compile(r"^(?:[-:]+|\s+(?::-+:?|-+:|-{3,}))\s*$")


class TableKind(StrEnum):
    """Enum class to store the closed set of table dialects.

    MARKDOWN: pipe-delimited, alignment from ``:`` markers in separator rows.
    ORG: pipe-delimited, ``+`` junctions in separator rows, alignment
      decided by majority vote over the data cells.
    BOX: box-drawn grid using one of the registered charsets.
    """

    MARKDOWN = auto()
    ORG = auto()
    BOX = auto()

    @property
    def is_pipe(self) -> bool:
        """True for the pipe-delimited dialects."""
        return self != TableKind.BOX

    @property
    def alignment_from_markers(self) -> bool:
        """True if column alignment comes from separator-row markers."""
        return self == TableKind.MARKDOWN

    @property
    def separator_junctions(self) -> str:
        """Glyphs that split separator rows into cells."""
        return "|+" if self == TableKind.ORG else "|"


class TableRange:
    """A table found in a document.

    Attributes:
        start: Offset of the start of the first line.
        end: Offset of the end of the last line (excluding its newline).
        kind: Table dialect.
        charset: Box charset in use, for box-drawn tables only.
        line_starts: Offset of start of every line in the table, in order.
    """

    def __init__(
        self,
        start: int,
        end: int,
        kind: TableKind,
        line_starts: list[int],
        charset: Optional[BoxCharset] = None,
    ) -> None:
        assert (charset is not None) == (kind == TableKind.BOX)
        self.start = start
        self.end = end
        self.kind = kind
        self.line_starts = line_starts
        self.charset = charset

    @property
    def delimiter(self) -> str:
        """Glyph separating cells on data rows."""
        return self.charset.vertical if self.charset is not None else PIPE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableRange):
            return NotImplemented
        return (self.start, self.end, self.kind) == (other.start, other.end, other.kind)

    def __repr__(self) -> str:
        return f"TableRange({self.start}, {self.end}, {self.kind})"


def vertical_glyphs(config: LayoutConfig) -> set[str]:
    """Return glyphs that open a table's data rows."""
    return {PIPE} | {charset.vertical for charset in config.charsets}


def corner_glyphs(config: LayoutConfig) -> set[str]:
    """Return top, middle and bottom left corner glyphs of every charset."""
    return {
        charset.glyph(row, RulePart.LEFT)
        for charset in config.charsets
        for row in RuleRow
    }


def is_table_line(document: Document, pos: int, config: LayoutConfig) -> bool:
    """Return True if the line containing ``pos`` is part of a table.

    After indentation the line must open with a pipe or a box vertical
    edge, or with a left corner glyph directly followed by another glyph,
    and must not be inside a literal block. A corner followed by a blank,
    like a "+" list bullet, does not count.

    Args:
        document: Document to examine.
        pos: Any offset on the line.
        config: Supplies the registered charsets.
    """
    start = document.line_start(pos)
    line = document.line_text(start)
    stripped = line.lstrip()
    if not stripped:
        return False
    if stripped[0] not in vertical_glyphs(config) and (
        stripped[0] not in corner_glyphs(config)
        or len(stripped) < 2
        or stripped[1].isspace()
    ):
        return False
    return not document.is_literal(start + len(line) - len(stripped))


def _is_blank_line(document: Document, pos: int) -> bool:
    """Return True if line containing ``pos`` has only whitespace."""
    return not document.line_text(pos).strip()


def is_separator_line(line: str) -> bool:
    """Return True if a pipe-table line holds only rules and alignment markers.

    Cells are split at pipes and at the org "+" junction. Every cell must be
    a rule, e.g. "|---|:--:|" or "|---+---|".
    """
    stripped = line.strip()
    if not stripped.startswith(PIPE) or "-" not in stripped:
        return False
    cells = re.split(r"[|+]", stripped[1:])
    if not cells[-1]:
        cells.pop()
    return bool(cells) and all(RULE_CELL_REGEX.match(cell) for cell in cells)


def _extend_backward(document: Document, pos: int, config: LayoutConfig) -> int:
    """Return start of the first of the table lines running up to ``pos``."""
    first = document.line_start(pos)
    while (prev := document.prev_line(first)) is not None and is_table_line(
        document, prev, config
    ):
        first = prev
    return first


def locate_table(
    document: Document, pos: int, config: LayoutConfig
) -> Optional[TableRange]:
    """Find the table containing ``pos``.

    Extends backward and forward while the table-line predicate holds. In
    a box-drawn table a single blank line between table lines is crossed in
    either direction; two blank lines end the table.

    Args:
        document: Document to examine.
        pos: Any offset on a line of the table.
        config: Supplies the registered charsets and default dialect.

    Returns:
        Range and classification of the table, or None if not in a table.
    """
    if not is_table_line(document, pos, config):
        return None

    first = _extend_backward(document, pos, config)
    # Cross single blank lines upward while the lines above open a box table
    while (
        (blank := document.prev_line(first)) is not None
        and _is_blank_line(document, blank)
        and (above := document.prev_line(blank)) is not None
        and is_table_line(document, above, config)
    ):
        candidate = _extend_backward(document, above, config)
        if config.charsets.match_rule(document.line_text(candidate).lstrip()) is None:
            break
        first = candidate

    charset = config.charsets.match_rule(document.line_text(first).lstrip())

    line_starts = [first]
    while (nxt := document.next_line(line_starts[-1])) is not None:
        if is_table_line(document, nxt, config):
            line_starts.append(nxt)
            continue
        if charset is None or not _is_blank_line(document, nxt):
            break
        after = document.next_line(nxt)
        if after is None or not is_table_line(document, after, config):
            break
        line_starts.extend((nxt, after))

    kind = (
        TableKind.BOX
        if charset is not None
        else _pipe_dialect(document, line_starts, config)
    )
    return TableRange(
        first, document.line_end(line_starts[-1]), kind, line_starts, charset
    )


def _pipe_dialect(
    document: Document, line_starts: list[int], config: LayoutConfig
) -> TableKind:
    """Decide between the pipe dialects from the table's separator rows."""
    has_marker = False
    for start in line_starts:
        line = document.line_text(start)
        if not is_separator_line(line):
            continue
        if "+" in line:
            return TableKind.ORG
        has_marker = has_marker or ":" in line
    if has_marker:
        return TableKind.MARKDOWN
    return TableKind.ORG if config.default_dialect == "org" else TableKind.MARKDOWN


def find_tables(
    document: Document, start: int, end: int, config: LayoutConfig
) -> Iterator[TableRange]:
    """Yield every table overlapping ``[start, end)``, in document order.

    A table that starts before ``start`` or runs beyond ``end`` is
    yielded whole.
    """
    last_line = document.line_start(max(start, end - 1))
    pos: Optional[int] = document.line_start(start)
    while pos is not None and pos <= last_line:
        table = locate_table(document, pos, config)
        if table is None:
            pos = document.next_line(pos)
            continue
        yield table
        pos = document.next_line(table.end)
