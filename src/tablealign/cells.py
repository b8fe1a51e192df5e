"""Parse table rows into cell and content boundaries."""

from enum import StrEnum, auto
import logging
from typing import Optional

from tablealign.document import Document
from tablealign.errors import MalformedCellError
from tablealign.scanner import (
    PIPE,
    RULE_CELL_REGEX,
    TableRange,
    is_separator_line,
)

logger = logging.getLogger(__package__)

RULE_CHAR = "-"
ALIGN_MARKER = ":"


class CellBounds:
    """Boundaries of one cell.

    ``cell_begin`` is just after the opening delimiter and ``cell_end`` is at
    the closing delimiter. The content bounds are trimmed of padding, except
    that one unit of padding is kept on each side that had more than one.
    For an empty cell the content bounds collapse to a placeholder that is
    never measured as real content.

    Attributes:
        cell_begin: Offset just after the opening delimiter.
        content_begin: Offset of start of content.
        content_end: Offset just beyond the content.
        cell_end: Offset of the closing delimiter.
        empty: True if the cell holds only whitespace.
    """

    def __init__(
        self,
        cell_begin: int,
        content_begin: int,
        content_end: int,
        cell_end: int,
        empty: bool = False,
    ) -> None:
        self.cell_begin = cell_begin
        self.content_begin = content_begin
        self.content_end = content_end
        self.cell_end = cell_end
        self.empty = empty

    @property
    def unpadded(self) -> bool:
        """True if non-empty content runs right up to both delimiters."""
        return (
            not self.empty
            and self.content_begin == self.cell_begin
            and self.content_end == self.cell_end
        )

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return the four boundaries, outer to inner to outer."""
        return (self.cell_begin, self.content_begin, self.content_end, self.cell_end)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellBounds):
            return NotImplemented
        return self.as_tuple() == other.as_tuple() and self.empty == other.empty

    def __repr__(self) -> str:
        return f"CellBounds{self.as_tuple()}{' empty' if self.empty else ''}"


def _find_delimiter(text: str, delimiters: str) -> int:
    """Return index of the first of any of ``delimiters`` in text, or -1."""
    found = [idx for idx in (text.find(delim) for delim in delimiters) if idx >= 0]
    return min(found) if found else -1


def parse_cell(
    document: Document, cell_begin: int, delimiters: str, limit: int
) -> CellBounds:
    """Parse the cell starting just after a delimiter.

    Args:
        document: Document containing the row.
        cell_begin: Offset just after the opening delimiter.
        delimiters: Glyph(s) that may close the cell.
        limit: Offset beyond which no closing delimiter is searched for,
            normally the end of the line.

    Returns:
        Cell and content boundaries.

    Raises:
        MalformedCellError: if no closing delimiter precedes ``limit``.
    """
    text = document.text(cell_begin, limit)
    idx = _find_delimiter(text, delimiters)
    if idx < 0:
        raise MalformedCellError(cell_begin, delimiters[0])
    cell_end = cell_begin + idx
    segment = text[:idx]
    if not segment.strip():
        return CellBounds(
            cell_begin,
            min(cell_begin + 1, cell_end),
            max(cell_end - 1, cell_begin),
            cell_end,
            empty=True,
        )
    lead = len(segment) - len(segment.lstrip())
    trail = len(segment) - len(segment.rstrip())
    # Keep one unit of padding on a side the user padded more generously
    content_begin = cell_begin + lead - (1 if lead > 1 else 0)
    content_end = cell_end - trail + (1 if trail > 1 else 0)
    return CellBounds(cell_begin, content_begin, content_end, cell_end)


def row_delimiter_start(document: Document, line_start: int) -> int:
    """Return offset of the leading delimiter of the row starting at ``line_start``."""
    line = document.line_text(line_start)
    return line_start + len(line) - len(line.lstrip())


def parse_row(
    document: Document, line_start: int, delimiters: str
) -> list[CellBounds]:
    """Parse every cell of a row.

    The row must open with a delimiter (after indentation). Trailing
    whitespace after the last delimiter is ignored; any other trailing
    text is an unterminated cell.

    Raises:
        MalformedCellError: if the last cell has no closing delimiter.
    """
    line_end = document.line_end(line_start)
    pos = row_delimiter_start(document, line_start) + 1
    cells: list[CellBounds] = []
    while pos < line_end and document.text(pos, line_end).strip():
        cell = parse_cell(document, pos, delimiters, line_end)
        cells.append(cell)
        pos = cell.cell_end + 1
    return cells


def is_separator_cell(text: str) -> bool:
    """Return True if cell text is a rule, e.g. ``---`` or `` :--: ``.

    A rule opens with a rule glyph or marker, or is a longer rule inside
    blanks; a lone dash inside blanks is content.
    """
    return bool(RULE_CELL_REGEX.match(text))


def is_separator_row(document: Document, line_start: int, table: TableRange) -> bool:
    """Return True if the row holds only rule glyphs and alignment markers.

    For box-drawn tables, a separator row is one that opens with a corner
    or junction glyph of the table's charset.
    """
    line = document.line_text(line_start)
    if table.charset is not None:
        stripped = line.lstrip()
        return bool(stripped) and stripped[0] in table.charset.border_glyphs()
    return is_separator_line(line)


def is_blank_row(document: Document, line_start: int) -> bool:
    """Return True for a whitespace-only line inside a box-drawn table."""
    return not document.line_text(line_start).strip()


def separator_alignment_markers(text: str) -> tuple[bool, bool]:
    """Return whether a separator cell has a marker at its start and end."""
    stripped = text.strip()
    return stripped.startswith(ALIGN_MARKER), stripped.endswith(ALIGN_MARKER)


class RowKind(StrEnum):
    """Enum class to store the kinds of table row."""

    DATA = auto()
    SEPARATOR = auto()
    BLANK = auto()
    LITERAL = auto()


class ParsedRow:
    """One row of a table with its cells.

    Attributes:
        line_start: Offset of start of the row's line.
        kind: Data, separator, blank or literal row.
        cells: Cells of a data row, or of a pipe-table separator row.
            Box-table separator rows are parsed by the layout planner.
    """

    def __init__(
        self, line_start: int, kind: RowKind, cells: Optional[list[CellBounds]] = None
    ) -> None:
        self.line_start = line_start
        self.kind = kind
        self.cells = cells or []


def parse_table(document: Document, table: TableRange) -> list[ParsedRow]:
    """Classify and parse every row of the table.

    In a pipe table, a line not led by a pipe, such as a rule drawn in an
    unknown box charset, is a literal row: it is left exactly as it is.

    Raises:
        MalformedCellError: if any row has an unterminated cell.
    """
    rows: list[ParsedRow] = []
    for line_start in table.line_starts:
        if is_blank_row(document, line_start):
            rows.append(ParsedRow(line_start, RowKind.BLANK))
        elif table.kind.is_pipe and not document.line_text(
            line_start
        ).lstrip().startswith(PIPE):
            rows.append(ParsedRow(line_start, RowKind.LITERAL))
        elif is_separator_row(document, line_start, table):
            cells = (
                parse_row(document, line_start, table.kind.separator_junctions)
                if table.kind.is_pipe
                else []
            )
            rows.append(ParsedRow(line_start, RowKind.SEPARATOR, cells))
        else:
            cells = parse_row(document, line_start, table.delimiter)
            rows.append(ParsedRow(line_start, RowKind.DATA, cells))
    logger.debug(
        f"Parsed {table!r}: {sum(row.kind == RowKind.DATA for row in rows)} data rows"
    )
    return rows
