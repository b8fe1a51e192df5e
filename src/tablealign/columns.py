"""Compute column widths and alignments from measured glyph widths."""

from enum import StrEnum, auto
import logging
import math

from tablealign.cells import (
    ParsedRow,
    RowKind,
    is_separator_cell,
    separator_alignment_markers,
)
from tablealign.document import Document
from tablealign.metrics import GlyphMetrics
from tablealign.preferences import LayoutConfig
from tablealign.scanner import TableRange

logger = logging.getLogger(__package__)


class Alignment(StrEnum):
    """Enum class to store column alignment."""

    LEFT = auto()
    RIGHT = auto()


class Column:
    """Derived metrics for one column of a table.

    Attributes:
        width: Max content width plus fixed padding.
        alignment: Left or right.
    """

    def __init__(self, width: int, alignment: Alignment = Alignment.LEFT) -> None:
        self.width = width
        self.alignment = alignment

    def __repr__(self) -> str:
        return f"Column({self.width}, {self.alignment})"


class TableMetrics:
    """Column metrics plus the content width of every data cell.

    Attributes:
        columns: One entry per column.
        content_widths: Measured content width of each data cell, keyed by
            (row index, column index); empty cells are 0.
    """

    def __init__(
        self, columns: list[Column], content_widths: dict[tuple[int, int], int]
    ) -> None:
        self.columns = columns
        self.content_widths = content_widths


def measure_content(
    metrics: GlyphMetrics, rows: list[ParsedRow]
) -> dict[tuple[int, int], int]:
    """Measure the content of every data cell.

    Empty cells count as zero, whatever their literal whitespace would
    measure, since wide-glyph padding can exceed real content.
    """
    widths: dict[tuple[int, int], int] = {}
    for row_idx, row in enumerate(rows):
        if row.kind != RowKind.DATA:
            continue
        for col, cell in enumerate(row.cells):
            widths[(row_idx, col)] = (
                0
                if cell.empty
                else metrics.measure_width(cell.content_begin, cell.content_end)
            )
    return widths


def column_widths(
    metrics: GlyphMetrics,
    table: TableRange,
    rows: list[ParsedRow],
    content_widths: dict[tuple[int, int], int],
    config: LayoutConfig,
) -> list[int]:
    """Return the width of each column.

    Width is the fixed padding plus the widest content in the column. For
    box-drawn tables the rendered span of the column (width plus one space)
    is rounded up to a whole number of rule glyphs, so borders can be drawn
    as a clean repeating rule.
    """
    num_cols = max(
        (len(row.cells) for row in rows if row.kind == RowKind.DATA), default=0
    )
    widths = [0] * num_cols
    for (_, col), width in content_widths.items():
        widths[col] = max(widths[col], width)
    widths = [width + config.padding for width in widths]
    if table.charset is not None:
        space_width = metrics.measure_glyph(" ")
        cell_width = metrics.measure_glyph(config.charsets.target.rule)
        if cell_width > 0:
            widths = [
                math.ceil((width + space_width) / cell_width) * cell_width
                - space_width
                for width in widths
            ]
    return widths


def marker_alignments(
    document: Document, rows: list[ParsedRow], num_cols: int
) -> list[Alignment]:
    """Return alignments from the first separator row's ``:`` markers.

    A column is right-aligned if its separator cell ends with a marker and
    does not start with one. Without a separator row, every column is left.
    """
    alignments = [Alignment.LEFT] * num_cols
    separator = next((row for row in rows if row.kind == RowKind.SEPARATOR), None)
    if separator is None:
        return alignments
    for col, cell in enumerate(separator.cells[:num_cols]):
        text = document.text(cell.cell_begin, cell.cell_end)
        if not is_separator_cell(text):
            continue
        at_start, at_end = separator_alignment_markers(text)
        if at_end and not at_start:
            alignments[col] = Alignment.RIGHT
    return alignments


def _cell_vote(text: str) -> int:
    """Return +1 for a left-looking cell, -1 for a right-looking one.

    One blank after the opening delimiter means left. Otherwise one blank
    before the closing delimiter means right, and anything else left.
    """
    if text.startswith(" ") and not text.startswith("  "):
        return 1
    if text.endswith(" ") and not text.endswith("  "):
        return -1
    return 1


def majority_alignments(
    document: Document, rows: list[ParsedRow], num_cols: int
) -> list[Alignment]:
    """Return alignments by majority vote of every data cell, empty or not.

    Ties resolve to right.
    """
    votes = [0] * num_cols
    for row in rows:
        if row.kind != RowKind.DATA:
            continue
        for col, cell in enumerate(row.cells):
            votes[col] += _cell_vote(document.text(cell.cell_begin, cell.cell_end))
    return [Alignment.LEFT if vote > 0 else Alignment.RIGHT for vote in votes]


def compute_table_metrics(
    document: Document,
    metrics: GlyphMetrics,
    table: TableRange,
    rows: list[ParsedRow],
    config: LayoutConfig,
) -> TableMetrics:
    """Compute width and alignment of every column of a parsed table.

    Box-drawn tables have no alignment source, so their columns are left.
    """
    content_widths = measure_content(metrics, rows)
    widths = column_widths(metrics, table, rows, content_widths, config)
    if table.charset is not None:
        alignments = [Alignment.LEFT] * len(widths)
    elif table.kind.alignment_from_markers:
        alignments = marker_alignments(document, rows, len(widths))
    else:
        alignments = majority_alignments(document, rows, len(widths))
    columns = [Column(width, align) for width, align in zip(widths, alignments)]
    logger.debug(f"Columns for {table!r}: {columns}")
    return TableMetrics(columns, content_widths)
