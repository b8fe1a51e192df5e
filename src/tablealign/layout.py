"""Plan the annotations that line up a table's columns.

Planning is a pure function of the document text, the glyph metrics and the
configuration: nothing here touches the document's annotations. The plan
is a list of annotations which, once applied, place every cell boundary
at a pixel-exact stop.

Within a data row the planner tracks a cursor, the x position just after
the delimiter that opens the current cell. A cell of column width ``w``
occupies ``[x0, x0 + S + w)``, where ``S`` is the width of a space, so the
next delimiter always lands at ``x0 + S + w``.
"""

import logging

from tablealign import annotations
from tablealign.annotations import Annotation
from tablealign.cells import (
    RULE_CHAR,
    CellBounds,
    ParsedRow,
    RowKind,
    parse_table,
    row_delimiter_start,
)
from tablealign.charsets import RulePart, RuleRow
from tablealign.columns import Alignment, Column, TableMetrics, compute_table_metrics
from tablealign.document import Document
from tablealign.errors import MalformedCellError
from tablealign.metrics import GlyphMetrics
from tablealign.preferences import LayoutConfig
from tablealign.scanner import TableRange

logger = logging.getLogger(__package__)


class _RowContext:
    """Values shared by every row of one planning pass."""

    def __init__(
        self,
        document: Document,
        metrics: GlyphMetrics,
        table: TableRange,
        table_metrics: TableMetrics,
        config: LayoutConfig,
    ) -> None:
        self.document = document
        self.metrics = metrics
        self.table = table
        self.columns = table_metrics.columns
        self.content_widths = table_metrics.content_widths
        self.config = config
        self.space_width = metrics.measure_glyph(" ")
        if table.charset is not None:
            self.bar_glyph = config.charsets.target.vertical
        else:
            self.bar_glyph = table.delimiter
        self.bar_width = metrics.measure_glyph(self.bar_glyph)

    def span(self, column: Column) -> int:
        """Return rendered width of a cell between its two delimiters."""
        return self.space_width + column.width


def plan_table(
    document: Document, metrics: GlyphMetrics, table: TableRange, config: LayoutConfig
) -> list[Annotation]:
    """Return the annotations that align ``table``.

    Args:
        document: Document containing the table.
        metrics: Measures the document's text.
        table: Table found by the scanner.
        config: Layout configuration.

    Raises:
        MalformedCellError: if a row cannot be split into cells.
    """
    rows = parse_table(document, table)
    table_metrics = compute_table_metrics(document, metrics, table, rows, config)
    if not table_metrics.columns:
        return []
    ctx = _RowContext(document, metrics, table, table_metrics, config)

    plan: list[Annotation] = []
    last_idx = len(rows) - 1
    for row_idx, row in enumerate(rows):
        if row.kind == RowKind.DATA:
            plan.extend(_plan_data_row(ctx, row_idx, row))
        elif row.kind == RowKind.SEPARATOR:
            if table.charset is None:
                plan.extend(_plan_pipe_separator(ctx, row))
            else:
                if row_idx == 0:
                    role = RuleRow.TOP
                elif row_idx == last_idx:
                    role = RuleRow.BOTTOM
                else:
                    role = RuleRow.MIDDLE
                plan.extend(_plan_box_separator(ctx, row, role))
    return plan


def _delimiter_annotations(ctx: _RowContext, pos: int) -> list[Annotation]:
    """Cosmetic annotations for one data-row delimiter glyph at ``pos``."""
    if ctx.table.charset is not None:
        if ctx.table.charset.vertical == ctx.bar_glyph:
            return []
        return [annotations.glyph(pos, pos + 1, ctx.bar_glyph, ctx.bar_width)]
    if ctx.config.full_height_bar:
        return [annotations.bar(pos, ctx.bar_width)]
    return []


def _plan_data_row(ctx: _RowContext, row_idx: int, row: ParsedRow) -> list[Annotation]:
    """Plan padding for every cell of a data row."""
    lead = row_delimiter_start(ctx.document, row.line_start)
    x0 = ctx.metrics.measure_width(row.line_start, lead) + ctx.bar_width
    plan = _delimiter_annotations(ctx, lead)
    for col, cell in enumerate(row.cells):
        column = ctx.columns[col]
        content_width = ctx.content_widths[(row_idx, col)]
        plan.extend(_plan_cell(ctx, cell, column, content_width, x0))
        plan.extend(_delimiter_annotations(ctx, cell.cell_end))
        x0 += column.width + ctx.bar_width + ctx.space_width
    return plan


def _plan_cell(
    ctx: _RowContext, cell: CellBounds, column: Column, content_width: int, x0: int
) -> list[Annotation]:
    """Plan the padding annotations for one data cell.

    Padding on the aligned side is stretched or shrunk to fill the column.
    Surplus blanks on the other side, beyond the one unit kept with the
    content, are collapsed to a single space so they can't push the closing
    delimiter out of line.

    Args:
        ctx: Values for this planning pass.
        cell: Boundaries of the cell.
        column: Width and alignment of the cell's column.
        content_width: Measured content width (0 for an empty cell).
        x0: X position just after the cell's opening delimiter.
    """
    measure = ctx.metrics.measure_width
    right_edge = x0 + ctx.span(column)
    right = column.alignment == Alignment.RIGHT

    if cell.empty:
        # Blank out everything after the first unit of padding
        if cell.content_begin < cell.cell_end:
            x_start = x0 + measure(cell.cell_begin, cell.content_begin)
            return [
                annotations.space(
                    cell.content_begin, cell.cell_end, right_edge - x_start
                )
            ]
        return [
            annotations.pad(
                cell.cell_begin,
                cell.cell_end,
                right_edge - (x0 + measure(cell.cell_begin, cell.cell_end)),
            )
        ]

    if cell.unpadded:
        return [
            annotations.pad(
                cell.cell_begin,
                cell.cell_end,
                ctx.span(column) - content_width,
                before=right,
            )
        ]

    lead = measure(cell.cell_begin, cell.content_begin)
    trail = measure(cell.content_end, cell.cell_end)
    plan: list[Annotation] = []

    if not right:
        begin = cell.cell_begin
        if lead > ctx.space_width:
            plan.append(
                annotations.space(cell.cell_begin, cell.content_begin, ctx.space_width)
            )
            lead = ctx.space_width
            begin = cell.content_begin
        fill = right_edge - (x0 + lead + content_width)
        if cell.content_end < cell.cell_end:
            plan.append(annotations.space(cell.content_end, cell.cell_end, fill))
        else:
            plan.append(annotations.pad(begin, cell.cell_end, fill))
        return plan

    end = cell.cell_end
    if trail > ctx.space_width:
        plan.append(
            annotations.space(cell.content_end, cell.cell_end, ctx.space_width)
        )
        trail = ctx.space_width
        end = cell.content_end
    fill = right_edge - trail - content_width - x0
    if cell.cell_begin < cell.content_begin:
        plan.insert(0, annotations.space(cell.cell_begin, cell.content_begin, fill))
    else:
        plan.insert(0, annotations.pad(cell.cell_begin, end, fill, before=True))
    return plan


def _plan_pipe_separator(ctx: _RowContext, row: ParsedRow) -> list[Annotation]:
    """Replace each separator cell with a rule as wide as its column.

    Alignment markers are covered by the rule. ``+`` junctions are drawn at
    delimiter width so they line up with the data rows' delimiters.
    """
    plan: list[Annotation] = []
    lead = row_delimiter_start(ctx.document, row.line_start)
    if ctx.config.full_height_bar:
        plan.append(annotations.bar(lead, ctx.bar_width))
    for col, cell in enumerate(row.cells[: len(ctx.columns)]):
        plan.append(
            annotations.glyph(
                cell.cell_begin,
                cell.cell_end,
                RULE_CHAR,
                ctx.span(ctx.columns[col]),
            )
        )
        junction = ctx.document.text(cell.cell_end, cell.cell_end + 1)
        if junction == ctx.bar_glyph:
            if ctx.config.full_height_bar:
                plan.append(annotations.bar(cell.cell_end, ctx.bar_width))
        else:
            plan.append(
                annotations.glyph(
                    cell.cell_end, cell.cell_end + 1, junction, ctx.bar_width
                )
            )
    return plan


def _plan_box_separator(
    ctx: _RowContext, row: ParsedRow, role: RuleRow
) -> list[Annotation]:
    """Redraw a box-table rule with refined glyphs and exact run widths.

    Every corner and junction is remapped to the target charset's glyph for
    this rule (top, middle or bottom) and every horizontal run becomes a
    rule exactly as wide as its column.

    Raises:
        MalformedCellError: if the rule's runs don't match the columns.
    """
    assert ctx.table.charset is not None
    source = ctx.table.charset
    target = ctx.config.charsets.target
    borders = source.border_glyphs()

    line_start = row.line_start
    text = ctx.document.line_text(line_start).rstrip()
    positions = [
        line_start + idx for idx, char in enumerate(text) if char in borders
    ]
    if len(positions) - 1 != len(ctx.columns):
        raise MalformedCellError(
            positions[-1] if positions else line_start, source.rule
        )

    plan: list[Annotation] = []
    for idx, pos in enumerate(positions):
        if idx == 0:
            part = RulePart.LEFT
        elif idx == len(positions) - 1:
            part = RulePart.RIGHT
        else:
            part = RulePart.JUNCTION
        char = ctx.document.text(pos, pos + 1)
        refined = target.glyph(role, part)
        if char != refined or ctx.metrics.measure_glyph(char) != ctx.bar_width:
            plan.append(annotations.glyph(pos, pos + 1, refined, ctx.bar_width))
        if idx < len(ctx.columns):
            plan.append(
                annotations.glyph(
                    pos + 1,
                    positions[idx + 1],
                    target.rule,
                    ctx.span(ctx.columns[idx]),
                )
            )
    return plan
