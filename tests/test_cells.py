"""Test splitting rows into cells"""

import pytest

from tablealign.cells import (
    CellBounds,
    RowKind,
    is_separator_cell,
    is_separator_row,
    parse_cell,
    parse_row,
    parse_table,
    separator_alignment_markers,
)
from tablealign.document import StringDocument
from tablealign.errors import MalformedCellError, TableAlignError
from tablealign.preferences import LayoutConfig
from tablealign.scanner import locate_table


def test_parse_cell_padding() -> None:
    """Test content bounds keep one unit of generous padding"""
    doc = StringDocument("| a |")
    assert parse_cell(doc, 1, "|", doc.length()) == CellBounds(1, 2, 3, 4)
    doc = StringDocument("|  abc  |")
    assert parse_cell(doc, 1, "|", doc.length()) == CellBounds(1, 2, 7, 8)
    doc = StringDocument("|   abc|")
    assert parse_cell(doc, 1, "|", doc.length()) == CellBounds(1, 3, 7, 7)


def test_parse_cell_unpadded() -> None:
    """Test content touching both delimiters"""
    doc = StringDocument("|abc|")
    cell = parse_cell(doc, 1, "|", doc.length())
    assert cell == CellBounds(1, 1, 4, 4)
    assert cell.unpadded
    assert not parse_cell(StringDocument("| a |"), 1, "|", 5).unpadded


def test_parse_cell_empty() -> None:
    """Test whitespace-only cells"""
    doc = StringDocument("|   |")
    cell = parse_cell(doc, 1, "|", doc.length())
    assert cell == CellBounds(1, 2, 3, 4, empty=True)
    assert not cell.unpadded
    doc = StringDocument("||")
    assert parse_cell(doc, 1, "|", doc.length()) == CellBounds(1, 1, 1, 1, empty=True)


def test_unterminated_cell() -> None:
    """Test a row with text after its last delimiter"""
    doc = StringDocument("| a | b")
    with pytest.raises(MalformedCellError) as exc_info:
        parse_row(doc, 0, "|")
    assert exc_info.value.position == 5
    assert exc_info.value.delimiter == "|"
    assert isinstance(exc_info.value, TableAlignError)


def test_parse_row() -> None:
    """Test rows, with indentation and trailing whitespace"""
    doc = StringDocument("  | a | bb |  ")
    cells = parse_row(doc, 0, "|")
    assert [cell.as_tuple() for cell in cells] == [(3, 4, 5, 6), (7, 8, 10, 11)]


def test_separator_rows(config: LayoutConfig) -> None:
    """Test separator detection and alignment markers"""
    doc = StringDocument("| a | b |\n|---|:--:|\n| -5 | 3 |\n|---+---|")
    table = locate_table(doc, 0, config)
    assert table is not None
    assert not is_separator_row(doc, 0, table)
    assert is_separator_row(doc, 10, table)
    assert not is_separator_row(doc, 21, table)
    assert is_separator_row(doc, 32, table)
    assert separator_alignment_markers(" ---: ") == (False, True)
    assert separator_alignment_markers(":--:") == (True, True)
    assert separator_alignment_markers("---") == (False, False)


def test_separator_cells() -> None:
    """Test rules are told apart from cells holding a dash"""
    assert is_separator_cell("---")
    assert is_separator_cell("-")
    assert is_separator_cell(" --- ")
    assert is_separator_cell(" :-: ")
    assert is_separator_cell(" -: ")
    assert not is_separator_cell(" - ")
    assert not is_separator_cell(" -5 ")
    assert not is_separator_cell("   ")


def test_dash_row_is_data(config: LayoutConfig) -> None:
    """Test a row of lone dashes padded with blanks is a data row"""
    doc = StringDocument("| - | - |\n| --- | :-: |\n| a | b |")
    table = locate_table(doc, 0, config)
    assert table is not None
    assert not is_separator_row(doc, 0, table)
    assert is_separator_row(doc, 10, table)
    kinds = [row.kind for row in parse_table(doc, table)]
    assert kinds == [RowKind.DATA, RowKind.SEPARATOR, RowKind.DATA]


def test_unknown_charset_rows_literal(config: LayoutConfig) -> None:
    """Test rows of a pipe table not led by a pipe are kept literally"""
    doc = StringDocument("+==+\n| a |\n| bb |\n+==+")
    table = locate_table(doc, 0, config)
    assert table is not None
    rows = parse_table(doc, table)
    assert [row.kind for row in rows] == [
        RowKind.LITERAL,
        RowKind.DATA,
        RowKind.DATA,
        RowKind.LITERAL,
    ]
    assert rows[0].cells == []


def test_parse_table_rows(config: LayoutConfig) -> None:
    """Test rows of an org table are classified and split at junctions"""
    doc = StringDocument("| a | b |\n|---+---|\n| c | d |")
    table = locate_table(doc, 0, config)
    assert table is not None
    rows = parse_table(doc, table)
    assert [row.kind for row in rows] == [RowKind.DATA, RowKind.SEPARATOR, RowKind.DATA]
    assert [cell.cell_end for cell in rows[1].cells] == [14, 18]
    assert len(rows[2].cells) == 2


def test_parse_box_table(config: LayoutConfig) -> None:
    """Test box rule rows are separators and blank lines are kept"""
    doc = StringDocument("┌─┬─┐\n│a│b│\n\n│c│d│\n└─┴─┘")
    table = locate_table(doc, 0, config)
    assert table is not None
    rows = parse_table(doc, table)
    assert [row.kind for row in rows] == [
        RowKind.SEPARATOR,
        RowKind.DATA,
        RowKind.BLANK,
        RowKind.DATA,
        RowKind.SEPARATOR,
    ]
    assert [cell.as_tuple() for cell in rows[1].cells] == [(7, 7, 8, 8), (9, 9, 10, 10)]
