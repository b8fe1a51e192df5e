"""Test locating and classifying tables"""

from tablealign.charsets import ASCII_CHARSET, UNICODE_CHARSET
from tablealign.document import StringDocument
from tablealign.preferences import LayoutConfig
from tablealign.scanner import (
    TableKind,
    find_tables,
    is_table_line,
    locate_table,
)

PROSE_AND_TABLE = "intro\n| a | b |\n|---|---|\n| c | d |\nafter\n"


def test_locate_pipe_table(config: LayoutConfig) -> None:
    """Test a table is found from any line, and only from its lines"""
    doc = StringDocument(PROSE_AND_TABLE)
    for pos in (6, 20, 30, 35):
        table = locate_table(doc, pos, config)
        assert table is not None
        assert (table.start, table.end) == (6, 35)
        assert table.line_starts == [6, 16, 26]
        assert table.kind == TableKind.MARKDOWN
        assert table.charset is None
    assert locate_table(doc, 2, config) is None
    assert locate_table(doc, 38, config) is None


def test_pipe_dialects() -> None:
    """Test dialect is taken from separator rows, else the default"""
    org = StringDocument("| a | b |\n|---+---|\n| c | d |")
    markers = StringDocument("| a | b |\n|:--|--:|")
    plain = StringDocument("| a | b |\n|---|---|")
    org_default = LayoutConfig(default_dialect="org")

    table = locate_table(org, 0, LayoutConfig())
    assert table is not None and table.kind == TableKind.ORG
    table = locate_table(markers, 0, org_default)
    assert table is not None and table.kind == TableKind.MARKDOWN
    table = locate_table(plain, 0, LayoutConfig())
    assert table is not None and table.kind == TableKind.MARKDOWN
    table = locate_table(plain, 0, org_default)
    assert table is not None and table.kind == TableKind.ORG


def test_kind_properties() -> None:
    """Test the dialect behaviour selected by TableKind"""
    assert TableKind.MARKDOWN.alignment_from_markers
    assert not TableKind.ORG.alignment_from_markers
    assert TableKind.ORG.separator_junctions == "|+"
    assert TableKind.MARKDOWN.separator_junctions == "|"
    assert not TableKind.BOX.is_pipe


def test_locate_box_tables(config: LayoutConfig) -> None:
    """Test box tables in both the Unicode and ASCII charsets"""
    doc = StringDocument("┌─┬─┐\n│a│b│\n└─┴─┘")
    table = locate_table(doc, 8, config)
    assert table is not None
    assert table.kind == TableKind.BOX
    assert table.charset is UNICODE_CHARSET
    assert table.delimiter == "│"
    assert (table.start, table.end) == (0, doc.length())

    doc = StringDocument("text\n+-+-+\n|a|b|\n+-+-+\n")
    table = locate_table(doc, 12, config)
    assert table is not None
    assert table.kind == TableKind.BOX
    assert table.charset is ASCII_CHARSET
    assert table.start == 5


def test_blank_line_tolerance(config: LayoutConfig) -> None:
    """Test one blank line is crossed in box tables only, from either side"""
    box = StringDocument("+-+\n|a|\n\n|b|\n+-+")
    table = locate_table(box, 0, config)
    assert table is not None
    assert table.kind == TableKind.BOX
    assert table.line_starts == [0, 4, 8, 9, 13]

    # The same table is found from below the blank line
    for pos in (9, 13):
        table = locate_table(box, pos, config)
        assert table is not None
        assert table.kind == TableKind.BOX
        assert table.line_starts == [0, 4, 8, 9, 13]

    unicode_box = StringDocument("┌─┬─┐\n│ a │ b │\n\n│ cc │ d │\n└─┴─┘")
    table = locate_table(unicode_box, 18, config)
    assert table is not None
    assert table.charset is UNICODE_CHARSET
    assert (table.start, table.end) == (0, unicode_box.length())

    pipes = StringDocument("| a |\n\n| b |")
    table = locate_table(pipes, 0, config)
    assert table is not None
    assert table.end == 5
    table = locate_table(pipes, 7, config)
    assert table is not None
    assert table.start == 7

    two_blanks = StringDocument("+-+\n|a|\n\n\n|b|")
    table = locate_table(two_blanks, 0, config)
    assert table is not None
    assert table.end == 7
    table = locate_table(two_blanks, 10, config)
    assert table is not None
    assert table.start == 10


def test_not_table_lines(config: LayoutConfig) -> None:
    """Test lines that merely start with a table glyph are not tables"""
    doc = StringDocument("+ a list item\n- b | c |\nplain | text |")
    assert not is_table_line(doc, 0, config)
    assert not is_table_line(doc, 14, config)
    assert not is_table_line(doc, 30, config)
    assert locate_table(doc, 0, config) is None


def test_literal_blocks_ignored(config: LayoutConfig) -> None:
    """Test tables inside literal blocks are left alone"""
    doc = StringDocument("```\n| a | b |\n```\n#+begin_example\n| c |\n#+end_example\n")
    assert list(find_tables(doc, 0, doc.length(), config)) == []
    unterminated = StringDocument("~~~~\n| a | b |\n")
    assert locate_table(unterminated, 6, config) is None


def test_find_tables(config: LayoutConfig) -> None:
    """Test all tables overlapping a region are found whole"""
    doc = StringDocument("| a |\n| b |\ntext\n| c |\nmore\n| d |")
    tables = list(find_tables(doc, 0, doc.length(), config))
    assert [(table.start, table.end) for table in tables] == [
        (0, 11),
        (17, 22),
        (28, 33),
    ]

    tables = list(find_tables(doc, 8, 19, config))
    assert [(table.start, table.end) for table in tables] == [(0, 11), (17, 22)]


def test_unknown_charset_is_pipe_table(config: LayoutConfig) -> None:
    """Test a corner-led rule matching no charset leaves the table pipe-delimited"""
    doc = StringDocument("+==+\n| a |\n+==+")
    assert is_table_line(doc, 0, config)
    table = locate_table(doc, 0, config)
    assert table is not None
    assert table.kind.is_pipe
    assert table.charset is None
    assert (table.start, table.end) == (0, doc.length())
