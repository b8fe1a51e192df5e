"""Exceptions raised by the table layout engine."""


class TableAlignError(Exception):
    """Base class for table layout errors."""


class MalformedCellError(TableAlignError):
    """Raised when a row expected to be tabular has no closing delimiter.

    Attributes:
        position: Offset of the start of the unterminated cell.
        delimiter: Delimiter glyph that was being searched for.
    """

    def __init__(self, position: int, delimiter: str) -> None:
        super().__init__(
            f"No closing '{delimiter}' for cell starting at offset {position}"
        )
        self.position = position
        self.delimiter = delimiter


class NoRenderSurfaceError(TableAlignError):
    """Raised when a measurement is requested without a live render surface."""
