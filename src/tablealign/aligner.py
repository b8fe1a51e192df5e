"""Entry points that find, lay out and annotate tables in a document."""

import logging
from typing import Callable, Optional

from tablealign.applier import AnnotationApplier
from tablealign.document import Document
from tablealign.layout import plan_table
from tablealign.metrics import GlyphMetrics
from tablealign.preferences import LayoutConfig
from tablealign.scanner import TableRange, find_tables, locate_table
from tablealign.utilities import sing_plur

logger = logging.getLogger(__package__)


class TableError:
    """Record of a table whose layout was abandoned.

    Attributes:
        table: The table that was skipped; its annotations have been cleared.
        error: The exception that stopped the layout.
    """

    def __init__(self, table: TableRange, error: Exception) -> None:
        self.table = table
        self.error = error

    @property
    def message(self) -> str:
        """Description of the error suitable for a status message."""
        return f"{type(self.error).__name__}: {self.error}"

    def __repr__(self) -> str:
        return f"TableError({self.table!r}, {self.message!r})"


class AlignResult:
    """Outcome of aligning a region.

    Attributes:
        start: Start of the range processed, extended to cover whole tables.
        end: End of the range processed, extended to cover whole tables.
        tables: Tables that were laid out.
        errors: Tables that were abandoned, and why.
        skipped: True if nothing was done because no measurement is possible.
    """

    def __init__(
        self,
        start: int,
        end: int,
        tables: Optional[list[TableRange]] = None,
        errors: Optional[list[TableError]] = None,
        skipped: bool = False,
    ) -> None:
        self.start = start
        self.end = end
        self.tables = tables or []
        self.errors = errors or []
        self.skipped = skipped

    def __repr__(self) -> str:
        return (
            f"AlignResult({self.start}, {self.end}, "
            f"{sing_plur(len(self.tables), 'table')}, "
            f"{sing_plur(len(self.errors), 'error')}"
            f"{', skipped' if self.skipped else ''})"
        )


class TableAligner:
    """Keep the tables of one document visually aligned.

    The host calls `align_region` with each region it has re-rendered,
    `align_at` when the user edits inside a table, and `reset_region` to
    remove the alignment altogether.

    Attributes:
        document: Document whose tables are aligned.
        metrics: Measures the document's rendered text.
        config: Layout configuration; may be replaced between passes.
        skip_callback: Optional function given a position, returning True if
          `align_at` should do nothing there, e.g. while the user is typing
          in the middle of a cell.
    """

    def __init__(
        self,
        document: Document,
        metrics: GlyphMetrics,
        config: Optional[LayoutConfig] = None,
        skip_callback: Optional[Callable[[int], bool]] = None,
    ) -> None:
        self.document = document
        self.metrics = metrics
        self.config = config if config is not None else LayoutConfig()
        self.skip_callback = skip_callback
        self.applier = AnnotationApplier(document)

    def align_region(self, start: int, end: int) -> AlignResult:
        """Align every table overlapping ``[start, end)``.

        Annotations left in the region by tables that no longer exist are
        removed. A table that cannot be laid out has its annotations
        cleared and is reported in the result; the other tables are
        unaffected.

        Args:
            start: Start of region, typically the region just re-rendered.
            end: End of region.

        Returns:
            Range processed, tables aligned and any per-table errors.
        """
        if not self.metrics.has_render_surface():
            logger.debug(
                f"No render surface - table alignment of [{start}, {end}) skipped"
            )
            return AlignResult(start, end, skipped=True)

        tables = list(find_tables(self.document, start, end, self.config))
        result = AlignResult(
            min([start] + [table.start for table in tables]),
            max([end] + [table.end for table in tables]),
        )
        self.applier.clear(result.start, result.end)
        for table in tables:
            if error := self._align_table(table):
                result.errors.append(error)
            else:
                result.tables.append(table)
        logger.debug(f"Aligned region: {result!r}")
        return result

    def align_at(self, position: int, force: bool = False) -> Optional[TableRange]:
        """Align the table containing ``position``.

        Args:
            position: Any offset within the table.
            force: If True, ignore the skip callback.

        Returns:
            The table aligned, or None if there is no table at ``position``,
            the pass was skipped, or the table could not be laid out.
        """
        if (
            not force
            and self.skip_callback is not None
            and self.skip_callback(position)
        ):
            logger.debug(f"Table alignment at {position} suppressed by callback")
            return None
        if not self.metrics.has_render_surface():
            logger.debug(f"No render surface - table alignment at {position} skipped")
            return None
        table = locate_table(self.document, position, self.config)
        if table is None or self._align_table(table):
            return None
        return table

    def reset_region(self, start: int, end: int) -> None:
        """Remove all table alignment from ``[start, end)``."""
        self.applier.clear(start, end)

    def _align_table(self, table: TableRange) -> Optional[TableError]:
        """Plan and apply one table, clearing it if anything goes wrong.

        Returns:
            None on success, otherwise a record of the failure.
        """
        try:
            plan = plan_table(self.document, self.metrics, table, self.config)
            self.applier.apply(table, plan)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self.applier.clear(table.start, table.end)
            logger.warning(f"Unable to align table at offset {table.start}: {exc}")
            return TableError(table, exc)
        return None
