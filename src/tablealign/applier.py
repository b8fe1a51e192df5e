"""Materialize planned annotations on a document, and clear them."""

import logging

from tablealign.annotations import ANNOTATION_TAG, Annotation
from tablealign.document import Document
from tablealign.scanner import TableRange

logger = logging.getLogger(__package__)


class AnnotationApplier:
    """Apply and clear the engine's annotations on one document.

    Only annotations carrying the engine's tag are ever touched, so other
    annotations the host has on the document survive every pass.

    Attributes:
        document: Document that receives the annotations.
        tag: Owner tag of the engine's annotations.
    """

    def __init__(self, document: Document, tag: str = ANNOTATION_TAG) -> None:
        self.document = document
        self.tag = tag

    def apply(self, table_range: TableRange, plan: list[Annotation]) -> None:
        """Replace the annotations over a table with those in the plan.

        If materializing fails part way, the whole range is cleared again
        before the error propagates, so no partial plan is left visible.

        Args:
            table_range: Table whose existing annotations are replaced.
            plan: Annotations planned for the table.
        """
        self.clear(table_range.start, table_range.end)
        try:
            self.document.add_annotations(plan)
        except Exception:
            self.clear(table_range.start, table_range.end)
            raise

    def clear(self, start: int, end: int) -> int:
        """Remove engine annotations intersecting ``[start, end)``.

        Safe to call on a range with no annotations.

        Returns:
            Number of annotations removed.
        """
        removed = self.document.remove_annotations(start, end, self.tag)
        if removed:
            logger.debug(f"Cleared {removed} annotations in [{start}, {end})")
        return removed
