"""Render an annotated document as plain monospace text."""

import logging

from tablealign.annotations import AnnotationKind
from tablealign.document import StringDocument
from tablealign.metrics import glyph_cells

logger = logging.getLogger(__package__)


def render(document: StringDocument, unit: int = 1) -> str:
    """Return the document text as it would appear with its annotations.

    Widths are converted from pixels to monospace cells by dividing by
    ``unit``, so the metrics used for layout should be `MonospaceMetrics`
    with the same unit.

    Args:
        document: Document to render.
        unit: Width of one monospace cell in pixels.

    Returns:
        Rendered text; the document itself is unchanged.
    """
    text = document.get_text()
    pieces: list[str] = []
    pos = 0
    for ann in document.annotations():
        if ann.start < pos:
            logger.debug(f"Overlapping annotation at {ann.start} not rendered")
            continue
        pieces.append(text[pos : ann.start])
        covered = text[ann.start : ann.end]
        blank = " " * (ann.width // unit)
        if ann.kind == AnnotationKind.SPACE:
            pieces.append(blank)
        elif ann.kind == AnnotationKind.PAD_BEFORE:
            pieces.append(blank + covered)
        elif ann.kind == AnnotationKind.PAD_AFTER:
            pieces.append(covered + blank)
        elif ann.kind == AnnotationKind.GLYPH:
            count = ann.width // (unit * max(glyph_cells(ann.glyph), 1))
            pieces.append(ann.glyph * count)
        else:
            pieces.append(covered)
        pos = ann.end
    pieces.append(text[pos:])
    return "".join(pieces)
