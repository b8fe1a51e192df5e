"""Non-destructive visual directives attached to document ranges."""

from dataclasses import dataclass
from enum import StrEnum, auto

# Owner tag carried by every annotation the engine creates
ANNOTATION_TAG = "tablealign"


class AnnotationKind(StrEnum):
    """Enum class to store annotation kinds.

    SPACE: render the range as a blank ``width`` pixels wide.
    PAD_BEFORE: keep the range visible, add a blank of ``width`` before it.
    PAD_AFTER: keep the range visible, add a blank of ``width`` after it.
    GLYPH: render the range as ``glyph``, repeated/stretched to ``width``.
    BAR: render a delimiter glyph as a full-height rule ``width`` wide.
    """

    SPACE = auto()
    PAD_BEFORE = auto()
    PAD_AFTER = auto()
    GLYPH = auto()
    BAR = auto()


@dataclass(frozen=True)
class Annotation:
    """A single planned annotation.

    Attributes:
        kind: What the annotation does to its range.
        start: Offset of first character covered.
        end: Offset beyond last character covered (may equal start).
        width: Rendered width in pixels.
        glyph: Replacement glyph, for GLYPH annotations.
        tag: Owner tag used to find and remove the annotation.
    """

    kind: AnnotationKind
    start: int
    end: int
    width: int
    glyph: str = ""
    tag: str = ANNOTATION_TAG

    def __post_init__(self) -> None:
        assert self.start <= self.end
        assert self.width >= 0
        assert self.kind != AnnotationKind.GLYPH or self.glyph


def space(start: int, end: int, width: int) -> Annotation:
    """Return a SPACE annotation, clamping a negative width to zero."""
    return Annotation(AnnotationKind.SPACE, start, end, max(width, 0))


def pad(start: int, end: int, width: int, before: bool = False) -> Annotation:
    """Return a PAD_BEFORE or PAD_AFTER annotation, clamping the width."""
    kind = AnnotationKind.PAD_BEFORE if before else AnnotationKind.PAD_AFTER
    return Annotation(kind, start, end, max(width, 0))


def glyph(start: int, end: int, char: str, width: int) -> Annotation:
    """Return a GLYPH annotation showing ``char`` over the range."""
    return Annotation(AnnotationKind.GLYPH, start, end, max(width, 0), char)


def bar(start: int, width: int) -> Annotation:
    """Return a BAR annotation over the single delimiter glyph at ``start``."""
    return Annotation(AnnotationKind.BAR, start, start + 1, max(width, 0))
