"""Documents: the text the engine reads and the annotations it writes."""

from abc import ABC, abstractmethod
import logging
from typing import Optional

import regex as re

from tablealign.annotations import ANNOTATION_TAG, Annotation
from tablealign.utilities import TextRange

logger = logging.getLogger(__package__)

# Opening line of a literal block, and a function giving the matching closer
FENCE_OPEN_REGEX = re.compile(r"^\s*(`{3,}|~{3,})")
ORG_BLOCK_OPEN_REGEX = re.compile(
    r"^\s*#\+begin_(src|example|export|verse|quote)\b", flags=re.IGNORECASE
)


class Document(ABC):
    """Externally owned text plus the annotations layered over it.

    Positions are flat character offsets; lines are separated by newlines.
    The engine never changes the characters of a document.
    """

    @abstractmethod
    def text(self, start: int, end: int) -> str:
        """Return the characters in ``[start, end)``."""

    @abstractmethod
    def length(self) -> int:
        """Return number of characters in document."""

    @abstractmethod
    def line_start(self, pos: int) -> int:
        """Return offset of the start of the line containing ``pos``."""

    @abstractmethod
    def line_end(self, pos: int) -> int:
        """Return offset of the newline ending the line containing ``pos``,
        or the document length for the last line."""

    def is_literal(self, pos: int) -> bool:  # pylint: disable=unused-argument
        """Return True if ``pos`` is styled as part of a literal/quoted block."""
        return False

    @abstractmethod
    def add_annotation(self, annotation: Annotation) -> None:
        """Materialize an annotation."""

    def add_annotations(self, plan: list[Annotation]) -> None:
        """Materialize every annotation in a plan."""
        for annotation in plan:
            self.add_annotation(annotation)

    @abstractmethod
    def remove_annotations(
        self, start: int, end: int, tag: str = ANNOTATION_TAG
    ) -> int:
        """Remove annotations with ``tag`` intersecting ``[start, end)``.

        Returns:
            Number of annotations removed.
        """

    @abstractmethod
    def annotations(
        self, start: int = 0, end: Optional[int] = None, tag: str = ANNOTATION_TAG
    ) -> list[Annotation]:
        """Return annotations with ``tag`` intersecting ``[start, end)``,
        ordered by position."""

    def line_text(self, pos: int) -> str:
        """Return text of the line containing ``pos``, without its newline."""
        return self.text(self.line_start(pos), self.line_end(pos))

    def next_line(self, pos: int) -> Optional[int]:
        """Return start of the line after the one containing ``pos``, or None."""
        end = self.line_end(pos)
        if end >= self.length():
            return None
        return end + 1

    def prev_line(self, pos: int) -> Optional[int]:
        """Return start of the line before the one containing ``pos``, or None."""
        start = self.line_start(pos)
        if start == 0:
            return None
        return self.line_start(start - 1)


class StringDocument(Document):
    """In-memory document holding its annotations in a list.

    Fenced code blocks (backticks or tildes) and org ``#+begin_...`` blocks
    are reported as literal, which is how a host's styling would mark them.
    """

    def __init__(self, text: str = "") -> None:
        self._text = ""
        self._literal_ranges: list[TextRange] = []
        self._annotations: list[Annotation] = []
        self.set_text(text)

    def set_text(self, text: str) -> None:
        """Replace the document text, as an edit by the user would.

        Annotations are left where they were; a following layout pass
        is responsible for clearing any that are now stale.
        """
        self._text = text
        self._literal_ranges = self._find_literal_ranges()

    def get_text(self) -> str:
        """Return the whole document text."""
        return self._text

    def text(self, start: int, end: int) -> str:
        return self._text[start:end]

    def length(self) -> int:
        return len(self._text)

    def line_start(self, pos: int) -> int:
        return self._text.rfind("\n", 0, pos) + 1

    def line_end(self, pos: int) -> int:
        end = self._text.find("\n", pos)
        return len(self._text) if end < 0 else end

    def is_literal(self, pos: int) -> bool:
        return any(rng.start <= pos < rng.end for rng in self._literal_ranges)

    def add_annotation(self, annotation: Annotation) -> None:
        assert 0 <= annotation.start <= annotation.end <= len(self._text)
        self._annotations.append(annotation)

    def remove_annotations(
        self, start: int, end: int, tag: str = ANNOTATION_TAG
    ) -> int:
        kept = [
            ann
            for ann in self._annotations
            if ann.tag != tag or not TextRange(ann.start, ann.end).overlaps(start, end)
        ]
        removed = len(self._annotations) - len(kept)
        self._annotations = kept
        return removed

    def annotations(
        self, start: int = 0, end: Optional[int] = None, tag: str = ANNOTATION_TAG
    ) -> list[Annotation]:
        if end is None:
            end = len(self._text)
        found = [
            ann
            for ann in self._annotations
            if ann.tag == tag and TextRange(ann.start, ann.end).overlaps(start, end)
        ]
        return sorted(found, key=lambda ann: (ann.start, ann.end))

    def _find_literal_ranges(self) -> list[TextRange]:
        """Return ranges covered by literal blocks, fence lines included.

        An unterminated block runs to the end of the document.
        """
        ranges: list[TextRange] = []
        closer: Optional[re.Pattern] = None
        block_start = 0
        pos = 0
        for line in self._text.split("\n"):
            line_end = pos + len(line) + 1
            if closer is None:
                if match := FENCE_OPEN_REGEX.match(line):
                    fence = match[1]
                    closer = re.compile(
                        rf"^\s*{re.escape(fence[0])}{{{len(fence)},}}\s*$"
                    )
                    block_start = pos
                elif match := ORG_BLOCK_OPEN_REGEX.match(line):
                    closer = re.compile(
                        rf"^\s*#\+end_{match[1]}\b", flags=re.IGNORECASE
                    )
                    block_start = pos
            elif closer.match(line):
                ranges.append(TextRange(block_start, line_end))
                closer = None
            pos = line_end
        if closer is not None:
            ranges.append(TextRange(block_start, len(self._text) + 1))
        return ranges
