"""Adapters letting the engine align tables shown in a Tk Text widget.

Document offsets count characters only. Embedded windows, which this
module uses to draw padding and glyphs, occupy Tk index positions but are
never counted, so offsets stay valid while annotations come and go.
"""

import logging
import math
import tkinter as tk
from tkinter import font as tk_font
from typing import Iterable, Optional

import _tkinter

from tablealign.annotations import ANNOTATION_TAG, Annotation, AnnotationKind
from tablealign.document import Document
from tablealign.errors import NoRenderSurfaceError
from tablealign.metrics import GlyphMetrics
from tablealign.utilities import TextRange

logger = logging.getLogger(__package__)


class IndexRowCol:
    """Class to store/manipulate Tk Text indexes.

    Attributes:
        row: Row or line number.
        col: Column number.
    """

    row: int
    col: int

    def __init__(
        self, index_or_row: _tkinter.Tcl_Obj | str | int, col: Optional[int] = None
    ) -> None:
        """Construct index either from string or two ints.

        Args:
            index_or_row: Either int row, or index, which is string or Tcl_Obj that can be cast to string
            col: Optional column - needed if index_or_row is an int
        """
        if isinstance(index_or_row, _tkinter.Tcl_Obj):
            index_or_row = str(index_or_row)
        if isinstance(index_or_row, str):
            assert col is None
            rr, cc = index_or_row.split(".", 1)
            self.row = int(rr)
            self.col = int(cc)
        else:
            assert isinstance(index_or_row, int) and isinstance(col, int)
            self.row = index_or_row
            self.col = col

    def index(self) -> str:
        """Return string index from object's row/col attributes."""
        return f"{self.row}.{self.col}"

    def __eq__(self, other: object) -> bool:
        """Override equality test to check row and col."""
        if not isinstance(other, IndexRowCol):
            return NotImplemented
        return (self.row, self.col) == (other.row, other.col)


class TkTextDocument(Document):
    """Document backed by a Tk Text widget owned by the host.

    Annotations are drawn with an elide tag, which hides the characters an
    annotation replaces, plus an embedded window holding the blank, glyph
    or bar. Embedded windows are named after the annotation's tag so they
    can be found and removed again.

    Attributes:
        widget: The Text widget.
        literal_tags: Names of tags marking literal/quoted blocks.
    """

    def __init__(
        self, widget: tk.Text, literal_tags: Optional[Iterable[str]] = None
    ) -> None:
        self.widget = widget
        self.literal_tags = set(literal_tags or ())
        self._windows: dict[str, tuple[Annotation, tk.Widget]] = {}
        self._serial = 0

    def index(self, pos: int) -> str:
        """Return Tk index of the character at offset ``pos``.

        Only characters are counted, not embedded windows.
        """
        return self.widget.index(f"1.0 + {pos} any chars")

    def offset(self, index: str) -> int:
        """Return character offset of a Tk index."""
        return self._count("1.0", index)

    def _count(self, index1: str, index2: str) -> int:
        """Return number of characters between two indexes."""
        result = self.widget.count(index1, index2, "chars")
        if result is None:
            return 0
        if isinstance(result, tuple):
            return int(result[0])
        return int(result)

    def text(self, start: int, end: int) -> str:
        if end <= start:
            return ""
        return self.widget.get(self.index(start), self.index(end))

    def length(self) -> int:
        return self._count("1.0", tk.END + "-1c")

    def line_start(self, pos: int) -> int:
        row = IndexRowCol(self.index(pos)).row
        return self.offset(IndexRowCol(row, 0).index())

    def line_end(self, pos: int) -> int:
        row = IndexRowCol(self.index(pos)).row
        return self.offset(f"{row}.end")

    def is_literal(self, pos: int) -> bool:
        if not self.literal_tags:
            return False
        return bool(self.literal_tags & set(self.widget.tag_names(self.index(pos))))

    def elide_tag(self, tag: str) -> str:
        """Return name of the tag used to hide characters for ``tag``."""
        return f"{tag}_elide"

    def add_annotation(self, annotation: Annotation) -> None:
        self.add_annotations([annotation])

    def add_annotations(self, plan: list[Annotation]) -> None:
        """Materialize annotations from last to first.

        The widget's modified flag is left as it was, since the stored text
        has not changed.
        """
        modified = self.widget.edit_modified()
        for annotation in sorted(
            plan, key=lambda ann: (ann.start, ann.end), reverse=True
        ):
            self._materialize(annotation)
        self.widget.edit_modified(modified)

    def _materialize(self, annotation: Annotation) -> None:
        """Draw one annotation in the widget."""
        elide_tag = self.elide_tag(annotation.tag)
        self.widget.tag_configure(elide_tag, elide=True)
        start = self.index(annotation.start)
        end = self.index(annotation.end)

        if annotation.kind == AnnotationKind.PAD_AFTER:
            where = end
        else:
            where = start
        if annotation.kind in (
            AnnotationKind.SPACE,
            AnnotationKind.GLYPH,
            AnnotationKind.BAR,
        ):
            self.widget.tag_add(elide_tag, start, end)

        window = self._make_window(annotation)
        self.widget.window_create(
            where, window=window, stretch=annotation.kind == AnnotationKind.BAR
        )
        # The window must not inherit the elision of its neighbours
        self.widget.tag_remove(elide_tag, str(window))
        self._windows[str(window)] = (annotation, window)

    def _make_window(self, annotation: Annotation) -> tk.Widget:
        """Create the widget that draws an annotation."""
        self._serial += 1
        name = f"{annotation.tag}{annotation.kind}{self._serial}"
        background = self.widget.cget("background")
        font = widget_font(self.widget)
        height = font.metrics("linespace")
        canvas = tk.Canvas(
            self.widget,
            name=name,
            width=annotation.width,
            height=height,
            background=background,
            highlightthickness=0,
            borderwidth=0,
        )
        if annotation.kind == AnnotationKind.GLYPH:
            step = font.measure(annotation.glyph)
            if step > 0:
                for idx in range(math.ceil(annotation.width / step)):
                    canvas.create_text(
                        idx * step,
                        0,
                        text=annotation.glyph,
                        anchor=tk.NW,
                        font=font,
                        fill=self.widget.cget("foreground"),
                    )
        elif annotation.kind == AnnotationKind.BAR:
            mid = annotation.width // 2
            canvas.create_line(
                mid, 0, mid, 10000, fill=self.widget.cget("foreground")
            )
        return canvas

    def remove_annotations(
        self, start: int, end: int, tag: str = ANNOTATION_TAG
    ) -> int:
        modified = self.widget.edit_modified()
        removed = 0
        for name, (annotation, window) in list(self._windows.items()):
            if annotation.tag != tag:
                continue
            pos = self.offset(self.widget.index(name))
            if not (start <= pos <= end):
                continue
            self.widget.delete(name)
            if window.winfo_exists():
                window.destroy()
            del self._windows[name]
            removed += 1
        if end > start:
            self.widget.tag_remove(
                self.elide_tag(tag), self.index(start), self.index(end)
            )
        self.widget.edit_modified(modified)
        return removed

    def annotations(
        self, start: int = 0, end: Optional[int] = None, tag: str = ANNOTATION_TAG
    ) -> list[Annotation]:
        if end is None:
            end = self.length()
        found = [
            annotation
            for annotation, _ in self._windows.values()
            if annotation.tag == tag
            and TextRange(annotation.start, annotation.end).overlaps(start, end)
        ]
        return sorted(found, key=lambda ann: (ann.start, ann.end))


def widget_font(widget: tk.Text, tag: str = "") -> tk_font.Font:
    """Return font used by a Text widget, or by one of its tags."""
    description = widget.tag_cget(tag, "font") if tag else ""
    if not description:
        description = widget.cget("font")
    try:
        return tk_font.nametofont(str(description))
    except tk.TclError:
        return tk_font.Font(root=widget, font=description)


class TkTextMetrics(GlyphMetrics):
    """Measure a Text widget's contents using its fonts.

    Text carrying a tag with its own font is measured in that font.

    Attributes:
        document: Document wrapping the widget.
    """

    def __init__(self, document: TkTextDocument) -> None:
        self.document = document
        self._fonts: dict[str, tk_font.Font] = {}

    def has_render_surface(self) -> bool:
        try:
            return bool(self.document.widget.winfo_exists())
        except tk.TclError:
            return False

    def measure_glyph(self, char: str) -> int:
        self._check_surface()
        return self._font("").measure(char)

    def measure_width(self, start: int, end: int) -> int:
        self._check_surface()
        if end <= start:
            return 0
        bounds = sorted({start, end} | self._font_boundaries(start, end))
        return sum(
            self._font(self._font_tag_at(seg_start)).measure(
                self.document.text(seg_start, seg_end)
            )
            for seg_start, seg_end in zip(bounds, bounds[1:])
        )

    def _font(self, tag: str) -> tk_font.Font:
        """Return (cached) font of the widget or of a tag."""
        if tag not in self._fonts:
            self._fonts[tag] = widget_font(self.document.widget, tag)
        return self._fonts[tag]

    def _font_tags(self) -> list[str]:
        """Return names of tags that set a font."""
        widget = self.document.widget
        return [tag for tag in widget.tag_names() if widget.tag_cget(tag, "font")]

    def _font_tag_at(self, pos: int) -> str:
        """Return highest priority font-setting tag at ``pos``, or ""."""
        widget = self.document.widget
        font_tags = set(self._font_tags())
        for tag in reversed(widget.tag_names(self.document.index(pos))):
            if tag in font_tags:
                return tag
        return ""

    def _font_boundaries(self, start: int, end: int) -> set[int]:
        """Return offsets within ``(start, end)`` where the font may change."""
        widget = self.document.widget
        bounds: set[int] = set()
        for tag in self._font_tags():
            for index in widget.tag_ranges(tag):
                pos = self.document.offset(str(index))
                if start < pos < end:
                    bounds.add(pos)
        return bounds

    def _check_surface(self) -> None:
        """Raise if the widget has gone."""
        if not self.has_render_surface():
            raise NoRenderSurfaceError("Text widget is not available for measuring")
