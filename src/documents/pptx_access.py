from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from pptx import Presentation
from pptx.oxml.ns import qn
from pptx.shapes.group import GroupShape
from pptx.text.text import TextFrame

from .base import DocumentAccess, OpenDocument

"""Presentations (.pptx) via python-pptx.

Text-bearing elements are shape text frames, slide by slide in shape order.
Group shapes are walked depth-first so grouped text boxes are included.
"""


def _iter_frames(shapes: Iterable[Any]) -> Iterator[TextFrame]:
    for shape in shapes:
        if isinstance(shape, GroupShape):
            yield from _iter_frames(shape.shapes)
        elif shape.has_text_frame:
            yield shape.text_frame


class PptxDocumentAccess(DocumentAccess):
    kind = "pptx"
    extensions = (".pptx",)

    def _load(self, path: Path) -> Any:
        return Presentation(str(path))

    def _dump(self, document: OpenDocument) -> None:
        document.native.save(str(document.path))

    def _iter_text_elements(self, native: Any) -> Iterator[TextFrame]:
        for slide in native.slides:
            yield from _iter_frames(slide.shapes)

    def get_text(self, element: TextFrame) -> str:
        return element.text or ""

    def set_text(self, element: TextFrame, text: str) -> None:
        """Replace frame text, keeping the first paragraph and its first run."""
        paragraphs = element.paragraphs
        first = paragraphs[0]
        for extra in paragraphs[1:]:
            extra._p.getparent().remove(extra._p)
        if "\n" in text or "\v" in text or not first.runs:
            # 改行は段落レベルでのみ表現できる
            first.text = text
            return
        # a:fld / a:br are part of the paragraph text but not of runs
        for child in first._p.findall(qn("a:fld")) + first._p.findall(qn("a:br")):
            first._p.remove(child)
        first.runs[0].text = text
        for run in first.runs[1:]:
            run._r.getparent().remove(run._r)
