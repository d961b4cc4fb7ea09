from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import docx
from docx.oxml.ns import qn
from docx.text.paragraph import Paragraph

from .base import DocumentAccess, OpenDocument

"""Word-processing documents (.docx) via python-docx.

Text-bearing elements are paragraphs: body paragraphs first, then the paragraphs
of every table cell (row by row). Merged cells are reported once.
"""


def set_paragraph_text_keep_first_run(paragraph: Paragraph, text: str) -> None:
    """Replace paragraph text, keeping the formatting of its first run.

    Hyperlinks are dropped: their runs count towards ``Paragraph.text`` but are
    not part of ``Paragraph.runs``.
    """
    p = paragraph._p
    for hyperlink in p.findall(qn("w:hyperlink")):
        p.remove(hyperlink)
    if not paragraph.runs:
        paragraph.add_run(text)
        return
    paragraph.runs[0].text = text
    for run in paragraph.runs[1:]:
        run.text = ""


class DocxDocumentAccess(DocumentAccess):
    kind = "docx"
    extensions = (".docx",)

    def _load(self, path: Path) -> Any:
        return docx.Document(str(path))

    def _dump(self, document: OpenDocument) -> None:
        document.native.save(str(document.path))

    def _iter_text_elements(self, native: Any) -> Iterator[Paragraph]:
        yield from native.paragraphs
        seen: set[Any] = set()
        for table in native.tables:
            for row in table.rows:
                for cell in row.cells:
                    # 結合セルは row.cells に重複して現れる
                    if cell._tc in seen:
                        continue
                    seen.add(cell._tc)
                    yield from cell.paragraphs

    def get_text(self, element: Paragraph) -> str:
        return element.text or ""

    def set_text(self, element: Paragraph, text: str) -> None:
        set_paragraph_text_keep_first_run(element, text)
