from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from lxml import etree

from .base import DocumentAccess, OpenDocument

"""Vector drawings (.svg) via lxml.

Text-bearing elements are ``<text>`` elements in document order. Their text is
the concatenation of every nested ``<tspan>``.
"""

SVG_NS = "http://www.w3.org/2000/svg"
TEXT_TAG = f"{{{SVG_NS}}}text"


class SvgDocumentAccess(DocumentAccess):
    kind = "svg"
    extensions = (".svg",)

    def _load(self, path: Path) -> Any:
        parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False)
        return etree.parse(str(path), parser)

    def _dump(self, document: OpenDocument) -> None:
        document.native.write(str(document.path), xml_declaration=True, encoding="utf-8")

    def _iter_text_elements(self, native: Any) -> Iterator[Any]:
        # 名前空間なしの <text> も対象
        yield from native.getroot().iter(TEXT_TAG, "text")

    def get_text(self, element: Any) -> str:
        return "".join(element.itertext())

    def set_text(self, element: Any, text: str) -> None:
        """Replace text, keeping the first child (usually a positioned tspan)."""
        children = list(element)
        if not children:
            element.text = text
            return
        element.text = None
        first = children[0]
        for grandchild in list(first):
            first.remove(grandchild)
        first.text = text
        first.tail = None
        for extra in children[1:]:
            element.remove(extra)
