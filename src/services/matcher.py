from __future__ import annotations

import logging
import re
from collections import deque
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..documents.base import DocumentAccess
from ..models.layer_map import NO_MATCH, LayerMap
from ..models.row import Row

"""Text-entry matcher: picture list rows -> document text elements.

Builds the LayerMap once per run. Each element can be claimed by one row only;
rows are served in row order, and among elements with the same normalized text
the first one in enumeration order is claimed first. Only whitespace differences
are ignored; anything else (case, punctuation) is a mismatch.
"""

__all__ = [
    "normalize_key",
    "build_layer_map",
    "match_template",
]

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def normalize_key(text: str | None) -> str:
    """Remove every (Unicode) whitespace character. Used for comparison only."""
    if not text:
        return ""
    return _WHITESPACE.sub("", text)


def build_layer_map(
    elements: Sequence[Any],
    rows: Sequence[Row],
    source_language: str,
    access: DocumentAccess | None = None,
) -> tuple[LayerMap, list[str]]:
    """Compute the row -> element mapping.

    Args:
        elements: text elements in document order (plain strings when ``access`` is None)
        rows: picture list rows in row order
        source_language: column holding the text found in the document
        access: DocumentAccess used to read element text

    Returns:
        (LayerMap, unmatched source texts in row order, not normalized)
    """
    # key -> 未使用要素インデックスのキュー (列挙順)
    pool: dict[str, deque[int]] = {}
    for element_index, element in enumerate(elements):
        text = access.get_text(element) if access is not None else element
        pool.setdefault(normalize_key(text), deque()).append(element_index)

    entries: list[int | None] = []
    unmatched: list[str] = []
    for row in rows:
        source_text = row.text(source_language)
        candidates = pool.get(normalize_key(source_text))
        if candidates:
            element_index = candidates.popleft()
            entries.append(element_index)
            logger.debug("row=%d matched element=%d text=%r", row.index, element_index, source_text)
        else:
            entries.append(NO_MATCH)
            unmatched.append(source_text)
            logger.debug("row=%d no match text=%r", row.index, source_text)

    return LayerMap(tuple(entries)), unmatched


def match_template(
    template: Path,
    rows: Sequence[Row],
    source_language: str,
    access: DocumentAccess,
) -> tuple[LayerMap, list[str], int]:
    """Open the template read-only, build the LayerMap, close without saving.

    Returns:
        (LayerMap, unmatched texts, number of text elements in the template)
    """
    document = access.open(template)
    try:
        elements = access.list_text_elements(document)
        layer_map, unmatched = build_layer_map(elements, rows, source_language, access)
    finally:
        access.close(document)
    logger.debug(
        "template=%s elements=%d rows=%d matched=%d",
        template.name,
        len(elements),
        len(rows),
        layer_map.matched_count,
    )
    return layer_map, unmatched, len(elements)
