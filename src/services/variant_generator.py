from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..documents.base import DocumentAccess, OpenDocument
from ..models.errors import DocumentIOError
from ..models.layer_map import LayerMap
from ..models.row import Row
from ..models.variant_result import VariantResult, VariantStatus

"""Variant generation: one fresh, edited copy of the template per language.

The template itself is never opened for writing. Each variant is copied, opened,
edited through the precomputed LayerMap, saved and closed before the next one
starts. LayerMap positions are only valid when the copy enumerates the same
elements in the same order as the template did.
"""

__all__ = [
    "target_filename",
    "target_path",
    "generate_variant",
]

logger = logging.getLogger(__name__)


def target_filename(name: str, language: str) -> str:
    """Insert ``_<language>`` before the final extension segment.

    >>> target_filename("poster.psd", "fr")
    'poster_fr.psd'
    >>> target_filename("readme", "es")
    'readme_es'
    """
    if "." not in name:
        return f"{name}_{language}"
    stem, _, ext = name.rpartition(".")
    return f"{stem}_{language}.{ext}"


def target_path(template: Path, language: str, output_directory: Path | None = None) -> Path:
    directory = output_directory if output_directory is not None else template.parent
    return directory / target_filename(template.name, language)


def _apply_layer_map(
    access: DocumentAccess,
    document: OpenDocument,
    elements: Sequence[Any],
    language: str,
    rows: Sequence[Row],
    layer_map: LayerMap,
    skip_empty_targets: bool,
) -> int:
    edits = 0
    for row_index, element_index in layer_map.matched_items():
        row = rows[row_index]
        text = row.text(language)
        if skip_empty_targets and text == "":
            logger.warning(
                "row %d has no '%s' text; keeping original element text", row.spreadsheet_row, language
            )
            continue
        try:
            access.set_text(elements[element_index], text)
        except IndexError as e:
            raise DocumentIOError(
                "edit",
                document.path,
                ValueError(f"element {element_index} not found ({len(elements)} elements)"),
                language,
            ) from e
        edits += 1
    return edits


def generate_variant(
    template: Path,
    target_language: str,
    rows: Sequence[Row],
    layer_map: LayerMap,
    access: DocumentAccess,
    output_directory: Path | None = None,
    skip_empty_targets: bool = False,
) -> VariantResult:
    """Produce the ``target_language`` copy of ``template``.

    Never raises for document I/O: failures come back as a FAILED VariantResult
    whose ``error`` names the language and the failing operation.
    """
    started = time.perf_counter()
    output = target_path(template, target_language, output_directory)
    if output.resolve() == template.resolve():
        return VariantResult(
            language=target_language,
            output_path=output,
            status=VariantStatus.FAILED,
            error=f"[{target_language}] refusing to overwrite template {template}",
        )

    document: OpenDocument | None = None
    edits = 0
    operation = "copy"
    try:
        if output.exists():
            logger.info("overwriting existing file: %s", output)
        access.copy_document(template, output)
        operation = "open"
        document = access.open(output)
        operation = "list"
        elements = access.list_text_elements(document)
        operation = "edit"
        edits = _apply_layer_map(
            access, document, elements, target_language, rows, layer_map, skip_empty_targets
        )
        operation = "save"
        access.save(document)
    except DocumentIOError as e:
        if e.language is None:
            e.language = target_language
        message = f"[{target_language}] {e.operation} failed for {e.path}: {e.cause}"
        logger.debug("variant %s failed", target_language, exc_info=True)
        return VariantResult(
            language=target_language,
            output_path=output,
            status=VariantStatus.FAILED,
            edits=0,
            error=message,
            elapsed_seconds=time.perf_counter() - started,
        )
    except Exception as e:
        logger.debug("variant %s failed", target_language, exc_info=True)
        return VariantResult(
            language=target_language,
            output_path=output,
            status=VariantStatus.FAILED,
            edits=0,
            error=f"[{target_language}] {operation} failed for {output}: {type(e).__name__}: {e}",
            elapsed_seconds=time.perf_counter() - started,
        )
    finally:
        if document is not None and not document.closed:
            access.close(document)

    logger.debug("variant %s saved edits=%d path=%s", target_language, edits, output)
    return VariantResult(
        language=target_language,
        output_path=output,
        status=VariantStatus.SUCCESS,
        edits=edits,
        elapsed_seconds=time.perf_counter() - started,
    )
