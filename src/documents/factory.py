from __future__ import annotations

from pathlib import Path

from src.models.errors import UnsupportedSourceError

from .base import DocumentAccess
from .docx_access import DocxDocumentAccess
from .pptx_access import PptxDocumentAccess
from .svg_access import SvgDocumentAccess

"""Select the DocumentAccess implementation for a template, once per run."""

_ACCESS_TYPES: tuple[type[DocumentAccess], ...] = (
    DocxDocumentAccess,
    PptxDocumentAccess,
    SvgDocumentAccess,
)


def supported_extensions() -> list[str]:
    return sorted(ext for access_type in _ACCESS_TYPES for ext in access_type.extensions)


def get_document_access(path: Path) -> DocumentAccess:
    """Return the DocumentAccess for ``path`` based on its extension.

    Raises:
        UnsupportedSourceError: no implementation handles the extension
    """
    for access_type in _ACCESS_TYPES:
        access = access_type()
        if access.supports(path):
            return access
    raise UnsupportedSourceError(path, supported_extensions())
