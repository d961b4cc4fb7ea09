"""Document access implementations, one per document kind."""

from .base import DocumentAccess, OpenDocument
from .docx_access import DocxDocumentAccess
from .factory import get_document_access, supported_extensions
from .pptx_access import PptxDocumentAccess
from .svg_access import SvgDocumentAccess

__all__ = [
    "DocumentAccess",
    "OpenDocument",
    "DocxDocumentAccess",
    "PptxDocumentAccess",
    "SvgDocumentAccess",
    "get_document_access",
    "supported_extensions",
]
