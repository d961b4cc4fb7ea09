from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.models.errors import DocumentIOError

"""Document access interface.

One DocumentAccess implementation exists per document kind and is selected once
per run (see factory.get_document_access). The matcher and the variant generator
only talk to documents through this interface; they never inspect native objects.

Element references returned by ``list_text_elements`` are opaque. Their order must
be stable for an unmodified document, because the LayerMap stores positions.
"""

__all__ = [
    "DocumentAccess",
    "OpenDocument",
]


@dataclass
class OpenDocument:
    """Handle for an opened document: its path plus the library's native object."""
    path: Path
    native: Any
    closed: bool = False
    meta: dict[str, Any] = field(default_factory=dict)


class DocumentAccess(ABC):
    """Read/write access to the text-bearing elements of one document kind."""

    kind: str = ""
    extensions: tuple[str, ...] = ()

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def copy_document(self, source: Path, destination: Path) -> Path:
        """Copy ``source`` to ``destination`` (overwriting) and return the new path."""
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
        except OSError as e:
            raise DocumentIOError("copy", destination, e) from e
        return destination

    def open(self, path: Path) -> OpenDocument:
        try:
            native = self._load(path)
        except Exception as e:
            raise DocumentIOError("open", path, e) from e
        return OpenDocument(path=path, native=native)

    def save(self, document: OpenDocument) -> None:
        if document.closed:
            raise DocumentIOError("save", document.path, ValueError("document is closed"))
        try:
            self._dump(document)
        except Exception as e:
            raise DocumentIOError("save", document.path, e) from e

    def close(self, document: OpenDocument) -> None:
        # ライブラリ側に close 概念はないので参照を手放すだけ
        document.native = None
        document.closed = True

    def list_text_elements(self, document: OpenDocument) -> list[Any]:
        if document.closed:
            raise DocumentIOError("list", document.path, ValueError("document is closed"))
        return list(self._iter_text_elements(document.native))

    @abstractmethod
    def _load(self, path: Path) -> Any:
        """Parse ``path`` into the library's native document object."""

    @abstractmethod
    def _dump(self, document: OpenDocument) -> None:
        """Write the native document back to ``document.path``."""

    @abstractmethod
    def _iter_text_elements(self, native: Any) -> Any:
        """Yield text-bearing elements in document order."""

    @abstractmethod
    def get_text(self, element: Any) -> str:
        ...

    @abstractmethod
    def set_text(self, element: Any, text: str) -> None:
        ...
