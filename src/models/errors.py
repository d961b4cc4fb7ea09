from __future__ import annotations

from pathlib import Path

"""Exception taxonomy for the picture-list localizer.

All user-visible failures carry enough context (path, language, operation) for the
caller to fix the input without looking inside the document.
"""

__all__ = [
    "LocalizationError",
    "UnsupportedSourceError",
    "EmptyLanguageSetError",
    "UnknownLanguageError",
    "DocumentIOError",
    "RunAbortedError",
]


class LocalizationError(Exception):
    """Base class for localization errors."""


class UnsupportedSourceError(LocalizationError):
    """Raised when a document or table type is not recognized."""

    def __init__(self, path: Path | str, supported: list[str] | None = None) -> None:
        self.path = Path(path)
        self.supported = sorted(supported or [])
        msg = f"unsupported file type '{self.path.suffix or self.path.name}': {self.path}"
        if self.supported:
            msg += f" (supported: {', '.join(self.supported)})"
        super().__init__(msg)


class EmptyLanguageSetError(LocalizationError):
    """Raised when there are fewer than two languages or no targets selected."""


class UnknownLanguageError(LocalizationError):
    """Raised when a requested language is not a column of the picture list."""

    def __init__(self, language: str, available: list[str]) -> None:
        self.language = language
        self.available = list(available)
        super().__init__(f"unknown language '{language}' (available: {', '.join(self.available)})")


class DocumentIOError(LocalizationError):
    """Raised when copying, opening, saving or closing a document fails."""

    def __init__(
        self,
        operation: str,
        path: Path | str,
        cause: BaseException | None = None,
        language: str | None = None,
    ) -> None:
        self.operation = operation
        self.path = Path(path)
        self.cause = cause
        self.language = language
        detail = f": {cause}" if cause is not None else ""
        prefix = f"[{language}] " if language else ""
        super().__init__(f"{prefix}{operation} failed for {self.path}{detail}")


class RunAbortedError(LocalizationError):
    """Raised when the caller declines to continue after unmatched rows."""
