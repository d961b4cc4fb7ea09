from __future__ import annotations

from dataclasses import dataclass

"""LanguageSelection model: source language plus ordered target languages."""

__all__ = [
    "LanguageSelection",
]


@dataclass(frozen=True)
class LanguageSelection:
    """Source language and ordered, distinct target languages.

    Built through ``src.services.languages.select_languages`` which enforces that
    the source never appears among the targets.
    """
    source: str
    targets: tuple[str, ...]
