from __future__ import annotations

from dataclasses import dataclass

"""Row model for the picture list.

A Row is one data line of the picture list worksheet: language name -> cell text.
The reserved row-number column never appears in ``values``.
"""

__all__ = [
    "Row",
]


@dataclass(frozen=True)
class Row:
    """One picture list entry.

    ``index`` is the 0-based position in the parsed table; it is also the position
    of the row's entry in the LayerMap.
    """
    index: int  # 0-based, stable
    values: dict[str, str]  # language -> text (column order preserved)
    line: int | None = None  # worksheet row number (1-based), if known

    @property
    def languages(self) -> list[str]:
        return list(self.values.keys())

    def text(self, language: str) -> str:
        """Return the cell for ``language`` ('' when the cell is missing)."""
        value = self.values.get(language)
        return "" if value is None else value

    @property
    def spreadsheet_row(self) -> int:
        """1-based worksheet row number; header is row 1."""
        if self.line is not None:
            return self.line
        return self.index + 2
