from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

"""LayerMap: row index -> element index mapping produced by the matcher.

Built once per localization run against the template document and reused,
read-only, for every target-language variant.
"""

__all__ = [
    "NO_MATCH",
    "LayerMap",
]

# 一致なし
NO_MATCH = None


@dataclass(frozen=True)
class LayerMap:
    """Sequence indexed by row index holding an element index or NO_MATCH.

    Non-sentinel entries are unique: no two rows map to the same element.
    The matcher guarantees this while building the tuple.
    """
    entries: tuple[int | None, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, row_index: int) -> int | None:
        return self.entries[row_index]

    def __iter__(self) -> Iterator[int | None]:
        return iter(self.entries)

    def matched_items(self) -> Iterator[tuple[int, int]]:
        """Yield (row_index, element_index) for every matched row, in row order."""
        for row_index, element_index in enumerate(self.entries):
            if element_index is not NO_MATCH:
                yield row_index, element_index

    def unmatched_indices(self) -> list[int]:
        return [i for i, e in enumerate(self.entries) if e is NO_MATCH]

    @property
    def matched_count(self) -> int:
        return sum(1 for e in self.entries if e is not NO_MATCH)

    @property
    def unmatched_count(self) -> int:
        return len(self.entries) - self.matched_count
