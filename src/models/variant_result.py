from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from .layer_map import LayerMap

"""Result models for variant generation and a whole localization run.

VariantStatus follows the life cycle of one target-language copy:
success when the copy was edited and saved, failed on any I/O error,
skipped when an earlier failure aborted the batch.
"""

__all__ = [
    "VariantStatus",
    "VariantResult",
    "LocalizationResult",
]


class VariantStatus(Enum):
    """Outcome of one target-language variant."""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class VariantResult:
    """Outcome of generating one language variant."""
    language: str
    output_path: Path | None
    status: VariantStatus
    edits: int = 0  # 書き換えた要素数
    error: str | None = None  # 失敗理由 (operation と path を含む)
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is VariantStatus.SUCCESS


@dataclass(frozen=True)
class LocalizationResult:
    """Aggregated outcome of one localization run (one template, many languages)."""
    template: Path
    source_language: str
    row_count: int
    layer_map: LayerMap
    unmatched: list[str]
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    variants: list[VariantResult] = field(default_factory=list)

    @property
    def success_variants(self) -> int:
        return sum(1 for v in self.variants if v.status is VariantStatus.SUCCESS)

    @property
    def failed_variants(self) -> int:
        return sum(1 for v in self.variants if v.status is VariantStatus.FAILED)

    @property
    def skipped_variants(self) -> int:
        return sum(1 for v in self.variants if v.status is VariantStatus.SKIPPED)

    @property
    def total_edits(self) -> int:
        return sum(v.edits for v in self.variants)

    @property
    def output_paths(self) -> list[Path]:
        return [v.output_path for v in self.variants if v.ok and v.output_path is not None]
