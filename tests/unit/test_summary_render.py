from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from src.models.layer_map import NO_MATCH, LayerMap
from src.models.variant_result import LocalizationResult, VariantResult, VariantStatus
from src.services.summary import render_summary_line


def _result(elapsed: float, variants: list[VariantResult]) -> LocalizationResult:
    now = datetime.now(UTC)
    return LocalizationResult(
        template=Path("poster.docx"),
        source_language="en",
        row_count=3,
        layer_map=LayerMap((0, NO_MATCH, 1)),
        unmatched=["Missing"],
        start_time=now,
        end_time=now,
        elapsed_seconds=elapsed,
        variants=variants,
    )


def test_render_summary_line():
    line = render_summary_line(
        _result(
            2.0,
            [
                VariantResult("fr", Path("poster_fr.docx"), VariantStatus.SUCCESS, edits=2),
                VariantResult("de", Path("poster_de.docx"), VariantStatus.SUCCESS, edits=2),
            ],
        )
    )
    assert line == (
        "SUMMARY variants=2 success=2 failed=0 skipped=0 rows=3 matched=2 unmatched=1 edits=4 elapsed_sec=2"
    )


def test_render_summary_line_failures_and_fractional_seconds():
    line = render_summary_line(
        _result(
            1.23456,
            [
                VariantResult("fr", Path("poster_fr.docx"), VariantStatus.FAILED, error="x"),
                VariantResult("de", None, VariantStatus.SKIPPED),
            ],
        )
    )
    assert "variants=2 success=0 failed=1 skipped=1" in line
    assert line.endswith("elapsed_sec=1.235")


def test_render_summary_line_tiny_and_zero_elapsed():
    assert render_summary_line(_result(0.0, [])).endswith("elapsed_sec=0")
    assert render_summary_line(_result(0.000123, [])).endswith("elapsed_sec=0.000123")
