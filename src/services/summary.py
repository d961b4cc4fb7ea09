from __future__ import annotations

from ..models.variant_result import LocalizationResult

"""SUMMARY line rendering for a localization run."""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # 指数表記を避ける
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: LocalizationResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY variants={n} success={s} failed={f} skipped={k} rows={rows}
    matched={m} unmatched={u} edits={e} elapsed_sec={t}
    """
    return (
        f"SUMMARY variants={len(result.variants)} "
        f"success={result.success_variants} "
        f"failed={result.failed_variants} "
        f"skipped={result.skipped_variants} "
        f"rows={result.row_count} "
        f"matched={result.layer_map.matched_count} "
        f"unmatched={result.layer_map.unmatched_count} "
        f"edits={result.total_edits} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
