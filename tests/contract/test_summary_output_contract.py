from __future__ import annotations

import re
from pathlib import Path

from src.cli import main as cli_main
from src.logging.init import reset_logging

"""SUMMARY 行フォーマット契約テスト"""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+variants=([0-9]+)\s+success=([0-9]+)\s+failed=([0-9]+)\s+skipped=([0-9]+)\s+"
    r"rows=([0-9]+)\s+matched=([0-9]+)\s+unmatched=([0-9]+)\s+edits=([0-9]+)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY variants=3 success=2 failed=1 skipped=0 rows=12 matched=11 unmatched=1 edits=22 elapsed_sec=0.84"
    m = SUMMARY_PATTERN.match(line)
    assert m, "SUMMARY line should match contract regex"
    assert int(m.group(1)) == int(m.group(2)) + int(m.group(3)) + int(m.group(4))


def test_cli_emits_exactly_one_summary_line(temp_workdir: Path, docx_project, capsys):
    reset_logging()

    code = cli_main([str(docx_project["template"]), str(docx_project["picture_list"]), "-y"])

    lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("SUMMARY")]
    assert code == 0
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m
    variants, success, failed, skipped, rows, matched, unmatched, edits = (int(g) for g in m.groups()[:8])
    assert (variants, success, failed, skipped) == (2, 2, 0, 0)
    assert (rows, matched, unmatched, edits) == (2, 2, 0, 4)
    assert matched + unmatched == rows


def test_every_output_line_is_labeled(temp_workdir: Path, docx_project, capsys):
    reset_logging()
    cli_main([str(docx_project["template"]), str(docx_project["picture_list"]), "-y"])
    out = capsys.readouterr().out
    for line in out.splitlines():
        assert line.split(" ", 1)[0] in {"INFO", "WARN", "ERROR", "SUMMARY"}, line
