from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from src.excel.reader import PictureListError, list_sheet_names, normalize_table, read_picture_list
from src.models.errors import UnsupportedSourceError
from tests.helpers import make_picture_list_xlsx


def _make_excel(tmp_path: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
    p = tmp_path / name
    with pd.ExcelWriter(p) as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return p


def test_read_picture_list_success(temp_workdir: Path):
    path = make_picture_list_xlsx(
        temp_workdir / "strings.xlsx",
        [
            {"en": "Hello", "fr": "Bonjour"},
            {"en": " Bye ", "fr": "Au revoir"},
        ],
    )
    data = read_picture_list(path)

    assert data.sheet_name == "Sheet1"
    assert data.columns == ["en", "fr"]
    assert [r.index for r in data.rows] == [0, 1]
    assert data.rows[0].values == {"en": "Hello", "fr": "Bonjour"}
    # セル値は空白込みでそのまま保持
    assert data.rows[1].text("en") == " Bye "
    assert data.rows[1].spreadsheet_row == 3


def test_reserved_row_number_column_is_excluded(temp_workdir: Path):
    path = _make_excel(
        temp_workdir, "rownum.xlsx",
        {"Sheet1": [["__rowNum__", "en", "fr"], ["1", "Hello", "Bonjour"]]},
    )
    data = read_picture_list(path)
    assert data.columns == ["en", "fr"]
    assert data.rows[0].values == {"en": "Hello", "fr": "Bonjour"}

    custom = read_picture_list(path, row_number_column="en")
    assert custom.columns == ["__rowNum__", "fr"]


def test_blank_rows_are_skipped_and_indices_stay_dense(temp_workdir: Path):
    path = _make_excel(
        temp_workdir, "blank.xlsx",
        {"Sheet1": [["en", "fr"], ["Hello", "Bonjour"], [None, None], ["Bye", "Au revoir"]]},
    )
    data = read_picture_list(path)

    assert [r.text("en") for r in data.rows] == ["Hello", "Bye"]
    assert [r.index for r in data.rows] == [0, 1]


def test_empty_cells_become_empty_strings(temp_workdir: Path):
    path = _make_excel(
        temp_workdir, "holes.xlsx",
        {"Sheet1": [["en", "fr", "de"], ["Hello", None, "Hallo"]]},
    )
    data = read_picture_list(path)
    assert data.rows[0].values == {"en": "Hello", "fr": "", "de": "Hallo"}


def test_numbers_are_read_as_text(temp_workdir: Path):
    path = _make_excel(temp_workdir, "numbers.xlsx", {"Sheet1": [["en", "fr"], ["2024", 2024]]})
    data = read_picture_list(path)
    assert data.rows[0].text("fr") == "2024"


def test_select_sheet_by_name(temp_workdir: Path):
    path = _make_excel(
        temp_workdir, "multi.xlsx",
        {
            "A": [["en", "fr"], ["one", "un"]],
            "B": [["en", "de"], ["two", "zwei"]],
        },
    )
    assert list_sheet_names(path) == ["A", "B"]
    data = read_picture_list(path, sheet="B")
    assert data.sheet_name == "B"
    assert data.columns == ["en", "de"]

    with pytest.raises(PictureListError, match="worksheet 'C' not found"):
        read_picture_list(path, sheet="C")


def test_read_csv_picture_list(temp_workdir: Path):
    path = temp_workdir / "strings.csv"
    path.write_text("en,fr\nHello,Bonjour\n,\nBye,Au revoir\n", encoding="utf-8")

    data = read_picture_list(path)

    assert data.sheet_name == "csv"
    assert data.columns == ["en", "fr"]
    assert [r.text("fr") for r in data.rows] == ["Bonjour", "Au revoir"]


def test_unsupported_extension(temp_workdir: Path):
    path = temp_workdir / "strings.ods"
    path.write_bytes(b"")
    with pytest.raises(UnsupportedSourceError, match=".ods"):
        read_picture_list(path)


def test_missing_file(temp_workdir: Path):
    with pytest.raises(PictureListError, match="not found"):
        read_picture_list(temp_workdir / "nope.xlsx")


def test_normalize_table_rejects_duplicate_and_missing_columns():
    with pytest.raises(PictureListError, match="duplicate column 'en'"):
        normalize_table(pd.DataFrame([["en", "en"], ["a", "b"]]), "S")
    with pytest.raises(PictureListError, match="no language columns"):
        normalize_table(pd.DataFrame([["", ""], ["a", "b"]]), "S")
    with pytest.raises(PictureListError, match="no header row"):
        normalize_table(pd.DataFrame(), "S")
