from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from src.models.config_models import DEFAULT_ROW_NUMBER_COLUMN
from src.models.errors import UnsupportedSourceError
from src.models.row import Row

"""Picture list reader.

The first worksheet row is the header: one column per language, plus the optional
reserved row-number column. Every following non-empty row becomes a Row whose
cells are kept as strings exactly as written (whitespace included; the matcher
normalizes it away when comparing).
"""

__all__ = [
    "PictureList",
    "PictureListError",
    "SUPPORTED_EXTENSIONS",
    "list_sheet_names",
    "read_picture_list",
]

EXCEL_EXTENSIONS = {".xlsx", ".xlsm"}
CSV_EXTENSIONS = {".csv"}
SUPPORTED_EXTENSIONS = sorted(EXCEL_EXTENSIONS | CSV_EXTENSIONS)

# CSV にはシート概念がないので擬似シート名を使う
CSV_SHEET_NAME = "csv"


class PictureListError(Exception):
    """Raised when the picture list cannot be read or has no usable header/rows."""


@dataclass(frozen=True)
class PictureList:
    sheet_name: str
    columns: list[str]  # language columns in sheet order (reserved column excluded)
    rows: list[Row]


def _check_supported(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in EXCEL_EXTENSIONS:
        return "excel"
    if suffix in CSV_EXTENSIONS:
        return "csv"
    raise UnsupportedSourceError(path, SUPPORTED_EXTENSIONS)


def list_sheet_names(path: Path) -> list[str]:
    """Return the worksheet names of a picture list (a single pseudo sheet for CSV)."""
    kind = _check_supported(path)
    if not path.exists():
        raise PictureListError(f"picture list not found: {path}")
    if kind == "csv":
        return [CSV_SHEET_NAME]
    try:
        with pd.ExcelFile(path) as xls:
            return [str(name) for name in xls.sheet_names]
    except (OSError, ValueError) as e:
        raise PictureListError(f"failed to open picture list {path.name}: {e}") from e


def _read_raw(path: Path, kind: str, sheet: str | None) -> tuple[str, pd.DataFrame]:
    # 生読み: 全セル文字列、NA 変換なし (空セルは '')
    options: dict[str, Any] = {"header": None, "dtype": str, "keep_default_na": False, "na_filter": False}
    try:
        if kind == "csv":
            return CSV_SHEET_NAME, pd.read_csv(path, encoding="utf-8-sig", **options)
        with pd.ExcelFile(path) as xls:
            names = [str(n) for n in xls.sheet_names]
            if not names:
                raise PictureListError(f"picture list {path.name} has no worksheets")
            name = names[0] if sheet is None else sheet
            if name not in names:
                raise PictureListError(
                    f"worksheet '{name}' not found in {path.name} (available: {', '.join(names)})"
                )
            return name, xls.parse(name, **options)
    except pd.errors.EmptyDataError as e:
        raise PictureListError(f"picture list {path.name} is empty") from e
    except (OSError, ValueError) as e:
        raise PictureListError(f"failed to read picture list {path.name}: {e}") from e


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str) and pd.isna(value):
        return ""
    return str(value)


def normalize_table(df: pd.DataFrame, sheet_name: str, row_number_column: str = DEFAULT_ROW_NUMBER_COLUMN) -> PictureList:
    """Turn a raw (header=None) DataFrame into a PictureList.

    Steps:
    1. First row is the header; names are stripped, blank names are ignored
    2. The reserved row-number column is dropped
    3. Rows whose language cells are all blank are skipped
    4. Row.index is the position among kept rows, Row.line the worksheet row
    """
    if df.shape[0] < 1:
        raise PictureListError(f"sheet '{sheet_name}' has no header row")

    header = [_cell(v).strip() for v in df.iloc[0].tolist()]
    positions: list[tuple[int, str]] = []
    seen: set[str] = set()
    for pos, name in enumerate(header):
        if not name or name == row_number_column:
            continue
        if name in seen:
            raise PictureListError(f"sheet '{sheet_name}' has duplicate column '{name}'")
        seen.add(name)
        positions.append((pos, name))
    if not positions:
        raise PictureListError(f"sheet '{sheet_name}' has no language columns")

    rows: list[Row] = []
    for offset, raw in enumerate(df.iloc[1:].itertuples(index=False, name=None)):
        values = {name: _cell(raw[pos]) if pos < len(raw) else "" for pos, name in positions}
        if all(not v.strip() for v in values.values()):
            continue
        rows.append(Row(index=len(rows), values=values, line=offset + 2))

    return PictureList(sheet_name=sheet_name, columns=[name for _, name in positions], rows=rows)


def read_picture_list(
    path: Path,
    sheet: str | None = None,
    row_number_column: str = DEFAULT_ROW_NUMBER_COLUMN,
) -> PictureList:
    """Read a picture list file into Rows.

    Parameters
    ----------
    path: .xlsx / .xlsm / .csv file
    sheet: worksheet name (None -> first sheet; ignored for CSV)
    row_number_column: reserved non-language column to exclude

    Raises
    ------
    UnsupportedSourceError: unknown file extension (checked before any I/O)
    PictureListError: missing file/sheet, no header or no language columns
    """
    kind = _check_supported(path)
    if not path.exists():
        raise PictureListError(f"picture list not found: {path}")
    sheet_name, df = _read_raw(path, kind, sheet)
    return normalize_table(df, sheet_name, row_number_column=row_number_column)
