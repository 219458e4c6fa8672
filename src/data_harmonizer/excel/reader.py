from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

"""Sheet -> RawRow adapter for the CLI.

The harmonizer only needs a sequence of ``{column name: scalar}`` rows. This
module produces them from a workbook sheet or a CSV file with pandas: the
first row is the header row, blank cells become None and fully blank rows are
skipped (continuation rows always carry at least one value).
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "SheetReadError",
    "SheetNotFoundError",
    "read_sheet_frame",
    "frame_to_rows",
    "read_sheet_rows",
]

SUPPORTED_SUFFIXES = (".xlsx", ".csv")


class SheetReadError(Exception):
    """Raised when a file cannot be parsed into a sheet."""

class SheetNotFoundError(SheetReadError):
    """Raised when the requested sheet does not exist in the workbook."""


def _na_options(keep_na_strings: list[str] | None) -> dict[str, Any]:
    # pandas 既定の NA 文字列集合から keep_na_strings を除外
    if not keep_na_strings:
        return {"keep_default_na": True, "na_values": None}
    import pandas._libs.parsers as parsers

    custom_na = parsers.STR_NA_VALUES - set(keep_na_strings)
    return {"keep_default_na": False, "na_values": list(custom_na)}


def read_sheet_frame(
    path: Path, sheet_name: str | None = None, keep_na_strings: list[str] | None = None
) -> pd.DataFrame:
    """Read one sheet (first sheet when ``sheet_name`` is None) as a DataFrame."""
    na = _na_options(keep_na_strings)
    try:
        if path.suffix.lower() == ".csv":
            return pd.read_csv(path, dtype=object, **na)
        xls = pd.ExcelFile(path)
        names = [str(n) for n in xls.sheet_names]
        if sheet_name is None:
            target: str | int = 0
        elif sheet_name in names:
            target = sheet_name
        else:
            raise SheetNotFoundError(f"sheet '{sheet_name}' not found in {path.name} (sheets: {names})")
        return xls.parse(target, **na)
    except SheetReadError:
        raise
    except Exception as e:
        raise SheetReadError(f"cannot read {path.name}: {e}") from e


def frame_to_rows(df: pd.DataFrame) -> list[dict[str, Any]]:
    columns = [str(c).strip() for c in df.columns]
    rows: list[dict[str, Any]] = []
    for raw in df.itertuples(index=False, name=None):
        values = [None if pd.isna(v) else v for v in raw]
        if all(v is None or (isinstance(v, str) and not v.strip()) for v in values):
            continue
        rows.append(dict(zip(columns, values, strict=False)))
    return rows


def read_sheet_rows(
    path: Path, sheet_name: str | None = None, keep_na_strings: list[str] | None = None
) -> list[dict[str, Any]]:
    """Parse ``path`` into RawRows ready for ``harmonize_data``."""
    return frame_to_rows(read_sheet_frame(path, sheet_name, keep_na_strings))
