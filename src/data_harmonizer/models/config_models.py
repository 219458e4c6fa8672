from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the harmonizer CLI.

These are built by src/data_harmonizer/config/loader.py after the YAML file has
passed schema validation.
"""

__all__ = [
    "PivotConfig",
    "HarmonizerConfig",
]


@dataclass(frozen=True)
class PivotConfig:
    """Field selection for the pivot table printed at the end of a run."""
    row_field: str
    column_field: str
    value_field: str
    agg_type: str = "count"  # sum | count | avg (avg is counted like count)


@dataclass(frozen=True)
class HarmonizerConfig:
    """Root configuration object for a harmonize run."""
    source_directory: str  # Directory to scan for .xlsx/.csv files
    sheet_name: str | None = None  # None -> first sheet of every workbook
    keep_na_strings: list[str] | None = None  # pandas NaN 変換から除外する文字列
    timezone: str = "UTC"  # Zone used to decide "today" for expiry metrics
    forecast_months: int = 6
    pivot: PivotConfig | None = None
