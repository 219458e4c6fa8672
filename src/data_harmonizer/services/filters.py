from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from ..harmonize.tokenizer import cell_text
from ..models.pivot_result import FilterConfig
from ..models.processed_data import CompanyDataset, DataRow
from .metrics import expiry_date
from .pivot import coerce_number

"""Row selection helpers used by table views and drill-downs.

None of these copy rows: the returned lists hold the input row objects.
"""

__all__ = [
    "combine_datasets",
    "search_rows",
    "filter_by_date_range",
    "apply_filters",
    "UnknownOperatorError",
]


class UnknownOperatorError(ValueError):
    """Raised when a FilterConfig names an operator that does not exist."""


def combine_datasets(datasets: Iterable[CompanyDataset]) -> tuple[list[str], list[DataRow]]:
    """Master view: union of headers (first-seen order) and all rows concatenated."""
    headers: dict[str, None] = {}
    rows: list[DataRow] = []
    for ds in datasets:
        for h in ds.data.headers:
            headers.setdefault(h, None)
        rows.extend(ds.data.rows)
    return list(headers), rows


def search_rows(rows: Sequence[DataRow], term: str) -> list[DataRow]:
    """Rows where any cell contains ``term`` (case-insensitive)."""
    if not term:
        return list(rows)
    needle = term.lower()
    return [r for r in rows if any(needle in cell_text(v, strip=False).lower() for v in r.values())]


def filter_by_date_range(rows: Sequence[DataRow], start: date | None = None, end: date | None = None) -> list[DataRow]:
    """Keep rows whose expiry date lies within ``[start, end]``.

    Rows without a ``(Date)`` column or with an unparseable date are kept.
    """
    if start is None and end is None:
        return list(rows)
    kept: list[DataRow] = []
    for row in rows:
        expiry = expiry_date(row)
        if expiry is not None:
            if start is not None and expiry < start:
                continue
            if end is not None and expiry > end:
                continue
        kept.append(row)
    return kept


def _matches(row: DataRow, flt: FilterConfig) -> bool:
    cell = cell_text(row.get(flt.column))
    if flt.operator == "equals":
        return cell.lower() == flt.value.strip().lower()
    if flt.operator == "contains":
        return flt.value.lower() in cell.lower()
    if flt.operator == "greaterThan":
        return coerce_number(cell) > coerce_number(flt.value)
    if flt.operator == "lessThan":
        return coerce_number(cell) < coerce_number(flt.value)
    raise UnknownOperatorError(f"unknown filter operator: {flt.operator}")


def apply_filters(rows: Sequence[DataRow], filters: Sequence[FilterConfig]) -> list[DataRow]:
    """Rows satisfying every filter."""
    return [r for r in rows if all(_matches(r, f) for f in filters)]
