from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from ..harmonize.tokenizer import cell_text
from ..models.processed_data import DataRow
from ..models.pivot_result import PivotResult

__all__ = [
    "BLANK_LABEL",
    "coerce_number",
    "generate_pivot_data",
]

BLANK_LABEL = "(Blank)"
_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]+")
_LEADING_FLOAT_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


def coerce_number(value: Any) -> float:
    """Best-effort numeric value of a cell.

    Everything but digits, ``.`` and ``-`` is stripped and the longest numeric
    prefix is read (``"SAR 1,250.50"`` -> 1250.5). Unparseable input gives 0.
    """
    cleaned = _NON_NUMERIC_RE.sub("", cell_text(value, strip=False) or "0")
    match = _LEADING_FLOAT_RE.match(cleaned)
    if match is None:
        return 0.0
    return float(match.group(0))


def _pivot_key(value: Any) -> str:
    return cell_text(value, strip=False) or BLANK_LABEL


def generate_pivot_data(
    rows: Sequence[DataRow], row_field: str, col_field: str, value_field: str, agg_type: str
) -> PivotResult:
    """Aggregate ``rows`` into a row-key x column-key table.

    ``agg_type == "sum"`` adds the coerced value of ``value_field``; any other
    mode counts rows.
    """
    table: dict[str, dict[str, float]] = {}
    columns: set[str] = set()
    for row in rows:
        r_key = _pivot_key(row.get(row_field))
        c_key = _pivot_key(row.get(col_field))
        columns.add(c_key)
        cells = table.setdefault(r_key, {})
        amount = coerce_number(row.get(value_field)) if agg_type == "sum" else 1
        cells[c_key] = cells.get(c_key, 0) + amount
    return PivotResult(
        rows=[{"row": key, **cells} for key, cells in table.items()],
        columns=sorted(columns),
    )
