from __future__ import annotations

from collections.abc import Sequence

from ..models.processed_data import DataRow
from .tokenizer import cell_text

"""Record merger.

Rosters often spill one person's details over several physical rows: only the
first row carries the identifier (first column), the following rows leave it
blank and continue other cells. Those continuation rows are folded back into
the record they belong to.
"""

__all__ = [
    "merge_records",
]


def merge_records(raw_rows: Sequence[DataRow]) -> list[DataRow]:
    """Collapse continuation rows into the preceding record.

    The key set of the first row is the canonical column list. Continuation
    fragments are appended to the record's value with a newline separator.
    A leading row without identifier becomes a record of its own; when the
    first row has no columns at all, everything folds into that one record.
    """
    if not raw_rows:
        return []
    headers = list(raw_rows[0].keys())
    # 先頭行に列が無い場合、識別子は常に空として扱う
    identifier = headers[0] if headers else None
    merged: list[DataRow] = []
    current: DataRow | None = None
    for row in raw_rows:
        if identifier is not None and cell_text(row.get(identifier)):
            current = dict(row)
            merged.append(current)
        elif current is not None:
            for h in headers:
                fragment = cell_text(row.get(h))
                if not fragment:
                    continue
                existing = cell_text(current.get(h))
                current[h] = f"{existing}\n{fragment}" if existing else fragment
        else:
            current = dict(row)
            merged.append(current)
    return merged
