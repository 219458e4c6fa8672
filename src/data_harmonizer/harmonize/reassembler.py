from __future__ import annotations

from collections.abc import Sequence

from ..models.data_type import DataType
from ..models.processed_data import DataRow
from .classifier import classify_token
from .dates import try_parse_date
from .schema import ExpansionMap
from .tokenizer import tokenize

__all__ = [
    "reassemble_row",
]

VALUE_SEPARATOR = "; "


def reassemble_row(row: DataRow, original_headers: Sequence[str], expansion: ExpansionMap) -> DataRow:
    """Build a fresh row keyed by the expanded headers.

    Unsplit columns get their tokens joined by a single space. In a split
    column every token is routed on its own classification; tokens whose
    sub-column does not exist (UNKNOWN included) are dropped, and tokens
    sharing a sub-column are joined with ``"; "``.
    """
    out: DataRow = {}
    for header in original_headers:
        tokens = tokenize(row.get(header))
        targets = expansion[header]
        if len(targets) == 1:
            out[targets[0]] = " ".join(tokens)
            continue
        for target in targets:
            out[target] = ""
        for token in tokens:
            kind = classify_token(token)
            value = token
            if kind is DataType.DATE:
                value = try_parse_date(token) or token
            target = f"{header}{kind.suffix}"
            if target not in targets:
                continue
            existing = out[target]
            out[target] = f"{existing}{VALUE_SEPARATOR}{value}" if existing else value
    return out
