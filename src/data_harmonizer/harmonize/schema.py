from __future__ import annotations

from collections.abc import Sequence

from ..models.data_type import SPLIT_ORDER, DataType
from ..models.processed_data import DataRow
from .classifier import classify_token
from .tokenizer import tokenize

"""Column type profiling and schema expansion.

Two pure steps that must run over every row before any row is re-assembled:

- ``profile_columns`` unions the classification of every token per column.
- ``build_expansion_map`` decides for each column whether it stays as is or is
  split into ``"<name> (Text)"``, ``"<name> (Number)"``, ``"<name> (Date)"``.
"""

__all__ = [
    "ExpansionMap",
    "profile_columns",
    "build_expansion_map",
    "expanded_headers",
]

# Original header -> ordered target header list (1..3 entries)
ExpansionMap = dict[str, list[str]]


def profile_columns(rows: Sequence[DataRow], original_headers: Sequence[str]) -> dict[str, frozenset[DataType]]:
    """Observed token types per column; the identity column is always {TEXT}."""
    profile: dict[str, frozenset[DataType]] = {}
    for index, header in enumerate(original_headers):
        if index == 0:
            profile[header] = frozenset({DataType.TEXT})
            continue
        types: set[DataType] = set()
        for row in rows:
            types.update(classify_token(t) for t in tokenize(row.get(header)))
        profile[header] = frozenset(types)
    return profile


def build_expansion_map(
    original_headers: Sequence[str], profile: dict[str, frozenset[DataType]]
) -> ExpansionMap:
    """Map each original header to its target header list.

    A column is only split when more than one type co-occurs; a column of
    nothing but dates stays a single plain column. UNKNOWN counts toward the
    decision but never gets a sub-column of its own.
    """
    expansion: ExpansionMap = {}
    for index, header in enumerate(original_headers):
        types = profile.get(header, frozenset())
        if index == 0 or len(types) <= 1:
            expansion[header] = [header]
        else:
            expansion[header] = [f"{header}{t.suffix}" for t in SPLIT_ORDER if t in types]
    return expansion


def expanded_headers(original_headers: Sequence[str], expansion: ExpansionMap) -> list[str]:
    headers: list[str] = []
    for header in original_headers:
        headers.extend(expansion[header])
    return headers
