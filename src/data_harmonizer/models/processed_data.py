from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Harmonized dataset models.

ProcessedData is the output of the harmonizer: the expanded header list, the
re-assembled rows and the headers as they were before expansion.
CompanyDataset names one harmonized upload so several can be combined.
"""

__all__ = [
    "DataRow",
    "ProcessedData",
    "CompanyDataset",
]

# Column name -> scalar cell value (str / int / float / None)
DataRow = dict[str, Any]


@dataclass(frozen=True)
class ProcessedData:
    """Result of harmonizing one sheet.

    ``headers`` is the concatenation, in original column order, of every
    column's expansion list; each row is keyed by ``headers``.
    """
    headers: list[str] = field(default_factory=list)
    rows: list[DataRow] = field(default_factory=list)
    original_headers: list[str] = field(default_factory=list)

    @property
    def split_columns(self) -> list[str]:
        """Original headers that were split into typed sub-columns."""
        header_set = set(self.headers)
        return [h for h in self.original_headers if h not in header_set]


@dataclass(frozen=True)
class CompanyDataset:
    id: str
    name: str
    data: ProcessedData
