from __future__ import annotations

from enum import Enum

"""DataType enum for token classification.

Every token found in a cell is classified into exactly one of these types.
The ``suffix`` property gives the sub-column marker used when a column is split.
"""

__all__ = [
    "DataType",
    "SPLIT_ORDER",
]


class DataType(Enum):
    """Classification of a single cell token.

    - DATE: calendar date or spreadsheet serial date
    - NUMBER: plain integer/decimal or long ID-like digit run
    - TEXT: anything carrying an ASCII letter
    - UNKNOWN: none of the above (counts toward splitting, never gets a sub-column)
    """
    DATE = "Date"
    NUMBER = "Number"
    TEXT = "Text"
    UNKNOWN = "Unknown"

    @property
    def suffix(self) -> str:
        return f" ({self.value})"


# Sub-column order of a split column
SPLIT_ORDER: tuple[DataType, ...] = (DataType.TEXT, DataType.NUMBER, DataType.DATE)
