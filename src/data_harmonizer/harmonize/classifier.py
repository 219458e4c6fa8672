from __future__ import annotations

import re

from ..models.data_type import DataType
from .dates import try_parse_date

__all__ = [
    "classify_token",
]

_LONG_DIGITS_RE = re.compile(r"[0-9]{8,}")
_LETTER_RE = re.compile(r"[a-zA-Z]")
_NUMERIC_RE = re.compile(r"[0-9]+(\.[0-9]+)?")


def classify_token(token: str) -> DataType:
    """Classify one token; the first matching rule wins.

    1. parses as a date -> DATE
    2. eight or more digits (passport / card numbers) -> NUMBER
    3. contains an ASCII letter -> TEXT
    4. plain integer or decimal -> NUMBER
    5. anything else -> UNKNOWN
    """
    if try_parse_date(token):
        return DataType.DATE
    if _LONG_DIGITS_RE.fullmatch(token):
        return DataType.NUMBER
    if _LETTER_RE.search(token):
        return DataType.TEXT
    if _NUMERIC_RE.fullmatch(token):
        return DataType.NUMBER
    return DataType.UNKNOWN
