from __future__ import annotations

import re
from datetime import date
from typing import Any

"""Cell tokenizer.

Spreadsheet cells routinely pack several values into one cell (one per line,
comma/semicolon separated, or padded apart with runs of spaces) and mix in
Arabic-script labels. ``tokenize`` turns such a cell into its list of values.
"""

__all__ = [
    "ARABIC_RE",
    "TOKEN_SPLIT_RE",
    "cell_text",
    "tokenize",
]

ARABIC_RE = re.compile(r"[\u0600-\u06FF]")
TOKEN_SPLIT_RE = re.compile(r"[\n,;]|\s{2,}")


def cell_text(value: Any, *, strip: bool = True) -> str:
    """String form of a scalar cell value.

    None and NaN become ``""``; integral floats lose their ``.0`` (workbooks
    read through pandas turn integer columns with blanks into floats); dates
    render as ``DD/MM/YYYY``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float):
        if value != value:  # NaN
            return ""
        text = str(int(value)) if value.is_integer() else str(value)
    elif isinstance(value, date):
        text = value.strftime("%d/%m/%Y")
    else:
        text = str(value)
    return text.strip() if strip else text


def tokenize(value: Any) -> list[str]:
    """Split a raw cell value into trimmed, non-empty tokens (order and duplicates kept)."""
    if value is None:
        return []
    text = ARABIC_RE.sub("", cell_text(value, strip=False)).strip()
    if not text:
        return []
    return [t.strip() for t in TOKEN_SPLIT_RE.split(text) if t.strip()]
