from __future__ import annotations

import re
from datetime import date, datetime, timedelta

"""Date normalization.

Dates arrive either as delimited text (``5/1/2024``, ``05-01-24``,
``2024-01-05``) or as spreadsheet serial numbers (``45000``). Both are
normalized to ``DD/MM/YYYY``, day-first unless the first segment is a
four digit year.
"""

__all__ = [
    "DAY_FIRST_PATTERN",
    "YEAR_FIRST_PATTERN",
    "SERIAL_MIN",
    "SERIAL_MAX",
    "format_date",
    "try_parse_date",
    "parse_display_date",
]

# day-first is anchored at the start only, so "12/05/2023 10:00" still reads as a date
DAY_FIRST_PATTERN = re.compile(r"[0-9]{1,2}[/-][0-9]{1,2}[/-][0-9]{2,4}")
YEAR_FIRST_PATTERN = re.compile(r"[0-9]{4}[/-][0-9]{1,2}[/-][0-9]{1,2}")
_DELIMITER_RE = re.compile(r"[/-]")
# more than nine significant digits can never form a valid date part
_LEADING_DIGITS_RE = re.compile(r"0*([0-9]{1,9})")
_PLAIN_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Plausible serial-date window (exclusive); serial 25569 is 1970-01-01
SERIAL_MIN = 40000
SERIAL_MAX = 60000
_SERIAL_UNIX_OFFSET = 25569
_UNIX_EPOCH = datetime(1970, 1, 1)


def format_date(value: date) -> str:
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def _build_date(year: int, month: int, day: int) -> date | None:
    # 2 桁年は 1900 年代として扱う (元データの慣習)
    if 0 <= year < 100:
        year += 1900
    try:
        return date(year, month, day)
    except (ValueError, OverflowError):
        return None


def _leading_int(segment: str) -> int | None:
    m = _LEADING_DIGITS_RE.match(segment.strip())
    return int(m.group(1)) if m else None


def _from_segments(token: str) -> date | None:
    parts = _DELIMITER_RE.split(token)[:3]
    if len(parts[0]) == 4:
        y, m, d = parts
    else:
        d, m, y = parts
    values = [_leading_int(p) for p in (y, m, d)]
    if None in values:
        return None
    return _build_date(*values)


def _from_serial(token: str) -> date | None:
    if not _PLAIN_NUMBER_RE.fullmatch(token):
        return None
    serial = float(token)
    if not SERIAL_MIN < serial < SERIAL_MAX:
        return None
    seconds = round((serial - _SERIAL_UNIX_OFFSET) * 86400)
    return (_UNIX_EPOCH + timedelta(seconds=seconds)).date()


def try_parse_date(token: str) -> str | None:
    """Normalize ``token`` to ``DD/MM/YYYY`` or return None.

    Each date segment contributes its leading digits only, so a trailing
    time of day is ignored. Impossible calendar dates (``31/04/2024``) are
    not errors: they fall through to the serial-number check and, failing
    that, yield None.
    """
    token = token.strip()
    if DAY_FIRST_PATTERN.match(token) or YEAR_FIRST_PATTERN.fullmatch(token):
        parsed = _from_segments(token)
        if parsed is not None:
            return format_date(parsed)
    serial = _from_serial(token)
    if serial is not None:
        return format_date(serial)
    return None


def parse_display_date(text: str) -> date | None:
    """Parse the first ``DD/MM/YYYY`` value of a harmonized cell.

    Only the text before the first ``;`` is considered, so a multi-date cell
    is represented by its first date.
    """
    head = text.split(";")[0].strip()
    parts = head.split("/")
    if len(parts) != 3:
        return None
    try:
        d, m, y = (int(p.strip()) for p in parts)
    except ValueError:
        return None
    return _build_date(y, m, d)
