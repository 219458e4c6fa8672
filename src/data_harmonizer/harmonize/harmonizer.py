from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.processed_data import DataRow, ProcessedData
from .merger import merge_records
from .reassembler import reassemble_row
from .schema import build_expansion_map, expanded_headers, profile_columns

"""Harmonizer entry point.

raw rows -> merge continuation rows -> profile column types -> expand schema
-> re-assemble every record against the expanded schema.
"""

__all__ = [
    "harmonize_data",
]

logger = logging.getLogger(__name__)


def harmonize_data(raw_rows: Sequence[DataRow]) -> ProcessedData:
    """Turn parsed sheet rows into a typed, split-column dataset.

    Never raises on cell content; an empty input yields an empty dataset.
    """
    if not raw_rows:
        return ProcessedData(headers=[], rows=[], original_headers=[])
    merged = merge_records(raw_rows)
    original_headers = list(merged[0].keys())
    profile = profile_columns(merged, original_headers)
    expansion = build_expansion_map(original_headers, profile)
    headers = expanded_headers(original_headers, expansion)
    rows = [reassemble_row(row, original_headers, expansion) for row in merged]

    split = [h for h in original_headers if expansion[h] != [h]]
    logger.debug(
        f"harmonized raw_rows={len(raw_rows)} records={len(rows)} "
        f"columns={len(original_headers)}->{len(headers)} split={split}"
    )
    return ProcessedData(headers=headers, rows=rows, original_headers=original_headers)
