"""Harmonization engine: tokenize, classify, merge, profile, expand, re-assemble."""

from .classifier import classify_token
from .dates import parse_display_date, try_parse_date
from .harmonizer import harmonize_data
from .merger import merge_records
from .reassembler import reassemble_row
from .schema import ExpansionMap, build_expansion_map, expanded_headers, profile_columns
from .tokenizer import cell_text, tokenize

__all__ = [
    "tokenize",
    "cell_text",
    "try_parse_date",
    "parse_display_date",
    "classify_token",
    "merge_records",
    "profile_columns",
    "build_expansion_map",
    "expanded_headers",
    "ExpansionMap",
    "reassemble_row",
    "harmonize_data",
]
