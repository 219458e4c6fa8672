from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "PivotResult",
    "FilterConfig",
]


@dataclass(frozen=True)
class PivotResult:
    """Row x column aggregation table.

    ``rows`` holds one dict per distinct row key (encounter order) of the form
    ``{"row": <key>, <column key>: <number>, ...}``; ``columns`` is the sorted
    list of every column key seen.
    """
    rows: list[dict[str, Any]] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FilterConfig:
    column: str
    value: str
    operator: str = "equals"  # equals | contains | greaterThan | lessThan
