from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .dashboard_metrics import DashboardMetrics
from .processed_data import CompanyDataset, DataRow

"""Run result models for the harmonizer CLI.

RunResult aggregates the per-file outcome of a run and feeds the SUMMARY line.
"""

__all__ = [
    "FileStat",
    "RunResult",
]


@dataclass(frozen=True)
class FileStat:
    """Per-file harmonization statistics."""
    file_name: str
    status: str  # success/failed
    raw_rows: int  # rows read from the sheet
    records: int  # logical records after continuation merge
    columns: int  # headers after expansion
    split_columns: int  # original headers split into typed sub-columns
    elapsed_seconds: float


@dataclass(frozen=True)
class RunResult:
    """Aggregated results of one harmonize run."""
    success_files: int
    failed_files: int
    total_raw_rows: int
    total_records: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    datasets: list[CompanyDataset] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)  # master view headers
    rows: list[DataRow] = field(default_factory=list)  # master view rows (after search)
    file_stats: list[FileStat] = field(default_factory=list)
    metrics: DashboardMetrics | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
