"""Domain models for the spreadsheet harmonizer.

Plain frozen dataclasses and enums shared by the harmonize core, the metrics
services and the CLI.
"""

from .config_models import HarmonizerConfig, PivotConfig
from .dashboard_metrics import DashboardMetrics, ForecastMonth, RenewalForecast, WorkforceSplit
from .data_type import SPLIT_ORDER, DataType
from .error_record import ErrorRecord
from .pivot_result import FilterConfig, PivotResult
from .processed_data import CompanyDataset, DataRow, ProcessedData
from .processing_result import FileStat, RunResult

__all__ = [
    # Configuration models
    "HarmonizerConfig",
    "PivotConfig",
    # Harmonized data
    "DataType",
    "SPLIT_ORDER",
    "DataRow",
    "ProcessedData",
    "CompanyDataset",
    # Metrics / pivot
    "DashboardMetrics",
    "ForecastMonth",
    "RenewalForecast",
    "WorkforceSplit",
    "PivotResult",
    "FilterConfig",
    # Run results
    "FileStat",
    "RunResult",
    "ErrorRecord",
]
