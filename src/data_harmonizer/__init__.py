"""Spreadsheet harmonizer.

Turns roster sheets with multi-valued, mixed-type cells into typed columns and
derives dashboard metrics and pivot tables from the result.
"""

from .harmonize.harmonizer import harmonize_data
from .services.metrics import extract_dashboard_metrics
from .services.pivot import generate_pivot_data

__all__ = [
    "harmonize_data",
    "extract_dashboard_metrics",
    "generate_pivot_data",
]

__version__ = "0.1.0"
