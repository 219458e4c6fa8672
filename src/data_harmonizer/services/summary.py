from __future__ import annotations

from ..models.dashboard_metrics import DashboardMetrics
from ..models.pivot_result import PivotResult
from ..models.processing_result import RunResult

"""SUMMARY line rendering.

The lines are logged at SUMMARY level, so the ``SUMMARY`` label is added by
the formatter and not rendered here.

Formats:
    files={total}/{total} success={n} failed={n} raw_rows={n} records={n} elapsed_sec={s}
    metrics total={n} escape={n} expired={n} active={n} upcoming={n} health={pct}
"""

__all__ = [
    "format_number",
    "render_summary_line",
    "render_metrics_line",
    "render_pivot_lines",
]


def format_number(value: float) -> str:
    """Integers without decimals, very small values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if abs(value) < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: RunResult) -> str:
    """Render the run SUMMARY line.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     success_files=1, failed_files=0, total_raw_rows=12, total_records=9,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'files=1/1 success=1 failed=0 raw_rows=12 records=9 elapsed_sec=2'
    """
    total = result.total_files
    return (
        f"files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"raw_rows={result.total_raw_rows} "
        f"records={result.total_records} "
        f"elapsed_sec={format_number(result.elapsed_seconds)}"
    )


def render_metrics_line(metrics: DashboardMetrics, health: float) -> str:
    return (
        f"metrics total={metrics.total} "
        f"escape={metrics.escape_count} "
        f"expired={metrics.expired_card_count} "
        f"active={metrics.active_count} "
        f"upcoming={metrics.upcoming_renewals} "
        f"health={format_number(health)}"
    )


def render_pivot_lines(pivot: PivotResult) -> list[str]:
    """One ``pivot row=<key> <col>=<n> ...`` line per pivot row (absent cells omitted)."""
    lines = []
    for entry in pivot.rows:
        cells = " ".join(
            f"{col}={format_number(entry[col])}" for col in pivot.columns if col in entry and col != "row"
        )
        lines.append(f"pivot row={entry['row']} {cells}".rstrip())
    return lines
