from __future__ import annotations

import re
from datetime import datetime, timezone

from data_harmonizer.models.dashboard_metrics import DashboardMetrics
from data_harmonizer.models.processing_result import RunResult
from data_harmonizer.services.summary import render_metrics_line, render_summary_line

"""SUMMARY output contract: downstream scripts grep these lines."""

SUMMARY_PATTERN = re.compile(
    r"^files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"raw_rows=([0-9]+)\s+records=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)
METRICS_PATTERN = re.compile(
    r"^metrics total=[0-9]+ escape=[0-9]+ expired=[0-9]+ active=[0-9]+ upcoming=[0-9]+ health=[0-9]+\.?[0-9]*$"
)


def test_summary_line_matches_contract():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    result = RunResult(
        success_files=3,
        failed_files=1,
        total_raw_rows=120,
        total_records=97,
        start_time=now,
        end_time=now,
        elapsed_seconds=1.25,
    )
    match = SUMMARY_PATTERN.match(render_summary_line(result))
    assert match
    assert match.group(1) == "4"
    assert match.group(3) == "3"
    assert match.group(4) == "1"
    assert match.group(7) == "1.25"


def test_metrics_line_matches_contract():
    line = render_metrics_line(DashboardMetrics(total=3, escape_count=1), 66.7)
    assert METRICS_PATTERN.match(line), line
