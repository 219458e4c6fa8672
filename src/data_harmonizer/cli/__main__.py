from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.reader import SheetReadError
from ..logging.init import log_summary, setup_logging
from ..models.config_models import HarmonizerConfig
from ..models.processing_result import RunResult
from ..services.metrics import active_records, health_index, renewal_forecast, risk_density, split_workforce
from ..services.orchestrator import ProcessingError, harmonize_file, process_all, scan_input_files
from ..services.pivot import generate_pivot_data
from ..services.summary import render_metrics_line, render_pivot_lines, render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config
- Harmonize every .xlsx/.csv file of the source directory
- Log SUMMARY lines (run, metrics, forecast, optional pivot)
- Optionally write a JSON report
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

ENV_CONFIG = "HARMONIZER_CONFIG"
ENV_TODAY = "HARMONIZER_TODAY"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so HARMONIZER_* variables can be kept next to the data."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Harmonize messy roster spreadsheets and print dashboard metrics")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print harmonized headers & first rows then exit")
    p.add_argument("--search", default=None, help="Only count rows containing this text (case-insensitive)")
    p.add_argument("--report", type=Path, default=None, help="Write a JSON report to this path")
    return p.parse_args(argv)


def _reference_date(cfg: HarmonizerConfig) -> date:
    """Today in the configured timezone, unless HARMONIZER_TODAY pins it."""
    pinned = os.getenv(ENV_TODAY)
    if pinned:
        return date.fromisoformat(pinned.strip())
    return datetime.now(ZoneInfo(cfg.timezone)).date()


def _inspect_data(cfg: HarmonizerConfig) -> int:
    for f in scan_input_files(Path(cfg.source_directory)):
        print(f"FILE: {f.name}")
        try:
            dataset, stat = harmonize_file(f, cfg)
        except SheetReadError as e:
            print(f"  read_error: {e}")
            continue
        print(f"  records={stat.records} headers={dataset.data.headers}")
        for row in dataset.data.rows[:3]:
            print("    row=", row)
    return EXIT_SUCCESS_ALL


def _write_report(path: Path, cfg: HarmonizerConfig, result: RunResult, today: date) -> None:
    metrics = result.metrics
    report: dict[str, Any] = {
        "generated_at": result.end_time.isoformat().replace("+00:00", "Z"),
        "reference_date": today.isoformat(),
        "files": [asdict(s) for s in result.file_stats],
        "headers": result.headers,
        "rows": result.rows,
    }
    if metrics is not None:
        report["metrics"] = metrics.to_dict()
        report["health_index"] = health_index(metrics)
        report["risk_density"] = risk_density(metrics)
        report["forecast"] = asdict(renewal_forecast(metrics, today, cfg.forecast_months))
        workforce = split_workforce(result.rows)
        report["workforce"] = {
            "motorcyclist": len(workforce.motorcyclist),
            "staff_support": len(workforce.staff_support),
        }
        report["active_rows"] = len(active_records(result.rows, metrics))
    if cfg.pivot is not None:
        pivot = generate_pivot_data(
            result.rows, cfg.pivot.row_field, cfg.pivot.column_field, cfg.pivot.value_field, cfg.pivot.agg_type
        )
        report["pivot"] = asdict(pivot)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report, ensure_ascii=False, indent=2, default=str), encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    # 空リスト [] のときに sys.argv を読まないよう None のみ判定
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    config_path = args.config or Path(os.getenv(ENV_CONFIG) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.is_dir():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    try:
        today = _reference_date(cfg)
    except ValueError as e:
        logger.error(f"{ENV_TODAY}: {e}")
        return EXIT_FATAL

    logger.info(f"Processing files from: {directory}")
    if args.inspect_data:
        return _inspect_data(cfg)

    try:
        result = process_all(cfg, today, search=args.search)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    log_summary(render_summary_line(result))
    metrics = result.metrics
    if metrics is not None:
        log_summary(render_metrics_line(metrics, health_index(metrics)))
        forecast = renewal_forecast(metrics, today, cfg.forecast_months)
        for month in forecast.months:
            logger.info(
                f"forecast {month.key} {month.month} renewals={month.count} "
                f"escapes={month.escape_count} status={month.status}"
            )
        logger.info(f"forecast total_projected={forecast.total_projected}")
    if cfg.pivot is not None:
        pivot = generate_pivot_data(
            result.rows, cfg.pivot.row_field, cfg.pivot.column_field, cfg.pivot.value_field, cfg.pivot.agg_type
        )
        for line in render_pivot_lines(pivot):
            log_summary(line)

    if args.report is not None:
        _write_report(args.report, cfg, result, today)
        logger.info(f"report written: {args.report}")

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
