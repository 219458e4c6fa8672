from __future__ import annotations

import logging
import time
import uuid
from datetime import UTC, date, datetime
from pathlib import Path

from ..excel.reader import SUPPORTED_SUFFIXES, SheetNotFoundError, SheetReadError, read_sheet_rows
from ..harmonize.harmonizer import harmonize_data
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import HarmonizerConfig
from ..models.processed_data import CompanyDataset
from ..models.processing_result import FileStat, RunResult
from .filters import combine_datasets, search_rows
from .metrics import extract_dashboard_metrics
from .progress import ProgressTracker

"""Run orchestration: scan the source directory, harmonize every file into a
CompanyDataset, then compute dashboard metrics over the combined master view.

A file that cannot be read is recorded in the error log and counted as failed;
the remaining files are still processed.
"""

__all__ = [
    "ProcessingError",
    "scan_input_files",
    "harmonize_file",
    "process_all",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal run-level error (nothing could be processed)."""


def scan_input_files(directory: Path) -> list[Path]:
    """Supported input files in ``directory`` (non-recursive, sorted by name)."""
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def harmonize_file(path: Path, config: HarmonizerConfig) -> tuple[CompanyDataset, FileStat]:
    """Read and harmonize one file. Raises SheetReadError when it cannot be parsed."""
    started = time.perf_counter()
    raw_rows = read_sheet_rows(path, config.sheet_name, config.keep_na_strings)
    data = harmonize_data(raw_rows)
    dataset = CompanyDataset(id=str(uuid.uuid4()), name=path.stem, data=data)
    stat = FileStat(
        file_name=path.name,
        status="success",
        raw_rows=len(raw_rows),
        records=len(data.rows),
        columns=len(data.headers),
        split_columns=len(data.split_columns),
        elapsed_seconds=time.perf_counter() - started,
    )
    return dataset, stat


def process_all(config: HarmonizerConfig, today: date, search: str | None = None) -> RunResult:
    """Harmonize every input file and compute metrics over the master view.

    Args:
        config: Run configuration
        today: Reference date for expiry metrics
        search: Optional free-text filter applied to the master view before metrics

    Raises:
        ProcessingError: If the source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer()
    file_paths = scan_input_files(Path(config.source_directory))

    datasets: list[CompanyDataset] = []
    file_stats: list[FileStat] = []
    failed = 0
    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start_file(path)
            try:
                dataset, stat = harmonize_file(path, config)
            except SheetReadError as e:
                failed += 1
                error_type = "SHEET_NOT_FOUND" if isinstance(e, SheetNotFoundError) else "READ_ERROR"
                logger.warning(f"{path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, config.sheet_name or "", error_type, str(e)))
                file_stats.append(FileStat(path.name, "failed", 0, 0, 0, 0, 0.0))
                progress.finish_file()
                continue
            datasets.append(dataset)
            file_stats.append(stat)
            logger.info(
                f"{path.name}: records={stat.records} columns={stat.columns} split_columns={stat.split_columns}"
            )
            progress.finish_file(stat.records)

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    master_headers, master_rows = combine_datasets(datasets)
    if search:
        master_rows = search_rows(master_rows, search)
    metrics = extract_dashboard_metrics(master_rows, today)

    end_time = datetime.now(UTC)
    return RunResult(
        success_files=len(datasets),
        failed_files=failed,
        total_raw_rows=sum(s.raw_rows for s in file_stats),
        total_records=sum(s.records for s in file_stats),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        datasets=datasets,
        headers=master_headers,
        rows=master_rows,
        file_stats=file_stats,
        metrics=metrics,
    )
