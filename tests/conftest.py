# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from data_harmonizer.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        # .env 読み込みで設定された値もテスト終了時に元へ戻す
        monkeypatch.setenv("HARMONIZER_CONFIG", "")
        monkeypatch.setenv("HARMONIZER_TODAY", "")
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
timezone: UTC
forecast_months: 3
keep_na_strings: [NA]
pivot:
  row_field: Nationality
  column_field: Card Status
  value_field: Salary
  agg_type: sum
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "harmonizer.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def roster_rows() -> list[dict[str, object]]:
    """Raw rows of a small roster sheet with one continuation row."""
    return [
        {"Name": "Ali", "Nationality": "India", "Card Status": "Valid", "Expiry": "12/05/2023", "Salary": "1,200"},
        {"Name": "", "Nationality": "", "Card Status": "", "Expiry": "passport 12345678", "Salary": ""},
        {"Name": "Bina", "Nationality": "Nepal", "Card Status": "Valid", "Expiry": "2024-06-20", "Salary": "900"},
        {"Name": "Chen", "Nationality": "India", "Card Status": "", "Expiry": "he has an escape report", "Salary": "abc"},
    ]


def make_workbook(path: Path, rows: list[dict[str, object]], sheet_name: str = "Roster") -> Path:
    """Write ``rows`` as a single-sheet workbook (first row = header)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, index=False)
    return path


@pytest.fixture()
def workbook_factory():
    return make_workbook


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()
