from __future__ import annotations
import pandas as pd
import pytest
from pathlib import Path
from data_harmonizer.excel.reader import (
    SheetNotFoundError,
    SheetReadError,
    frame_to_rows,
    read_sheet_rows,
)


def test_read_first_sheet_by_default(temp_workdir: Path, workbook_factory):
    path = workbook_factory(
        temp_workdir / "data" / "roster.xlsx",
        [{"Name": "Ali", "Passport": 12345678}, {"Name": None, "Passport": "visa 1"}],
    )
    rows = read_sheet_rows(path)
    assert rows[0]["Name"] == "Ali"
    assert rows[1]["Name"] is None
    assert list(rows[0].keys()) == ["Name", "Passport"]


def test_read_named_sheet(temp_workdir: Path):
    path = temp_workdir / "data" / "multi.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame({"A": [1]}).to_excel(writer, sheet_name="First", index=False)
        pd.DataFrame({"B": ["x"]}).to_excel(writer, sheet_name="Second", index=False)
    assert read_sheet_rows(path, sheet_name="Second") == [{"B": "x"}]
    with pytest.raises(SheetNotFoundError):
        read_sheet_rows(path, sheet_name="Missing")


def test_read_csv_keeps_na_strings(temp_workdir: Path):
    path = temp_workdir / "data" / "roster.csv"
    path.write_text("Name,Nationality\nAli,NA\nBina,\n", encoding="utf-8")
    assert read_sheet_rows(path)[0]["Nationality"] is None
    rows = read_sheet_rows(path, keep_na_strings=["NA"])
    assert rows[0]["Nationality"] == "NA"
    assert rows[1]["Nationality"] is None


def test_blank_rows_are_skipped():
    df = pd.DataFrame({"A": ["x", None, "  "], "B": [1, None, None]})
    assert frame_to_rows(df) == [{"A": "x", "B": 1}]


def test_unreadable_file_raises(temp_workdir: Path):
    path = temp_workdir / "data" / "broken.xlsx"
    path.write_bytes(b"not a workbook")
    with pytest.raises(SheetReadError):
        read_sheet_rows(path)
