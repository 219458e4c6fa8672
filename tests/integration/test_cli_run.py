from __future__ import annotations

import json
from pathlib import Path

from data_harmonizer.cli import main as cli_main

"""End-to-end CLI runs over real workbooks written with pandas/openpyxl."""

ROSTER = [
    {"Employee": "EMP-1 الموظف", "Nationality": "India", "Card Status": "Valid",
     "Documents": "12345678\n12/05/2023", "Salary": "1,000", "Designation": "Motorcyclist"},
    {"Employee": None, "Nationality": None, "Card Status": None,
     "Documents": "Visa 4410", "Salary": None, "Designation": None},
    {"Employee": "EMP-2", "Nationality": "Nepal", "Card Status": "Valid",
     "Documents": "2024-06-20", "Salary": "500", "Designation": "Cook"},
    {"Employee": "EMP-3", "Nationality": "India", "Card Status": "Cancelled",
     "Documents": "He has an escape report", "Salary": "250", "Designation": "Bike rider"},
]


def test_cli_run_success(write_config, temp_workdir: Path, workbook_factory, monkeypatch, capsys):
    workbook_factory(temp_workdir / "data" / "roster.xlsx", ROSTER)
    monkeypatch.setenv("HARMONIZER_TODAY", "2024-06-15")

    code = cli_main(["--report", "out/report.json"])

    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=1/1 success=1 failed=0 raw_rows=4 records=3" in out
    assert "SUMMARY metrics total=3 escape=1 expired=1 active=1 upcoming=1" in out
    assert "INFO forecast 2024-06 JUN renewals=1 escapes=0" in out
    assert "INFO forecast total_projected=1" in out
    assert "SUMMARY pivot row=India Valid=1000 Cancelled=250" in out or \
        "SUMMARY pivot row=India Cancelled=250 Valid=1000" in out

    report = json.loads((temp_workdir / "out" / "report.json").read_text(encoding="utf-8"))
    assert report["reference_date"] == "2024-06-15"
    assert report["headers"] == [
        "Employee",
        "Nationality",
        "Card Status",
        "Documents (Text)",
        "Documents (Number)",
        "Documents (Date)",
        "Salary",
        "Designation",
    ]
    first = report["rows"][0]
    assert first["Employee"] == "EMP-1"
    assert first["Documents (Number)"] == "12345678"
    assert first["Documents (Date)"] == "12/05/2023"
    assert first["Documents (Text)"] == "Visa 4410"
    assert report["metrics"]["nationality_data"] == {"India": 2, "Nepal": 1}
    assert len(report["forecast"]["months"]) == 3
    assert report["forecast"]["total_projected"] == 1
    assert report["forecast"]["months"][0]["status"] == "CRITICAL"
    assert report["workforce"] == {"motorcyclist": 2, "staff_support": 1}
    assert report["active_rows"] == 2
    assert report["pivot"]["columns"] == ["Cancelled", "Valid"]


def test_cli_search_narrows_metrics(write_config, temp_workdir: Path, workbook_factory, monkeypatch, capsys):
    workbook_factory(temp_workdir / "data" / "roster.xlsx", ROSTER)
    monkeypatch.setenv("HARMONIZER_TODAY", "2024-06-15")

    code = cli_main(["--search", "nepal"])

    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY metrics total=1 escape=0 expired=0 active=1 upcoming=1" in out


def test_cli_no_files_success(write_config, temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=0/0 success=0 failed=0 raw_rows=0 records=0" in out
    assert "SUMMARY metrics total=0" in out


def test_cli_partial_failure(write_config, temp_workdir: Path, workbook_factory, capsys):
    workbook_factory(temp_workdir / "data" / "good.xlsx", ROSTER)
    (temp_workdir / "data" / "broken.xlsx").write_bytes(b"not a workbook")

    code = cli_main([])

    out = capsys.readouterr().out
    assert code == 2
    assert "WARN broken.xlsx:" in out
    assert "SUMMARY files=2/2 success=1 failed=1" in out
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    record = json.loads(logs[0].read_text(encoding="utf-8").splitlines()[0])
    assert record["file"] == "broken.xlsx"
    assert record["error_type"] == "READ_ERROR"


def test_cli_missing_sheet_is_recorded(temp_workdir: Path, workbook_factory, capsys):
    cfg = temp_workdir / "config" / "harmonizer.yml"
    cfg.write_text("source_directory: ./data\nsheet_name: Missing\n", encoding="utf-8")
    workbook_factory(temp_workdir / "data" / "roster.xlsx", ROSTER)

    code = cli_main([])

    assert code == 2
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    record = json.loads(logs[0].read_text(encoding="utf-8").splitlines()[0])
    assert record["error_type"] == "SHEET_NOT_FOUND"
    assert record["sheet"] == "Missing"


def test_cli_directory_missing(write_config, temp_workdir: Path, capsys):
    text = write_config.read_text(encoding="utf-8").replace("./data", "./missing_dir")
    write_config.write_text(text, encoding="utf-8")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR directory not found:" in out


def test_cli_config_missing(temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: config file not found" in out


def test_cli_config_from_env_file(temp_workdir: Path, workbook_factory, capsys):
    alt = temp_workdir / "alt.yml"
    alt.write_text("source_directory: ./data\n", encoding="utf-8")
    (temp_workdir / ".env").write_text("HARMONIZER_CONFIG=alt.yml\nHARMONIZER_TODAY=2024-06-15\n", encoding="utf-8")
    workbook_factory(temp_workdir / "data" / "roster.xlsx", ROSTER)

    code = cli_main([])

    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=1/1 success=1" in out


def test_cli_invalid_today_override(write_config, temp_workdir: Path, monkeypatch, capsys):
    monkeypatch.setenv("HARMONIZER_TODAY", "15/06/2024")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR HARMONIZER_TODAY:" in out


def test_cli_inspect_data(write_config, temp_workdir: Path, workbook_factory, capsys):
    workbook_factory(temp_workdir / "data" / "roster.xlsx", ROSTER)
    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: roster.xlsx" in out
    assert "Documents (Date)" in out
