#!/usr/bin/env python3
"""Sample roster generation script.

Generates a deliberately messy personnel roster workbook for manual runs of
the harmonizer:
- Row 1: Header row
- Some records continue on the following rows with a blank first column
- Cells mix passport numbers, Arabic labels, free text and dates in several
  formats (day-first, year-first, spreadsheet serial numbers)
- A few rows carry the escape report marker
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

NATIONALITIES = ["India", "Pakistan", "Nepal", "Bangladesh", "Egypt", "Philippines", ""]
JOBS = ["Motorcyclist", "Delivery bike rider", "Driver", "Cleaner", "Accountant", "Cook"]
STATUSES = ["Valid", "Under renewal", "Cancelled", ""]
ESCAPE_NOTE = "He has an escape report"


def _format_expiry(rng: np.random.Generator, day_offset: int) -> Any:
    expiry = pd.Timestamp("2024-01-01") + pd.Timedelta(days=day_offset)
    style = rng.integers(0, 4)
    if style == 0:
        return expiry.strftime("%d/%m/%Y")
    if style == 1:
        return expiry.strftime("%Y-%m-%d")
    if style == 2:
        # spreadsheet serial date
        return int((expiry - pd.Timestamp("1899-12-30")).days)
    return f"{expiry.strftime('%d-%m-%Y')} تاريخ الانتهاء"


def generate_roster(records: int, seed: int = 42) -> pd.DataFrame:
    """Build the raw (un-harmonized) roster as a DataFrame.

    Args:
        records: Number of logical person records
        seed: Random seed for reproducible data

    Returns:
        DataFrame whose rows include continuation fragments
    """
    rng = np.random.default_rng(seed)
    rows: list[dict[str, Any]] = []
    for i in range(records):
        passport = f"{rng.integers(10_000_000, 99_999_999)}"
        expiry = _format_expiry(rng, int(rng.integers(0, 1100)))
        note = ESCAPE_NOTE if rng.random() < 0.08 else "Residence ID " + passport
        rows.append(
            {
                "Employee": f"EMP-{i + 1:04d} الموظف",
                "Nationality": str(rng.choice(NATIONALITIES)),
                "Job Description": str(rng.choice(JOBS)),
                "Card Status": str(rng.choice(STATUSES)),
                "Documents": f"{passport}\n{expiry}",
                "Notes": note,
            }
        )
        # 継続行 (先頭列空白)
        if rng.random() < 0.25:
            rows.append(
                {
                    "Employee": "",
                    "Nationality": "",
                    "Job Description": "",
                    "Card Status": "",
                    "Documents": f"Visa {rng.integers(1000, 9999)}",
                    "Notes": "follow-up required",
                }
            )
    return pd.DataFrame(rows)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a messy sample roster workbook")
    parser.add_argument("--records", type=int, default=200, help="Number of person records")
    parser.add_argument("--output", type=Path, default=Path("data/sample_roster.xlsx"), help="Output .xlsx path")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args(argv)

    if args.records <= 0:
        print("Error: --records must be positive", file=sys.stderr)
        return 1

    df = generate_roster(args.records, args.seed)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(args.output, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Roster", index=False)
    print(f"Wrote {len(df)} rows ({args.records} records) to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
