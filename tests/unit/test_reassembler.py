from __future__ import annotations

from data_harmonizer.harmonize.reassembler import reassemble_row


def test_single_target_joins_tokens_with_space():
    row = {"Name": "Bob\nSmith", "Phone": "+966-55, 12"}
    expansion = {"Name": ["Name"], "Phone": ["Phone"]}
    assert reassemble_row(row, ["Name", "Phone"], expansion) == {"Name": "Bob Smith", "Phone": "+966-55 12"}


def test_tokens_routed_by_their_own_type():
    row = {"ID": "x", "Docs": "Visa, 12345678\n5/1/2024; passport; 2024-02-03"}
    expansion = {"ID": ["ID"], "Docs": ["Docs (Text)", "Docs (Number)", "Docs (Date)"]}
    out = reassemble_row(row, ["ID", "Docs"], expansion)
    assert out == {
        "ID": "x",
        "Docs (Text)": "Visa; passport",
        "Docs (Number)": "12345678",
        "Docs (Date)": "05/01/2024; 03/02/2024",
    }


def test_missing_sub_column_and_unknown_tokens_are_dropped():
    row = {"ID": "x", "Docs": "abc; 12/05/2023; ???"}
    expansion = {"ID": ["ID"], "Docs": ["Docs (Text)", "Docs (Number)"]}
    out = reassemble_row(row, ["ID", "Docs"], expansion)
    assert out == {"ID": "x", "Docs (Text)": "abc", "Docs (Number)": ""}


def test_every_sub_column_is_initialised():
    expansion = {"ID": ["ID"], "Docs": ["Docs (Text)", "Docs (Date)"]}
    out = reassemble_row({"ID": "x"}, ["ID", "Docs"], expansion)
    assert out == {"ID": "x", "Docs (Text)": "", "Docs (Date)": ""}


def test_serial_dates_are_normalised():
    expansion = {"ID": ["ID"], "Docs": ["Docs (Text)", "Docs (Date)"]}
    out = reassemble_row({"ID": "x", "Docs": 45000}, ["ID", "Docs"], expansion)
    assert out["Docs (Date)"] == "15/03/2023"
