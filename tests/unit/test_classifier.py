from __future__ import annotations

import pytest

from data_harmonizer.harmonize.classifier import classify_token
from data_harmonizer.models.data_type import DataType


@pytest.mark.parametrize(
    "token, expected",
    [
        ("12/05/2023", DataType.DATE),
        ("12/05/2023 10:00", DataType.DATE),  # trailing time of day is ignored
        ("45000", DataType.DATE),  # serial date window
        ("12345678", DataType.NUMBER),
        ("123", DataType.NUMBER),
        ("12.50", DataType.NUMBER),
        ("abc", DataType.TEXT),
        ("Visa 1234", DataType.TEXT),
        ("A1", DataType.TEXT),
        ("+966-55", DataType.UNKNOWN),
        ("12/34", DataType.UNKNOWN),
        ("-5", DataType.UNKNOWN),
        ("٣٤", DataType.UNKNOWN),  # non-ASCII digits are not numbers
    ],
)
def test_classify_token(token, expected):
    assert classify_token(token) is expected


def test_impossible_date_is_not_a_date():
    assert classify_token("31/04/2024") is DataType.UNKNOWN


def test_suffix():
    assert DataType.DATE.suffix == " (Date)"
    assert DataType.TEXT.suffix == " (Text)"
