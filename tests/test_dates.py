from datetime import date, datetime

import pandas as pd
import pytest

from finantech.dates import format_date, is_valid_date, parse_date, to_iso


@pytest.mark.parametrize(
    "text, expected",
    [
        ("15/03/2024", date(2024, 3, 15)),
        ("2024-03-15", date(2024, 3, 15)),
        (" 01/01/2025 ", date(2025, 1, 1)),
        ("29/02/2024", date(2024, 2, 29)),
    ],
)
def test_parse_date_accepts_both_formats(text, expected):
    assert parse_date(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        "abc",
        "31/02/2024",
        "29/02/2023",
        "15/03/24",
        "24-03-15",
        "15-03-2024",
        "2024/03/15",
        "15/03",
        "2024-03",
        None,
        12345,
    ],
)
def test_parse_date_invalid_returns_nat(text):
    """Invalid input never raises and yields the NaT sentinel."""
    result = parse_date(text)
    assert result is pd.NaT
    assert not is_valid_date(result)


def test_parse_date_passes_through_date_objects():
    assert parse_date(date(2024, 5, 1)) == date(2024, 5, 1)
    assert parse_date(datetime(2024, 5, 1, 10, 30)) == date(2024, 5, 1)


def test_both_formats_compare_as_dates():
    """'10/01/2024' is earlier than '2024-01-09' only if compared as text."""
    assert parse_date("10/01/2024") > parse_date("2024-01-09")


def test_is_valid_date():
    assert is_valid_date(date(2024, 1, 1))
    assert not is_valid_date(None)
    assert not is_valid_date(pd.NaT)


def test_format_date_and_to_iso():
    assert format_date("2024-03-05") == "05/03/2024"
    assert format_date("05/03/2024") == "05/03/2024"
    assert format_date("not a date") == ""
    assert to_iso("05/03/2024") == "2024-03-05"
    assert to_iso("31/04/2024") is None
