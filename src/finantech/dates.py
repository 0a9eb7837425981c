# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Date helpers for FinanTech.

Dates are stored exactly as the user typed them, in one of two accepted
textual formats:

- ``DD/MM/YYYY`` (slash-delimited, Brazilian convention)
- ``YYYY-MM-DD`` (dash-delimited, ISO-like)

Every comparison in the application goes through `parse_date`, so the two
formats are never compared as raw strings.

Invalid input never raises: `parse_date` returns the pandas ``NaT``
sentinel, which behaves like a "not a number" date (all comparisons are
False). Callers check `is_valid_date` before using the value.
"""

from datetime import date, datetime
from typing import Union

import pandas as pd

DateLike = Union[str, date, None]


def parse_date(text: DateLike):
    """
    Parse a date string in ``DD/MM/YYYY`` or ``YYYY-MM-DD`` format.

    Parameters
    ----------
    text:
        Raw date string. ``date`` / ``datetime`` objects are accepted and
        returned as plain dates.

    Returns
    -------
    datetime.date or pandas.NaT
        The parsed calendar date, or ``NaT`` when the text does not match one
        of the two formats or does not name a real calendar day.
    """
    if isinstance(text, datetime):
        return text.date()
    if isinstance(text, date):
        return text
    if not isinstance(text, str):
        return pd.NaT

    raw = text.strip()
    parts: list[str] = []
    if "/" in raw:
        parts = raw.split("/")
        if len(parts) != 3 or len(parts[2]) != 4:
            return pd.NaT
        day, month, year = parts
    elif "-" in raw:
        parts = raw.split("-")
        if len(parts) != 3 or len(parts[0]) != 4:
            return pd.NaT
        year, month, day = parts
    else:
        return pd.NaT

    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return pd.NaT


def is_valid_date(value) -> bool:
    """Return True if `value` is a usable date (not None / NaT)."""
    if value is None:
        return False
    try:
        return not pd.isna(value)
    except (TypeError, ValueError):
        return False


def format_date(value: DateLike) -> str:
    """Format a date (or date string) as ``DD/MM/YYYY``; invalid input gives ''."""
    parsed = parse_date(value)
    if not is_valid_date(parsed):
        return ""
    return parsed.strftime("%d/%m/%Y")


def to_iso(value: DateLike):
    """Return the ISO ``YYYY-MM-DD`` form of a date string, or None if invalid."""
    parsed = parse_date(value)
    if not is_valid_date(parsed):
        return None
    return parsed.isoformat()


def today() -> date:
    """Return today's date (isolated for easier testing)."""
    return datetime.today().date()
