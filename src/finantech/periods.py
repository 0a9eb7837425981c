# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Period helpers for FinanTech.

This module defines a Period value object and helpers to derive the period
used to filter transaction lists (by due date) from CLI arguments.
"""

from calendar import monthrange
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .dates import is_valid_date, parse_date, today
from .models import Transaction


@dataclass
class Period:
    """Represents a filtering period with a human-readable label."""

    start: date
    end: date
    label: str


def period_month(year: int, month: int) -> Period:
    """Full calendar month."""
    last_day = monthrange(year, month)[1]
    return Period(
        start=date(year, month, 1),
        end=date(year, month, last_day),
        label=f"{month:02d}/{year}",
    )


def period_current_month() -> Period:
    """Full current calendar month."""
    current = today()
    return period_month(current.year, current.month)


def _parse_month(raw: str) -> Period:
    """Parse 'YYYY-MM' or 'MM/YYYY'."""
    text = raw.strip()
    try:
        if "/" in text:
            month_s, year_s = text.split("/")
        else:
            year_s, month_s = text.split("-")
        return period_month(int(year_s), int(month_s))
    except ValueError as exc:
        raise ValueError(
            f"Invalid month {raw!r}, expected YYYY-MM or MM/YYYY."
        ) from exc


def _parse_bound(raw: str, name: str) -> date:
    value = parse_date(raw)
    if not is_valid_date(value):
        raise ValueError(
            f"Invalid {name} date {raw!r}, expected DD/MM/YYYY or YYYY-MM-DD."
        )
    return value


def determine_period_from_args(args) -> Optional[Period]:
    """
    Determine the filtering period based on CLI args.

    Priority (highest to lowest):

        1. args.month ("current", YYYY-MM or MM/YYYY)
        2. args.from_date / args.to_date (custom period, open-ended if one
           bound is missing)
        3. None: no filtering
    """
    # 1) Month wins over everything else
    month = getattr(args, "month", None)
    if month:
        if month == "current":
            return period_current_month()
        return _parse_month(month)

    # 2) Custom from/to dates
    from_raw: Optional[str] = getattr(args, "from_date", None)
    to_raw: Optional[str] = getattr(args, "to_date", None)

    if from_raw or to_raw:
        start = _parse_bound(from_raw, "from") if from_raw else date.min
        end = _parse_bound(to_raw, "to") if to_raw else date.max

        if end < start:
            raise ValueError("Custom period end date cannot be before start date.")

        label = f"Custom period ({from_raw or '...'} → {to_raw or '...'})"
        return Period(start=start, end=end, label=label)

    # 3) Default: everything
    return None


def filter_transactions_by_period(
    transactions: Iterable[Transaction],
    period: Optional[Period],
) -> list[Transaction]:
    """
    Keep the transactions whose due date falls within the period (inclusive).

    Transactions with an invalid due date are dropped when a period is given.
    """
    if period is None:
        return list(transactions)

    kept: list[Transaction] = []
    for tx in transactions:
        due = parse_date(tx.due_date)
        if is_valid_date(due) and period.start <= due <= period.end:
            kept.append(tx)
    return kept
