# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Late-payment charges for payables and receivables.

Rules
-----
Given a transaction and a reference date (today by default):

- a paid transaction (status "Pago") owes exactly its amount;
- the elapsed time is the number of whole days between the due date and the
  reference date, never negative; an invalid due date counts as 0 days;
- interest:
    * daily:   amount x rate/100 x elapsed_days
    * monthly: amount x rate/100 x elapsed_days / 30
  The monthly rate is pro-rated linearly on a 30-day month. It is not
  compounded and does not follow calendar month lengths; this is the rule
  agreed with the business and must not be changed silently.
- fine: a flat percentage of the amount, applied once as soon as
  elapsed_days > 0;
- total = amount + interest + fine.

This module also owns the single automatic status transition of the
application: a "Pendente" transaction whose due date has passed becomes
"Vencido" (see `refresh_overdue_statuses`).
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from .dates import is_valid_date, parse_date, today
from .models import Transaction

logger = logging.getLogger(__name__)

MONTH_DAYS = 30


@dataclass(frozen=True)
class Charges:
    """Result of a charge computation."""

    interest: float
    fine: float
    total: float
    days_overdue: int = 0


def _no_charges(transaction: Transaction) -> Charges:
    return Charges(interest=0.0, fine=0.0, total=transaction.amount, days_overdue=0)


def elapsed_days(due_date: str, reference_date: date) -> int:
    """
    Whole days elapsed between `due_date` and `reference_date`.

    Returns 0 when the reference date is on or before the due date, or when
    the due date cannot be parsed.
    """
    due = parse_date(due_date)
    if not is_valid_date(due):
        return 0
    return max(0, (reference_date - due).days)


def calculate_charges(
    transaction: Transaction,
    reference_date: Optional[date] = None,
) -> Charges:
    """
    Compute the interest, fine and total owed for a transaction.

    Parameters
    ----------
    transaction:
        The payable or receivable.
    reference_date:
        Date at which charges are evaluated. Defaults to today.

    Returns
    -------
    Charges
        Interest, fine, total and the number of days overdue.
    """
    if transaction.status == "Pago":
        return _no_charges(transaction)

    ref = reference_date if reference_date is not None else today()
    days = elapsed_days(transaction.due_date, ref)
    if days == 0:
        return _no_charges(transaction)

    interest = 0.0
    if transaction.interest_rate and transaction.interest_type:
        rate = transaction.interest_rate / 100
        if transaction.interest_type == "daily":
            interest = transaction.amount * rate * days
        elif transaction.interest_type == "monthly":
            interest = transaction.amount * rate * (days / MONTH_DAYS)

    fine = 0.0
    if transaction.fine_rate and transaction.fine_rate > 0:
        fine = transaction.amount * (transaction.fine_rate / 100)

    interest = max(0.0, interest)
    fine = max(0.0, fine)

    return Charges(
        interest=interest,
        fine=fine,
        total=transaction.amount + interest + fine,
        days_overdue=days,
    )


def is_overdue(transaction: Transaction, reference_date: Optional[date] = None) -> bool:
    """True if the transaction is unpaid and its due date is before the reference."""
    if transaction.status in ("Pago", "Agendado"):
        return False
    ref = reference_date if reference_date is not None else today()
    return elapsed_days(transaction.due_date, ref) > 0


def refresh_overdue_statuses(
    transactions: Iterable[Transaction],
    reference_date: Optional[date] = None,
) -> list[Transaction]:
    """
    Return a new list where overdue "Pendente" transactions become "Vencido".

    Other statuses are never touched: status transitions are one-directional.
    """
    ref = reference_date if reference_date is not None else today()
    result: list[Transaction] = []
    changed = 0
    for tx in transactions:
        if tx.status == "Pendente" and is_overdue(tx, ref):
            result.append(replace(tx, status="Vencido"))
            changed += 1
        else:
            result.append(tx)
    if changed:
        logger.info("Marked %d transaction(s) as overdue (reference %s)", changed, ref)
    return result
