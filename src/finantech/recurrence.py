# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Recurring transactions and rent receivables.

Occurrences are generated on demand (e.g. a "generate next" action); there
is no background scheduler. Avoiding double generation is the caller's
responsibility: no deduplication key exists beyond the transaction id.

Responsibilities:
- `next_occurrence`: the next instance of a recurring transaction, with its
  due date advanced by one calendar month (or year).
- `expand_occurrences`: successive occurrences up to a date, honouring the
  optional recurrence end date.
- `generate_rent_receivables`: monthly rent receivables of a rented
  property over its contract, adjusted yearly by an adjustment index.
"""

import logging
import uuid
from calendar import monthrange
from collections.abc import Iterator
from dataclasses import replace
from datetime import date
from typing import Optional

from .dates import format_date, is_valid_date, parse_date
from .errors import ValidationError
from .models import AdjustmentIndex, Property, Transaction

logger = logging.getLogger(__name__)

MONTH_NAMES_PT = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


def add_months(value: date, months: int) -> date:
    """Add calendar months, clamping the day to the last day of the target month."""
    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return date(year, month, day)


def _format_like(original: str, value: date) -> str:
    """Render `value` in the same textual format as `original`."""
    if "/" in original:
        return format_date(value)
    return value.isoformat()


def _advance(due: date, interval: str) -> date:
    if interval == "monthly":
        return add_months(due, 1)
    if interval == "yearly":
        return add_months(due, 12)
    raise ValidationError(f"Unsupported recurrence interval: {interval!r}")


def next_occurrence(
    transaction: Transaction,
    new_id: Optional[str] = None,
) -> Transaction:
    """
    Build the next occurrence of a recurring transaction.

    The new transaction copies every field of the original, except:
    - `id`: `new_id` or a fresh uuid4 hex string,
    - `due_date`: advanced by one interval, kept in the original format,
    - `status`: reset to "Pendente",
    - `payment_date` / `scheduled_payment_date`: cleared.

    Raises
    ------
    ValidationError
        If the transaction has no recurrence rule or an invalid due date.
    """
    if transaction.recurrence is None:
        raise ValidationError(f"Transaction {transaction.id!r} is not recurring.")

    due = parse_date(transaction.due_date)
    if not is_valid_date(due):
        raise ValidationError(
            f"Transaction {transaction.id!r} has an invalid due date: "
            f"{transaction.due_date!r}."
        )

    next_due = _advance(due, transaction.recurrence.interval)

    return replace(
        transaction,
        id=new_id or uuid.uuid4().hex,
        due_date=_format_like(transaction.due_date, next_due),
        status="Pendente",
        payment_date=None,
        scheduled_payment_date=None,
    )


def expand_occurrences(transaction: Transaction, until: date) -> Iterator[Transaction]:
    """
    Yield successive occurrences whose due date is on or before `until`.

    Generation stops at the recurrence end date when one is set. The
    original transaction itself is not yielded.
    """
    if transaction.recurrence is None:
        raise ValidationError(f"Transaction {transaction.id!r} is not recurring.")

    end = parse_date(transaction.recurrence.end_date)
    limit = min(until, end) if is_valid_date(end) else until

    current = transaction
    while True:
        current = next_occurrence(current)
        if parse_date(current.due_date) > limit:
            return
        yield current


def _years_elapsed(start: date, current: date) -> int:
    """Number of full contract years between `start` and `current`."""
    years = current.year - start.year
    if (current.month, current.day) < (start.month, start.day):
        years -= 1
    return max(0, years)


def generate_rent_receivables(
    prop: Property,
    indexes: list[AdjustmentIndex],
    existing: list[Transaction],
    reference_date: date,
) -> tuple[list[Transaction], list[Transaction]]:
    """
    Regenerate the future rent receivables of a property.

    Parameters
    ----------
    prop:
        The property. Only properties with status "Alugado" and complete
        rental details produce new receivables.
    indexes:
        Adjustment indexes; the one referenced by the rental details is
        applied once per full contract year.
    existing:
        All receivables. Rent receivables of this property that are paid or
        already past due are kept; future ones are dropped and regenerated.
    reference_date:
        "Today". Only months whose due date is on or after this date are
        generated.

    Returns
    -------
    (to_keep, new_receivables) : tuple of lists
    """
    to_keep = [
        r
        for r in existing
        if not (r.property_id == prop.id and r.category == "Aluguéis")
        or r.status == "Pago"
        or (
            is_valid_date(parse_date(r.due_date))
            and parse_date(r.due_date) < reference_date
        )
    ]

    details = prop.rental_details
    if prop.status != "Alugado" or details is None:
        return to_keep, []

    start = parse_date(details.contract_start)
    end = parse_date(details.contract_end)
    if (
        not details.tenant_id
        or not details.rent_amount
        or not details.payment_day
        or not is_valid_date(start)
        or not is_valid_date(end)
    ):
        logger.warning("Incomplete rental details for property %s", prop.id)
        return to_keep, []

    index = next((i for i in indexes if i.id == details.adjustment_index_id), None)
    rate = 1 + index.value / 100 if index is not None else 1.0

    new_receivables: list[Transaction] = []
    offset = 0
    current = start
    while current <= end:
        day = min(details.payment_day, monthrange(current.year, current.month)[1])
        due = date(current.year, current.month, day)
        if due >= reference_date:
            years = _years_elapsed(start, due)
            month_label = f"{MONTH_NAMES_PT[due.month - 1]} de {due.year}"
            new_receivables.append(
                Transaction(
                    id=f"rent_{prop.id}_{due.strftime('%Y-%m')}",
                    description=f"Aluguel Ref. {month_label} - {prop.name}",
                    category="Aluguéis",
                    amount=details.rent_amount * rate**years,
                    due_date=due.isoformat(),
                    status="Pendente",
                    type="receita",
                    company=prop.company,
                    cost_center="Imobiliário",
                    contact_id=details.tenant_id,
                    property_id=prop.id,
                )
            )
        offset += 1
        current = add_months(start, offset)

    logger.info(
        "Generated %d rent receivable(s) for property %s",
        len(new_receivables),
        prop.id,
    )
    return to_keep, new_receivables
