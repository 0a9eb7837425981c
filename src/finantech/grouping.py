# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Grouping of transaction and project lists for grouped table rendering.

The grouping types are:

- none:       a single bucket named "all",
- status:     one bucket per status (Pendente, Pago, ...),
- costCenter: one bucket per cost center,
- type:       one bucket per transaction type (receita / despesa).

Buckets are ordered by first appearance of their key in the input list, and
items keep their input order inside a bucket. Items with an empty key fall
into the "Não categorizado" bucket.

`grouped_table` turns the buckets into a pandas DataFrame with a header
row, one row per transaction and a subtotal row per group, ready to be
printed by the CLI or exported to CSV.
"""

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Literal, Optional, TypeVar

import pandas as pd

from .charges import calculate_charges
from .dates import format_date
from .models import Transaction

GroupingType = Literal["none", "status", "costCenter", "type"]

GROUPING_TYPES = ("none", "status", "costCenter", "type")
UNCATEGORIZED = "Não categorizado"
ALL_GROUP = "all"

# Attribute(s) read for each grouping type, first present attribute wins.
_GROUP_ATTRIBUTES: dict[str, tuple[str, ...]] = {
    "status": ("status",),
    "costCenter": ("cost_center", "cost_center_name"),
    "type": ("type",),
}

_GROUP_LABELS = {
    "status": "Situação",
    "costCenter": "Centro de Custo",
    "type": "Tipo",
}

T = TypeVar("T")


def _group_key(item, grouping: str) -> str:
    for attr in _GROUP_ATTRIBUTES[grouping]:
        if hasattr(item, attr):
            value = getattr(item, attr)
            return str(value) if value else UNCATEGORIZED
    return UNCATEGORIZED


def group_transactions(
    items: Iterable[T],
    grouping: GroupingType = "none",
) -> dict[str, list[T]]:
    """
    Partition items into ordered buckets.

    Parameters
    ----------
    items:
        Transactions (or projects) to group.
    grouping:
        One of "none", "status", "costCenter", "type".

    Returns
    -------
    dict[str, list]
        Group key -> items, in order of first appearance. Every input item
        appears in exactly one group.

    Raises
    ------
    ValueError
        If the grouping type is unknown.
    """
    if grouping not in GROUPING_TYPES:
        raise ValueError(f"Unknown grouping type: {grouping!r}")

    if grouping == "none":
        return {ALL_GROUP: list(items)}

    groups: dict[str, list[T]] = {}
    for item in items:
        groups.setdefault(_group_key(item, grouping), []).append(item)
    return groups


def group_subtotals(
    groups: dict[str, Sequence[Transaction]],
    reference_date: Optional[date] = None,
) -> dict[str, float]:
    """Sum of `calculate_charges(item).total` for each group."""
    return {
        key: sum(calculate_charges(tx, reference_date).total for tx in txs)
        for key, txs in groups.items()
    }


def grouped_table(
    groups: dict[str, Sequence[Transaction]],
    grouping: GroupingType = "none",
    reference_date: Optional[date] = None,
    contact_names: Optional[dict[str, str]] = None,
    decimals: int = 2,
) -> pd.DataFrame:
    """
    Build a flat table of grouped transactions with per-group subtotals.

    Columns: row_type ("group" | "item" | "subtotal"), id, description,
    contact, category, cost_center, due_date (DD/MM/YYYY), amount, interest,
    fine, total, status.

    Group header and subtotal rows are only emitted when `grouping` is not
    "none".
    """
    contact_names = contact_names or {}
    rows: list[dict] = []

    for key, txs in groups.items():
        if grouping != "none":
            rows.append(
                {"row_type": "group", "description": f"{_GROUP_LABELS[grouping]}: {key}"}
            )

        subtotal = 0.0
        for tx in txs:
            charges = calculate_charges(tx, reference_date)
            subtotal += charges.total
            rows.append(
                {
                    "row_type": "item",
                    "id": tx.id,
                    "description": tx.description,
                    "contact": contact_names.get(tx.contact_id or "", ""),
                    "category": tx.category,
                    "cost_center": tx.cost_center,
                    "due_date": format_date(tx.due_date),
                    "amount": round(tx.amount, decimals),
                    "interest": round(charges.interest, decimals),
                    "fine": round(charges.fine, decimals),
                    "total": round(charges.total, decimals),
                    "status": tx.status,
                }
            )

        if grouping != "none":
            rows.append(
                {
                    "row_type": "subtotal",
                    "description": "Subtotal",
                    "total": round(subtotal, decimals),
                }
            )

    columns = [
        "row_type",
        "id",
        "description",
        "contact",
        "category",
        "cost_center",
        "due_date",
        "amount",
        "interest",
        "fine",
        "total",
        "status",
    ]
    df = pd.DataFrame(rows, columns=columns)
    return df
