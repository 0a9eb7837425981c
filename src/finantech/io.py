# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
I/O module for FinanTech.

This module handles:
- reading bank statement lines from a CSV file into `BankTransaction`
  objects, ready to be reconciled,
- exporting grouped transaction tables (see `grouping.grouped_table`) to a
  spreadsheet-friendly CSV file.

Expected statement formats
--------------------------

Column names are case-insensitive.

1) Explicit type
   -------------
       date, description, amount, type

   - ``amount`` is a positive number,
   - ``type`` is ``debit`` or ``credit``.

2) Signed amount
   -------------
       date, description, amount

   - negative amounts are debits, positive amounts are credits; the stored
     amount is always the absolute value.

Dates must be in ``DD/MM/YYYY`` or ``YYYY-MM-DD`` format and are stored as
written. An optional ``id`` column provides stable identifiers; otherwise
ids are derived from the account and line number.

The column ``label`` is accepted as an alias for ``description``.
"""

import os
from typing import Union

import pandas as pd

from .dates import is_valid_date, parse_date
from .models import BankTransaction

PathLike = Union[str, "os.PathLike[str]"]

EXPORT_HEADERS = {
    "row_type": "Linha",
    "id": "ID",
    "description": "Descrição",
    "contact": "Contato",
    "category": "Categoria",
    "cost_center": "Centro de Custo",
    "due_date": "Vencimento",
    "amount": "Valor Original",
    "interest": "Juros",
    "fine": "Multa",
    "total": "Total",
    "status": "Situação",
}


def read_bank_statement(path: PathLike, bank_account_id: str) -> list[BankTransaction]:
    """
    Read bank statement lines from a CSV file.

    Parameters
    ----------
    path:
        Path to the CSV file.
    bank_account_id:
        Bank account the lines belong to.

    Returns
    -------
    list[BankTransaction]
        One object per CSV row, in file order.

    Raises
    ------
    ValueError
        If the CSV does not contain the required columns, or if a date,
        amount or type value is invalid.
    """
    df = pd.read_csv(path, dtype=str)

    # Normalize column names to lowercase (to make the check case-insensitive)
    df.columns = [c.lower().strip() for c in df.columns]
    cols = set(df.columns)

    if "label" in cols and "description" not in cols:
        df = df.rename(columns={"label": "description"})
        cols = set(df.columns)

    required = {"date", "description", "amount"}
    if not required.issubset(cols):
        raise ValueError(
            "Invalid bank statement structure. Expected columns:\n"
            "  - date, description, amount[, type][, id]\n"
            "(column names are case-insensitive; 'label' is accepted as an alias "
            "for 'description')."
        )

    d = df.copy()
    d["amount"] = pd.to_numeric(d["amount"], errors="coerce")
    if d["amount"].isna().any():
        raise ValueError("Invalid numeric values in 'amount' column.")

    has_type = "type" in cols
    has_id = "id" in cols

    lines: list[BankTransaction] = []
    for pos, row in enumerate(d.itertuples(index=False), start=1):
        raw_date = str(row.date).strip()
        if not is_valid_date(parse_date(raw_date)):
            raise ValueError(f"Invalid date on line {pos}: {raw_date!r}.")

        amount = float(row.amount)
        if has_type:
            tx_type = str(row.type).strip().lower()
            if tx_type not in ("debit", "credit"):
                raise ValueError(f"Invalid type on line {pos}: {row.type!r}.")
        else:
            tx_type = "debit" if amount < 0 else "credit"

        tx_id = str(row.id).strip() if has_id and pd.notna(row.id) else ""
        lines.append(
            BankTransaction(
                id=tx_id or f"{bank_account_id}-{pos}",
                bank_account_id=bank_account_id,
                date=raw_date,
                description=str(row.description),
                amount=abs(amount),
                type=tx_type,
            )
        )

    return lines


def export_grouped_csv(table: pd.DataFrame, path: PathLike) -> None:
    """
    Write a grouped table to CSV with Portuguese headers.

    The file uses ';' as separator and a UTF-8 BOM so that spreadsheet
    software opens accented characters correctly.
    """
    out = table.rename(columns=EXPORT_HEADERS)
    out.to_csv(path, sep=";", index=False, encoding="utf-8-sig")
