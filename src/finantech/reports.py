# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Income statement (DRE, "Demonstração do Resultado do Exercício").

The statement is built on a cash basis: only paid transactions ("Pago")
are included, and the optional period filter applies to the payment date.

Structure of the statement table:

    level 0   (=) RECEITA OPERACIONAL BRUTA        total of paid receitas
    level 1       <category>                       one row per category
    level 0   (-) DESPESAS OPERACIONAIS            total of paid despesas
    level 1       <category>                       one row per category
    level 0   (=) RESULTADO LÍQUIDO DO EXERCÍCIO   revenue minus expenses

Transactions without a category are reported under "Outras Receitas" or
"Outras Despesas". Categories keep their order of first appearance.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from .dates import is_valid_date, parse_date
from .models import Transaction
from .periods import Period

OTHER_REVENUE = "Outras Receitas"
OTHER_EXPENSES = "Outras Despesas"

REVENUE_LABEL = "(=) RECEITA OPERACIONAL BRUTA"
EXPENSES_LABEL = "(-) DESPESAS OPERACIONAIS"
NET_RESULT_LABEL = "(=) RESULTADO LÍQUIDO DO EXERCÍCIO"


@dataclass(frozen=True)
class IncomeStatement:
    revenue_by_category: dict[str, float]
    expenses_by_category: dict[str, float]

    @property
    def total_revenue(self) -> float:
        return sum(self.revenue_by_category.values())

    @property
    def total_expenses(self) -> float:
        return sum(self.expenses_by_category.values())

    @property
    def net_result(self) -> float:
        return self.total_revenue - self.total_expenses


def _paid_within(tx: Transaction, period: Optional[Period]) -> bool:
    if tx.status != "Pago":
        return False
    if period is None:
        return True
    paid = parse_date(tx.payment_date)
    return is_valid_date(paid) and period.start <= paid <= period.end


def _sum_by_category(
    transactions: Iterable[Transaction],
    fallback: str,
    period: Optional[Period],
) -> dict[str, float]:
    totals: dict[str, float] = {}
    for tx in transactions:
        if not _paid_within(tx, period):
            continue
        key = tx.category.strip() or fallback
        totals[key] = totals.get(key, 0.0) + tx.amount
    return totals


def income_statement(
    payables: Iterable[Transaction],
    receivables: Iterable[Transaction],
    period: Optional[Period] = None,
) -> IncomeStatement:
    """
    Sum paid receivables and payables by category.

    Parameters
    ----------
    payables, receivables:
        Transactions of one company.
    period:
        Optional period; when given, only transactions paid within it
        (inclusive bounds) are counted. A paid transaction with an invalid
        payment date is then excluded.
    """
    return IncomeStatement(
        revenue_by_category=_sum_by_category(receivables, OTHER_REVENUE, period),
        expenses_by_category=_sum_by_category(payables, OTHER_EXPENSES, period),
    )


def income_statement_table(statement: IncomeStatement, decimals: int = 2) -> pd.DataFrame:
    """Return the statement as a DataFrame with columns level, name, amount."""
    rows: list[dict[str, object]] = [
        {"level": 0, "name": REVENUE_LABEL, "amount": statement.total_revenue}
    ]
    rows.extend(
        {"level": 1, "name": category, "amount": value}
        for category, value in statement.revenue_by_category.items()
    )
    rows.append({"level": 0, "name": EXPENSES_LABEL, "amount": -statement.total_expenses})
    rows.extend(
        {"level": 1, "name": category, "amount": -value}
        for category, value in statement.expenses_by_category.items()
    )
    rows.append({"level": 0, "name": NET_RESULT_LABEL, "amount": statement.net_result})

    df = pd.DataFrame(rows, columns=["level", "name", "amount"])
    df["amount"] = df["amount"].astype(float).round(decimals)
    return df
