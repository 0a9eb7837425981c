# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Aggregations over transactions linked to properties, projects and proposals.

Transactions reference their parent entity through `property_id`,
`project_id` or `contact_id`. These links drive:

- per-property monthly results (paid receitas minus paid despesas),
- per-project realized cost and budget consumption,
- the six-month cash flow used by the financial analysis,
- the deletion guards of the workspace (`linked_transaction_count`).

Only paid transactions ("Pago" with a valid payment date) count as
realized; pending amounts are never included in results.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .dates import is_valid_date, parse_date, today
from .grouping import UNCATEGORIZED
from .models import Project, Property, Proposal, Transaction
from .recurrence import add_months

MONTH_LABELS_PT = (
    "JAN",
    "FEV",
    "MAR",
    "ABR",
    "MAI",
    "JUN",
    "JUL",
    "AGO",
    "SET",
    "OUT",
    "NOV",
    "DEZ",
)


@dataclass(frozen=True)
class PropertyMonthlyResult:
    property_id: str
    year: int
    month: int
    income: float
    expenses: float
    net: float
    by_cost_center: dict[str, float]


@dataclass(frozen=True)
class ProjectCostSummary:
    project_id: str
    budgeted_cost: float
    realized_cost: float
    realized_revenue: float
    budget_consumption: Optional[float]


@dataclass(frozen=True)
class CashFlowMonth:
    month: str
    receitas: float
    despesas: float
    saldo: float


def _paid_in_month(tx: Transaction, year: int, month: int) -> bool:
    if tx.status != "Pago":
        return False
    paid = parse_date(tx.payment_date)
    return is_valid_date(paid) and paid.year == year and paid.month == month


def _signed_amount(tx: Transaction) -> float:
    return tx.amount if tx.type == "receita" else -tx.amount


def property_monthly_result(
    prop: Property,
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> PropertyMonthlyResult:
    """
    Net result of a property for one calendar month.

    Paid transactions linked to the property whose payment date falls in the
    month are summed: receitas count positive, despesas negative. The
    breakdown groups the same signed amounts by cost center.
    """
    income = 0.0
    expenses = 0.0
    by_cost_center: dict[str, float] = {}

    for tx in transactions:
        if tx.property_id != prop.id or not _paid_in_month(tx, year, month):
            continue
        if tx.type == "receita":
            income += tx.amount
        else:
            expenses += tx.amount
        key = tx.cost_center or UNCATEGORIZED
        by_cost_center[key] = by_cost_center.get(key, 0.0) + _signed_amount(tx)

    return PropertyMonthlyResult(
        property_id=prop.id,
        year=year,
        month=month,
        income=income,
        expenses=expenses,
        net=income - expenses,
        by_cost_center=by_cost_center,
    )


def project_cost_summary(
    project: Project,
    transactions: Iterable[Transaction],
) -> ProjectCostSummary:
    """
    Budget versus realized figures for a project.

    `budget_consumption` is realized cost / budgeted cost, or None when the
    project has no budget.
    """
    budgeted = sum(item.cost for item in project.budget)
    realized_cost = 0.0
    realized_revenue = 0.0
    for tx in transactions:
        if tx.project_id != project.id or tx.status != "Pago":
            continue
        if tx.type == "despesa":
            realized_cost += tx.amount
        else:
            realized_revenue += tx.amount

    return ProjectCostSummary(
        project_id=project.id,
        budgeted_cost=budgeted,
        realized_cost=realized_cost,
        realized_revenue=realized_revenue,
        budget_consumption=realized_cost / budgeted if budgeted else None,
    )


def proposal_total(proposal: Proposal) -> float:
    """Sum of the proposal item values."""
    return sum(item.value for item in proposal.items)


def linked_transaction_count(
    transactions: Iterable[Transaction],
    *,
    contact_id: Optional[str] = None,
    project_id: Optional[str] = None,
    property_id: Optional[str] = None,
) -> int:
    """
    Count the transactions referencing a contact, project or property.

    Exactly one of the keyword arguments must be given.
    """
    given = [v for v in (contact_id, project_id, property_id) if v is not None]
    if len(given) != 1:
        raise ValueError("Give exactly one of contact_id, project_id, property_id.")

    if contact_id is not None:
        return sum(1 for tx in transactions if tx.contact_id == contact_id)
    if project_id is not None:
        return sum(1 for tx in transactions if tx.project_id == project_id)
    return sum(1 for tx in transactions if tx.property_id == property_id)


def monthly_cash_flow(
    transactions: Sequence[Transaction],
    months: int = 6,
    reference_date: Optional[date] = None,
) -> list[CashFlowMonth]:
    """
    Paid receitas / despesas per month over the last `months` months.

    The current month is the last one. `saldo` is the running balance over
    the window, starting at zero. An empty list is returned when the window
    has no activity at all.
    """
    ref = reference_date if reference_date is not None else today()
    first = add_months(date(ref.year, ref.month, 1), -(months - 1))

    result: list[CashFlowMonth] = []
    balance = 0.0
    for offset in range(months):
        current = add_months(first, offset)
        receitas = sum(
            tx.amount
            for tx in transactions
            if tx.type == "receita" and _paid_in_month(tx, current.year, current.month)
        )
        despesas = sum(
            tx.amount
            for tx in transactions
            if tx.type == "despesa" and _paid_in_month(tx, current.year, current.month)
        )
        balance += receitas - despesas
        result.append(
            CashFlowMonth(
                month=MONTH_LABELS_PT[current.month - 1],
                receitas=receitas,
                despesas=despesas,
                saldo=balance,
            )
        )

    if not any(m.receitas or m.despesas for m in result):
        return []
    return result
