from finantech.models import Transaction
from finantech.periods import period_month
from finantech.reports import (
    NET_RESULT_LABEL,
    OTHER_EXPENSES,
    OTHER_REVENUE,
    income_statement,
    income_statement_table,
)


def make_tx(tx_id: str, **kw) -> Transaction:
    values = dict(
        id=tx_id,
        description=tx_id,
        amount=100.0,
        due_date="2024-03-05",
        type="despesa",
        company="ACME",
        status="Pago",
        payment_date="10/03/2024",
    )
    values.update(kw)
    return Transaction(**values)


RECEIVABLES = [
    make_tx("r1", type="receita", amount=1000.0, category="Vendas"),
    make_tx("r2", type="receita", amount=250.0),
    make_tx("r3", type="receita", amount=500.0, category="Vendas"),
    make_tx("r4", type="receita", amount=9999.0, status="Pendente", payment_date=None),
]
PAYABLES = [
    make_tx("p1", amount=300.0, category="Aluguel"),
    make_tx("p2", amount=80.0, category="  "),
    make_tx("p3", amount=40.0, status="Vencido", payment_date=None),
]


def test_income_statement_sums_paid_transactions_by_category():
    """Only paid transactions count; empty categories use the fallback names."""
    stmt = income_statement(PAYABLES, RECEIVABLES)

    assert stmt.revenue_by_category == {"Vendas": 1500.0, OTHER_REVENUE: 250.0}
    assert stmt.expenses_by_category == {"Aluguel": 300.0, OTHER_EXPENSES: 80.0}
    assert stmt.total_revenue == 1750.0
    assert stmt.total_expenses == 380.0
    assert stmt.net_result == 1370.0


def test_income_statement_filters_on_payment_date():
    """The period applies to the payment date, bounds included."""
    receivables = [
        make_tx("r1", type="receita", amount=100.0, payment_date="2024-03-31"),
        make_tx("r2", type="receita", amount=200.0, payment_date="01/04/2024"),
        make_tx("r3", type="receita", amount=300.0, payment_date="not a date"),
    ]

    stmt = income_statement([], receivables, period_month(2024, 3))

    assert stmt.revenue_by_category == {OTHER_REVENUE: 100.0}
    assert stmt.expenses_by_category == {}
    assert stmt.net_result == 100.0


def test_income_statement_table_layout():
    """Totals at level 0, categories at level 1, expenses shown as negatives."""
    table = income_statement_table(income_statement(PAYABLES, RECEIVABLES))

    assert list(table.columns) == ["level", "name", "amount"]
    assert table["level"].tolist() == [0, 1, 1, 0, 1, 1, 0]
    assert table["amount"].tolist() == [1750.0, 1500.0, 250.0, -380.0, -300.0, -80.0, 1370.0]
    assert table["name"].iloc[-1] == NET_RESULT_LABEL


def test_empty_statement():
    table = income_statement_table(income_statement([], []))

    assert table["amount"].tolist() == [0.0, 0.0, 0.0]
