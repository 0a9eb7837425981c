from datetime import date

import pytest

from finantech.charges import calculate_charges
from finantech.grouping import (
    ALL_GROUP,
    UNCATEGORIZED,
    group_subtotals,
    group_transactions,
    grouped_table,
)
from finantech.models import Project, Transaction

REF = date(2024, 3, 11)


def make_tx(tx_id: str, status: str = "Pendente", cost_center: str = "", **kw) -> Transaction:
    values = dict(
        id=tx_id,
        description=f"Lançamento {tx_id}",
        amount=100.0,
        due_date="01/03/2024",
        type="despesa",
        company="ACME",
        status=status,
        cost_center=cost_center,
    )
    values.update(kw)
    return Transaction(**values)


@pytest.fixture
def transactions() -> list[Transaction]:
    return [
        make_tx("a", "Vencido", "Obras", interest_rate=1.0, interest_type="daily"),
        make_tx("b", "Pago", "Administrativo", payment_date="01/03/2024"),
        make_tx("c", "Vencido", ""),
        make_tx("d", "Pendente", "Obras", fine_rate=2.0),
        make_tx("e", "Pago", "Obras", type="receita", payment_date="02/03/2024"),
    ]


def test_group_none_returns_single_bucket(transactions):
    groups = group_transactions(transactions, "none")

    assert list(groups) == [ALL_GROUP]
    assert groups[ALL_GROUP] == transactions


def test_group_by_status_keeps_first_appearance_order(transactions):
    groups = group_transactions(transactions, "status")

    assert list(groups) == ["Vencido", "Pago", "Pendente"]
    assert [t.id for t in groups["Vencido"]] == ["a", "c"]
    assert [t.id for t in groups["Pago"]] == ["b", "e"]


def test_group_by_cost_center_uses_fallback(transactions):
    groups = group_transactions(transactions, "costCenter")

    assert list(groups) == ["Obras", "Administrativo", UNCATEGORIZED]
    assert [t.id for t in groups[UNCATEGORIZED]] == ["c"]


def test_group_by_type(transactions):
    groups = group_transactions(transactions, "type")

    assert list(groups) == ["despesa", "receita"]


@pytest.mark.parametrize("grouping", ["none", "status", "costCenter", "type"])
def test_every_item_lands_in_exactly_one_group(transactions, grouping):
    groups = group_transactions(transactions, grouping)

    grouped_ids = [t.id for items in groups.values() for t in items]
    assert sorted(grouped_ids) == sorted(t.id for t in transactions)


@pytest.mark.parametrize("grouping", ["none", "status", "costCenter", "type"])
def test_subtotals_sum_to_overall_total(transactions, grouping):
    groups = group_transactions(transactions, grouping)

    subtotals = group_subtotals(groups, REF)

    overall = sum(calculate_charges(t, REF).total for t in transactions)
    assert sum(subtotals.values()) == pytest.approx(overall)


def test_subtotals_include_charges(transactions):
    groups = group_transactions(transactions, "costCenter")

    subtotals = group_subtotals(groups, REF)

    # a: 100 + 10 days x 1 % = 110; d: 100 + 2 % fine = 102; e: paid = 100
    assert subtotals["Obras"] == pytest.approx(312.0)
    assert subtotals[UNCATEGORIZED] == pytest.approx(100.0)


def test_projects_group_by_cost_center_name():
    projects = [
        Project(id="p1", name="Casa", type="Obra", status="Ativo", client_id="c", company="ACME",
                cost_center_name="Obras"),
        Project(id="p2", name="Loja", type="Obra", status="Ativo", client_id="c", company="ACME"),
    ]

    groups = group_transactions(projects, "costCenter")

    assert list(groups) == ["Obras", UNCATEGORIZED]


def test_unknown_grouping_raises(transactions):
    with pytest.raises(ValueError):
        group_transactions(transactions, "category")


def test_grouped_table_rows(transactions):
    groups = group_transactions(transactions, "status")

    df = grouped_table(groups, "status", reference_date=REF, contact_names={})

    assert list(df["row_type"]) == [
        "group", "item", "item", "subtotal",
        "group", "item", "item", "subtotal",
        "group", "item", "subtotal",
    ]
    first_item = df[df["id"] == "a"].iloc[0]
    assert first_item["due_date"] == "01/03/2024"
    assert first_item["interest"] == pytest.approx(10.0)
    assert first_item["total"] == pytest.approx(110.0)

    subtotal_rows = df[df["row_type"] == "subtotal"]
    assert subtotal_rows["total"].sum() == pytest.approx(512.0)


def test_grouped_table_without_grouping_has_only_items(transactions):
    groups = group_transactions(transactions, "none")

    df = grouped_table(groups, "none", reference_date=REF)

    assert set(df["row_type"]) == {"item"}
    assert len(df) == len(transactions)
