from datetime import date

import pytest

from finantech.charges import (
    calculate_charges,
    elapsed_days,
    is_overdue,
    refresh_overdue_statuses,
)
from finantech.models import Transaction


def make_tx(**overrides) -> Transaction:
    values = dict(
        id="t1",
        description="Aluguel escritório",
        amount=1000.0,
        due_date="01/03/2024",
        type="despesa",
        company="ACME",
        status="Pendente",
    )
    values.update(overrides)
    return Transaction(**values)


def test_daily_interest_and_fine():
    """1000 at 1 %/day with a 2 % fine, 10 days late: 100 interest, 20 fine."""
    tx = make_tx(interest_rate=1.0, interest_type="daily", fine_rate=2.0)

    charges = calculate_charges(tx, date(2024, 3, 11))

    assert charges.days_overdue == 10
    assert charges.interest == pytest.approx(100.0)
    assert charges.fine == pytest.approx(20.0)
    assert charges.total == pytest.approx(1120.0)


def test_daily_interest_without_fine():
    tx = make_tx(interest_rate=1.0, interest_type="daily")

    charges = calculate_charges(tx, date(2024, 3, 11))

    assert charges.fine == 0.0
    assert charges.total == pytest.approx(1100.0)


def test_monthly_interest_is_prorated_on_30_days():
    """3 %/month over 15 days is half a month of interest."""
    tx = make_tx(interest_rate=3.0, interest_type="monthly")

    charges = calculate_charges(tx, date(2024, 3, 16))

    assert charges.interest == pytest.approx(15.0)
    assert charges.total == pytest.approx(1015.0)


def test_paid_transaction_has_no_charges():
    tx = make_tx(
        status="Pago",
        payment_date="20/03/2024",
        interest_rate=1.0,
        interest_type="daily",
        fine_rate=2.0,
    )

    charges = calculate_charges(tx, date(2024, 4, 1))

    assert charges.interest == 0.0
    assert charges.fine == 0.0
    assert charges.total == 1000.0


@pytest.mark.parametrize("reference", [date(2024, 3, 1), date(2024, 2, 20)])
def test_not_yet_due_has_no_charges(reference):
    tx = make_tx(interest_rate=1.0, interest_type="daily", fine_rate=2.0)

    charges = calculate_charges(tx, reference)

    assert charges.days_overdue == 0
    assert charges.total == 1000.0


def test_invalid_due_date_has_no_charges():
    tx = make_tx(due_date="31/02/2024", interest_rate=1.0, interest_type="daily")

    charges = calculate_charges(tx, date(2024, 12, 31))

    assert charges.interest == 0.0
    assert charges.total == 1000.0


def test_no_interest_rate_means_no_interest():
    tx = make_tx(interest_type="daily")

    charges = calculate_charges(tx, date(2024, 3, 31))

    assert charges.interest == 0.0
    assert charges.total == 1000.0


def test_fine_applies_without_interest_rate():
    tx = make_tx(fine_rate=10.0)

    charges = calculate_charges(tx, date(2024, 3, 2))

    assert charges.fine == pytest.approx(100.0)
    assert charges.total == pytest.approx(1100.0)


def test_iso_due_date_is_supported():
    tx = make_tx(due_date="2024-03-01", interest_rate=1.0, interest_type="daily")

    assert calculate_charges(tx, date(2024, 3, 3)).interest == pytest.approx(20.0)


def test_elapsed_days_never_negative():
    assert elapsed_days("10/03/2024", date(2024, 3, 1)) == 0
    assert elapsed_days("01/03/2024", date(2024, 3, 4)) == 3
    assert elapsed_days("garbage", date(2024, 3, 4)) == 0


def test_is_overdue_ignores_paid_and_scheduled():
    ref = date(2024, 3, 10)
    assert is_overdue(make_tx(), ref)
    assert not is_overdue(make_tx(status="Pago"), ref)
    assert not is_overdue(make_tx(status="Agendado"), ref)


def test_refresh_overdue_statuses_only_touches_pending():
    txs = [
        make_tx(id="a"),
        make_tx(id="b", due_date="2024-04-01"),
        make_tx(id="c", status="Pago"),
        make_tx(id="d", status="Agendado"),
    ]

    refreshed = refresh_overdue_statuses(txs, date(2024, 3, 15))

    assert [t.status for t in refreshed] == ["Vencido", "Pendente", "Pago", "Agendado"]
    # Inputs are untouched.
    assert txs[0].status == "Pendente"
    # Unchanged items are kept as-is.
    assert refreshed[1] is txs[1]
