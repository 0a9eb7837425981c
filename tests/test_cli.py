import pytest

import finantech.cli as cli
from finantech.db import DatabaseConfig
from finantech.models import BankAccount, Contact, SystemTransaction, Transaction
from finantech.workspace import Workspace


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Write a minimal TOML config pointing to a temporary database."""
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    path = tmp_path / "finantech_config.toml"
    path.write_text(
        '[company]\ndefault = "ACME"\n\n'
        '[database]\nengine = "sqlite"\npath = "cli.sqlite"\n\n'
        '[display]\ngrouping = "status"\n',
        encoding="utf-8",
    )
    return path


def make_workspace(tmp_path) -> Workspace:
    return Workspace.load(DatabaseConfig(engine="sqlite", path=tmp_path / "cli.sqlite"))


def run(config_path, *argv) -> None:
    cli.main(["--config", str(config_path), *argv])


def test_version(capsys):
    """--version prints the installed version."""
    cli.main(["--version"])

    assert "finantech version" in capsys.readouterr().out


def test_taxes_simulate(config_path, capsys):
    """taxes simulate prints the regime breakdown and total."""
    run(config_path, "taxes", "simulate", "100000", "--regime", "presumido")

    out = capsys.readouterr().out
    assert "Lucro Presumido" in out
    assert "Total:   8650.00" in out


def test_payables_list_with_charges(tmp_path, config_path, capsys):
    """payables list shows only the selected company and exports the CSV."""
    ws = make_workspace(tmp_path)
    ws.add_transaction(
        Transaction(id="t1", description="Aluguel", amount=1000.0, due_date="01/03/2024",
                    type="despesa", company="ACME", interest_rate=1.0, interest_type="daily")
    )
    ws.add_transaction(
        Transaction(id="t2", description="Outra empresa", amount=5.0, due_date="01/03/2024",
                    type="despesa", company="Other")
    )
    csv_path = tmp_path / "out" / "payables.csv"

    run(config_path, "payables", "list", "--as-of", "11/03/2024", "--csv", str(csv_path))

    out = capsys.readouterr().out
    assert "Aluguel" in out
    assert "Outra empresa" not in out
    assert "Total owed: 1100.00" in out
    assert csv_path.is_file()


def test_transactions_pay(tmp_path, config_path, capsys):
    """transactions pay stores the payment date."""
    ws = make_workspace(tmp_path)
    ws.add_transaction(
        Transaction(id="t1", description="Luz", amount=80.0, due_date="2024-03-01",
                    type="despesa", company="ACME")
    )

    run(config_path, "transactions", "pay", "t1", "--date", "05/03/2024")

    assert "paid on 05/03/2024" in capsys.readouterr().out
    assert make_workspace(tmp_path).payables[0].status == "Pago"


def test_contacts_validate(config_path, capsys):
    """contacts validate prints the formatted document."""
    run(config_path, "contacts", "validate", "11222333000181")
    assert "11.222.333/0001-81" in capsys.readouterr().out

    with pytest.raises(SystemExit) as excinfo:
        run(config_path, "contacts", "validate", "111.111.111-11")
    assert excinfo.value.code == 1
    assert "CPF/CNPJ inválido." in capsys.readouterr().err


def test_blocked_deletion_exits_with_warning(tmp_path, config_path, capsys):
    """A blocked deletion is reported as a warning with exit status 1."""
    ws = make_workspace(tmp_path)
    ws.save_contact(
        Contact(id="c1", name="Cliente", type="Cliente", document="529.982.247-25", company="ACME")
    )
    ws.add_transaction(
        Transaction(id="r1", description="Venda", amount=10.0, due_date="2024-03-01",
                    type="receita", company="ACME", contact_id="c1")
    )

    with pytest.raises(SystemExit) as excinfo:
        run(config_path, "contacts", "delete", "c1")

    assert excinfo.value.code == 1
    assert "vinculado a 1 transação(ões)" in capsys.readouterr().err
    assert len(make_workspace(tmp_path).contacts) == 1


def test_bank_reconcile_without_key_fails_gracefully(tmp_path, config_path, capsys, monkeypatch):
    """Reconciliation without an API key fails with the localized message."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    ws = make_workspace(tmp_path)
    csv_path = tmp_path / "extrato.csv"
    csv_path.write_text("date,description,amount\n10/03/2024,PIX,50\n", encoding="utf-8")

    ws._persist(
        "bank_accounts",
        [BankAccount(id="b1", name="Conta", agency="1", account="2", balance=0.0, company="ACME")],
    )
    ws._persist(
        "system_transactions",
        [SystemTransaction(id="s1", bank_account_id="b1", date="10/03/2024", description="Venda",
                           amount=50.0, type="credit", company="ACME")],
    )

    run(config_path, "bank", "import", str(csv_path), "--account", "b1")
    assert "Imported 1 new line(s)" in capsys.readouterr().out

    with pytest.raises(SystemExit):
        run(config_path, "bank", "reconcile", "--apply")
    assert "A IA não conseguiu processar a conciliação." in capsys.readouterr().err


def test_advisor_without_key_prints_message(config_path, capsys, monkeypatch):
    """The advisor prints the missing-key message instead of failing."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    run(config_path, "advisor", "tax", "50000")

    assert "Chave de API não configurada." in capsys.readouterr().out


def test_missing_config_is_reported(tmp_path, capsys):
    """A missing configuration file is an argparse error."""
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(tmp_path / "missing.toml"), "taxes", "simulate", "1"])

    assert excinfo.value.code == 2


def test_transactions_add_and_delete(tmp_path, config_path, capsys):
    """transactions add stores a transaction for the resolved company; delete removes it."""
    run(
        config_path, "transactions", "add", "despesa", "Internet", "120.50", "05/04/2024",
        "--id", "t9", "--category", "Utilidades", "--interest-rate", "1",
        "--interest-type", "daily", "--recurrence", "monthly",
    )

    assert "Added despesa t9" in capsys.readouterr().out
    stored = make_workspace(tmp_path).payables
    assert [t.id for t in stored] == ["t9"]
    assert stored[0].company == "ACME"
    assert stored[0].recurrence.interval == "monthly"

    run(config_path, "--company", "Other", "transactions", "add", "receita", "Venda", "10",
        "2024-04-05")
    assert make_workspace(tmp_path).receivables[0].company == "Other"

    run(config_path, "transactions", "delete", "t9")
    assert make_workspace(tmp_path).payables == []


def test_transactions_add_rejects_invalid_due_date(tmp_path, config_path, capsys):
    """An invalid due date is reported and nothing is stored."""
    with pytest.raises(SystemExit) as excinfo:
        run(config_path, "transactions", "add", "despesa", "Luz", "80", "31/02/2024")

    assert excinfo.value.code == 1
    assert "Invalid date format" in capsys.readouterr().err
    assert make_workspace(tmp_path).payables == []


def test_contacts_add_validates_and_formats_document(tmp_path, config_path, capsys):
    """contacts add stores the formatted document and rejects invalid ones."""
    run(config_path, "contacts", "add", "Fornecedor X", "11222333000181",
        "--type", "Fornecedor", "--id", "c7")

    assert "11.222.333/0001-81" in capsys.readouterr().out
    contact = make_workspace(tmp_path).contacts[0]
    assert (contact.id, contact.type, contact.company) == ("c7", "Fornecedor", "ACME")

    with pytest.raises(SystemExit) as excinfo:
        run(config_path, "contacts", "add", "Outro", "111.111.111-11")
    assert excinfo.value.code == 1
    assert len(make_workspace(tmp_path).contacts) == 1


def test_reports_dre(tmp_path, config_path, capsys):
    """reports dre prints paid revenue and expenses by category and the net result."""
    ws = make_workspace(tmp_path)
    ws.add_transaction(
        Transaction(id="r1", description="Venda", amount=1000.0, due_date="2024-03-01",
                    type="receita", company="ACME", status="Pago", payment_date="02/03/2024",
                    category="Vendas")
    )
    ws.add_transaction(
        Transaction(id="p1", description="Luz", amount=300.0, due_date="2024-03-01",
                    type="despesa", company="ACME", status="Pago", payment_date="03/03/2024")
    )
    ws.add_transaction(
        Transaction(id="p2", description="Aberto", amount=999.0, due_date="2024-03-01",
                    type="despesa", company="ACME")
    )

    run(config_path, "reports", "dre", "--month", "2024-03")

    out = capsys.readouterr().out
    assert "RECEITA OPERACIONAL BRUTA" in out
    assert "Vendas" in out
    assert "Outras Despesas" in out
    assert "700.0" in out
    assert "999" not in out


def test_group_without_subcommand_prints_help_text(config_path, capsys):
    """Command groups without a subcommand print the available subcommands."""
    run(config_path, "company")
    assert "No company subcommand specified" in capsys.readouterr().out

    run(config_path, "reports")
    assert "No reports subcommand specified" in capsys.readouterr().out
