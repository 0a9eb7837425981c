# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for FinanTech.

The CLI is intentionally thin: it does not implement financial rules
itself. It loads the configuration, sets up logging, loads the workspace
from the database and dispatches to the underlying modules.


Company (tenant) selection
--------------------------

Every list is filtered by company. The company is resolved as:

1) ``--company`` on the command line,
2) the company stored with ``company select NAME``,
3) ``[company] default`` in the TOML configuration.


Commands
--------

    payables list | receivables list
        Grouped table of transactions with interest, fine and total owed.
        Options: --group, --month, --from-date, --to-date, --as-of, --csv.

    transactions add {receita,despesa} DESCRIPTION AMOUNT DUE_DATE [options]
    transactions delete ID
    transactions pay ID [--date D] | schedule ID DATE | next ID | refresh-overdue

    contacts add NAME DOCUMENT [--type T] | contacts validate DOCUMENT
    contacts delete ID
    projects delete ID | projects summary ID
    properties delete ID | properties result ID --month YYYY-MM
    properties rent ID

    bank import CSV --account ID | bank reconcile [--apply]

    reports dre [--month M | --from-date D --to-date D]

    taxes simulate REVENUE --regime {simples,presumido,real}

    advisor analysis | advisor costs | advisor tax REVENUE [--activity TEXT]

    company select NAME


Errors
------

Business errors (`FinanTechError`) are printed as a warning and the process
exits with status 1. Configuration problems are reported through argparse.
"""

import argparse
import logging
import sqlite3
import sys
import uuid
from datetime import date
from pathlib import Path
from typing import Optional

from . import __version__
from .advisor import cost_cutting_suggestions, financial_analysis, tax_regime_comparison
from .config import AppConfig, load_app_config
from .dates import is_valid_date, parse_date
from .db import init_database
from .documents import format_document, is_valid_document
from .errors import FinanTechError, ValidationError
from .grouping import GROUPING_TYPES, group_subtotals, group_transactions, grouped_table
from .io import export_grouped_csv, read_bank_statement
from .models import (
    RECURRENCE_INTERVALS,
    TRANSACTION_STATUSES,
    TRANSACTION_TYPES,
    Contact,
    Recurrence,
    Transaction,
)
from .periods import determine_period_from_args, filter_transactions_by_period
from .reconciliation import suggest_matches, unmatched_for_company
from .reports import income_statement, income_statement_table
from .rollups import monthly_cash_flow, project_cost_summary, property_monthly_result
from .taxes import REGIME_LABELS, TAX_RATES, simulate_tax_regime
from .utils import setup_logging
from .workspace import Workspace

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="finantech",
        description=(
            "FinanTech - Multi-tenant financial management for SMBs. "
            "Manages payables and receivables, late-payment charges, "
            "recurring entries, bank reconciliation and tax simulation."
        ),
    )

    # Generic options
    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of finantech and exit.",
    )
    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the main TOML configuration file. "
            "If omitted, 'finantech_config.toml' in the current directory is used."
        ),
    )
    ap.add_argument(
        "--company",
        help="Company (tenant) to work on. Overrides the selected/default company.",
    )

    subparsers = ap.add_subparsers(dest="command", metavar="command")

    # ------------------------------------------------------------------
    # payables / receivables list
    # ------------------------------------------------------------------
    for kind, label in (("payables", "accounts payable"), ("receivables", "accounts receivable")):
        kind_parser = subparsers.add_parser(kind, help=f"Inspect {label}.")
        kind_sub = kind_parser.add_subparsers(dest="list_command", metavar=f"{kind}-command")
        kind_list = kind_sub.add_parser("list", help=f"List {label} with charges.")
        kind_list.add_argument(
            "--group",
            choices=GROUPING_TYPES,
            help="Grouping of the table. Defaults to display.grouping from config.",
        )
        kind_list.add_argument(
            "--month",
            help="Only transactions due in this month ('current', YYYY-MM or MM/YYYY).",
        )
        kind_list.add_argument(
            "--from-date",
            dest="from_date",
            help="Only transactions due on or after this date (DD/MM/YYYY or YYYY-MM-DD).",
        )
        kind_list.add_argument(
            "--to-date",
            dest="to_date",
            help="Only transactions due on or before this date (DD/MM/YYYY or YYYY-MM-DD).",
        )
        kind_list.add_argument(
            "--as-of",
            dest="as_of",
            help="Reference date for interest and fines. Defaults to today.",
        )
        kind_list.add_argument(
            "--csv",
            dest="csv_path",
            metavar="PATH",
            help="Also export the grouped table to this CSV file.",
        )

    # ------------------------------------------------------------------
    # transactions
    # ------------------------------------------------------------------
    tx_parser = subparsers.add_parser("transactions", help="Update transactions.")
    tx_sub = tx_parser.add_subparsers(dest="tx_command", metavar="transactions-command")

    tx_add = tx_sub.add_parser("add", help="Create a payable or a receivable.")
    tx_add.add_argument("type", choices=TRANSACTION_TYPES)
    tx_add.add_argument("description")
    tx_add.add_argument("amount", type=float)
    tx_add.add_argument("due_date", help="Due date (DD/MM/YYYY or YYYY-MM-DD).")
    tx_add.add_argument("--id", dest="tx_id", help="Identifier. Generated when omitted.")
    tx_add.add_argument("--status", choices=TRANSACTION_STATUSES, default="Pendente")
    tx_add.add_argument("--category", default="")
    tx_add.add_argument("--cost-center", dest="cost_center", default="")
    tx_add.add_argument("--contact", dest="contact_id", help="Linked contact id.")
    tx_add.add_argument("--property", dest="property_id", help="Linked property id.")
    tx_add.add_argument("--project", dest="project_id", help="Linked project id.")
    tx_add.add_argument("--interest-rate", dest="interest_rate", type=float)
    tx_add.add_argument(
        "--interest-type", dest="interest_type", choices=("daily", "monthly")
    )
    tx_add.add_argument("--fine-rate", dest="fine_rate", type=float)
    tx_add.add_argument("--recurrence", choices=RECURRENCE_INTERVALS)
    tx_add.add_argument(
        "--recurrence-end", dest="recurrence_end", help="Last due date of the recurrence."
    )

    tx_delete = tx_sub.add_parser("delete", help="Delete a transaction.")
    tx_delete.add_argument("id")

    tx_pay = tx_sub.add_parser("pay", help="Mark a transaction as paid.")
    tx_pay.add_argument("id")
    tx_pay.add_argument("--date", help="Payment date. Defaults to today.")

    tx_schedule = tx_sub.add_parser("schedule", help="Schedule a payment.")
    tx_schedule.add_argument("id")
    tx_schedule.add_argument("date")

    tx_next = tx_sub.add_parser("next", help="Generate the next occurrence of a recurring entry.")
    tx_next.add_argument("id")

    tx_refresh = tx_sub.add_parser(
        "refresh-overdue", help="Mark overdue pending transactions as 'Vencido'."
    )
    tx_refresh.add_argument("--as-of", dest="as_of", help="Reference date. Defaults to today.")

    # ------------------------------------------------------------------
    # contacts / projects / properties
    # ------------------------------------------------------------------
    contacts_parser = subparsers.add_parser("contacts", help="Manage contacts.")
    contacts_sub = contacts_parser.add_subparsers(dest="contacts_command", metavar="contacts-command")
    contacts_add = contacts_sub.add_parser("add", help="Create or replace a contact.")
    contacts_add.add_argument("name")
    contacts_add.add_argument("document", help="CPF or CNPJ, with or without punctuation.")
    contacts_add.add_argument(
        "--type",
        dest="contact_type",
        choices=("Cliente", "Fornecedor", "Proprietário"),
        default="Cliente",
    )
    contacts_add.add_argument("--id", dest="contact_id", help="Identifier. Generated when omitted.")
    contacts_add.add_argument("--email", default="")
    contacts_add.add_argument("--phone", default="")
    contacts_validate = contacts_sub.add_parser("validate", help="Validate a CPF or CNPJ.")
    contacts_validate.add_argument("document")
    contacts_delete = contacts_sub.add_parser("delete", help="Delete a contact.")
    contacts_delete.add_argument("id")

    projects_parser = subparsers.add_parser("projects", help="Manage projects.")
    projects_sub = projects_parser.add_subparsers(dest="projects_command", metavar="projects-command")
    projects_delete = projects_sub.add_parser("delete", help="Delete a project.")
    projects_delete.add_argument("id")
    projects_summary = projects_sub.add_parser("summary", help="Budget versus realized cost.")
    projects_summary.add_argument("id")

    properties_parser = subparsers.add_parser("properties", help="Manage properties.")
    properties_sub = properties_parser.add_subparsers(
        dest="properties_command", metavar="properties-command"
    )
    properties_delete = properties_sub.add_parser("delete", help="Delete a property.")
    properties_delete.add_argument("id")
    properties_result = properties_sub.add_parser("result", help="Monthly net result.")
    properties_result.add_argument("id")
    properties_result.add_argument("--month", required=True, help="Month (YYYY-MM or MM/YYYY).")
    properties_rent = properties_sub.add_parser(
        "rent", help="Regenerate future rent receivables of a rented property."
    )
    properties_rent.add_argument("id")

    # ------------------------------------------------------------------
    # bank
    # ------------------------------------------------------------------
    bank_parser = subparsers.add_parser("bank", help="Bank statements and reconciliation.")
    bank_sub = bank_parser.add_subparsers(dest="bank_command", metavar="bank-command")
    bank_import = bank_sub.add_parser("import", help="Import statement lines from CSV.")
    bank_import.add_argument("csv_path", metavar="CSV")
    bank_import.add_argument("--account", required=True, help="Bank account id.")
    bank_reconcile = bank_sub.add_parser("reconcile", help="Ask the AI for matching pairs.")
    bank_reconcile.add_argument(
        "--apply",
        action="store_true",
        help="Flag the suggested system transactions as matched.",
    )

    # ------------------------------------------------------------------
    # reports
    # ------------------------------------------------------------------
    reports_parser = subparsers.add_parser("reports", help="Financial reports.")
    reports_sub = reports_parser.add_subparsers(dest="reports_command", metavar="reports-command")
    reports_dre = reports_sub.add_parser(
        "dre", help="Income statement (cash basis, paid transactions only)."
    )
    reports_dre.add_argument(
        "--month",
        help="Only transactions paid in this month ('current', YYYY-MM or MM/YYYY).",
    )
    reports_dre.add_argument(
        "--from-date",
        dest="from_date",
        help="Only transactions paid on or after this date.",
    )
    reports_dre.add_argument(
        "--to-date",
        dest="to_date",
        help="Only transactions paid on or before this date.",
    )

    # ------------------------------------------------------------------
    # taxes / advisor / company
    # ------------------------------------------------------------------
    taxes_parser = subparsers.add_parser("taxes", help="Tax regime simulation.")
    taxes_sub = taxes_parser.add_subparsers(dest="taxes_command", metavar="taxes-command")
    taxes_simulate = taxes_sub.add_parser("simulate", help="Estimate monthly taxes.")
    taxes_simulate.add_argument("revenue", type=float)
    taxes_simulate.add_argument("--regime", choices=list(TAX_RATES), default="simples")

    advisor_parser = subparsers.add_parser("advisor", help="AI advisory text.")
    advisor_sub = advisor_parser.add_subparsers(dest="advisor_command", metavar="advisor-command")
    advisor_sub.add_parser("analysis", help="Cash-flow analysis for the next 3 months.")
    advisor_sub.add_parser("costs", help="Cost-cutting suggestions.")
    advisor_tax = advisor_sub.add_parser("tax", help="Tax regime comparison.")
    advisor_tax.add_argument("revenue", type=float)
    advisor_tax.add_argument("--activity", default="", help="Main business activity.")

    company_parser = subparsers.add_parser("company", help="Company selection.")
    company_sub = company_parser.add_subparsers(dest="company_command", metavar="company-command")
    company_select = company_sub.add_parser("select", help="Remember the company to work on.")
    company_select.add_argument("name")

    return ap


def _parse_reference_date(value: Optional[str]) -> Optional[date]:
    """
    Parse an optional CLI date argument (DD/MM/YYYY or YYYY-MM-DD).

    Raises
    ------
    ValidationError
        If the date format is invalid.
    """
    if value is None:
        return None
    parsed = parse_date(value)
    if not is_valid_date(parsed):
        raise ValidationError(
            f"Invalid date format: {value!r}. Expected DD/MM/YYYY or YYYY-MM-DD."
        )
    return parsed


def _resolve_company(args: argparse.Namespace, config: AppConfig, ws: Workspace) -> str:
    company = args.company or ws.selected_company or config.default_company
    if not company:
        raise ValidationError(
            "No company selected. Use --company, 'company select NAME' or "
            "set [company] default in the configuration."
        )
    return company


def _handle_list(args: argparse.Namespace, config: AppConfig, ws: Workspace) -> None:
    """Print (and optionally export) the grouped table of payables or receivables."""
    company = _resolve_company(args, config, ws)
    period = determine_period_from_args(args)
    reference_date = _parse_reference_date(args.as_of)
    grouping = args.group or config.grouping

    items = filter_transactions_by_period(ws.transactions_for(company, args.command), period)

    if period is not None:
        print(f"Applied period: {period.label}")

    if not items:
        print("No transactions found for the given criteria.")
        return

    groups = group_transactions(items, grouping)
    contact_names = {c.id: c.name for c in ws.contacts}
    table = grouped_table(
        groups,
        grouping,
        reference_date=reference_date,
        contact_names=contact_names,
        decimals=config.decimals,
    )

    print()
    print(table.fillna("").to_string(index=False))

    subtotals = group_subtotals(groups, reference_date)
    print()
    print(f"Total entries: {len(items)} | Total owed: {sum(subtotals.values()):.{config.decimals}f}")

    if args.csv_path:
        path = Path(args.csv_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        export_grouped_csv(table, path)
        print(f"Wrote {path} ({len(table)} rows)")


def _transaction_from_args(args: argparse.Namespace, company: str) -> Transaction:
    """Build a new transaction from the `transactions add` arguments."""
    for value in (args.due_date, args.recurrence_end):
        if value is not None:
            _parse_reference_date(value)

    recurrence = None
    if args.recurrence:
        recurrence = Recurrence(interval=args.recurrence, end_date=args.recurrence_end)

    return Transaction(
        id=args.tx_id or uuid.uuid4().hex,
        description=args.description,
        amount=args.amount,
        due_date=args.due_date,
        type=args.type,
        company=company,
        status=args.status,
        category=args.category,
        cost_center=args.cost_center,
        interest_rate=args.interest_rate,
        interest_type=args.interest_type,
        fine_rate=args.fine_rate,
        recurrence=recurrence,
        contact_id=args.contact_id,
        property_id=args.property_id,
        project_id=args.project_id,
    )


def _handle_transactions(args: argparse.Namespace, config: AppConfig, ws: Workspace) -> None:
    subcmd = args.tx_command
    if subcmd == "add":
        tx = ws.add_transaction(_transaction_from_args(args, _resolve_company(args, config, ws)))
        print(f"Added {tx.type} {tx.id}: {tx.description} due {tx.due_date} ({tx.amount:.2f}).")
    elif subcmd == "delete":
        ws.delete_transaction(args.id)
        print(f"Transaction {args.id} deleted.")
    elif subcmd == "pay":
        tx = ws.pay_transaction(args.id, args.date)
        print(f"Transaction {tx.id} paid on {tx.payment_date}.")
    elif subcmd == "schedule":
        tx = ws.schedule_transaction(args.id, args.date)
        print(f"Transaction {tx.id} scheduled for {tx.scheduled_payment_date}.")
    elif subcmd == "next":
        tx = ws.generate_next_occurrence(args.id)
        print(f"Generated {tx.id}: {tx.description} due {tx.due_date} ({tx.amount:.2f}).")
    elif subcmd == "refresh-overdue":
        changed = ws.refresh_overdue(_parse_reference_date(args.as_of))
        print(f"{changed} transaction(s) marked as 'Vencido'.")
    else:
        print(
            "No transactions subcommand specified. "
            "Available subcommands are: 'add', 'delete', 'pay', 'schedule', 'next', "
            "'refresh-overdue'."
        )


def _handle_contacts(args: argparse.Namespace, config: AppConfig, ws: Workspace) -> None:
    subcmd = args.contacts_command
    if subcmd == "add":
        contact = ws.save_contact(
            Contact(
                id=args.contact_id or uuid.uuid4().hex,
                name=args.name,
                type=args.contact_type,
                document=args.document,
                company=_resolve_company(args, config, ws),
                email=args.email,
                phone=args.phone,
            )
        )
        print(f"Saved contact {contact.id}: {contact.name} ({contact.document}).")
    elif subcmd == "validate":
        if is_valid_document(args.document):
            print(f"Valid document: {format_document(args.document)}")
        else:
            raise ValidationError("CPF/CNPJ inválido.")
    elif subcmd == "delete":
        ws.delete_contact(args.id)
        print(f"Contact {args.id} deleted.")
    else:
        print(
            "No contacts subcommand specified. "
            "Available subcommands are: 'add', 'validate', 'delete'."
        )


def _handle_projects(args: argparse.Namespace, config: AppConfig, ws: Workspace) -> None:
    subcmd = args.projects_command
    if subcmd == "delete":
        ws.delete_project(args.id)
        print(f"Project {args.id} deleted.")
    elif subcmd == "summary":
        project = ws.find_entity(ws.projects, args.id, "Projeto")
        summary = project_cost_summary(project, ws.all_transactions())
        print(f"Project:          {project.name}")
        print(f"Budgeted cost:    {summary.budgeted_cost:.2f}")
        print(f"Realized cost:    {summary.realized_cost:.2f}")
        print(f"Realized revenue: {summary.realized_revenue:.2f}")
        if summary.budget_consumption is not None:
            print(f"Budget consumed:  {summary.budget_consumption:.1%}")
    else:
        print("No projects subcommand specified. Available subcommands are: 'delete', 'summary'.")


def _handle_properties(args: argparse.Namespace, config: AppConfig, ws: Workspace) -> None:
    subcmd = args.properties_command
    if subcmd == "delete":
        ws.delete_property(args.id)
        print(f"Property {args.id} deleted.")
    elif subcmd == "result":
        prop = ws.find_entity(ws.properties, args.id, "Imóvel")
        period = determine_period_from_args(argparse.Namespace(month=args.month))
        result = property_monthly_result(
            prop, ws.all_transactions(), period.start.year, period.start.month
        )
        print(f"Property: {prop.name} ({period.label})")
        print(f"Income:   {result.income:.2f}")
        print(f"Expenses: {result.expenses:.2f}")
        print(f"Net:      {result.net:.2f}")
        for cost_center, value in result.by_cost_center.items():
            print(f"  - {cost_center}: {value:.2f}")
    elif subcmd == "rent":
        created = ws.generate_rent(args.id)
        print(f"Generated {len(created)} rent receivable(s) for property {args.id}.")
    else:
        print(
            "No properties subcommand specified. "
            "Available subcommands are: 'delete', 'result', 'rent'."
        )


def _handle_bank(args: argparse.Namespace, config: AppConfig, ws: Workspace) -> None:
    subcmd = args.bank_command
    if subcmd == "import":
        csv_path = Path(args.csv_path)
        if not csv_path.is_file():
            raise ValidationError(f"CSV file not found: {csv_path}")
        print(f"Importing bank statement lines from {csv_path}...")
        lines = read_bank_statement(csv_path, args.account)
        imported = ws.import_bank_transactions(lines)
        print(f"Imported {imported} new line(s) ({len(lines) - imported} already known).")
    elif subcmd == "reconcile":
        company = _resolve_company(args, config, ws)
        bank_txs, system_txs = unmatched_for_company(
            company, ws.bank_accounts, ws.bank_transactions, ws.system_transactions
        )
        suggestions = suggest_matches(bank_txs, system_txs, config.ai)
        if not suggestions:
            print("No reconciliation suggestions.")
            return
        for s in suggestions:
            print(f"- {s.bank_tx_id} <-> {s.system_tx_id}: {s.reason}")
        if args.apply:
            changed = ws.apply_reconciliation(suggestions)
            print(f"{changed} system transaction(s) flagged as matched.")
    else:
        print("No bank subcommand specified. Available subcommands are: 'import', 'reconcile'.")


def _handle_reports(args: argparse.Namespace, config: AppConfig, ws: Workspace) -> None:
    if args.reports_command != "dre":
        print("No reports subcommand specified. Available subcommands are: 'dre'.")
        return

    company = _resolve_company(args, config, ws)
    period = determine_period_from_args(args)
    statement = income_statement(
        ws.transactions_for(company, "payables"),
        ws.transactions_for(company, "receivables"),
        period,
    )
    table = income_statement_table(statement, decimals=config.decimals)

    print(f"DRE - {company} (regime de caixa)")
    if period is not None:
        print(f"Applied period: {period.label}")
    print()
    print(table.to_string(index=False))


def _handle_company(args: argparse.Namespace, ws: Workspace) -> None:
    if args.company_command != "select":
        print("No company subcommand specified. Available subcommands are: 'select'.")
        return
    ws.select_company(args.name)
    print(f"Selected company: {args.name}")


def _handle_taxes(args: argparse.Namespace, config: AppConfig) -> None:
    if args.taxes_command != "simulate":
        print("No taxes subcommand specified. Available subcommands are: 'simulate'.")
        return
    result = simulate_tax_regime(args.revenue, args.regime)
    print(f"Regime:  {REGIME_LABELS[result.regime]}")
    print(f"Revenue: {result.revenue:.2f}")
    for line in result.breakdown:
        print(f"  - {line.name}: {line.value:.2f}")
    print(f"Total:   {result.total:.2f}")


def _handle_advisor(args: argparse.Namespace, config: AppConfig, ws: Workspace) -> None:
    subcmd = args.advisor_command
    if subcmd == "analysis":
        company = _resolve_company(args, config, ws)
        payables = ws.transactions_for(company, "payables")
        receivables = ws.transactions_for(company, "receivables")
        cash_flow = monthly_cash_flow([*payables, *receivables])
        print(financial_analysis(cash_flow, receivables, payables, config.ai))
    elif subcmd == "costs":
        company = _resolve_company(args, config, ws)
        print(cost_cutting_suggestions(ws.transactions_for(company, "payables"), config.ai))
    elif subcmd == "tax":
        print(tax_regime_comparison(args.revenue, args.activity, config.ai))
    else:
        print(
            "No advisor subcommand specified. "
            "Available subcommands are: 'analysis', 'costs', 'tax'."
        )


def _dispatch(args: argparse.Namespace, config: AppConfig) -> None:
    command = args.command

    # Commands that do not touch the database.
    if command == "taxes":
        _handle_taxes(args, config)
        return

    init_database(config.database)
    ws = Workspace.load(config.database)

    if command in ("payables", "receivables"):
        if args.list_command != "list":
            print(f"No {command} subcommand specified. Available subcommands are: 'list'.")
            return
        _handle_list(args, config, ws)
    elif command == "transactions":
        _handle_transactions(args, config, ws)
    elif command == "contacts":
        _handle_contacts(args, config, ws)
    elif command == "projects":
        _handle_projects(args, config, ws)
    elif command == "properties":
        _handle_properties(args, config, ws)
    elif command == "bank":
        _handle_bank(args, config, ws)
    elif command == "advisor":
        _handle_advisor(args, config, ws)
    elif command == "reports":
        _handle_reports(args, config, ws)
    elif command == "company":
        _handle_company(args, ws)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the FinanTech CLI.

    This function parses command-line arguments, loads the configuration,
    sets up logging, initializes the database and runs the requested
    command. Business errors are printed as warnings and end the process
    with exit status 1.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --version: short-circuit and exit early.
    if args.version:
        print(f"finantech version {__version__}")
        return

    if not args.command:
        parser.print_help()
        return

    try:
        config = load_app_config(args.config_path)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    setup_logging(config.log_level, config.log_file)

    try:
        _dispatch(args, config)
    except FinanTechError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Aviso: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except (ValueError, OSError, sqlite3.Error) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
