# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
In-memory workspace backed by snapshot persistence.

The `Workspace` owns one list per entity type (payables, receivables,
contacts, ...). Every mutation builds a new list, swaps it in, and persists
the whole list under its snapshot key. If the write fails the previous list
is restored and `PersistenceError` is raised, so that memory and storage
never diverge silently.

Business rules enforced here:
- transactions are routed to payables (despesa) or receivables (receita),
- contact documents must be valid CPF/CNPJ numbers,
- bank details are only kept for owners ("Proprietário"),
- contacts, projects and properties cannot be deleted while transactions
  reference them (no cascade).

There is no concurrency control: a workspace assumes a single writer.
"""

import logging
import sqlite3
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date
from typing import Any, Literal, Optional

from . import db
from .charges import refresh_overdue_statuses
from .dates import format_date, is_valid_date, parse_date, today
from .documents import format_document, is_valid_document
from .errors import DeletionBlockedError, PersistenceError, ValidationError
from .models import (
    AdjustmentIndex,
    BankAccount,
    BankTransaction,
    Contact,
    Project,
    Property,
    Proposal,
    SystemTransaction,
    Transaction,
)
from .reconciliation import MatchSuggestion, apply_matches, manual_match
from .recurrence import generate_rent_receivables, next_occurrence
from .rollups import linked_transaction_count

logger = logging.getLogger(__name__)

TransactionKind = Literal["payables", "receivables"]

# Failures of a snapshot write: database errors, an unusable database path
# (OSError from mkdir) and values json cannot encode.
SAVE_ERRORS = (sqlite3.Error, OSError, TypeError, ValueError)

# attribute name -> (snapshot key, entity class)
_COLLECTIONS: dict[str, tuple[str, Any]] = {
    "payables": (db.KEY_PAYABLES, Transaction),
    "receivables": (db.KEY_RECEIVABLES, Transaction),
    "contacts": (db.KEY_CONTACTS, Contact),
    "properties": (db.KEY_PROPERTIES, Property),
    "projects": (db.KEY_PROJECTS, Project),
    "proposals": (db.KEY_PROPOSALS, Proposal),
    "bank_accounts": (db.KEY_BANK_ACCOUNTS, BankAccount),
    "bank_transactions": (db.KEY_BANK_TRANSACTIONS, BankTransaction),
    "system_transactions": (db.KEY_SYSTEM_TRANSACTIONS, SystemTransaction),
    "adjustment_indexes": (db.KEY_ADJUSTMENT_INDEXES, AdjustmentIndex),
}


def _kind_for(tx: Transaction) -> TransactionKind:
    return "payables" if tx.type == "despesa" else "receivables"


class Workspace:
    """
    Entity lists of all companies, loaded from and saved to the database.

    Use `Workspace.load(cfg)` to read every snapshot; a fresh database gives
    an empty workspace.
    """

    def __init__(self, cfg: db.DatabaseConfig) -> None:
        self.cfg = cfg
        self.payables: list[Transaction] = []
        self.receivables: list[Transaction] = []
        self.contacts: list[Contact] = []
        self.properties: list[Property] = []
        self.projects: list[Project] = []
        self.proposals: list[Proposal] = []
        self.bank_accounts: list[BankAccount] = []
        self.bank_transactions: list[BankTransaction] = []
        self.system_transactions: list[SystemTransaction] = []
        self.adjustment_indexes: list[AdjustmentIndex] = []
        self.selected_company: Optional[str] = None

    # ------------------------------------------------------------------
    # Loading / persistence
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, cfg: db.DatabaseConfig) -> "Workspace":
        """Load every snapshot from the database."""
        ws = cls(cfg)
        for attr, (key, entity_cls) in _COLLECTIONS.items():
            records = db.load_snapshot(cfg, key, default=[])
            if not isinstance(records, list):
                logger.warning("Snapshot %s is not a list, ignoring it.", key)
                records = []
            setattr(ws, attr, [entity_cls.from_dict(r) for r in records])

        selected = db.load_snapshot(cfg, db.KEY_SELECTED_COMPANY, default=None)
        ws.selected_company = str(selected) if selected else None

        logger.debug(
            "Loaded workspace: %d payable(s), %d receivable(s), %d contact(s)",
            len(ws.payables),
            len(ws.receivables),
            len(ws.contacts),
        )
        return ws

    def _save(self, attr: str, items: list) -> None:
        key, _ = _COLLECTIONS[attr]
        db.save_snapshot(self.cfg, key, [item.to_dict() for item in items])

    def _persist(self, attr: str, new_items: list) -> None:
        """Swap in `new_items` for `attr` and save it; revert on failure."""
        previous = getattr(self, attr)
        setattr(self, attr, new_items)
        try:
            self._save(attr, new_items)
        except SAVE_ERRORS as exc:
            setattr(self, attr, previous)
            logger.error("Failed to save %s: %s", attr, exc)
            raise PersistenceError(
                "Não foi possível salvar os dados. As alterações foram desfeitas."
            ) from exc

    def select_company(self, company: str) -> None:
        """Remember the selected company between runs."""
        previous = self.selected_company
        self.selected_company = company
        try:
            db.save_snapshot(self.cfg, db.KEY_SELECTED_COMPANY, company)
        except SAVE_ERRORS as exc:
            self.selected_company = previous
            raise PersistenceError(
                "Não foi possível salvar a empresa selecionada."
            ) from exc

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def transactions_for(
        self,
        company: str,
        kind: TransactionKind,
    ) -> list[Transaction]:
        """Payables or receivables of one company, in stored order."""
        if kind not in ("payables", "receivables"):
            raise ValueError(f"Unknown transaction kind: {kind!r}")
        return [tx for tx in getattr(self, kind) if tx.company == company]

    def all_transactions(self) -> list[Transaction]:
        return [*self.payables, *self.receivables]

    def find_transaction(self, tx_id: str) -> Transaction:
        for tx in self.all_transactions():
            if tx.id == tx_id:
                return tx
        raise ValidationError(f"Lançamento não encontrado: {tx_id}")

    def _update_transaction_list(
        self,
        kind: TransactionKind,
        fn: Callable[[list[Transaction]], list[Transaction]],
    ) -> None:
        self._persist(kind, fn(list(getattr(self, kind))))

    def add_transaction(self, tx: Transaction) -> Transaction:
        if any(existing.id == tx.id for existing in self.all_transactions()):
            raise ValidationError(f"Já existe um lançamento com o id {tx.id}.")
        self._update_transaction_list(_kind_for(tx), lambda items: [*items, tx])
        logger.info("Added %s %s (%s)", tx.type, tx.id, tx.company)
        return tx

    def update_transaction(self, tx: Transaction) -> Transaction:
        """Replace the stored transaction that has the same id."""
        current = self.find_transaction(tx.id)
        old_kind = _kind_for(current)
        new_kind = _kind_for(tx)

        if old_kind == new_kind:
            self._update_transaction_list(
                new_kind,
                lambda items: [tx if t.id == tx.id else t for t in items],
            )
        else:
            # The type changed: move the transaction to the other list.
            old_items = getattr(self, old_kind)
            self._persist(old_kind, [t for t in old_items if t.id != tx.id])
            try:
                self._persist(new_kind, [*getattr(self, new_kind), tx])
            except PersistenceError:
                setattr(self, old_kind, old_items)
                try:
                    self._save(old_kind, old_items)
                except SAVE_ERRORS as exc:
                    logger.error("Failed to restore %s: %s", old_kind, exc)
                raise
        return tx

    def delete_transaction(self, tx_id: str) -> None:
        current = self.find_transaction(tx_id)
        self._update_transaction_list(
            _kind_for(current), lambda items: [t for t in items if t.id != tx_id]
        )
        logger.info("Deleted transaction %s", tx_id)

    def pay_transaction(self, tx_id: str, payment_date: Optional[str] = None) -> Transaction:
        """Mark a transaction as paid ("Pago") on `payment_date` (today by default)."""
        current = self.find_transaction(tx_id)
        if current.status == "Pago":
            raise ValidationError(f"O lançamento {tx_id} já está pago.")

        paid_on = payment_date or format_date(today())
        if not is_valid_date(parse_date(paid_on)):
            raise ValidationError(f"Data de pagamento inválida: {paid_on!r}.")

        return self.update_transaction(
            replace(current, status="Pago", payment_date=paid_on)
        )

    def schedule_transaction(self, tx_id: str, scheduled_date: str) -> Transaction:
        """Schedule the payment of an unpaid transaction ("Agendado")."""
        current = self.find_transaction(tx_id)
        if current.status == "Pago":
            raise ValidationError(f"O lançamento {tx_id} já está pago.")
        if not is_valid_date(parse_date(scheduled_date)):
            raise ValidationError(f"Data de agendamento inválida: {scheduled_date!r}.")

        return self.update_transaction(
            replace(
                current,
                status="Agendado",
                scheduled_payment_date=scheduled_date,
            )
        )

    def generate_next_occurrence(self, tx_id: str) -> Transaction:
        """Append the next occurrence of a recurring transaction."""
        new_tx = next_occurrence(self.find_transaction(tx_id))
        return self.add_transaction(new_tx)

    def refresh_overdue(self, reference_date: Optional[date] = None) -> int:
        """Mark overdue pending transactions as "Vencido"; return how many changed."""
        changed = 0
        for kind in ("payables", "receivables"):
            items: list[Transaction] = getattr(self, kind)
            refreshed = refresh_overdue_statuses(items, reference_date)
            diff = sum(1 for old, new in zip(items, refreshed) if old is not new)
            if diff:
                self._persist(kind, refreshed)
                changed += diff
        return changed

    def generate_rent(
        self,
        property_id: str,
        reference_date: Optional[date] = None,
    ) -> list[Transaction]:
        """Regenerate the future rent receivables of a property."""
        prop = self.find_entity(self.properties, property_id, "Imóvel")
        to_keep, new_receivables = generate_rent_receivables(
            prop,
            self.adjustment_indexes,
            self.receivables,
            reference_date if reference_date is not None else today(),
        )
        self._persist("receivables", [*to_keep, *new_receivables])
        return new_receivables

    # ------------------------------------------------------------------
    # Contacts, projects, properties
    # ------------------------------------------------------------------

    @staticmethod
    def find_entity(items: Iterable, item_id: str, label: str):
        for item in items:
            if item.id == item_id:
                return item
        raise ValidationError(f"{label} não encontrado: {item_id}")

    def save_contact(self, contact: Contact) -> Contact:
        """
        Insert or replace a contact.

        The document is validated and stored formatted. Bank details are
        dropped unless the contact is an owner.
        """
        if not is_valid_document(contact.document):
            raise ValidationError("O CPF ou CNPJ inserido é inválido. Por favor, verifique.")

        cleaned = replace(
            contact,
            document=format_document(contact.document),
            bank_details=contact.bank_details if contact.type == "Proprietário" else None,
        )

        if any(c.id == cleaned.id for c in self.contacts):
            new_items = [cleaned if c.id == cleaned.id else c for c in self.contacts]
        else:
            new_items = [*self.contacts, cleaned]
        self._persist("contacts", new_items)
        return cleaned

    def delete_contact(self, contact_id: str) -> None:
        contact = self.find_entity(self.contacts, contact_id, "Contato")
        linked = linked_transaction_count(self.all_transactions(), contact_id=contact_id)
        if linked:
            label = contact.type.lower()
            raise DeletionBlockedError(
                f"Não é possível excluir este {label}. Ele está vinculado a "
                f"{linked} transação(ões) financeira(s).",
                linked,
            )
        self._persist("contacts", [c for c in self.contacts if c.id != contact_id])

    def delete_project(self, project_id: str) -> None:
        self.find_entity(self.projects, project_id, "Projeto")
        linked = linked_transaction_count(self.all_transactions(), project_id=project_id)
        if linked:
            raise DeletionBlockedError(
                "Este projeto não pode ser excluído pois está vinculado a "
                f"{linked} transação(ões).",
                linked,
            )
        self._persist("projects", [p for p in self.projects if p.id != project_id])

    def delete_property(self, property_id: str) -> None:
        self.find_entity(self.properties, property_id, "Imóvel")
        linked = linked_transaction_count(
            self.all_transactions(), property_id=property_id
        )
        if linked:
            raise DeletionBlockedError(
                "Este imóvel não pode ser excluído pois está vinculado a "
                f"{linked} transação(ões).",
                linked,
            )
        self._persist("properties", [p for p in self.properties if p.id != property_id])

    # ------------------------------------------------------------------
    # Bank reconciliation
    # ------------------------------------------------------------------

    def import_bank_transactions(self, lines: Iterable[BankTransaction]) -> int:
        """Append statement lines, skipping ids already imported."""
        known = {tx.id for tx in self.bank_transactions}
        accounts = {a.id for a in self.bank_accounts}
        new_lines = []
        for line in lines:
            if line.bank_account_id not in accounts:
                raise ValidationError(f"Conta bancária não encontrada: {line.bank_account_id}")
            if line.id in known:
                continue
            known.add(line.id)
            new_lines.append(line)

        if new_lines:
            self._persist("bank_transactions", [*self.bank_transactions, *new_lines])
        logger.info("Imported %d bank statement line(s)", len(new_lines))
        return len(new_lines)

    def apply_reconciliation(self, suggestions: Iterable[MatchSuggestion]) -> int:
        """Flag the suggested system transactions as matched; return how many."""
        suggestions = list(suggestions)
        updated = apply_matches(self.system_transactions, suggestions)
        changed = sum(
            1 for old, new in zip(self.system_transactions, updated) if old.matched != new.matched
        )
        self._persist("system_transactions", updated)
        return changed

    def match_manually(self, system_tx_id: str) -> None:
        self.find_entity(self.system_transactions, system_tx_id, "Lançamento")
        self._persist(
            "system_transactions", manual_match(self.system_transactions, system_tx_id)
        )
