# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Domain dataclasses for FinanTech.

All entities are immutable dataclasses. Mutations produce new instances via
`dataclasses.replace`, and the owning lists are replaced as a whole before
being persisted as a snapshot (see `workspace.py`).

Each entity exposes:
- `to_dict()`: a JSON-compatible dictionary (snake_case keys), and
- `from_dict()`: the inverse, ignoring unknown keys so that snapshots written
  by newer versions can still be read.

Every entity carries a `company` attribute, the tenant partition key used to
filter lists per company.

Dates are kept as text (``DD/MM/YYYY`` or ``YYYY-MM-DD``) and are always
interpreted through `dates.parse_date`.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Literal, Optional

from .errors import ValidationError

TransactionStatus = Literal["Pendente", "Pago", "Vencido", "Agendado"]
TransactionType = Literal["receita", "despesa"]
InterestType = Literal["daily", "monthly"]
RecurrenceInterval = Literal["monthly", "yearly"]
ContactType = Literal["Cliente", "Fornecedor", "Proprietário"]
BankTransactionType = Literal["debit", "credit"]

TRANSACTION_STATUSES = ("Pendente", "Pago", "Vencido", "Agendado")
TRANSACTION_TYPES = ("receita", "despesa")
RECURRENCE_INTERVALS = ("monthly", "yearly")


def _known_fields(cls, data: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only the keys of `data` that are fields of the dataclass `cls`."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


class _DictMixin:
    """Shared serialization helpers."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        return cls(**_known_fields(cls, data))


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Recurrence(_DictMixin):
    """Recurrence rule attached to a transaction."""

    interval: RecurrenceInterval = "monthly"
    end_date: Optional[str] = None

    def __post_init__(self) -> None:
        if self.interval not in RECURRENCE_INTERVALS:
            raise ValidationError(f"Unsupported recurrence interval: {self.interval!r}")


@dataclass(frozen=True)
class Transaction(_DictMixin):
    """
    A payable (despesa) or receivable (receita).

    Invariants
    ----------
    - `amount` is never negative; the direction is carried by `type`.
    - `status` is one of Pendente, Pago, Vencido, Agendado.
    - the transaction belongs to exactly one `company`.
    """

    id: str
    description: str
    amount: float
    due_date: str
    type: TransactionType
    company: str
    status: TransactionStatus = "Pendente"
    category: str = ""
    cost_center: str = ""
    bank_account: str = ""
    payment_date: Optional[str] = None
    scheduled_payment_date: Optional[str] = None
    interest_rate: Optional[float] = None
    interest_type: Optional[InterestType] = None
    fine_rate: Optional[float] = None
    recurrence: Optional[Recurrence] = None
    contact_id: Optional[str] = None
    property_id: Optional[str] = None
    project_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValidationError(
                f"Transaction {self.id!r}: amount cannot be negative ({self.amount})."
            )
        if self.status not in TRANSACTION_STATUSES:
            raise ValidationError(
                f"Transaction {self.id!r}: invalid status {self.status!r}."
            )
        if self.type not in TRANSACTION_TYPES:
            raise ValidationError(f"Transaction {self.id!r}: invalid type {self.type!r}.")
        if self.interest_type is not None and self.interest_type not in (
            "daily",
            "monthly",
        ):
            raise ValidationError(
                f"Transaction {self.id!r}: invalid interest type {self.interest_type!r}."
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Transaction":
        values = _known_fields(cls, data)
        recurrence = values.get("recurrence")
        if isinstance(recurrence, Mapping):
            values["recurrence"] = Recurrence.from_dict(recurrence)
        values["amount"] = float(values.get("amount", 0.0))
        return cls(**values)


# ---------------------------------------------------------------------------
# Contacts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Address(_DictMixin):
    street: str = ""
    number: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""


@dataclass(frozen=True)
class ContactBankDetails(_DictMixin):
    bank_name: str = ""
    agency: str = ""
    account: str = ""
    pix_key: Optional[str] = None


@dataclass(frozen=True)
class Contact(_DictMixin):
    """
    A client, supplier or property owner.

    `bank_details` is only meaningful for owners (type "Proprietário"); the
    workspace drops it for other contact types when saving.
    """

    id: str
    name: str
    type: ContactType
    document: str
    company: str
    email: str = ""
    phone: str = ""
    address: Address = field(default_factory=Address)
    tax_regime: str = "Simples Nacional"
    bank_details: Optional[ContactBankDetails] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Contact":
        values = _known_fields(cls, data)
        if isinstance(values.get("address"), Mapping):
            values["address"] = Address.from_dict(values["address"])
        if isinstance(values.get("bank_details"), Mapping):
            values["bank_details"] = ContactBankDetails.from_dict(
                values["bank_details"]
            )
        return cls(**values)


# ---------------------------------------------------------------------------
# Properties, projects and proposals
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RentalDetails(_DictMixin):
    tenant_id: str
    rent_amount: float
    contract_start: str
    contract_end: str
    payment_day: int
    adjustment_index_id: Optional[str] = None


@dataclass(frozen=True)
class Property(_DictMixin):
    """A managed real-estate property."""

    id: str
    name: str
    type: str
    status: str
    owner_id: str
    company: str
    address: Address = field(default_factory=Address)
    rental_details: Optional[RentalDetails] = None
    sale_price: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Property":
        values = _known_fields(cls, data)
        if isinstance(values.get("address"), Mapping):
            values["address"] = Address.from_dict(values["address"])
        if isinstance(values.get("rental_details"), Mapping):
            values["rental_details"] = RentalDetails.from_dict(
                values["rental_details"]
            )
        return cls(**values)


@dataclass(frozen=True)
class BudgetItem(_DictMixin):
    id: str
    description: str
    type: str
    cost: float


@dataclass(frozen=True)
class ProjectStage(_DictMixin):
    id: str
    name: str
    due_date: str
    status: str = "Pendente"


@dataclass(frozen=True)
class Project(_DictMixin):
    """A construction / engineering project with its budget and stages."""

    id: str
    name: str
    type: str
    status: str
    client_id: str
    company: str
    cost_center_name: str = ""
    budget: list[BudgetItem] = field(default_factory=list)
    stages: list[ProjectStage] = field(default_factory=list)
    total_area: Optional[float] = None
    built_area: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Project":
        values = _known_fields(cls, data)
        values["budget"] = [BudgetItem.from_dict(b) for b in values.get("budget") or []]
        values["stages"] = [
            ProjectStage.from_dict(s) for s in values.get("stages") or []
        ]
        return cls(**values)


@dataclass(frozen=True)
class ProposalItem(_DictMixin):
    id: str
    description: str
    value: float


@dataclass(frozen=True)
class Proposal(_DictMixin):
    id: str
    name: str
    client_id: str
    status: str
    created_at: str
    company: str
    scope: str = ""
    items: list[ProposalItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Proposal":
        values = _known_fields(cls, data)
        values["items"] = [ProposalItem.from_dict(i) for i in values.get("items") or []]
        return cls(**values)


@dataclass(frozen=True)
class AdjustmentIndex(_DictMixin):
    """Yearly rent adjustment index (e.g. IGP-M), `value` in percent."""

    id: str
    name: str
    value: float
    company: str
    description: str = ""


# ---------------------------------------------------------------------------
# Bank ledger
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BankAccount(_DictMixin):
    id: str
    name: str
    agency: str
    account: str
    balance: float
    company: str


@dataclass(frozen=True)
class BankTransaction(_DictMixin):
    """A line of a bank statement."""

    id: str
    bank_account_id: str
    date: str
    description: str
    amount: float
    type: BankTransactionType


@dataclass(frozen=True)
class SystemTransaction(_DictMixin):
    """An internal ledger line, linked to a bank line by the `matched` flag."""

    id: str
    bank_account_id: str
    date: str
    description: str
    amount: float
    type: BankTransactionType
    company: str
    matched: bool = False
