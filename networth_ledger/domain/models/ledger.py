"""Domain models for persisted ledger entities."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class Account:
    """Money account owned by a user.

    Attributes:
        account_type: One of bank, cash or credit_card.
        balance: Current balance; negative on credit cards means money owed.
    """

    id: str
    owner_id: str
    name: str
    account_type: str
    balance: Decimal
    is_default: bool = False
    is_archived: bool = False


@dataclass(frozen=True)
class Category:
    """Top-level transaction category."""

    id: str
    owner_id: str
    name: str
    category_type: str
    sort_order: int = 0
    is_archived: bool = False


@dataclass(frozen=True)
class SubCategory:
    """Category refinement."""

    id: str
    owner_id: str
    category_id: str
    name: str
    sort_order: int = 0
    is_archived: bool = False


@dataclass(frozen=True)
class Transaction:
    """Immutable ledger fact."""

    id: str
    owner_id: str
    transaction_type: str
    amount: Decimal
    category_id: str | None
    transaction_date: date
    description: str | None
    created_at: datetime
    sub_category_id: str | None = None
    account_id: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class RecurringBill:
    """Bill expected every month on ``due_day``."""

    id: str
    owner_id: str
    name: str
    amount: Decimal
    due_day: int
    category_id: str | None = None
    sub_category_id: str | None = None
    account_id: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class BillPayment:
    """Payment state of a bill for one (month, year) period."""

    id: str
    bill_id: str
    month: int
    year: int
    is_paid: bool
    paid_date: date | None = None
    paid_amount: Decimal | None = None
    account_id: str | None = None
    transaction_id: str | None = None


@dataclass(frozen=True)
class MonthlyBudget:
    """Container for the budget items of one period."""

    id: str
    owner_id: str
    month: int
    year: int


@dataclass(frozen=True)
class BudgetItem:
    """Budget line: a spending ``limit`` or a one-shot ``payment``."""

    id: str
    owner_id: str
    budget_id: str
    item_type: str
    name: str
    amount: Decimal
    category_id: str | None = None
    is_paid: bool = False
    paid_date: date | None = None
    paid_amount: Decimal | None = None
    account_id: str | None = None
    transaction_id: str | None = None


@dataclass(frozen=True)
class BudgetGoal:
    """Per-period spending split as percentages of income."""

    owner_id: str
    month: int
    year: int
    needs_percentage: Decimal
    wants_percentage: Decimal
    savings_percentage: Decimal


@dataclass(frozen=True)
class Asset:
    """Non-account holding valued at ``current_value``."""

    id: str
    owner_id: str
    name: str
    asset_type: str
    subtype: str
    current_value: Decimal
    purchase_value: Decimal
    is_archived: bool = False


@dataclass(frozen=True)
class Liability:
    """Loan or other debt tracked by its outstanding balance."""

    id: str
    owner_id: str
    name: str
    liability_type: str
    principal_amount: Decimal
    outstanding_balance: Decimal
    interest_rate: Decimal
    is_archived: bool = False


@dataclass(frozen=True)
class LiabilityPayment:
    """Repayment recorded against a liability."""

    id: str
    liability_id: str
    amount: Decimal
    payment_date: date
    notes: str | None = None


@dataclass(frozen=True)
class NetworthSnapshot:
    """Frozen copy of a net worth computation."""

    id: str
    owner_id: str
    snapshot_date: date
    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal
    breakdown: dict[str, Decimal]
    created_at: datetime | None = None


__all__ = [
    "Account",
    "Category",
    "SubCategory",
    "Transaction",
    "RecurringBill",
    "BillPayment",
    "MonthlyBudget",
    "BudgetItem",
    "BudgetGoal",
    "Asset",
    "Liability",
    "LiabilityPayment",
    "NetworthSnapshot",
]
