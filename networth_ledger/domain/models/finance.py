"""Domain models for financial aggregates."""

from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal

from networth_ledger.domain.models.ledger import (
    Account,
    Category,
    SubCategory,
    Transaction,
)


@dataclass(frozen=True)
class NetWorthBreakdown:
    """Per-bucket totals behind a net worth figure."""

    bank_accounts: Decimal = Decimal("0")
    cash: Decimal = Decimal("0")
    investments: Decimal = Decimal("0")
    fixed_deposits: Decimal = Decimal("0")
    retirement: Decimal = Decimal("0")
    credit_cards: Decimal = Decimal("0")
    loans: Decimal = Decimal("0")

    @property
    def total_assets(self) -> Decimal:
        return (
            self.bank_accounts
            + self.cash
            + self.investments
            + self.fixed_deposits
            + self.retirement
        )

    @property
    def total_liabilities(self) -> Decimal:
        return self.credit_cards + self.loans

    def as_dict(self) -> dict[str, Decimal]:
        """Return bucket totals keyed by bucket name."""
        return {item.name: getattr(self, item.name) for item in fields(self)}


@dataclass(frozen=True)
class ChartBucket:
    """Labelled non-zero value for chart rendering."""

    label: str
    value: Decimal


@dataclass(frozen=True)
class NetWorthSummary:
    """Summary of net worth figures, rounded for presentation.

    Attributes:
        total_assets: Sum of the asset buckets.
        total_liabilities: Sum of the liability buckets.
        net_worth: Assets minus liabilities.
        breakdown: Every bucket, zero or not.
        assets_by_type: Non-zero asset buckets.
        liabilities_by_type: Non-zero liability buckets by liability type.
    """

    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal
    breakdown: NetWorthBreakdown
    assets_by_type: list[ChartBucket] = field(default_factory=list)
    liabilities_by_type: list[ChartBucket] = field(default_factory=list)


@dataclass(frozen=True)
class NetWorthHistoryPoint:
    """Net worth figures stored by one snapshot."""

    snapshot_date: date
    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal


@dataclass(frozen=True)
class TransactionDetail:
    """Transaction joined with its category, sub-category and account."""

    transaction: Transaction
    category: Category | None = None
    sub_category: SubCategory | None = None
    account: Account | None = None


@dataclass(frozen=True)
class SubCategorySpending:
    """Spending for one sub-category inside its parent category."""

    id: str
    name: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class CategorySpending:
    """Spending for one category with its sub-category split."""

    id: str
    name: str
    transaction_type: str
    amount: Decimal
    percentage: Decimal
    sub_categories: list[SubCategorySpending] = field(default_factory=list)


@dataclass(frozen=True)
class SpendingBreakdown:
    """Spending grouped by category over a date window."""

    categories: list[CategorySpending]
    total_spending: Decimal


@dataclass(frozen=True)
class TransactionFilters:
    """Optional filters for grouped transaction listings."""

    category_id: str | None = None
    sub_category_id: str | None = None
    transaction_type: str | None = None
    account_id: str | None = None
    search: str | None = None


@dataclass(frozen=True)
class TransactionGroup:
    """Transactions sharing one calendar date."""

    date: str
    transactions: list[TransactionDetail]


@dataclass(frozen=True)
class GroupedTransactions:
    """Date groups plus the number of transactions they hold."""

    groups: list[TransactionGroup]
    total: int


@dataclass(frozen=True)
class TypeProgress:
    """Spending so far against the goal for one transaction type."""

    current: Decimal
    goal: Decimal


@dataclass(frozen=True)
class NamedAmount:
    """Amount labelled for chart rendering."""

    name: str
    amount: Decimal
    transaction_type: str | None = None


@dataclass(frozen=True)
class MonthlySummary:
    """Income, spending and goal progress for a period."""

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    needs: TypeProgress
    wants: TypeProgress
    savings: TypeProgress
    investments: TypeProgress
    spending_by_type: list[NamedAmount]
    spending_by_category: list[NamedAmount]
    recent_transactions: list[TransactionDetail]


__all__ = [
    "NetWorthBreakdown",
    "ChartBucket",
    "NetWorthSummary",
    "NetWorthHistoryPoint",
    "TransactionDetail",
    "SubCategorySpending",
    "CategorySpending",
    "SpendingBreakdown",
    "TransactionFilters",
    "TransactionGroup",
    "GroupedTransactions",
    "TypeProgress",
    "NamedAmount",
    "MonthlySummary",
]
