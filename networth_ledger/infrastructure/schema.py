"""SQLAlchemy table definitions for the ledger store.

Money columns hold exact decimal strings at cent precision and date columns
hold ``YYYY-MM-DD`` strings, so values round-trip without float drift or
timezone shifts.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
import json

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.types import TypeDecorator

from networth_ledger.utils.decimal_utils import round_money


class DecimalString(TypeDecorator):
    """Decimal stored as exact text, quantized to cents half away from zero."""

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(round_money(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class IsoDate(TypeDecorator):
    """Calendar date stored as ``YYYY-MM-DD`` text."""

    impl = String(10)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, str):
            return date.fromisoformat(value).isoformat()
        return value.isoformat()

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return date.fromisoformat(value)


class DecimalMapJson(TypeDecorator):
    """Mapping of names to Decimals stored as JSON with string values."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(
            {key: str(round_money(amount)) for key, amount in value.items()}
        )

    def process_result_value(self, value, dialect):
        if value is None:
            return {}
        return {key: Decimal(amount) for key, amount in json.loads(value).items()}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


metadata = MetaData()

accounts = Table(
    "accounts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(36), nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("account_type", String(20), nullable=False),
    Column("balance", DecimalString, nullable=False, default=Decimal("0")),
    Column("is_default", Boolean, nullable=False, default=False),
    Column("is_archived", Boolean, nullable=False, default=False),
)

categories = Table(
    "categories",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(36), nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("category_type", String(20), nullable=False),
    Column("sort_order", Integer, nullable=False, default=0),
    Column("is_archived", Boolean, nullable=False, default=False),
)

sub_categories = Table(
    "sub_categories",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(36), nullable=False, index=True),
    Column(
        "category_id",
        String(36),
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(100), nullable=False),
    Column("sort_order", Integer, nullable=False, default=0),
    Column("is_archived", Boolean, nullable=False, default=False),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(36), nullable=False),
    Column("transaction_type", String(20), nullable=False),
    Column("amount", DecimalString, nullable=False),
    Column(
        "category_id",
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
    ),
    Column(
        "sub_category_id",
        String(36),
        ForeignKey("sub_categories.id", ondelete="SET NULL"),
    ),
    Column(
        "account_id",
        String(36),
        ForeignKey("accounts.id", ondelete="SET NULL"),
    ),
    Column("transaction_date", IsoDate, nullable=False),
    Column("description", String(255)),
    Column("notes", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utc_now),
    Index("ix_transactions_owner_date", "owner_id", "transaction_date"),
)

recurring_bills = Table(
    "recurring_bills",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(36), nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("amount", DecimalString, nullable=False),
    Column(
        "category_id",
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
    ),
    Column(
        "sub_category_id",
        String(36),
        ForeignKey("sub_categories.id", ondelete="SET NULL"),
    ),
    Column(
        "account_id",
        String(36),
        ForeignKey("accounts.id", ondelete="SET NULL"),
    ),
    Column("due_day", Integer, nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

bill_payments = Table(
    "bill_payments",
    metadata,
    Column("id", String(36), primary_key=True),
    Column(
        "bill_id",
        String(36),
        ForeignKey("recurring_bills.id"),
        nullable=False,
    ),
    Column("month", Integer, nullable=False),
    Column("year", Integer, nullable=False),
    Column("is_paid", Boolean, nullable=False, default=False),
    Column("paid_date", IsoDate),
    Column("paid_amount", DecimalString),
    Column(
        "account_id",
        String(36),
        ForeignKey("accounts.id", ondelete="SET NULL"),
    ),
    Column(
        "transaction_id",
        String(36),
        ForeignKey("transactions.id", ondelete="SET NULL"),
    ),
    UniqueConstraint(
        "bill_id", "month", "year", name="uq_bill_payments_bill_period"
    ),
)

monthly_budgets = Table(
    "monthly_budgets",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(36), nullable=False, index=True),
    Column("month", Integer, nullable=False),
    Column("year", Integer, nullable=False),
    UniqueConstraint(
        "owner_id", "month", "year", name="uq_monthly_budgets_owner_period"
    ),
)

budget_items = Table(
    "budget_items",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(36), nullable=False, index=True),
    Column(
        "budget_id",
        String(36),
        ForeignKey("monthly_budgets.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("item_type", String(20), nullable=False),
    Column(
        "category_id",
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
    ),
    Column("name", String(100), nullable=False),
    Column("amount", DecimalString, nullable=False),
    Column("is_paid", Boolean, nullable=False, default=False),
    Column("paid_date", IsoDate),
    Column("paid_amount", DecimalString),
    Column(
        "account_id",
        String(36),
        ForeignKey("accounts.id", ondelete="SET NULL"),
    ),
    Column(
        "transaction_id",
        String(36),
        ForeignKey("transactions.id", ondelete="SET NULL"),
    ),
)

budget_goals = Table(
    "budget_goals",
    metadata,
    Column("owner_id", String(36), primary_key=True),
    Column("month", Integer, primary_key=True),
    Column("year", Integer, primary_key=True),
    Column("needs_percentage", DecimalString, nullable=False),
    Column("wants_percentage", DecimalString, nullable=False),
    Column("savings_percentage", DecimalString, nullable=False),
)

assets = Table(
    "assets",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(36), nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("asset_type", String(20), nullable=False),
    Column("subtype", String(20), nullable=False),
    Column("current_value", DecimalString, nullable=False),
    Column("purchase_value", DecimalString, nullable=False),
    Column("is_archived", Boolean, nullable=False, default=False),
)

liabilities = Table(
    "liabilities",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(36), nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("liability_type", String(20), nullable=False),
    Column("principal_amount", DecimalString, nullable=False),
    Column("outstanding_balance", DecimalString, nullable=False),
    Column("interest_rate", DecimalString, nullable=False),
    Column("is_archived", Boolean, nullable=False, default=False),
)

liability_payments = Table(
    "liability_payments",
    metadata,
    Column("id", String(36), primary_key=True),
    Column(
        "liability_id",
        String(36),
        ForeignKey("liabilities.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("amount", DecimalString, nullable=False),
    Column("payment_date", IsoDate, nullable=False),
    Column("notes", Text),
)

networth_snapshots = Table(
    "networth_snapshots",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(36), nullable=False, index=True),
    Column("snapshot_date", IsoDate, nullable=False),
    Column("total_assets", DecimalString, nullable=False),
    Column("total_liabilities", DecimalString, nullable=False),
    Column("net_worth", DecimalString, nullable=False),
    Column("breakdown", DecimalMapJson),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utc_now),
)


__all__ = [
    "DecimalString",
    "IsoDate",
    "DecimalMapJson",
    "metadata",
    "accounts",
    "categories",
    "sub_categories",
    "transactions",
    "recurring_bills",
    "bill_payments",
    "monthly_budgets",
    "budget_items",
    "budget_goals",
    "assets",
    "liabilities",
    "liability_payments",
    "networth_snapshots",
]
