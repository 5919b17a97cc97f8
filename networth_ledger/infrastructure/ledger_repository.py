"""SQLAlchemy-backed repository for the ledger store."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import Table, delete, insert, or_, select, update
from sqlalchemy.engine import Connection

from networth_ledger.application.ports.database import DatabaseEnginePort
from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
    LedgerSessionPort,
)
from networth_ledger.domain.models import (
    Account,
    Asset,
    BillPayment,
    BudgetGoal,
    BudgetItem,
    Category,
    Liability,
    LiabilityPayment,
    MonthlyBudget,
    NetworthSnapshot,
    PaymentPeriod,
    RecurringBill,
    SubCategory,
    Transaction,
    TransactionDetail,
    TransactionFilters,
)
from networth_ledger.infrastructure import schema


def _labelled(table: Table, prefix: str) -> list:
    return [column.label(f"{prefix}{column.name}") for column in table.c]


def _extract(row, table: Table, prefix: str, model):
    mapping = row._mapping
    if mapping[f"{prefix}id"] is None:
        return None
    return model(
        **{column.name: mapping[f"{prefix}{column.name}"] for column in table.c}
    )


class SqlAlchemyLedgerSession(LedgerSessionPort):
    """Ledger operations executed on a single SQLAlchemy connection."""

    def __init__(self, conn: Connection) -> None:
        """Initialize the session.

        Args:
            conn: Open connection; the caller owns its transaction.
        """
        self._conn = conn

    def get_account(self, owner_id: str, account_id: str) -> Account | None:
        return self._fetch_one(
            schema.accounts,
            Account,
            schema.accounts.c.id == account_id,
            schema.accounts.c.owner_id == owner_id,
        )

    def list_accounts(
        self,
        owner_id: str,
        include_archived: bool = False,
    ) -> list[Account]:
        return self._fetch_owned(
            schema.accounts, Account, owner_id, include_archived
        )

    def list_assets(
        self,
        owner_id: str,
        include_archived: bool = False,
    ) -> list[Asset]:
        return self._fetch_owned(schema.assets, Asset, owner_id, include_archived)

    def list_liabilities(
        self,
        owner_id: str,
        include_archived: bool = False,
    ) -> list[Liability]:
        return self._fetch_owned(
            schema.liabilities, Liability, owner_id, include_archived
        )

    def get_category(self, owner_id: str, category_id: str) -> Category | None:
        return self._fetch_one(
            schema.categories,
            Category,
            schema.categories.c.id == category_id,
            schema.categories.c.owner_id == owner_id,
        )

    def get_sub_category(
        self,
        owner_id: str,
        sub_category_id: str,
    ) -> SubCategory | None:
        return self._fetch_one(
            schema.sub_categories,
            SubCategory,
            schema.sub_categories.c.id == sub_category_id,
            schema.sub_categories.c.owner_id == owner_id,
        )

    def get_bill(
        self,
        owner_id: str,
        bill_id: str,
        for_update: bool = False,
    ) -> RecurringBill | None:
        return self._fetch_one(
            schema.recurring_bills,
            RecurringBill,
            schema.recurring_bills.c.id == bill_id,
            schema.recurring_bills.c.owner_id == owner_id,
            for_update=for_update,
        )

    def list_bills(
        self,
        owner_id: str,
        is_active: bool | None = None,
    ) -> list[RecurringBill]:
        table = schema.recurring_bills
        query = select(table).where(table.c.owner_id == owner_id)
        if is_active is not None:
            query = query.where(table.c.is_active.is_(is_active))
        query = query.order_by(table.c.due_day, table.c.name)
        return [
            RecurringBill(**row._mapping)
            for row in self._conn.execute(query).all()
        ]

    def get_bill_payment(
        self,
        bill_id: str,
        period: PaymentPeriod,
    ) -> BillPayment | None:
        table = schema.bill_payments
        return self._fetch_one(
            table,
            BillPayment,
            table.c.bill_id == bill_id,
            table.c.month == period.month,
            table.c.year == period.year,
        )

    def list_bill_payments(
        self,
        bill_ids: list[str],
        period: PaymentPeriod,
    ) -> list[BillPayment]:
        if not bill_ids:
            return []
        table = schema.bill_payments
        query = select(table).where(
            table.c.bill_id.in_(bill_ids),
            table.c.month == period.month,
            table.c.year == period.year,
        )
        return [
            BillPayment(**row._mapping)
            for row in self._conn.execute(query).all()
        ]

    def list_payments_for_bill(self, bill_id: str) -> list[BillPayment]:
        table = schema.bill_payments
        query = (
            select(table)
            .where(table.c.bill_id == bill_id)
            .order_by(table.c.year, table.c.month)
        )
        return [
            BillPayment(**row._mapping)
            for row in self._conn.execute(query).all()
        ]

    def get_budget(self, owner_id: str, budget_id: str) -> MonthlyBudget | None:
        return self._fetch_one(
            schema.monthly_budgets,
            MonthlyBudget,
            schema.monthly_budgets.c.id == budget_id,
            schema.monthly_budgets.c.owner_id == owner_id,
        )

    def get_budget_item(
        self,
        owner_id: str,
        item_id: str,
        for_update: bool = False,
    ) -> BudgetItem | None:
        return self._fetch_one(
            schema.budget_items,
            BudgetItem,
            schema.budget_items.c.id == item_id,
            schema.budget_items.c.owner_id == owner_id,
            for_update=for_update,
        )

    def get_budget_goal(
        self,
        owner_id: str,
        period: PaymentPeriod,
    ) -> BudgetGoal | None:
        table = schema.budget_goals
        return self._fetch_one(
            table,
            BudgetGoal,
            table.c.owner_id == owner_id,
            table.c.month == period.month,
            table.c.year == period.year,
        )

    def get_transaction(
        self,
        owner_id: str,
        transaction_id: str,
    ) -> Transaction | None:
        return self._fetch_one(
            schema.transactions,
            Transaction,
            schema.transactions.c.id == transaction_id,
            schema.transactions.c.owner_id == owner_id,
        )

    def list_transaction_details(
        self,
        owner_id: str,
        start_date: date,
        end_date: date,
        filters: TransactionFilters | None = None,
    ) -> list[TransactionDetail]:
        tx = schema.transactions
        cat = schema.categories
        sub = schema.sub_categories
        acc = schema.accounts
        query = (
            select(
                *_labelled(tx, "tx_"),
                *_labelled(cat, "cat_"),
                *_labelled(sub, "sub_"),
                *_labelled(acc, "acc_"),
            )
            .select_from(
                tx.outerjoin(cat, cat.c.id == tx.c.category_id)
                .outerjoin(sub, sub.c.id == tx.c.sub_category_id)
                .outerjoin(acc, acc.c.id == tx.c.account_id)
            )
            .where(
                tx.c.owner_id == owner_id,
                tx.c.transaction_date >= start_date,
                tx.c.transaction_date <= end_date,
            )
        )
        if filters is not None:
            if filters.category_id:
                query = query.where(tx.c.category_id == filters.category_id)
            if filters.sub_category_id:
                query = query.where(
                    tx.c.sub_category_id == filters.sub_category_id
                )
            if filters.transaction_type:
                query = query.where(
                    tx.c.transaction_type == filters.transaction_type
                )
            if filters.account_id:
                query = query.where(tx.c.account_id == filters.account_id)
            if filters.search:
                term = f"%{filters.search}%"
                query = query.where(
                    or_(tx.c.description.ilike(term), tx.c.notes.ilike(term))
                )
        query = query.order_by(tx.c.transaction_date.desc(), tx.c.created_at.desc())

        return [
            TransactionDetail(
                transaction=_extract(row, tx, "tx_", Transaction),
                category=_extract(row, cat, "cat_", Category),
                sub_category=_extract(row, sub, "sub_", SubCategory),
                account=_extract(row, acc, "acc_", Account),
            )
            for row in self._conn.execute(query).all()
        ]

    def list_snapshots(
        self,
        owner_id: str,
        limit: int,
    ) -> list[NetworthSnapshot]:
        table = schema.networth_snapshots
        query = (
            select(table)
            .where(table.c.owner_id == owner_id)
            .order_by(table.c.snapshot_date.desc(), table.c.created_at.desc())
            .limit(limit)
        )
        return [
            NetworthSnapshot(**row._mapping)
            for row in self._conn.execute(query).all()
        ]

    def get_snapshot(
        self,
        owner_id: str,
        snapshot_id: str,
    ) -> NetworthSnapshot | None:
        return self._fetch_one(
            schema.networth_snapshots,
            NetworthSnapshot,
            schema.networth_snapshots.c.id == snapshot_id,
            schema.networth_snapshots.c.owner_id == owner_id,
        )

    def insert_transaction(self, transaction: Transaction) -> Transaction:
        self._insert(schema.transactions, transaction)
        return transaction

    def insert_bill_payment(self, payment: BillPayment) -> BillPayment:
        self._insert(schema.bill_payments, payment)
        return payment

    def mark_bill_payment_paid(
        self,
        payment_id: str,
        paid_date: date,
        paid_amount: Decimal,
        account_id: str,
        transaction_id: str,
    ) -> bool:
        table = schema.bill_payments
        result = self._conn.execute(
            update(table)
            .where(table.c.id == payment_id, table.c.is_paid.is_(False))
            .values(
                is_paid=True,
                paid_date=paid_date,
                paid_amount=paid_amount,
                account_id=account_id,
                transaction_id=transaction_id,
            )
        )
        return result.rowcount == 1

    def mark_budget_item_paid(
        self,
        owner_id: str,
        item_id: str,
        paid_date: date,
        paid_amount: Decimal,
        account_id: str,
        transaction_id: str,
    ) -> bool:
        table = schema.budget_items
        result = self._conn.execute(
            update(table)
            .where(
                table.c.id == item_id,
                table.c.owner_id == owner_id,
                table.c.item_type == "payment",
                table.c.is_paid.is_(False),
            )
            .values(
                is_paid=True,
                paid_date=paid_date,
                paid_amount=paid_amount,
                account_id=account_id,
                transaction_id=transaction_id,
            )
        )
        return result.rowcount == 1

    def insert_snapshot(self, snapshot: NetworthSnapshot) -> NetworthSnapshot:
        self._insert(schema.networth_snapshots, snapshot)
        return snapshot

    def update_bill(
        self,
        owner_id: str,
        bill_id: str,
        changes: dict[str, Any],
    ) -> int:
        table = schema.recurring_bills
        if not changes:
            return 0
        result = self._conn.execute(
            update(table)
            .where(table.c.id == bill_id, table.c.owner_id == owner_id)
            .values(**changes)
        )
        return result.rowcount

    def update_budget_item(
        self,
        owner_id: str,
        item_id: str,
        changes: dict[str, Any],
    ) -> int:
        table = schema.budget_items
        if not changes:
            return 0
        result = self._conn.execute(
            update(table)
            .where(table.c.id == item_id, table.c.owner_id == owner_id)
            .values(**changes)
        )
        return result.rowcount

    def delete_bill_payments(self, bill_id: str) -> int:
        table = schema.bill_payments
        result = self._conn.execute(
            delete(table).where(table.c.bill_id == bill_id)
        )
        return result.rowcount

    def delete_bill(self, owner_id: str, bill_id: str) -> int:
        table = schema.recurring_bills
        result = self._conn.execute(
            delete(table).where(
                table.c.id == bill_id, table.c.owner_id == owner_id
            )
        )
        return result.rowcount

    def delete_budget_item(self, owner_id: str, item_id: str) -> int:
        table = schema.budget_items
        result = self._conn.execute(
            delete(table).where(
                table.c.id == item_id, table.c.owner_id == owner_id
            )
        )
        return result.rowcount

    # Writes owned by the CRUD surfaces around the core.

    def insert_account(self, account: Account) -> Account:
        self._insert(schema.accounts, account)
        return account

    def update_account_balance(
        self,
        owner_id: str,
        account_id: str,
        balance: Decimal,
    ) -> int:
        table = schema.accounts
        result = self._conn.execute(
            update(table)
            .where(table.c.id == account_id, table.c.owner_id == owner_id)
            .values(balance=balance)
        )
        return result.rowcount

    def insert_category(self, category: Category) -> Category:
        self._insert(schema.categories, category)
        return category

    def insert_sub_category(self, sub_category: SubCategory) -> SubCategory:
        self._insert(schema.sub_categories, sub_category)
        return sub_category

    def insert_bill(self, bill: RecurringBill) -> RecurringBill:
        self._insert(schema.recurring_bills, bill)
        return bill

    def insert_budget(self, budget: MonthlyBudget) -> MonthlyBudget:
        self._insert(schema.monthly_budgets, budget)
        return budget

    def insert_budget_item(self, item: BudgetItem) -> BudgetItem:
        self._insert(schema.budget_items, item)
        return item

    def insert_budget_goal(self, goal: BudgetGoal) -> BudgetGoal:
        self._insert(schema.budget_goals, goal)
        return goal

    def insert_asset(self, asset: Asset) -> Asset:
        self._insert(schema.assets, asset)
        return asset

    def insert_liability(self, liability: Liability) -> Liability:
        self._insert(schema.liabilities, liability)
        return liability

    def insert_liability_payment(
        self,
        payment: LiabilityPayment,
    ) -> LiabilityPayment:
        self._insert(schema.liability_payments, payment)
        return payment

    def _insert(self, table: Table, record) -> None:
        payload = asdict(record)
        if "created_at" in payload and payload["created_at"] is None:
            del payload["created_at"]
        self._conn.execute(insert(table).values(**payload))

    def _fetch_one(self, table: Table, model, *conditions, for_update=False):
        query = select(table).where(*conditions)
        if for_update:
            query = query.with_for_update()
        row = self._conn.execute(query).first()
        if row is None:
            return None
        return model(**row._mapping)

    def _fetch_owned(
        self,
        table: Table,
        model,
        owner_id: str,
        include_archived: bool,
    ) -> list:
        query = select(table).where(table.c.owner_id == owner_id)
        if not include_archived:
            query = query.where(table.c.is_archived.is_(False))
        query = query.order_by(table.c.name)
        return [model(**row._mapping) for row in self._conn.execute(query).all()]


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository backed by SQLAlchemy for the ledger store."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    @contextmanager
    def session(self) -> Iterator[SqlAlchemyLedgerSession]:
        """Yield a session inside one database transaction.

        The transaction commits when the block exits normally and rolls
        back when it raises.
        """
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            yield SqlAlchemyLedgerSession(conn)

    @contextmanager
    def read_session(self) -> Iterator[SqlAlchemyLedgerSession]:
        """Yield a session for reads."""
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            yield SqlAlchemyLedgerSession(conn)

    def create_schema(self) -> None:
        """Create every ledger table that does not exist yet."""
        engine = self._db_port.get_ledger_engine()
        schema.metadata.create_all(engine)


__all__ = ["SqlAlchemyLedgerSession", "SqlAlchemyLedgerRepository"]
