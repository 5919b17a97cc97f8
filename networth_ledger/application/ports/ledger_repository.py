"""Ports for owner-scoped access to the ledger store."""

from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Any, Protocol

from networth_ledger.domain.models import (
    Account,
    Asset,
    BillPayment,
    BudgetGoal,
    BudgetItem,
    Category,
    Liability,
    MonthlyBudget,
    NetworthSnapshot,
    PaymentPeriod,
    RecurringBill,
    SubCategory,
    Transaction,
    TransactionDetail,
    TransactionFilters,
)


class LedgerSessionPort(Protocol):
    """Operations bound to one database connection.

    Every lookup taking ``owner_id`` returns ``None`` for rows owned by
    someone else, exactly as for missing rows.
    """

    def get_account(self, owner_id: str, account_id: str) -> Account | None:
        """Return an owned account."""

    def list_accounts(
        self,
        owner_id: str,
        include_archived: bool = False,
    ) -> list[Account]:
        """Return the owner's accounts."""

    def list_assets(
        self,
        owner_id: str,
        include_archived: bool = False,
    ) -> list[Asset]:
        """Return the owner's assets."""

    def list_liabilities(
        self,
        owner_id: str,
        include_archived: bool = False,
    ) -> list[Liability]:
        """Return the owner's liabilities."""

    def get_category(self, owner_id: str, category_id: str) -> Category | None:
        """Return an owned category."""

    def get_sub_category(
        self,
        owner_id: str,
        sub_category_id: str,
    ) -> SubCategory | None:
        """Return an owned sub-category."""

    def get_bill(
        self,
        owner_id: str,
        bill_id: str,
        for_update: bool = False,
    ) -> RecurringBill | None:
        """Return an owned bill, optionally locking its row."""

    def list_bills(
        self,
        owner_id: str,
        is_active: bool | None = None,
    ) -> list[RecurringBill]:
        """Return the owner's bills."""

    def get_bill_payment(
        self,
        bill_id: str,
        period: PaymentPeriod,
    ) -> BillPayment | None:
        """Return the payment record of a bill for a period."""

    def list_bill_payments(
        self,
        bill_ids: list[str],
        period: PaymentPeriod,
    ) -> list[BillPayment]:
        """Return payment records of several bills for a period."""

    def list_payments_for_bill(self, bill_id: str) -> list[BillPayment]:
        """Return every payment record of a bill."""

    def get_budget(self, owner_id: str, budget_id: str) -> MonthlyBudget | None:
        """Return an owned monthly budget."""

    def get_budget_item(
        self,
        owner_id: str,
        item_id: str,
        for_update: bool = False,
    ) -> BudgetItem | None:
        """Return an owned budget item, optionally locking its row."""

    def get_budget_goal(
        self,
        owner_id: str,
        period: PaymentPeriod,
    ) -> BudgetGoal | None:
        """Return the owner's goal percentages for a period."""

    def get_transaction(
        self,
        owner_id: str,
        transaction_id: str,
    ) -> Transaction | None:
        """Return an owned transaction."""

    def list_transaction_details(
        self,
        owner_id: str,
        start_date: date,
        end_date: date,
        filters: TransactionFilters | None = None,
    ) -> list[TransactionDetail]:
        """Return transactions dated within [start_date, end_date]."""

    def list_snapshots(
        self,
        owner_id: str,
        limit: int,
    ) -> list[NetworthSnapshot]:
        """Return the latest snapshots, newest first."""

    def get_snapshot(
        self,
        owner_id: str,
        snapshot_id: str,
    ) -> NetworthSnapshot | None:
        """Return an owned snapshot."""

    def insert_transaction(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""

    def insert_bill_payment(self, payment: BillPayment) -> BillPayment:
        """Persist a new bill payment record."""

    def mark_bill_payment_paid(
        self,
        payment_id: str,
        paid_date: date,
        paid_amount: Decimal,
        account_id: str,
        transaction_id: str,
    ) -> bool:
        """Flip an unpaid record to paid; False if it was already paid."""

    def mark_budget_item_paid(
        self,
        owner_id: str,
        item_id: str,
        paid_date: date,
        paid_amount: Decimal,
        account_id: str,
        transaction_id: str,
    ) -> bool:
        """Flip an unpaid payment item to paid; False if it was not unpaid."""

    def insert_snapshot(self, snapshot: NetworthSnapshot) -> NetworthSnapshot:
        """Persist a new snapshot."""

    def update_bill(
        self,
        owner_id: str,
        bill_id: str,
        changes: dict[str, Any],
    ) -> int:
        """Apply column changes to an owned bill."""

    def update_budget_item(
        self,
        owner_id: str,
        item_id: str,
        changes: dict[str, Any],
    ) -> int:
        """Apply column changes to an owned budget item."""

    def delete_bill_payments(self, bill_id: str) -> int:
        """Delete every payment record of a bill."""

    def delete_bill(self, owner_id: str, bill_id: str) -> int:
        """Delete an owned bill."""

    def delete_budget_item(self, owner_id: str, item_id: str) -> int:
        """Delete an owned budget item."""


class LedgerRepositoryPort(Protocol):
    """Port opening sessions against the ledger store."""

    def session(self) -> AbstractContextManager[LedgerSessionPort]:
        """Open a session whose writes commit together or not at all."""

    def read_session(self) -> AbstractContextManager[LedgerSessionPort]:
        """Open a session for reads."""

    def create_schema(self) -> None:
        """Create the ledger tables that do not exist yet."""


__all__ = ["LedgerSessionPort", "LedgerRepositoryPort"]
