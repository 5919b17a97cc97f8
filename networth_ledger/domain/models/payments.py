"""Domain models for obligations and their payments."""

from dataclasses import dataclass
from datetime import date

from networth_ledger.domain.errors import ValidationFailureError
from networth_ledger.domain.models.ledger import (
    Account,
    BillPayment,
    BudgetItem,
    Category,
    RecurringBill,
    SubCategory,
    Transaction,
)

BILL = "bill"
BUDGET_ITEM = "budget_item"


@dataclass(frozen=True)
class ObligationRef:
    """Reference to something that can be marked paid.

    Attributes:
        kind: ``bill`` for a recurring bill, ``budget_item`` for a budget item.
        obligation_id: Identifier of the bill or budget item.
    """

    kind: str
    obligation_id: str

    def __post_init__(self) -> None:
        if self.kind not in (BILL, BUDGET_ITEM):
            raise ValidationFailureError(
                f"Unknown obligation kind: {self.kind}"
            )

    @classmethod
    def bill(cls, bill_id: str) -> "ObligationRef":
        return cls(kind=BILL, obligation_id=bill_id)

    @classmethod
    def budget_item(cls, item_id: str) -> "ObligationRef":
        return cls(kind=BUDGET_ITEM, obligation_id=item_id)


@dataclass(frozen=True)
class PaymentPeriod:
    """Month and year a bill payment applies to."""

    month: int
    year: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValidationFailureError(
                f"Month must be between 1 and 12, got {self.month}"
            )

    @classmethod
    def of(cls, day: date) -> "PaymentPeriod":
        return cls(month=day.month, year=day.year)

    def label(self) -> str:
        return f"{self.month}/{self.year}"


@dataclass(frozen=True)
class PaidObligation:
    """Payment record hydrated with the records it links to.

    Attributes:
        kind: Obligation kind that was paid.
        record: The paid ``BillPayment`` or ``BudgetItem``.
        transaction: Transaction created for the payment.
        category: Category of the obligation, when it has one.
        sub_category: Sub-category of the obligation, when it has one.
        account: Account the payment was taken from.
        bill: Parent bill for bill payments.
    """

    kind: str
    record: BillPayment | BudgetItem
    transaction: Transaction
    category: Category | None
    sub_category: SubCategory | None
    account: Account
    bill: RecurringBill | None = None


@dataclass(frozen=True)
class BillStatusView:
    """Bill with its payment record and status for one period."""

    bill: RecurringBill
    payment: BillPayment | None
    status: str


@dataclass(frozen=True)
class ObligationDeletionResult:
    """Outcome of deleting a bill or budget item.

    Attributes:
        kind: Obligation kind that was deleted.
        obligation_id: Identifier of the deleted obligation.
        deleted_payment_count: Payment records removed with it.
        retained_transaction_ids: Transactions left in place as history.
    """

    kind: str
    obligation_id: str
    deleted_payment_count: int
    retained_transaction_ids: list[str]


__all__ = [
    "BILL",
    "BUDGET_ITEM",
    "ObligationRef",
    "PaymentPeriod",
    "PaidObligation",
    "BillStatusView",
    "ObligationDeletionResult",
]
