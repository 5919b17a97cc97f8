"""Domain services for bills and budget payment items."""

from datetime import date

from networth_ledger.domain.constants import UPCOMING_WINDOW_DAYS
from networth_ledger.domain.models import (
    BillPayment,
    BudgetItem,
    MonthlyBudget,
    PaymentPeriod,
    RecurringBill,
)


def describe_bill_payment(
    bill: RecurringBill,
    period: PaymentPeriod,
) -> tuple[str, str]:
    """Return the transaction description and notes for a bill payment."""
    return (
        f"{bill.name} - {period.label()}",
        f"Bill payment for {bill.name}",
    )


def describe_budget_payment(
    item: BudgetItem,
    budget: MonthlyBudget,
) -> tuple[str, str]:
    """Return the transaction description and notes for a budget payment."""
    return (
        item.name,
        f"Budget payment for {budget.month}/{budget.year}",
    )


def compute_bill_status(
    bill: RecurringBill,
    payment: BillPayment | None,
    period: PaymentPeriod,
    today: date,
) -> str:
    """Classify a bill for a period as seen on ``today``.

    Args:
        bill: Bill to classify.
        payment: Payment record for the period, if any.
        period: Period being viewed.
        today: Current calendar date in the owner's timezone.

    Returns:
        str: One of paid, overdue, due_today, upcoming or pending.
    """
    if not bill.is_active:
        return "pending"
    if payment is not None and payment.is_paid:
        return "paid"
    if period != PaymentPeriod.of(today):
        return "pending"
    if today.day > bill.due_day:
        return "overdue"
    if today.day == bill.due_day:
        return "due_today"
    if bill.due_day - today.day <= UPCOMING_WINDOW_DAYS:
        return "upcoming"
    return "pending"


__all__ = [
    "describe_bill_payment",
    "describe_budget_payment",
    "compute_bill_status",
]
