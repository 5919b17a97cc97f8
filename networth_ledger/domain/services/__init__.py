"""Domain services package."""

from .networth import build_net_worth_summary, compute_net_worth_breakdown
from .obligations import (
    compute_bill_status,
    describe_bill_payment,
    describe_budget_payment,
)
from .spending import (
    compute_monthly_summary,
    compute_spending_breakdown,
    group_transactions_by_date,
    sort_transaction_details,
)

__all__ = [
    "build_net_worth_summary",
    "compute_net_worth_breakdown",
    "compute_bill_status",
    "describe_bill_payment",
    "describe_budget_payment",
    "compute_monthly_summary",
    "compute_spending_breakdown",
    "group_transactions_by_date",
    "sort_transaction_details",
]
