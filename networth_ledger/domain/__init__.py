"""Domain package for business rules and core models."""

from .errors import (
    ConflictError,
    InvalidOperationError,
    InvalidReferenceError,
    LedgerError,
    NotFoundError,
    ValidationFailureError,
)
from .models import (
    NetWorthBreakdown,
    NetWorthSummary,
    ObligationRef,
    PaidObligation,
    PaymentPeriod,
)
from .services import (
    build_net_worth_summary,
    compute_net_worth_breakdown,
    compute_spending_breakdown,
    group_transactions_by_date,
)

__all__ = [
    "ConflictError",
    "InvalidOperationError",
    "InvalidReferenceError",
    "LedgerError",
    "NotFoundError",
    "ValidationFailureError",
    "NetWorthBreakdown",
    "NetWorthSummary",
    "ObligationRef",
    "PaidObligation",
    "PaymentPeriod",
    "build_net_worth_summary",
    "compute_net_worth_breakdown",
    "compute_spending_breakdown",
    "group_transactions_by_date",
]
