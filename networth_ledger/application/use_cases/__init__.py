"""Application use cases package."""

from .create_networth_snapshot import CreateNetworthSnapshotUseCase
from .delete_obligation import DeleteObligationUseCase
from .get_bill_statuses import GetBillStatusesUseCase
from .get_grouped_transactions import GetGroupedTransactionsUseCase
from .get_monthly_summary import GetMonthlySummaryUseCase
from .get_net_worth_summary import GetNetWorthSummaryUseCase
from .get_networth_history import GetNetworthHistoryUseCase
from .get_spending_breakdown import GetSpendingBreakdownUseCase
from .pay_obligation import PayObligationUseCase
from .update_obligation import UpdateObligationUseCase

__all__ = [
    "PayObligationUseCase",
    "GetNetWorthSummaryUseCase",
    "CreateNetworthSnapshotUseCase",
    "GetNetworthHistoryUseCase",
    "GetSpendingBreakdownUseCase",
    "GetGroupedTransactionsUseCase",
    "GetMonthlySummaryUseCase",
    "GetBillStatusesUseCase",
    "DeleteObligationUseCase",
    "UpdateObligationUseCase",
]
