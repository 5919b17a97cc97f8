"""Domain models package."""

from .finance import (
    CategorySpending,
    ChartBucket,
    GroupedTransactions,
    MonthlySummary,
    NamedAmount,
    NetWorthBreakdown,
    NetWorthHistoryPoint,
    NetWorthSummary,
    SpendingBreakdown,
    SubCategorySpending,
    TransactionDetail,
    TransactionFilters,
    TransactionGroup,
    TypeProgress,
)
from .ledger import (
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
    RecurringBill,
    SubCategory,
    Transaction,
)
from .payments import (
    BILL,
    BUDGET_ITEM,
    BillStatusView,
    ObligationDeletionResult,
    ObligationRef,
    PaidObligation,
    PaymentPeriod,
)
from .updates import UNSET, BudgetItemUpdate, RecurringBillUpdate

__all__ = [
    "Account",
    "Asset",
    "BillPayment",
    "BudgetGoal",
    "BudgetItem",
    "Category",
    "Liability",
    "LiabilityPayment",
    "MonthlyBudget",
    "NetworthSnapshot",
    "RecurringBill",
    "SubCategory",
    "Transaction",
    "CategorySpending",
    "ChartBucket",
    "GroupedTransactions",
    "MonthlySummary",
    "NamedAmount",
    "NetWorthBreakdown",
    "NetWorthHistoryPoint",
    "NetWorthSummary",
    "SpendingBreakdown",
    "SubCategorySpending",
    "TransactionDetail",
    "TransactionFilters",
    "TransactionGroup",
    "TypeProgress",
    "BILL",
    "BUDGET_ITEM",
    "BillStatusView",
    "ObligationDeletionResult",
    "ObligationRef",
    "PaidObligation",
    "PaymentPeriod",
    "UNSET",
    "BudgetItemUpdate",
    "RecurringBillUpdate",
]
