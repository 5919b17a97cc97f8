"""Domain constants for the ledger core."""

TRANSACTION_TYPES = ("income", "needs", "wants", "savings", "investments")
EXPENSE_TRANSACTION_TYPES = ("needs", "wants", "savings", "investments")
BUDGET_ITEM_TYPES = ("limit", "payment")

ASSET_BUCKETS = (
    ("bank_accounts", "Bank Accounts"),
    ("cash", "Cash"),
    ("investments", "Investments"),
    ("fixed_deposits", "Fixed Deposits"),
    ("retirement", "Retirement"),
)
CREDIT_CARDS_LABEL = "Credit Cards"
LIABILITY_CHART_LABELS = (
    ("home_loan", "Home Loan"),
    ("personal_loan", "Personal Loan"),
    ("other", "Other Loans"),
)

ASSET_TYPE_BUCKETS = {
    "investment": "investments",
    "fixed_deposit": "fixed_deposits",
    "retirement": "retirement",
}

UNCATEGORIZED_ID = "uncategorized"
UNCATEGORIZED_NAME = "Uncategorized"
OTHER_SUBCATEGORY_NAME = "Other"

DEFAULT_HISTORY_LIMIT = 12
MAX_HISTORY_LIMIT = 100
RECENT_TRANSACTIONS_LIMIT = 5
UPCOMING_WINDOW_DAYS = 7


__all__ = [
    "TRANSACTION_TYPES",
    "EXPENSE_TRANSACTION_TYPES",
    "BUDGET_ITEM_TYPES",
    "ASSET_BUCKETS",
    "CREDIT_CARDS_LABEL",
    "LIABILITY_CHART_LABELS",
    "ASSET_TYPE_BUCKETS",
    "UNCATEGORIZED_ID",
    "UNCATEGORIZED_NAME",
    "OTHER_SUBCATEGORY_NAME",
    "DEFAULT_HISTORY_LIMIT",
    "MAX_HISTORY_LIMIT",
    "RECENT_TRANSACTIONS_LIMIT",
    "UPCOMING_WINDOW_DAYS",
]
