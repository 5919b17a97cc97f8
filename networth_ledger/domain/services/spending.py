"""Domain services for spending and transaction grouping."""

from collections.abc import Iterable
from decimal import Decimal

from networth_ledger.domain.constants import (
    EXPENSE_TRANSACTION_TYPES,
    OTHER_SUBCATEGORY_NAME,
    RECENT_TRANSACTIONS_LIMIT,
    UNCATEGORIZED_ID,
    UNCATEGORIZED_NAME,
)
from networth_ledger.domain.models import (
    BudgetGoal,
    CategorySpending,
    GroupedTransactions,
    MonthlySummary,
    NamedAmount,
    SpendingBreakdown,
    SubCategorySpending,
    TransactionDetail,
    TransactionGroup,
    TypeProgress,
)
from networth_ledger.utils.decimal_utils import (
    coerce_decimal,
    percentage_of,
    round_money,
)

DEFAULT_GOAL_PERCENTAGES = {
    "needs": Decimal("50"),
    "wants": Decimal("30"),
    "savings": Decimal("20"),
}


def compute_spending_breakdown(
    details: Iterable[TransactionDetail],
) -> SpendingBreakdown:
    """Group non-income transactions by category and sub-category.

    Transactions without a sub-category fall into a synthetic "Other"
    sub-category scoped to their category. Percentages use unrounded
    amounts and are 0 when the parent total is 0.

    Args:
        details: Transactions of one owner within the window.

    Returns:
        SpendingBreakdown: Categories sorted by amount, largest first.
    """
    categories: dict[str, dict] = {}
    total_spending = Decimal("0")

    for detail in details:
        transaction = detail.transaction
        if transaction.transaction_type == "income":
            continue
        amount = coerce_decimal(transaction.amount)
        total_spending += amount

        category = detail.category
        category_id = category.id if category else UNCATEGORIZED_ID
        entry = categories.get(category_id)
        if entry is None:
            entry = {
                "name": category.name if category else UNCATEGORIZED_NAME,
                "type": transaction.transaction_type,
                "amount": Decimal("0"),
                "subs": {},
            }
            categories[category_id] = entry
        entry["amount"] += amount

        if detail.sub_category is not None:
            sub_id = detail.sub_category.id
            sub_name = detail.sub_category.name
        else:
            sub_id = f"{category_id}-other"
            sub_name = OTHER_SUBCATEGORY_NAME
        sub_entry = entry["subs"].setdefault(
            sub_id, {"name": sub_name, "amount": Decimal("0")}
        )
        sub_entry["amount"] += amount

    result = []
    for category_id, entry in categories.items():
        subs = [
            SubCategorySpending(
                id=sub_id,
                name=sub["name"],
                amount=round_money(sub["amount"]),
                percentage=percentage_of(sub["amount"], entry["amount"]),
            )
            for sub_id, sub in entry["subs"].items()
        ]
        subs.sort(key=lambda item: item.amount, reverse=True)
        result.append(
            CategorySpending(
                id=category_id,
                name=entry["name"],
                transaction_type=entry["type"],
                amount=round_money(entry["amount"]),
                percentage=percentage_of(entry["amount"], total_spending),
                sub_categories=subs,
            )
        )
    result.sort(key=lambda item: item.amount, reverse=True)

    return SpendingBreakdown(
        categories=result,
        total_spending=round_money(total_spending),
    )


def sort_transaction_details(
    details: Iterable[TransactionDetail],
    sort_order: str = "desc",
) -> list[TransactionDetail]:
    """Order by transaction date, then creation time newest first.

    Args:
        details: Transactions to order.
        sort_order: ``asc`` or ``desc`` for the date component only.

    Returns:
        list[TransactionDetail]: Ordered transactions.
    """
    ordered = sorted(
        details,
        key=lambda item: item.transaction.created_at,
        reverse=True,
    )
    ordered.sort(
        key=lambda item: item.transaction.transaction_date,
        reverse=sort_order == "desc",
    )
    return ordered


def group_transactions_by_date(
    details: Iterable[TransactionDetail],
    sort_order: str = "desc",
) -> GroupedTransactions:
    """Group transactions by their ``YYYY-MM-DD`` date.

    Args:
        details: Transactions to group.
        sort_order: ``asc`` or ``desc`` ordering of the date groups.

    Returns:
        GroupedTransactions: Date groups and the transaction count.
    """
    ordered = sort_transaction_details(details, sort_order)
    groups: dict[str, list[TransactionDetail]] = {}
    for detail in ordered:
        key = detail.transaction.transaction_date.isoformat()
        groups.setdefault(key, []).append(detail)

    return GroupedTransactions(
        groups=[
            TransactionGroup(date=key, transactions=items)
            for key, items in groups.items()
        ],
        total=len(ordered),
    )


def compute_monthly_summary(
    details: Iterable[TransactionDetail],
    goal: BudgetGoal | None = None,
) -> MonthlySummary:
    """Summarize income and spending by transaction type for a period.

    The savings share of the goal is split evenly between savings and
    investments.

    Args:
        details: Transactions of one owner within the period.
        goal: Stored goal percentages; 50/30/20 when absent.

    Returns:
        MonthlySummary: Rounded totals, goal progress and chart data.
    """
    details = list(details)
    totals = {name: Decimal("0") for name in ("income",) + EXPENSE_TRANSACTION_TYPES}
    by_category: dict[str, dict] = {}

    for detail in details:
        transaction = detail.transaction
        amount = coerce_decimal(transaction.amount)
        if transaction.transaction_type in totals:
            totals[transaction.transaction_type] += amount
        if transaction.transaction_type != "income":
            name = detail.category.name if detail.category else UNCATEGORIZED_NAME
            entry = by_category.setdefault(
                name,
                {"amount": Decimal("0"), "type": transaction.transaction_type},
            )
            entry["amount"] += amount

    if goal is not None:
        needs_pct = goal.needs_percentage
        wants_pct = goal.wants_percentage
        savings_pct = goal.savings_percentage
    else:
        needs_pct = DEFAULT_GOAL_PERCENTAGES["needs"]
        wants_pct = DEFAULT_GOAL_PERCENTAGES["wants"]
        savings_pct = DEFAULT_GOAL_PERCENTAGES["savings"]

    income = totals["income"]
    total_expense = sum(
        (totals[name] for name in EXPENSE_TRANSACTION_TYPES),
        Decimal("0"),
    )
    half_savings_goal = income * savings_pct / 100 / 2

    spending_by_type = [
        NamedAmount(name=name.capitalize(), amount=round_money(totals[name]))
        for name in EXPENSE_TRANSACTION_TYPES
        if totals[name] > 0
    ]
    spending_by_category = sorted(
        (
            NamedAmount(
                name=name,
                amount=round_money(entry["amount"]),
                transaction_type=entry["type"],
            )
            for name, entry in by_category.items()
        ),
        key=lambda item: item.amount,
        reverse=True,
    )

    return MonthlySummary(
        total_income=round_money(income),
        total_expense=round_money(total_expense),
        balance=round_money(income - total_expense),
        needs=TypeProgress(
            current=round_money(totals["needs"]),
            goal=round_money(income * needs_pct / 100),
        ),
        wants=TypeProgress(
            current=round_money(totals["wants"]),
            goal=round_money(income * wants_pct / 100),
        ),
        savings=TypeProgress(
            current=round_money(totals["savings"]),
            goal=round_money(half_savings_goal),
        ),
        investments=TypeProgress(
            current=round_money(totals["investments"]),
            goal=round_money(half_savings_goal),
        ),
        spending_by_type=spending_by_type,
        spending_by_category=spending_by_category,
        recent_transactions=sort_transaction_details(details)[
            :RECENT_TRANSACTIONS_LIMIT
        ],
    )


__all__ = [
    "DEFAULT_GOAL_PERCENTAGES",
    "compute_spending_breakdown",
    "sort_transaction_details",
    "group_transactions_by_date",
    "compute_monthly_summary",
]
