"""Domain services for net worth aggregation."""

from collections.abc import Iterable
from decimal import Decimal
from logging import Logger

from networth_ledger.domain.constants import (
    ASSET_BUCKETS,
    ASSET_TYPE_BUCKETS,
    CREDIT_CARDS_LABEL,
    LIABILITY_CHART_LABELS,
)
from networth_ledger.domain.models import (
    Account,
    Asset,
    ChartBucket,
    Liability,
    NetWorthBreakdown,
    NetWorthSummary,
)
from networth_ledger.utils.decimal_utils import coerce_decimal, round_money


def compute_net_worth_breakdown(
    accounts: Iterable[Account],
    assets: Iterable[Asset],
    liabilities: Iterable[Liability],
    logger: Logger,
) -> tuple[NetWorthBreakdown, dict[str, Decimal]]:
    """Classify current balances into net worth buckets.

    Archived rows are skipped. A credit card with a negative balance adds the
    amount owed to ``credit_cards``; a non-negative one counts as a prepaid
    balance under ``bank_accounts``. Every liability adds its outstanding
    balance to ``loans`` whatever its type.

    Args:
        accounts: Accounts of a single owner.
        assets: Assets of a single owner.
        liabilities: Liabilities of a single owner.
        logger: Logger used for warnings.

    Returns:
        tuple: Unrounded bucket totals, and outstanding liability balances
        keyed by liability type.
    """
    totals = {name: Decimal("0") for name in NetWorthBreakdown().as_dict()}
    liabilities_by_type: dict[str, Decimal] = {
        liability_type: Decimal("0")
        for liability_type, _ in LIABILITY_CHART_LABELS
    }

    for account in accounts:
        if account.is_archived:
            continue
        balance = coerce_decimal(account.balance)
        if account.account_type == "bank":
            totals["bank_accounts"] += balance
        elif account.account_type == "cash":
            totals["cash"] += balance
        elif account.account_type == "credit_card":
            if balance < 0:
                totals["credit_cards"] += abs(balance)
            else:
                totals["bank_accounts"] += balance
        else:
            logger.warning(
                f"Skipping account {account.id} with unknown type "
                f"{account.account_type}"
            )

    for asset in assets:
        if asset.is_archived:
            continue
        bucket = ASSET_TYPE_BUCKETS.get(asset.asset_type)
        if bucket is None:
            logger.warning(
                f"Skipping asset {asset.id} with unknown type {asset.asset_type}"
            )
            continue
        totals[bucket] += coerce_decimal(asset.current_value)

    for liability in liabilities:
        if liability.is_archived:
            continue
        outstanding = coerce_decimal(liability.outstanding_balance)
        totals["loans"] += outstanding
        liabilities_by_type[liability.liability_type] = (
            liabilities_by_type.get(liability.liability_type, Decimal("0"))
            + outstanding
        )

    return NetWorthBreakdown(**totals), liabilities_by_type


def build_net_worth_summary(
    breakdown: NetWorthBreakdown,
    liabilities_by_type: dict[str, Decimal],
) -> NetWorthSummary:
    """Round unrounded bucket totals into a presentable summary.

    Totals are derived from the unrounded buckets and rounded once. Stored
    amounts carry cent precision, so the rounded buckets add up to the
    rounded totals.

    Args:
        breakdown: Unrounded bucket totals.
        liabilities_by_type: Outstanding balances keyed by liability type.

    Returns:
        NetWorthSummary: Rounded totals, breakdown and chart arrays.
    """
    total_assets = breakdown.total_assets
    total_liabilities = breakdown.total_liabilities
    rounded = NetWorthBreakdown(
        **{
            name: round_money(value)
            for name, value in breakdown.as_dict().items()
        }
    )

    assets_by_type = [
        ChartBucket(label=label, value=round_money(getattr(breakdown, name)))
        for name, label in ASSET_BUCKETS
        if getattr(breakdown, name) > 0
    ]
    liability_values = [(CREDIT_CARDS_LABEL, breakdown.credit_cards)] + [
        (label, liabilities_by_type.get(liability_type, Decimal("0")))
        for liability_type, label in LIABILITY_CHART_LABELS
    ]
    liabilities_chart = [
        ChartBucket(label=label, value=round_money(value))
        for label, value in liability_values
        if value > 0
    ]

    return NetWorthSummary(
        total_assets=round_money(total_assets),
        total_liabilities=round_money(total_liabilities),
        net_worth=round_money(total_assets - total_liabilities),
        breakdown=rounded,
        assets_by_type=assets_by_type,
        liabilities_by_type=liabilities_chart,
    )


__all__ = ["compute_net_worth_breakdown", "build_net_worth_summary"]
