"""Use case to compute the current net worth of an owner."""

from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from networth_ledger.domain.models import NetWorthSummary
from networth_ledger.domain.services.networth import (
    build_net_worth_summary,
    compute_net_worth_breakdown,
)
from networth_ledger.infrastructure.logging.logger import get_app_logger


class GetNetWorthSummaryUseCase:
    """Compute net worth from current account, asset and liability balances."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port opening sessions against the ledger store.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, owner_id: str) -> NetWorthSummary:
        """Return the net worth summary.

        Args:
            owner_id: Owner whose balances are aggregated.

        Returns:
            NetWorthSummary: Rounded totals, breakdown and chart arrays.
        """
        with self._repository.read_session() as session:
            accounts = session.list_accounts(owner_id)
            assets = session.list_assets(owner_id)
            liabilities = session.list_liabilities(owner_id)

        breakdown, liabilities_by_type = compute_net_worth_breakdown(
            accounts,
            assets,
            liabilities,
            self._logger,
        )
        summary = build_net_worth_summary(breakdown, liabilities_by_type)

        self._logger.info(
            f"Net worth computed: assets={summary.total_assets}, "
            f"liabilities={summary.total_liabilities}"
        )
        return summary


__all__ = ["GetNetWorthSummaryUseCase"]
