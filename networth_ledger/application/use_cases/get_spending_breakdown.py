"""Use case to break spending down by category and sub-category."""

from datetime import date

from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from networth_ledger.application.use_cases.date_range import (
    validate_date_range,
)
from networth_ledger.domain.models import SpendingBreakdown
from networth_ledger.domain.services.spending import (
    compute_spending_breakdown,
)
from networth_ledger.infrastructure.logging.logger import get_app_logger


class GetSpendingBreakdownUseCase:
    """Aggregate non-income transactions of a date window."""

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

    def execute(
        self,
        owner_id: str,
        start_date: date,
        end_date: date,
    ) -> SpendingBreakdown:
        """Return spending grouped by category for [start_date, end_date].

        Args:
            owner_id: Owner whose transactions are read.
            start_date: First day of the window, inclusive.
            end_date: Last day of the window, inclusive.

        Returns:
            SpendingBreakdown: Categories with nested sub-categories.
        """
        validate_date_range(start_date, end_date)
        with self._repository.read_session() as session:
            details = session.list_transaction_details(
                owner_id, start_date, end_date
            )

        breakdown = compute_spending_breakdown(details)
        self._logger.info(
            f"Spending breakdown computed for {start_date}..{end_date}: "
            f"total={breakdown.total_spending}"
        )
        return breakdown


__all__ = ["GetSpendingBreakdownUseCase"]
