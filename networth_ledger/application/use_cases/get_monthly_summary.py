"""Use case to summarize a month of income and spending."""

from datetime import date

from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from networth_ledger.application.use_cases.date_range import (
    validate_date_range,
)
from networth_ledger.domain.models import MonthlySummary, PaymentPeriod
from networth_ledger.domain.services.spending import compute_monthly_summary
from networth_ledger.infrastructure.logging.logger import get_app_logger


class GetMonthlySummaryUseCase:
    """Summarize a window against the owner's spending goals."""

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
    ) -> MonthlySummary:
        """Return totals, goal progress and chart data for the window.

        Goals come from the budget goal of the start date's month.

        Args:
            owner_id: Owner whose transactions are read.
            start_date: First day of the window, inclusive.
            end_date: Last day of the window, inclusive.

        Returns:
            MonthlySummary: Rounded summary of the window.
        """
        validate_date_range(start_date, end_date)
        with self._repository.read_session() as session:
            details = session.list_transaction_details(
                owner_id, start_date, end_date
            )
            goal = session.get_budget_goal(
                owner_id, PaymentPeriod.of(start_date)
            )

        summary = compute_monthly_summary(details, goal)
        self._logger.info(
            f"Monthly summary computed for {start_date}..{end_date}: "
            f"income={summary.total_income}, expense={summary.total_expense}"
        )
        return summary


__all__ = ["GetMonthlySummaryUseCase"]
