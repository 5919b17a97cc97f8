"""Use case to list transactions grouped by calendar date."""

from datetime import date

from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from networth_ledger.application.use_cases.date_range import (
    validate_date_range,
)
from networth_ledger.domain.errors import ValidationFailureError
from networth_ledger.domain.models import GroupedTransactions, TransactionFilters
from networth_ledger.domain.services.spending import (
    group_transactions_by_date,
)
from networth_ledger.infrastructure.logging.logger import get_app_logger

SORT_ORDERS = ("asc", "desc")


class GetGroupedTransactionsUseCase:
    """Filter transactions of a window and group them by date."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        owner_id: str,
        start_date: date,
        end_date: date,
        filters: TransactionFilters | None = None,
        sort_order: str = "desc",
    ) -> GroupedTransactions:
        """Return date groups for [start_date, end_date].

        Args:
            owner_id: Owner whose transactions are read.
            start_date: First day of the window, inclusive.
            end_date: Last day of the window, inclusive.
            filters: Optional category, sub-category, type, account and
                text search filters.
            sort_order: ``asc`` or ``desc`` ordering of the date groups.
                Inside a date, newest created transactions come first.

        Returns:
            GroupedTransactions: Date groups and the transaction count.
        """
        if sort_order not in SORT_ORDERS:
            raise ValidationFailureError(f"Unknown sort order: {sort_order}")
        validate_date_range(start_date, end_date)

        with self._repository.read_session() as session:
            details = session.list_transaction_details(
                owner_id, start_date, end_date, filters
            )

        grouped = group_transactions_by_date(details, sort_order)
        self._logger.debug(
            f"Grouped {grouped.total} transactions into "
            f"{len(grouped.groups)} dates"
        )
        return grouped


__all__ = ["GetGroupedTransactionsUseCase", "SORT_ORDERS"]
