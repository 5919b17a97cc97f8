"""Use case to delete a bill or budget item while keeping its history."""

from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from networth_ledger.domain.errors import NotFoundError
from networth_ledger.domain.models import (
    BILL,
    ObligationDeletionResult,
    ObligationRef,
)
from networth_ledger.infrastructure.logging.logger import get_app_logger


class DeleteObligationUseCase:
    """Delete an obligation and its payment records.

    Transactions created by earlier payments stay in the ledger; the
    result lists them so callers can surface what was kept.
    """

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
        obligation: ObligationRef,
    ) -> ObligationDeletionResult:
        """Delete the referenced obligation.

        Args:
            owner_id: Owner acting on the obligation.
            obligation: Bill or budget item to delete.

        Returns:
            ObligationDeletionResult: Removed payment records and retained
            transactions.

        Raises:
            NotFoundError: If the obligation is absent or foreign.
        """
        with self._repository.session() as session:
            if obligation.kind == BILL:
                bill = session.get_bill(
                    owner_id, obligation.obligation_id, for_update=True
                )
                if bill is None:
                    raise NotFoundError(
                        f"Bill {obligation.obligation_id} not found"
                    )
                retained = [
                    payment.transaction_id
                    for payment in session.list_payments_for_bill(bill.id)
                    if payment.transaction_id
                ]
                deleted_payments = session.delete_bill_payments(bill.id)
                session.delete_bill(owner_id, bill.id)
            else:
                item = session.get_budget_item(
                    owner_id, obligation.obligation_id, for_update=True
                )
                if item is None:
                    raise NotFoundError(
                        f"Budget item {obligation.obligation_id} not found"
                    )
                retained = [item.transaction_id] if item.transaction_id else []
                deleted_payments = 1 if item.is_paid else 0
                session.delete_budget_item(owner_id, item.id)

        self._logger.info(
            f"Deleted {obligation.kind} {obligation.obligation_id}: "
            f"removed {deleted_payments} payment records, kept "
            f"{len(retained)} transactions"
        )
        return ObligationDeletionResult(
            kind=obligation.kind,
            obligation_id=obligation.obligation_id,
            deleted_payment_count=deleted_payments,
            retained_transaction_ids=retained,
        )


__all__ = ["DeleteObligationUseCase"]
