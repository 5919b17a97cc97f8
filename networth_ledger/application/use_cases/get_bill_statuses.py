"""Use case to show recurring bills with their status for a month."""

from datetime import date, datetime

from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from networth_ledger.domain.models import BillStatusView, PaymentPeriod
from networth_ledger.domain.services.obligations import compute_bill_status
from networth_ledger.infrastructure.logging.logger import get_app_logger


class GetBillStatusesUseCase:
    """List an owner's bills with their payment record for one period."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        logger=None,
        today=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port opening sessions against the ledger store.
            logger: Optional logger compatible with logging.Logger-like API.
            today: Optional callable returning the owner's current date.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._today = today or (lambda: datetime.now().astimezone().date())

    def execute(
        self,
        owner_id: str,
        month: int,
        year: int,
        today: date | None = None,
    ) -> list[BillStatusView]:
        """Return every bill with its status for ``month``/``year``.

        Args:
            owner_id: Owner whose bills are listed.
            month: Month of the period.
            year: Year of the period.
            today: Date the statuses are evaluated on.

        Returns:
            list[BillStatusView]: Bills ordered by due day.
        """
        period = PaymentPeriod(month=month, year=year)
        today = today or self._today()

        with self._repository.read_session() as session:
            bills = session.list_bills(owner_id)
            payments = {
                payment.bill_id: payment
                for payment in session.list_bill_payments(
                    [bill.id for bill in bills], period
                )
            }

        views = [
            BillStatusView(
                bill=bill,
                payment=payments.get(bill.id),
                status=compute_bill_status(
                    bill, payments.get(bill.id), period, today
                ),
            )
            for bill in bills
        ]
        self._logger.debug(
            f"Computed {len(views)} bill statuses for {period.label()}"
        )
        return views


__all__ = ["GetBillStatusesUseCase"]
