"""Use case to apply partial updates to bills and budget items."""

from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
    LedgerSessionPort,
)
from networth_ledger.domain.errors import (
    InvalidOperationError,
    InvalidReferenceError,
    NotFoundError,
    ValidationFailureError,
)
from networth_ledger.domain.models import (
    BILL,
    BudgetItem,
    BudgetItemUpdate,
    ObligationRef,
    RecurringBill,
    RecurringBillUpdate,
)
from networth_ledger.infrastructure.logging.logger import get_app_logger


class UpdateObligationUseCase:
    """Apply the explicitly set fields of an update to one obligation.

    Updates never touch payment state. References to categories,
    sub-categories and accounts must resolve within the owner's data.
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
        update: RecurringBillUpdate | BudgetItemUpdate,
    ) -> RecurringBill | BudgetItem:
        """Update the referenced obligation.

        Args:
            owner_id: Owner acting on the obligation.
            obligation: Bill or budget item to update.
            update: Changes matching the obligation kind.

        Returns:
            RecurringBill | BudgetItem: The obligation after the update.

        Raises:
            NotFoundError: If the obligation is absent or foreign.
            InvalidReferenceError: If a changed reference is not owned.
            InvalidOperationError: If a paid item would change its type.
        """
        expected = RecurringBillUpdate if obligation.kind == BILL else BudgetItemUpdate
        if not isinstance(update, expected):
            raise ValidationFailureError(
                f"{type(update).__name__} cannot update a {obligation.kind}"
            )

        with self._repository.session() as session:
            if obligation.kind == BILL:
                updated = self._update_bill(
                    session, owner_id, obligation.obligation_id, update
                )
            else:
                updated = self._update_budget_item(
                    session, owner_id, obligation.obligation_id, update
                )

        changed = ", ".join(update.changes()) or "nothing"
        self._logger.info(
            f"Updated {obligation.kind} {obligation.obligation_id}: {changed}"
        )
        return updated

    def _update_bill(
        self,
        session: LedgerSessionPort,
        owner_id: str,
        bill_id: str,
        update: RecurringBillUpdate,
    ) -> RecurringBill:
        bill = session.get_bill(owner_id, bill_id, for_update=True)
        if bill is None:
            raise NotFoundError(f"Bill {bill_id} not found")
        changes = update.changes()
        self._check_references(session, owner_id, changes)
        if changes:
            session.update_bill(owner_id, bill.id, changes)
        return update.apply_to(bill)

    def _update_budget_item(
        self,
        session: LedgerSessionPort,
        owner_id: str,
        item_id: str,
        update: BudgetItemUpdate,
    ) -> BudgetItem:
        item = session.get_budget_item(owner_id, item_id, for_update=True)
        if item is None:
            raise NotFoundError(f"Budget item {item_id} not found")
        changes = update.changes()
        if (
            item.is_paid
            and "item_type" in changes
            and changes["item_type"] != item.item_type
        ):
            raise InvalidOperationError(
                "A paid budget item cannot change its type"
            )
        self._check_references(session, owner_id, changes)
        if changes:
            session.update_budget_item(owner_id, item.id, changes)
        return update.apply_to(item)

    @staticmethod
    def _check_references(
        session: LedgerSessionPort,
        owner_id: str,
        changes: dict,
    ) -> None:
        lookups = (
            ("category_id", session.get_category, "Category"),
            ("sub_category_id", session.get_sub_category, "Sub-category"),
            ("account_id", session.get_account, "Account"),
        )
        for field_name, lookup, label in lookups:
            value = changes.get(field_name)
            if value and lookup(owner_id, value) is None:
                raise InvalidReferenceError(f"{label} {value} not found")


__all__ = ["UpdateObligationUseCase"]
