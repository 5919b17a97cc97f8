"""Use case to mark a bill or budget payment item as paid."""

from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

from sqlalchemy.exc import IntegrityError

from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
    LedgerSessionPort,
)
from networth_ledger.domain.constants import TRANSACTION_TYPES
from networth_ledger.domain.errors import (
    ConflictError,
    InvalidOperationError,
    InvalidReferenceError,
    NotFoundError,
    ValidationFailureError,
)
from networth_ledger.domain.models import (
    BILL,
    BUDGET_ITEM,
    Account,
    BillPayment,
    ObligationRef,
    PaidObligation,
    PaymentPeriod,
    Transaction,
)
from networth_ledger.domain.services.obligations import (
    describe_bill_payment,
    describe_budget_payment,
)
from networth_ledger.infrastructure.logging.logger import get_app_logger
from networth_ledger.utils.decimal_utils import coerce_decimal

_DUPLICATE_PAYMENT_MARKERS = (
    "uq_bill_payments_bill_period",
    "bill_payments.bill_id",
)


def _is_duplicate_payment(exc: IntegrityError) -> bool:
    """Return True when the violation is the one-payment-per-period key."""
    message = str(exc.orig)
    return any(marker in message for marker in _DUPLICATE_PAYMENT_MARKERS)


class PayObligationUseCase:
    """Record the payment of an obligation as a ledger transaction.

    The transaction insert and the paid mark run in one database
    transaction. The obligation row is locked first; the paid mark is a
    conditional update (or a unique-keyed insert for bills without a
    record yet), so concurrent attempts for one obligation and period
    produce a single paid transition. Losers raise ``ConflictError`` and
    leave no transaction behind.
    """

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        logger=None,
        clock=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port opening sessions against the ledger store.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Optional callable returning the current aware datetime.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(
        self,
        owner_id: str,
        obligation: ObligationRef,
        period: PaymentPeriod | None,
        account_id: str,
        paid_amount: Decimal,
        paid_date: date,
        transaction_type: str = "needs",
    ) -> PaidObligation:
        """Mark an obligation paid and create its transaction.

        Args:
            owner_id: Owner acting on the obligation.
            obligation: Bill or budget item to pay.
            period: Month and year paid; required for bills, ignored for
                budget items.
            account_id: Owned account the payment comes from.
            paid_amount: Positive amount paid.
            paid_date: Calendar date of the payment.
            transaction_type: Type of the created transaction.

        Returns:
            PaidObligation: Paid record with its transaction and references.

        Raises:
            NotFoundError: If the obligation is absent or foreign.
            InvalidOperationError: If the budget item is not a payment item.
            InvalidReferenceError: If the account is absent or foreign.
            ConflictError: If the obligation is already paid.
        """
        paid_amount = coerce_decimal(paid_amount)
        self._validate(obligation, period, paid_amount, transaction_type)

        try:
            with self._repository.session() as session:
                if obligation.kind == BILL:
                    result = self._pay_bill(
                        session,
                        owner_id,
                        obligation.obligation_id,
                        period,
                        account_id,
                        paid_amount,
                        paid_date,
                        transaction_type,
                    )
                else:
                    result = self._pay_budget_item(
                        session,
                        owner_id,
                        obligation.obligation_id,
                        account_id,
                        paid_amount,
                        paid_date,
                        transaction_type,
                    )
        except ConflictError as exc:
            self._logger.warning(
                f"Payment rejected for {obligation.kind} "
                f"{obligation.obligation_id}: {exc}"
            )
            raise
        except IntegrityError as exc:
            if not _is_duplicate_payment(exc):
                raise
            self._logger.warning(
                f"Payment rejected for {obligation.kind} "
                f"{obligation.obligation_id}: concurrent payment"
            )
            raise ConflictError(
                f"{obligation.kind} {obligation.obligation_id} is already paid"
            ) from exc

        self._logger.info(
            f"Paid {obligation.kind} {obligation.obligation_id}: "
            f"amount={paid_amount}, transaction={result.transaction.id}"
        )
        return result

    def _pay_bill(
        self,
        session: LedgerSessionPort,
        owner_id: str,
        bill_id: str,
        period: PaymentPeriod,
        account_id: str,
        paid_amount: Decimal,
        paid_date: date,
        transaction_type: str,
    ) -> PaidObligation:
        bill = session.get_bill(owner_id, bill_id, for_update=True)
        if bill is None:
            raise NotFoundError(f"Bill {bill_id} not found")
        account = self._require_account(session, owner_id, account_id)

        payment = session.get_bill_payment(bill.id, period)
        if payment is not None and payment.is_paid:
            raise ConflictError(
                f"Bill {bill.name} is already paid for {period.label()}"
            )

        description, notes = describe_bill_payment(bill, period)
        transaction = session.insert_transaction(
            Transaction(
                id=str(uuid4()),
                owner_id=owner_id,
                transaction_type=transaction_type,
                amount=paid_amount,
                category_id=bill.category_id,
                sub_category_id=bill.sub_category_id,
                account_id=account.id,
                transaction_date=paid_date,
                description=description,
                notes=notes,
                created_at=self._clock(),
            )
        )

        if payment is None:
            record = session.insert_bill_payment(
                BillPayment(
                    id=str(uuid4()),
                    bill_id=bill.id,
                    month=period.month,
                    year=period.year,
                    is_paid=True,
                    paid_date=paid_date,
                    paid_amount=paid_amount,
                    account_id=account.id,
                    transaction_id=transaction.id,
                )
            )
        else:
            marked = session.mark_bill_payment_paid(
                payment.id,
                paid_date,
                paid_amount,
                account.id,
                transaction.id,
            )
            if not marked:
                raise ConflictError(
                    f"Bill {bill.name} is already paid for {period.label()}"
                )
            record = replace(
                payment,
                is_paid=True,
                paid_date=paid_date,
                paid_amount=paid_amount,
                account_id=account.id,
                transaction_id=transaction.id,
            )

        return PaidObligation(
            kind=BILL,
            record=record,
            transaction=transaction,
            category=self._category(session, owner_id, bill.category_id),
            sub_category=self._sub_category(
                session, owner_id, bill.sub_category_id
            ),
            account=account,
            bill=bill,
        )

    def _pay_budget_item(
        self,
        session: LedgerSessionPort,
        owner_id: str,
        item_id: str,
        account_id: str,
        paid_amount: Decimal,
        paid_date: date,
        transaction_type: str,
    ) -> PaidObligation:
        item = session.get_budget_item(owner_id, item_id, for_update=True)
        if item is None:
            raise NotFoundError(f"Budget item {item_id} not found")
        if item.item_type != "payment":
            raise InvalidOperationError(
                "Only payment items can be marked as paid"
            )
        account = self._require_account(session, owner_id, account_id)
        if item.is_paid:
            raise ConflictError(f"Budget item {item.name} is already paid")

        budget = session.get_budget(owner_id, item.budget_id)
        if budget is None:
            raise NotFoundError(f"Budget {item.budget_id} not found")

        description, notes = describe_budget_payment(item, budget)
        transaction = session.insert_transaction(
            Transaction(
                id=str(uuid4()),
                owner_id=owner_id,
                transaction_type=transaction_type,
                amount=paid_amount,
                category_id=item.category_id,
                account_id=account.id,
                transaction_date=paid_date,
                description=description,
                notes=notes,
                created_at=self._clock(),
            )
        )

        marked = session.mark_budget_item_paid(
            owner_id,
            item.id,
            paid_date,
            paid_amount,
            account.id,
            transaction.id,
        )
        if not marked:
            raise ConflictError(f"Budget item {item.name} is already paid")

        return PaidObligation(
            kind=BUDGET_ITEM,
            record=replace(
                item,
                is_paid=True,
                paid_date=paid_date,
                paid_amount=paid_amount,
                account_id=account.id,
                transaction_id=transaction.id,
            ),
            transaction=transaction,
            category=self._category(session, owner_id, item.category_id),
            sub_category=None,
            account=account,
        )

    @staticmethod
    def _validate(
        obligation: ObligationRef,
        period: PaymentPeriod | None,
        paid_amount: Decimal,
        transaction_type: str,
    ) -> None:
        if obligation.kind == BILL and period is None:
            raise ValidationFailureError("Bill payments require a period")
        if paid_amount <= 0:
            raise ValidationFailureError("Paid amount must be positive")
        if transaction_type not in TRANSACTION_TYPES:
            raise ValidationFailureError(
                f"Unknown transaction type: {transaction_type}"
            )

    @staticmethod
    def _require_account(
        session: LedgerSessionPort,
        owner_id: str,
        account_id: str,
    ) -> Account:
        account = session.get_account(owner_id, account_id)
        if account is None:
            raise InvalidReferenceError(f"Account {account_id} not found")
        return account

    @staticmethod
    def _category(session, owner_id, category_id):
        if not category_id:
            return None
        return session.get_category(owner_id, category_id)

    @staticmethod
    def _sub_category(session, owner_id, sub_category_id):
        if not sub_category_id:
            return None
        return session.get_sub_category(owner_id, sub_category_id)


__all__ = ["PayObligationUseCase"]
