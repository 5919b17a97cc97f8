"""Tests for bill statuses, obligation updates and deletions on sqlite."""

from datetime import date
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from networth_ledger.application.use_cases.delete_obligation import (
    DeleteObligationUseCase,
)
from networth_ledger.application.use_cases.get_bill_statuses import (
    GetBillStatusesUseCase,
)
from networth_ledger.application.use_cases.pay_obligation import (
    PayObligationUseCase,
)
from networth_ledger.application.use_cases.update_obligation import (
    UpdateObligationUseCase,
)
from networth_ledger.domain.errors import (
    InvalidOperationError,
    InvalidReferenceError,
    NotFoundError,
    ValidationFailureError,
)
from networth_ledger.domain.models import (
    Account,
    BudgetItem,
    BudgetItemUpdate,
    Category,
    MonthlyBudget,
    ObligationRef,
    PaymentPeriod,
    RecurringBill,
    RecurringBillUpdate,
)
from networth_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from networth_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)


def _bill(bill_id: str, name: str, due_day: int, **kwargs) -> RecurringBill:
    return RecurringBill(
        id=bill_id,
        owner_id=kwargs.pop("owner_id", "owner-1"),
        name=name,
        amount=Decimal("50"),
        due_day=due_day,
        **kwargs,
    )


def _build_repository(tmp_path: Path) -> SqlAlchemyLedgerRepository:
    adapter = SqlAlchemyDatabaseEngineAdapter(
        f"sqlite:///{tmp_path / 'ledger.db'}"
    )
    repository = SqlAlchemyLedgerRepository(adapter)
    repository.create_schema()
    with repository.session() as session:
        for owner_id in ("owner-1", "owner-2"):
            session.insert_account(
                Account(
                    id=f"acc-{owner_id}",
                    owner_id=owner_id,
                    name="Checking",
                    account_type="bank",
                    balance=Decimal("500"),
                )
            )
            session.insert_category(
                Category(
                    id=f"cat-{owner_id}",
                    owner_id=owner_id,
                    name="Bills",
                    category_type="needs",
                )
            )
        session.insert_bill(_bill("bill-phone", "Phone", 10))
        session.insert_bill(_bill("bill-water", "Water", 20))
        session.insert_bill(_bill("bill-gym", "Gym", 25, is_active=False))
        session.insert_bill(_bill("bill-other", "Rent", 1, owner_id="owner-2"))
        session.insert_budget(
            MonthlyBudget(id="budget-1", owner_id="owner-1", month=4, year=2024)
        )
        session.insert_budget_item(
            BudgetItem(
                id="item-1",
                owner_id="owner-1",
                budget_id="budget-1",
                item_type="payment",
                name="Dentist",
                amount=Decimal("80"),
            )
        )
    return repository


def _pay(repository, obligation, period=PaymentPeriod(month=4, year=2024)):
    return PayObligationUseCase(repository, logger=MagicMock()).execute(
        owner_id="owner-1",
        obligation=obligation,
        period=period,
        account_id="acc-owner-1",
        paid_amount=Decimal("50"),
        paid_date=date(2024, 4, 9),
    )


def test_bill_statuses_for_current_month(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)
    _pay(repository, ObligationRef.bill("bill-water"))

    views = GetBillStatusesUseCase(repository, logger=MagicMock()).execute(
        "owner-1", month=4, year=2024, today=date(2024, 4, 12)
    )

    statuses = {view.bill.name: view.status for view in views}
    assert statuses == {"Phone": "overdue", "Water": "paid", "Gym": "pending"}
    assert [view.bill.due_day for view in views] == [10, 20, 25]
    water = next(view for view in views if view.bill.name == "Water")
    assert water.payment.is_paid is True


def test_bill_statuses_use_injected_today(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)
    use_case = GetBillStatusesUseCase(
        repository,
        logger=MagicMock(),
        today=lambda: date(2024, 4, 5),
    )

    views = use_case.execute("owner-1", month=4, year=2024)

    assert [view.status for view in views] == ["upcoming", "pending", "pending"]


def test_delete_bill_keeps_transactions(tmp_path: Path) -> None:
    """Deleting a bill removes its payments but not their transactions."""
    repository = _build_repository(tmp_path)
    april = _pay(repository, ObligationRef.bill("bill-phone"))
    may = _pay(
        repository,
        ObligationRef.bill("bill-phone"),
        period=PaymentPeriod(month=5, year=2024),
    )
    logger = MagicMock()

    result = DeleteObligationUseCase(repository, logger=logger).execute(
        "owner-1", ObligationRef.bill("bill-phone")
    )

    assert result.deleted_payment_count == 2
    assert sorted(result.retained_transaction_ids) == sorted(
        [april.transaction.id, may.transaction.id]
    )
    with repository.read_session() as session:
        assert session.get_bill("owner-1", "bill-phone") is None
        assert session.list_payments_for_bill("bill-phone") == []
        assert session.get_transaction("owner-1", april.transaction.id)
    logger.info.assert_called_once()


def test_delete_paid_budget_item_keeps_transaction(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)
    paid = _pay(repository, ObligationRef.budget_item("item-1"), period=None)

    result = DeleteObligationUseCase(repository, logger=MagicMock()).execute(
        "owner-1", ObligationRef.budget_item("item-1")
    )

    assert result.retained_transaction_ids == [paid.transaction.id]
    with repository.read_session() as session:
        assert session.get_budget_item("owner-1", "item-1") is None
        assert session.get_transaction("owner-1", paid.transaction.id)


def test_delete_foreign_bill_is_not_found(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)

    with pytest.raises(NotFoundError):
        DeleteObligationUseCase(repository, logger=MagicMock()).execute(
            "owner-1", ObligationRef.bill("bill-other")
        )

    with repository.read_session() as session:
        assert session.get_bill("owner-2", "bill-other") is not None


def test_update_bill_applies_only_set_fields(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)
    use_case = UpdateObligationUseCase(repository, logger=MagicMock())

    updated = use_case.execute(
        "owner-1",
        ObligationRef.bill("bill-phone"),
        RecurringBillUpdate(amount=Decimal("55.25"), category_id="cat-owner-1"),
    )

    assert updated.amount == Decimal("55.25")
    assert updated.name == "Phone"
    with repository.read_session() as session:
        stored = session.get_bill("owner-1", "bill-phone")
    assert stored.amount == Decimal("55.25")
    assert stored.category_id == "cat-owner-1"
    assert stored.due_day == 10


def test_update_bill_rejects_foreign_reference(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)
    use_case = UpdateObligationUseCase(repository, logger=MagicMock())

    with pytest.raises(InvalidReferenceError):
        use_case.execute(
            "owner-1",
            ObligationRef.bill("bill-phone"),
            RecurringBillUpdate(account_id="acc-owner-2"),
        )

    with repository.read_session() as session:
        assert session.get_bill("owner-1", "bill-phone").account_id is None


def test_update_paid_item_cannot_change_type(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)
    _pay(repository, ObligationRef.budget_item("item-1"), period=None)
    use_case = UpdateObligationUseCase(repository, logger=MagicMock())

    with pytest.raises(InvalidOperationError):
        use_case.execute(
            "owner-1",
            ObligationRef.budget_item("item-1"),
            BudgetItemUpdate(item_type="limit"),
        )

    renamed = use_case.execute(
        "owner-1",
        ObligationRef.budget_item("item-1"),
        BudgetItemUpdate(name="Dentist visit"),
    )
    assert renamed.name == "Dentist visit"
    assert renamed.is_paid is True


def test_update_rejects_mismatched_update_type() -> None:
    use_case = UpdateObligationUseCase(MagicMock(), logger=MagicMock())

    with pytest.raises(ValidationFailureError):
        use_case.execute(
            "owner-1",
            ObligationRef.bill("bill-phone"),
            BudgetItemUpdate(name="x"),
        )
