"""End-to-end payment tests against a sqlite ledger store."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import threading
from unittest.mock import MagicMock

import pytest

from networth_ledger.application.use_cases.pay_obligation import (
    PayObligationUseCase,
)
from networth_ledger.domain.errors import (
    ConflictError,
    InvalidReferenceError,
    NotFoundError,
)
from networth_ledger.domain.models import (
    Account,
    BillPayment,
    BudgetItem,
    Category,
    MonthlyBudget,
    ObligationRef,
    PaymentPeriod,
    RecurringBill,
    SubCategory,
)
from networth_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from networth_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
    SqlAlchemyLedgerSession,
)

_PERIOD = PaymentPeriod(month=5, year=2024)


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
                    balance=Decimal("1500.00"),
                )
            )
        session.insert_category(
            Category(
                id="cat-1",
                owner_id="owner-1",
                name="Housing",
                category_type="needs",
            )
        )
        session.insert_sub_category(
            SubCategory(
                id="sub-1",
                owner_id="owner-1",
                category_id="cat-1",
                name="Rent",
            )
        )
        session.insert_bill(
            RecurringBill(
                id="bill-1",
                owner_id="owner-1",
                name="Rent",
                amount=Decimal("900.00"),
                due_day=1,
                category_id="cat-1",
                sub_category_id="sub-1",
            )
        )
        session.insert_budget(
            MonthlyBudget(id="budget-1", owner_id="owner-1", month=5, year=2024)
        )
        session.insert_budget_item(
            BudgetItem(
                id="item-1",
                owner_id="owner-1",
                budget_id="budget-1",
                item_type="payment",
                name="Car insurance",
                amount=Decimal("320.10"),
                category_id="cat-1",
            )
        )
    return repository


def _use_case(repository) -> PayObligationUseCase:
    return PayObligationUseCase(repository, logger=MagicMock())


def _transactions(repository, owner_id: str = "owner-1"):
    with repository.read_session() as session:
        return session.list_transaction_details(
            owner_id, date(2000, 1, 1), date(2100, 12, 31)
        )


def _pay_rent(use_case, owner_id="owner-1", account_id="acc-owner-1"):
    return use_case.execute(
        owner_id=owner_id,
        obligation=ObligationRef.bill("bill-1"),
        period=_PERIOD,
        account_id=account_id,
        paid_amount=Decimal("900.00"),
        paid_date=date(2024, 5, 1),
    )


def test_bill_paid_once_then_conflict(tmp_path: Path) -> None:
    """A second payment for the same period adds no transaction."""
    repository = _build_repository(tmp_path)
    use_case = _use_case(repository)

    result = _pay_rent(use_case)
    with pytest.raises(ConflictError):
        _pay_rent(use_case)

    details = _transactions(repository)
    assert len(details) == 1
    with repository.read_session() as session:
        payment = session.get_bill_payment("bill-1", _PERIOD)
        stored = session.get_transaction("owner-1", payment.transaction_id)
    assert payment.is_paid is True
    assert payment.paid_date == date(2024, 5, 1)
    assert stored.id == result.transaction.id
    assert stored.amount == Decimal("900.00")
    assert stored.account_id == "acc-owner-1"
    assert stored.sub_category_id == "sub-1"
    assert stored.description == "Rent - 5/2024"


def test_next_period_can_be_paid(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)
    use_case = _use_case(repository)

    _pay_rent(use_case)
    use_case.execute(
        owner_id="owner-1",
        obligation=ObligationRef.bill("bill-1"),
        period=PaymentPeriod(month=6, year=2024),
        account_id="acc-owner-1",
        paid_amount=Decimal("900.00"),
        paid_date=date(2024, 6, 1),
    )

    assert len(_transactions(repository)) == 2


def test_existing_unpaid_record_is_marked_paid(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)
    with repository.session() as session:
        session.insert_bill_payment(
            BillPayment(
                id="pay-1",
                bill_id="bill-1",
                month=5,
                year=2024,
                is_paid=False,
            )
        )

    result = _pay_rent(_use_case(repository))

    assert result.record.id == "pay-1"
    with repository.read_session() as session:
        payment = session.get_bill_payment("bill-1", _PERIOD)
    assert payment.is_paid is True
    assert payment.transaction_id == result.transaction.id
    assert payment.paid_amount == Decimal("900.00")


def test_other_owner_cannot_pay_bill(tmp_path: Path) -> None:
    """Foreign obligations look exactly like missing ones."""
    repository = _build_repository(tmp_path)

    with pytest.raises(NotFoundError):
        _pay_rent(
            _use_case(repository),
            owner_id="owner-2",
            account_id="acc-owner-2",
        )

    assert _transactions(repository, "owner-2") == []


def test_foreign_account_is_rejected(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)

    with pytest.raises(InvalidReferenceError):
        _pay_rent(_use_case(repository), account_id="acc-owner-2")

    assert _transactions(repository) == []


def test_failure_after_transaction_insert_rolls_back(
    tmp_path: Path,
    monkeypatch,
) -> None:
    """No transaction survives when the paid mark fails."""
    repository = _build_repository(tmp_path)

    def _boom(self, *args, **kwargs):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(SqlAlchemyLedgerSession, "mark_budget_item_paid", _boom)

    with pytest.raises(RuntimeError):
        _use_case(repository).execute(
            owner_id="owner-1",
            obligation=ObligationRef.budget_item("item-1"),
            period=None,
            account_id="acc-owner-1",
            paid_amount=Decimal("320.10"),
            paid_date=date(2024, 5, 3),
        )

    assert _transactions(repository) == []
    with repository.read_session() as session:
        item = session.get_budget_item("owner-1", "item-1")
    assert item.is_paid is False
    assert item.transaction_id is None


def test_budget_item_paid_once(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)
    use_case = _use_case(repository)
    kwargs = {
        "owner_id": "owner-1",
        "obligation": ObligationRef.budget_item("item-1"),
        "period": None,
        "account_id": "acc-owner-1",
        "paid_amount": Decimal("320.10"),
        "paid_date": date(2024, 5, 3),
    }

    result = use_case.execute(**kwargs)
    with pytest.raises(ConflictError):
        use_case.execute(**kwargs)

    assert len(_transactions(repository)) == 1
    with repository.read_session() as session:
        item = session.get_budget_item("owner-1", "item-1")
    assert item.is_paid is True
    assert item.paid_amount == Decimal("320.10")
    assert item.transaction_id == result.transaction.id
    assert result.transaction.notes == "Budget payment for 5/2024"


def _pay_concurrently(repository, obligation, period, workers: int = 8):
    use_case = _use_case(repository)
    barrier = threading.Barrier(workers)
    outcomes = []

    def _worker() -> None:
        barrier.wait()
        try:
            use_case.execute(
                owner_id="owner-1",
                obligation=obligation,
                period=period,
                account_id="acc-owner-1",
                paid_amount=Decimal("900.00"),
                paid_date=date(2024, 5, 1),
            )
        except ConflictError:
            outcomes.append("conflict")
        else:
            outcomes.append("paid")

    threads = [threading.Thread(target=_worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return sorted(outcomes)


@pytest.mark.parametrize("existing_record", [False, True])
def test_concurrent_bill_payments_pay_once(
    tmp_path: Path,
    existing_record: bool,
) -> None:
    """Racing payments for one period end in a single paid record."""
    repository = _build_repository(tmp_path)
    if existing_record:
        with repository.session() as session:
            session.insert_bill_payment(
                BillPayment(
                    id="pay-1",
                    bill_id="bill-1",
                    month=5,
                    year=2024,
                    is_paid=False,
                )
            )

    outcomes = _pay_concurrently(
        repository, ObligationRef.bill("bill-1"), _PERIOD
    )

    assert outcomes == ["conflict"] * 7 + ["paid"]
    with repository.read_session() as session:
        payment = session.get_bill_payment("bill-1", _PERIOD)
    [detail] = _transactions(repository)
    assert payment.is_paid
    assert payment.transaction_id == detail.transaction.id


def test_concurrent_budget_item_payments_pay_once(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)

    outcomes = _pay_concurrently(
        repository, ObligationRef.budget_item("item-1"), None
    )

    assert outcomes == ["conflict"] * 7 + ["paid"]
    assert len(_transactions(repository)) == 1
