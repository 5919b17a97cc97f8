"""Tests for net worth snapshots and history against sqlite."""

from contextlib import contextmanager
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from networth_ledger.application.use_cases.create_networth_snapshot import (
    CreateNetworthSnapshotUseCase,
)
from networth_ledger.application.use_cases.get_networth_history import (
    GetNetworthHistoryUseCase,
)
from networth_ledger.domain.errors import (
    ConflictError,
    ValidationFailureError,
)
from networth_ledger.domain.models import Account, Asset, Liability
from networth_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from networth_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)


def _build_repository(tmp_path: Path) -> SqlAlchemyLedgerRepository:
    adapter = SqlAlchemyDatabaseEngineAdapter(
        f"sqlite:///{tmp_path / 'ledger.db'}"
    )
    repository = SqlAlchemyLedgerRepository(adapter)
    repository.create_schema()
    with repository.session() as session:
        session.insert_account(
            Account(
                id="bank-1",
                owner_id="owner-1",
                name="Checking",
                account_type="bank",
                balance=Decimal("1000"),
            )
        )
        session.insert_account(
            Account(
                id="cash-1",
                owner_id="owner-1",
                name="Wallet",
                account_type="cash",
                balance=Decimal("200"),
            )
        )
        session.insert_asset(
            Asset(
                id="asset-1",
                owner_id="owner-1",
                name="Index fund",
                asset_type="investment",
                subtype="mutual_fund",
                current_value=Decimal("5000"),
                purchase_value=Decimal("4200"),
            )
        )
        session.insert_liability(
            Liability(
                id="loan-1",
                owner_id="owner-1",
                name="Mortgage",
                liability_type="home_loan",
                principal_amount=Decimal("10000"),
                outstanding_balance=Decimal("3000"),
                interest_rate=Decimal("3.1"),
            )
        )
    return repository


class _Clock:
    def __init__(self) -> None:
        self._now = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(minutes=1)
        return self._now


def test_snapshot_stores_current_net_worth(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path)
    use_case = CreateNetworthSnapshotUseCase(
        repository,
        logger=MagicMock(),
        today=lambda: date(2024, 2, 29),
    )

    snapshot = use_case.execute("owner-1")

    assert snapshot.snapshot_date == date(2024, 2, 29)
    assert snapshot.total_assets == Decimal("6200.00")
    assert snapshot.total_liabilities == Decimal("3000.00")
    assert snapshot.net_worth == Decimal("3200.00")
    with repository.read_session() as session:
        stored = session.get_snapshot("owner-1", snapshot.id)
    assert stored.net_worth == Decimal("3200.00")
    assert stored.breakdown["investments"] == Decimal("5000.00")
    assert stored.breakdown["loans"] == Decimal("3000.00")


def test_snapshot_is_not_changed_by_later_balance_updates(
    tmp_path: Path,
) -> None:
    """Snapshots keep the figures of the moment they were taken."""
    repository = _build_repository(tmp_path)
    snapshot = CreateNetworthSnapshotUseCase(
        repository,
        logger=MagicMock(),
        today=lambda: date(2024, 3, 1),
    ).execute("owner-1")

    with repository.session() as session:
        session.update_account_balance("owner-1", "bank-1", Decimal("99999"))

    with repository.read_session() as session:
        stored = session.get_snapshot("owner-1", snapshot.id)
    assert stored.total_assets == snapshot.total_assets
    assert stored.net_worth == snapshot.net_worth
    assert stored.breakdown == snapshot.breakdown


def test_history_returns_latest_points_oldest_first(tmp_path: Path) -> None:
    """Same-day snapshots coexist; the limit keeps the newest ones."""
    repository = _build_repository(tmp_path)
    days = iter(
        [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31), date(2024, 3, 31)]
    )
    snapshots = CreateNetworthSnapshotUseCase(
        repository,
        logger=MagicMock(),
        today=lambda: next(days),
        clock=_Clock(),
    )
    for _ in range(4):
        snapshots.execute("owner-1")

    history = GetNetworthHistoryUseCase(repository, logger=MagicMock())

    points = history.execute("owner-1", limit=3)
    assert [point.snapshot_date for point in points] == [
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 3, 31),
    ]
    assert len(history.execute("owner-1")) == 4
    assert history.execute("owner-2") == []


@pytest.mark.parametrize("limit", [0, 101, -1, True])
def test_history_rejects_out_of_range_limit(limit) -> None:
    history = GetNetworthHistoryUseCase(MagicMock(), logger=MagicMock())

    with pytest.raises(ValidationFailureError):
        history.execute("owner-1", limit=limit)


def test_snapshot_duplicate_key_surfaces_as_conflict() -> None:
    """A store-level duplicate rejection becomes a conflict error."""
    session = MagicMock()
    session.list_accounts.return_value = []
    session.list_assets.return_value = []
    session.list_liabilities.return_value = []
    session.insert_snapshot.side_effect = IntegrityError(
        "INSERT INTO networth_snapshots", {}, Exception("duplicate key")
    )

    @contextmanager
    def _session():
        yield session

    repository = MagicMock()
    repository.session.side_effect = _session
    logger = MagicMock()
    use_case = CreateNetworthSnapshotUseCase(
        repository,
        logger=logger,
        today=lambda: date(2024, 5, 1),
    )

    with pytest.raises(ConflictError) as excinfo:
        use_case.execute("owner-1")

    assert excinfo.value.kind == "conflict"
    assert isinstance(excinfo.value.__cause__, IntegrityError)
    logger.warning.assert_called_once()
    logger.info.assert_not_called()
