"""Use case to persist a point-in-time net worth snapshot."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.exc import IntegrityError

from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from networth_ledger.domain.errors import ConflictError
from networth_ledger.domain.models import NetworthSnapshot
from networth_ledger.domain.services.networth import (
    build_net_worth_summary,
    compute_net_worth_breakdown,
)
from networth_ledger.infrastructure.logging.logger import get_app_logger


def _local_today():
    return datetime.now().astimezone().date()


class CreateNetworthSnapshotUseCase:
    """Compute net worth and store it as an immutable snapshot.

    Snapshots are only ever inserted. Several snapshots may share a date;
    history reads order them by creation time.
    """

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        logger=None,
        today=None,
        clock=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port opening sessions against the ledger store.
            logger: Optional logger compatible with logging.Logger-like API.
            today: Optional callable returning the owner's current date.
            clock: Optional callable returning the current aware datetime.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._today = today or _local_today
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self, owner_id: str) -> NetworthSnapshot:
        """Create a snapshot dated today.

        Args:
            owner_id: Owner whose net worth is captured.

        Returns:
            NetworthSnapshot: The stored snapshot.

        Raises:
            ConflictError: If the store rejects the snapshot as a duplicate.
        """
        try:
            with self._repository.session() as session:
                breakdown, liabilities_by_type = compute_net_worth_breakdown(
                    session.list_accounts(owner_id),
                    session.list_assets(owner_id),
                    session.list_liabilities(owner_id),
                    self._logger,
                )
                summary = build_net_worth_summary(
                    breakdown, liabilities_by_type
                )
                snapshot = session.insert_snapshot(
                    NetworthSnapshot(
                        id=str(uuid4()),
                        owner_id=owner_id,
                        snapshot_date=self._today(),
                        total_assets=summary.total_assets,
                        total_liabilities=summary.total_liabilities,
                        net_worth=summary.net_worth,
                        breakdown=summary.breakdown.as_dict(),
                        created_at=self._clock(),
                    )
                )
        except IntegrityError as exc:
            self._logger.warning(
                f"Net worth snapshot rejected for owner {owner_id}: "
                "duplicate key"
            )
            raise ConflictError("Net worth snapshot already exists") from exc

        self._logger.info(
            f"Net worth snapshot {snapshot.id} stored for "
            f"{snapshot.snapshot_date}: net_worth={snapshot.net_worth}"
        )
        return snapshot


__all__ = ["CreateNetworthSnapshotUseCase"]
