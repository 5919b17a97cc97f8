"""Use case to read the net worth trend from stored snapshots."""

from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from networth_ledger.domain.constants import (
    DEFAULT_HISTORY_LIMIT,
    MAX_HISTORY_LIMIT,
)
from networth_ledger.domain.errors import ValidationFailureError
from networth_ledger.domain.models import NetWorthHistoryPoint
from networth_ledger.infrastructure.logging.logger import get_app_logger


class GetNetworthHistoryUseCase:
    """Return the latest snapshots as a chronological series."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        logger=None,
        default_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port opening sessions against the ledger store.
            logger: Optional logger compatible with logging.Logger-like API.
            default_limit: Number of points returned when none is requested.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._default_limit = default_limit

    def execute(
        self,
        owner_id: str,
        limit: int | None = None,
    ) -> list[NetWorthHistoryPoint]:
        """Return up to ``limit`` points, oldest first.

        Args:
            owner_id: Owner whose snapshots are read.
            limit: Number of latest snapshots to include.

        Returns:
            list[NetWorthHistoryPoint]: Points ordered by snapshot date.

        Raises:
            ValidationFailureError: If ``limit`` is outside 1..100.
        """
        resolved = self._default_limit if limit is None else limit
        if (
            isinstance(resolved, bool)
            or not isinstance(resolved, int)
            or not 1 <= resolved <= MAX_HISTORY_LIMIT
        ):
            raise ValidationFailureError(
                f"History limit must be between 1 and {MAX_HISTORY_LIMIT}"
            )

        with self._repository.read_session() as session:
            snapshots = session.list_snapshots(owner_id, resolved)

        points = [
            NetWorthHistoryPoint(
                snapshot_date=snapshot.snapshot_date,
                total_assets=snapshot.total_assets,
                total_liabilities=snapshot.total_liabilities,
                net_worth=snapshot.net_worth,
            )
            for snapshot in reversed(snapshots)
        ]
        self._logger.debug(f"Loaded {len(points)} net worth history points")
        return points


__all__ = ["GetNetworthHistoryUseCase"]
