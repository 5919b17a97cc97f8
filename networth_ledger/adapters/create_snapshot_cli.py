"""CLI adapter to take an on-demand net worth snapshot."""

from networth_ledger.application.use_cases.create_networth_snapshot import (
    CreateNetworthSnapshotUseCase,
)
from networth_ledger.infrastructure.container import (
    build_database_adapter,
    build_ledger_repository,
    build_settings,
)
from networth_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def main() -> None:
    """Store a snapshot for the configured owner and print it."""
    logger = get_app_logger()
    settings = build_settings()
    owner_id = settings.require_owner_id()
    get_usage_logger().info(
        f"create_snapshot_cli run for owner {owner_id}"
    )
    repository = build_ledger_repository(build_database_adapter(settings))
    use_case = CreateNetworthSnapshotUseCase(
        repository,
        logger=logger,
        today=settings.today,
    )

    snapshot = use_case.execute(owner_id)

    print(
        f"Snapshot {snapshot.id} for {snapshot.snapshot_date}: "
        f"assets={snapshot.total_assets}, "
        f"liabilities={snapshot.total_liabilities}, "
        f"net_worth={snapshot.net_worth}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
