"""CLI adapter to print the current net worth of the configured owner."""

from networth_ledger.application.use_cases.get_net_worth_summary import (
    GetNetWorthSummaryUseCase,
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
    """Run the net worth use case and print the summary."""
    logger = get_app_logger()
    settings = build_settings()
    owner_id = settings.require_owner_id()
    get_usage_logger().info(f"networth_cli run for owner {owner_id}")
    repository = build_ledger_repository(build_database_adapter(settings))
    use_case = GetNetWorthSummaryUseCase(repository, logger=logger)

    summary = use_case.execute(owner_id)

    print(f"Total assets:      {summary.total_assets}")
    print(f"Total liabilities: {summary.total_liabilities}")
    print(f"Net worth:         {summary.net_worth}")
    for bucket in summary.assets_by_type:
        print(f"  + {bucket.label}: {bucket.value}")
    for bucket in summary.liabilities_by_type:
        print(f"  - {bucket.label}: {bucket.value}")


if __name__ == "__main__":  # pragma: no cover
    main()
