"""CLI adapter to create the ledger tables in the configured database."""

from networth_ledger.infrastructure.container import (
    build_database_adapter,
    build_ledger_repository,
)
from networth_ledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create every missing ledger table."""
    logger = get_app_logger()
    db_adapter = build_database_adapter()
    repository = build_ledger_repository(db_adapter)

    repository.create_schema()

    logger.info(f"Ledger schema ready at {db_adapter.get_ledger_engine().url}")
    print("Ledger tables created.")


if __name__ == "__main__":  # pragma: no cover
    main()
