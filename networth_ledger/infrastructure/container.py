"""Composition root for wiring infrastructure adapters."""

from networth_ledger.application.ports.database import DatabaseEnginePort
from networth_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from networth_ledger.application.use_cases.create_networth_snapshot import (
    CreateNetworthSnapshotUseCase,
)
from networth_ledger.application.use_cases.get_bill_statuses import (
    GetBillStatusesUseCase,
)
from networth_ledger.application.use_cases.get_networth_history import (
    GetNetworthHistoryUseCase,
)
from networth_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from networth_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from networth_ledger.infrastructure.logging.logger import get_app_logger
from networth_ledger.infrastructure.settings import LedgerSettings


def build_settings() -> LedgerSettings:
    """Return settings sourced from the environment."""
    return LedgerSettings.from_env()


def build_database_adapter(
    settings: LedgerSettings | None = None,
) -> DatabaseEnginePort:
    """Return a database adapter for the configured ledger store."""
    resolved = settings or build_settings()
    return SqlAlchemyDatabaseEngineAdapter(resolved.db_url)


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db)


def _settings_repository(settings: LedgerSettings) -> LedgerRepositoryPort:
    return build_ledger_repository(build_database_adapter(settings))


def build_create_snapshot_use_case(
    settings: LedgerSettings | None = None,
    repository: LedgerRepositoryPort | None = None,
) -> CreateNetworthSnapshotUseCase:
    """Return the snapshot use case dated by the configured timezone."""
    resolved = settings or build_settings()
    return CreateNetworthSnapshotUseCase(
        repository or _settings_repository(resolved),
        logger=get_app_logger(),
        today=resolved.today,
    )


def build_networth_history_use_case(
    settings: LedgerSettings | None = None,
    repository: LedgerRepositoryPort | None = None,
) -> GetNetworthHistoryUseCase:
    """Return the history use case with the configured default limit."""
    resolved = settings or build_settings()
    return GetNetworthHistoryUseCase(
        repository or _settings_repository(resolved),
        logger=get_app_logger(),
        default_limit=resolved.history_limit,
    )


def build_bill_statuses_use_case(
    settings: LedgerSettings | None = None,
    repository: LedgerRepositoryPort | None = None,
) -> GetBillStatusesUseCase:
    """Return the bill status use case dated by the configured timezone."""
    resolved = settings or build_settings()
    return GetBillStatusesUseCase(
        repository or _settings_repository(resolved),
        logger=get_app_logger(),
        today=resolved.today,
    )


__all__ = [
    "build_settings",
    "build_database_adapter",
    "build_ledger_repository",
    "build_create_snapshot_use_case",
    "build_networth_history_use_case",
    "build_bill_statuses_use_case",
]
