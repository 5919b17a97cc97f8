"""Database infrastructure for the ledger core.

This module exposes concrete helpers to create SQLAlchemy engines connected to
the ledger database. It belongs to the infrastructure layer because it deals
with external systems (PostgreSQL or sqlite).
"""

import os

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool

from networth_ledger.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for the ledger database.

    Server databases get a small connection pool; sqlite files keep the
    dialect's default pool and may be shared across threads.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with health checks enabled.
    """
    if make_url(db_url).get_backend_name() == "sqlite":
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
            future=True,
        )
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application use cases can depend only on the protocol.
    Each instance creates its engine lazily on first use.
    """

    def __init__(self, db_url: str | None = None) -> None:
        """Initialize the adapter.

        Args:
            db_url: Optional database URL; ``LEDGER_DB_URL`` when omitted.
        """
        self._db_url = db_url
        self._engine: Engine | None = None

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger store.
        """
        if self._engine is None:
            db_url = self._db_url or _get_env_var("LEDGER_DB_URL")
            self._engine = _create_engine(db_url)
        return self._engine


__all__ = ["SqlAlchemyDatabaseEngineAdapter"]
