"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from datetime import date, datetime
import os
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dotenv

from networth_ledger.domain.constants import (
    DEFAULT_HISTORY_LIMIT,
    MAX_HISTORY_LIMIT,
)
from networth_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger core.

    Attributes:
        db_url: Database URL of the ledger store, when configured.
        timezone: IANA timezone used to decide "today"; system local time
            when unset.
        history_limit: Default number of snapshots in net worth history.
        owner_id: Owner the command-line adapters act for.
    """

    db_url: Optional[str] = None
    timezone: Optional[str] = None
    history_limit: int = DEFAULT_HISTORY_LIMIT
    owner_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        timezone = os.getenv("LEDGER_TIMEZONE") or None
        if timezone is not None:
            timezone = cls._validate_timezone(timezone.strip(), logger=logger)
        return cls(
            db_url=os.getenv("LEDGER_DB_URL") or None,
            timezone=timezone,
            history_limit=cls._parse_history_limit(
                os.getenv("LEDGER_HISTORY_LIMIT"),
                logger=logger,
            ),
            owner_id=os.getenv("LEDGER_OWNER_ID") or None,
        )

    def today(self) -> date:
        """Return the current calendar date in the configured timezone."""
        if self.timezone is None:
            return datetime.now().astimezone().date()
        return datetime.now(ZoneInfo(self.timezone)).date()

    def require_owner_id(self) -> str:
        """Return the configured owner or raise a descriptive error.

        Raises:
            RuntimeError: If ``LEDGER_OWNER_ID`` is not set.
        """
        if not self.owner_id:
            raise RuntimeError("Missing environment variable: LEDGER_OWNER_ID")
        return self.owner_id

    @staticmethod
    def _validate_timezone(raw_timezone: str, logger) -> Optional[str]:
        """Return the timezone name when it is known.

        Args:
            raw_timezone: Raw IANA timezone name.
            logger: Logger used for warnings.

        Returns:
            Optional[str]: The timezone, or None to use system local time.
        """
        try:
            ZoneInfo(raw_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(
                f"Unknown LEDGER_TIMEZONE {raw_timezone}; using local time"
            )
            return None
        return raw_timezone

    @staticmethod
    def _parse_history_limit(raw_limit: Optional[str], logger) -> int:
        """Parse the default history limit.

        Args:
            raw_limit: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            int: Limit within 1..MAX_HISTORY_LIMIT.
        """
        if not raw_limit:
            return DEFAULT_HISTORY_LIMIT
        try:
            limit = int(raw_limit)
        except ValueError:
            logger.warning(
                f"Invalid LEDGER_HISTORY_LIMIT {raw_limit}; "
                f"using {DEFAULT_HISTORY_LIMIT}"
            )
            return DEFAULT_HISTORY_LIMIT
        return min(max(limit, 1), MAX_HISTORY_LIMIT)


__all__ = ["LedgerSettings"]
