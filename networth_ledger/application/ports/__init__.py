"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import LedgerRepositoryPort, LedgerSessionPort

__all__ = [
    "DatabaseEnginePort",
    "LedgerRepositoryPort",
    "LedgerSessionPort",
]
