"""Error taxonomy surfaced by the ledger core.

Every error keeps its ``kind`` so a boundary layer can map it to a response
without inspecting messages. Absent and foreign-owned entities raise the same
error so callers cannot discover other owners' data.
"""


class LedgerError(Exception):
    """Base exception for ledger core operations."""

    kind = "ledger_error"


class NotFoundError(LedgerError):
    """Referenced entity is absent or not owned by the caller."""

    kind = "not_found"


class InvalidReferenceError(LedgerError):
    """A referenced entity lies outside the caller's ownership."""

    kind = "invalid_reference"


class InvalidOperationError(LedgerError):
    """Action is not valid for the entity's kind or state."""

    kind = "invalid_operation"


class ConflictError(LedgerError):
    """Duplicate payment or store-level unique constraint violation."""

    kind = "conflict"


class ValidationFailureError(LedgerError):
    """Malformed input."""

    kind = "validation_failure"


__all__ = [
    "LedgerError",
    "NotFoundError",
    "InvalidReferenceError",
    "InvalidOperationError",
    "ConflictError",
    "ValidationFailureError",
]
