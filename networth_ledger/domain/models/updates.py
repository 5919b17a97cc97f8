"""Partial-update value types for obligations.

Fields left at ``UNSET`` are not applied; any other value, ``None`` included,
replaces the stored field. Changes apply in field declaration order.
"""

from dataclasses import dataclass, fields, replace
from decimal import Decimal
from typing import Any

from networth_ledger.domain.constants import BUDGET_ITEM_TYPES
from networth_ledger.domain.errors import ValidationFailureError
from networth_ledger.domain.models.ledger import BudgetItem, RecurringBill


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


class _PartialUpdate:
    def changes(self) -> dict[str, Any]:
        """Return the explicitly set fields in declaration order."""
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not UNSET
        }


@dataclass(frozen=True)
class RecurringBillUpdate(_PartialUpdate):
    """Changes to apply to a recurring bill."""

    name: str = UNSET
    amount: Decimal = UNSET
    category_id: str | None = UNSET
    sub_category_id: str | None = UNSET
    account_id: str | None = UNSET
    due_day: int = UNSET
    is_active: bool = UNSET

    def __post_init__(self) -> None:
        if self.due_day is not UNSET and not 1 <= self.due_day <= 31:
            raise ValidationFailureError(
                f"Due day must be between 1 and 31, got {self.due_day}"
            )
        if self.amount is not UNSET and self.amount <= 0:
            raise ValidationFailureError("Bill amount must be positive")

    def apply_to(self, bill: RecurringBill) -> RecurringBill:
        return replace(bill, **self.changes())


@dataclass(frozen=True)
class BudgetItemUpdate(_PartialUpdate):
    """Changes to apply to a budget item.

    Payment fields are not part of an update; items become paid only
    through a payment.
    """

    name: str = UNSET
    amount: Decimal = UNSET
    category_id: str | None = UNSET
    item_type: str = UNSET

    def __post_init__(self) -> None:
        if self.item_type is not UNSET and self.item_type not in BUDGET_ITEM_TYPES:
            raise ValidationFailureError(
                f"Unknown budget item type: {self.item_type}"
            )
        if self.amount is not UNSET and self.amount <= 0:
            raise ValidationFailureError("Budget item amount must be positive")

    def apply_to(self, item: BudgetItem) -> BudgetItem:
        return replace(item, **self.changes())


__all__ = ["UNSET", "RecurringBillUpdate", "BudgetItemUpdate"]
