"""Shared validation for date-windowed reads."""

from datetime import date

from networth_ledger.domain.errors import ValidationFailureError


def validate_date_range(start_date: date, end_date: date) -> None:
    """Raise when the window is inverted.

    Raises:
        ValidationFailureError: If ``start_date`` is after ``end_date``.
    """
    if start_date > end_date:
        raise ValidationFailureError(
            f"Start date {start_date} is after end date {end_date}"
        )


__all__ = ["validate_date_range"]
