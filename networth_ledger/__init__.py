"""Ledger reconciliation and net-worth aggregation core."""

__version__ = "0.1.0"
