"""Shared SQLAlchemy models registry for the workspace database.

Currently includes the bank reconciliation models used by
``bank_reconciliation``.
"""

from .reconciliation import Base, BankAccount, BankStatementLine, BankStatementUpload

__all__ = [
    "Base",
    "BankAccount",
    "BankStatementUpload",
    "BankStatementLine",
]
