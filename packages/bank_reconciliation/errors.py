"""Exception types raised by ``bank_reconciliation``.

Malformed statement *data* never raises: the parser skips rows and zeroes
unreadable amounts. These exceptions cover the structural cases the caller
has to act on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ParseFailure


class StatementImportError(Exception):
    """Base class for statement import failures."""


class UnsupportedStatementFormat(StatementImportError):
    """The file type cannot be read locally (e.g., PDF or image statements)."""


class NoTransactionsFound(StatementImportError):
    """Parsing produced no transactions; nothing was persisted."""

    def __init__(self, reason: ParseFailure | None, message: str | None = None) -> None:
        self.reason = reason
        if message is None:
            detail = f" ({reason.value})" if reason is not None else ""
            message = f"No transactions found in the statement{detail}"
        super().__init__(message)


class RemoteParseError(StatementImportError):
    """The remote statement parsing service reported a non-recoverable error."""


__all__ = [
    "StatementImportError",
    "UnsupportedStatementFormat",
    "NoTransactionsFound",
    "RemoteParseError",
]
