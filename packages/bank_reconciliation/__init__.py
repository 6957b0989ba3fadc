"""Public interface for the ``bank_reconciliation`` package.

Bank statement import for reconciliation: CSV/Excel statements in Bahasa
Indonesia or English are parsed into normalized transactions plus statement
metadata, checked against stored lines for duplicates, persisted, and handed
to the database's auto-match procedure. This module only re-exports symbols.
"""

from .api import import_statement, parse_statement_file, validate_statement_year
from .duplicates import (
    DuplicatePartition,
    Fingerprint,
    OnDuplicates,
    find_duplicates,
    fingerprint,
    resolve_duplicates,
)
from .errors import (
    NoTransactionsFound,
    RemoteParseError,
    StatementImportError,
    UnsupportedStatementFormat,
)
from .models import (
    AutoMatchResult,
    ColumnMap,
    ImportSummary,
    NormalizedTransaction,
    ParseFailure,
    ParseResult,
    StatementMetadata,
)
from .numbers import parse_locale_number
from .parser import parse_statement
from .remote import RemoteParseOutcome, classify_remote_response

__all__ = [
    # API
    "parse_statement",
    "parse_statement_file",
    "import_statement",
    "validate_statement_year",
    "parse_locale_number",
    "find_duplicates",
    "resolve_duplicates",
    "fingerprint",
    "classify_remote_response",
    # Models / types
    "ColumnMap",
    "NormalizedTransaction",
    "StatementMetadata",
    "ParseResult",
    "ParseFailure",
    "AutoMatchResult",
    "ImportSummary",
    "Fingerprint",
    "DuplicatePartition",
    "OnDuplicates",
    "RemoteParseOutcome",
    # Errors
    "StatementImportError",
    "UnsupportedStatementFormat",
    "NoTransactionsFound",
    "RemoteParseError",
]
