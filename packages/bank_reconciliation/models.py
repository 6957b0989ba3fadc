"""Data models and type aliases for ``bank_reconciliation``.

Raw statement rows carry no schema: a row is an ordered sequence of cells as
read from the source file, and the meaning of each position is assigned later
by :class:`ColumnMap`. Everything downstream of the row normalizer works with
:class:`NormalizedTransaction` and :class:`StatementMetadata`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Raw input
# ---------------------------------------------------------------------------

type RawStatementRow = Sequence[Any]
"""One row of cells (strings, numbers, dates or ``None``) from a statement file."""

type RawStatementRows = Sequence[RawStatementRow]

_ZERO = Decimal(0)


class ParseFailure(StrEnum):
    """Structurally unrecoverable parse outcomes (the whole file is rejected)."""

    HEADER_NOT_FOUND = "header_not_found"
    DATE_COLUMN_MISSING = "date_column_missing"


# ---------------------------------------------------------------------------
# Column layout
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ColumnMap:
    """Column index per semantic role; ``-1`` marks a role absent from the header."""

    date: int = -1
    description: int = -1
    branch: int = -1
    amount: int = -1
    debit: int = -1
    credit: int = -1
    balance: int = -1

    @property
    def has_split_amounts(self) -> bool:
        """Separate debit and credit columns are both present."""
        return self.debit >= 0 and self.credit >= 0

    @property
    def has_combined_amount(self) -> bool:
        """A single signed-by-indicator amount column ("mutasi") is present."""
        return self.amount >= 0


# ---------------------------------------------------------------------------
# Normalized output
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NormalizedTransaction:
    """A single statement line after normalization.

    ``debit`` and ``credit`` are non-negative. At most one of them is expected
    to be non-zero, but this is not enforced: see :attr:`has_both_sides`.
    ``source_row`` is the 0-based row index in the source file and takes no
    part in equality checks for duplicate detection.
    """

    date: str
    description: str
    reference: str
    debit: Decimal
    credit: Decimal
    balance: Decimal
    currency: str
    source_row: int | None = None

    @property
    def has_both_sides(self) -> bool:
        return self.debit != _ZERO and self.credit != _ZERO


class PeriodBanner(NamedTuple):
    """The statement period parsed from a ``Periode DD/MM/YYYY - DD/MM/YYYY`` row."""

    label: str
    start_date: date
    end_date: date


@dataclass(frozen=True, slots=True)
class StatementMetadata:
    """Statement-level figures from banner and footer rows.

    Every field defaults to empty/zero when the statement does not print it.
    """

    period: str = ""
    start_date: str | None = None
    end_date: str | None = None
    opening_balance: Decimal = _ZERO
    closing_balance: Decimal = _ZERO
    total_debits: Decimal = _ZERO
    total_credits: Decimal = _ZERO


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of one :func:`~bank_reconciliation.parser.parse_statement` call."""

    transactions: list[NormalizedTransaction]
    metadata: StatementMetadata
    failure: ParseFailure | None = None
    header_row_index: int | None = None
    columns: ColumnMap | None = None
    skipped_rows: int = 0
    footer_row_index: int | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


# ---------------------------------------------------------------------------
# Import workflow results
# ---------------------------------------------------------------------------


class AutoMatchResult(BaseModel):
    """Typed view of the row returned by the ``auto_match_smart`` procedure.

    The procedure links statement lines to ledger entries within a fixed
    7-day date tolerance: ``matched`` lines were linked outright,
    ``suggested`` lines need review, ``skipped`` lines were already matched.
    """

    model_config = ConfigDict(extra="ignore")

    matched_count: int = 0
    suggested_count: int = 0
    skipped_count: int = 0

    @field_validator("matched_count", "suggested_count", "skipped_count", mode="before")
    @classmethod
    def _null_as_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


@dataclass(slots=True)
class ImportSummary:
    """Counts reported back to the caller after an import attempt."""

    parsed_count: int
    inserted_count: int = 0
    duplicate_count: int = 0
    duplicates_skipped: int = 0
    upload_id: str | None = None
    metadata: StatementMetadata = field(default_factory=StatementMetadata)
    auto_match: AutoMatchResult | None = None
    auto_match_error: str | None = None


__all__ = [
    "RawStatementRow",
    "RawStatementRows",
    "ParseFailure",
    "ColumnMap",
    "NormalizedTransaction",
    "PeriodBanner",
    "StatementMetadata",
    "ParseResult",
    "AutoMatchResult",
    "ImportSummary",
]
