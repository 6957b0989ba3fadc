"""Public API surface for the ``bank_reconciliation`` package.

Parsing entry points have no database dependency. The DB-backed import
workflow is loaded lazily inside :func:`import_statement` so library users
that only parse never import SQLAlchemy models.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from os import PathLike

from .duplicates import DuplicateDecision, OnDuplicates
from .ingest.utils import load_statement_rows
from .models import ImportSummary, ParseResult
from .parser import parse_statement

_MIN_YEAR = 2000
_MAX_YEAR = 2100


def validate_statement_year(value: int | str) -> int:
    """Return ``value`` as a statement year; ``ValueError`` outside 2000-2100."""

    try:
        year = int(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"Invalid year provided: {value!r}") from exc
    if not _MIN_YEAR <= year <= _MAX_YEAR:
        raise ValueError(f"Invalid year provided: {year} (expected {_MIN_YEAR}-{_MAX_YEAR})")
    return year


def parse_statement_file(
    path: str | PathLike[str],
    *,
    statement_year: int | None = None,
    currency: str = "IDR",
) -> ParseResult:
    """Load a CSV/Excel statement from disk and parse it (no persistence)."""

    loaded = load_statement_rows(path)
    return parse_statement(loaded.rows, statement_year=statement_year, currency=currency)


def import_statement(
    path: str | PathLike[str],
    *,
    bank_account_id: str,
    statement_year: int | None = None,
    on_duplicates: OnDuplicates | str = OnDuplicates.ASK,
    ask: DuplicateDecision | None = None,
    database_url: str | None = None,
    date_range: tuple[str | date | None, str | date | None] = (None, None),
    created_by: str | None = None,
    auto_match: bool = True,
    on_progress: Callable[[str], None] | None = None,
) -> ImportSummary:
    """Delegate to :func:`bank_reconciliation.workflows.import_flow.import_statement`."""

    from .workflows.import_flow import import_statement as _impl

    return _impl(
        path,
        bank_account_id=bank_account_id,
        statement_year=statement_year,
        on_duplicates=on_duplicates,
        ask=ask,
        database_url=database_url,
        date_range=date_range,
        created_by=created_by,
        auto_match=auto_match,
        on_progress=on_progress,
    )


__all__ = [
    "validate_statement_year",
    "parse_statement_file",
    "import_statement",
]
