"""Row → :class:`NormalizedTransaction` conversion for located statement tables.

Dates
-----
- Numeric cells are spreadsheet date serials: serial ``n`` is ``n - 2`` days
  after 1900-01-01. That is the spreadsheet epoch with its 1900 leap-year
  bug, so serial ``1`` is 1899-12-31 and ``45292`` is 2024-01-01.
- ``date``/``datetime`` cells (already typed by the workbook reader) are used
  as-is.
- Text must be ``DD/MM``. The year comes from :class:`ParseContext`.
  Anything else, an out-of-range day/month or an impossible calendar date
  skips the row.

Amounts
-------
- Separate debit and credit columns are parsed independently.
- Otherwise a combined ``mutasi`` column is classified by the cell after
  it (``CR``/``DB``) or by a ``" CR"``/``" DB"`` suffix on the amount itself.
  Positive amounts without an indicator count as debits.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, NamedTuple

from .columns import cell_text
from .logging_setup import get_logger
from .models import ColumnMap, NormalizedTransaction, RawStatementRow
from .numbers import parse_locale_number

logger = get_logger("bank_reconciliation.normalizers")

_SPREADSHEET_EPOCH = datetime(1900, 1, 1)
_DAY_MONTH = re.compile(r"^(\d{1,2})/(\d{1,2})$")

FOOTER_MARKERS: tuple[str, ...] = ("Saldo Awal", "Mutasi Debet", "Mutasi Kredit", "Saldo Akhir")

# Rows logged at DEBUG level after the header
_TRACE_ROWS = 3


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Per-parse state threaded through row normalization."""

    statement_year: int
    currency: str = "IDR"


class RowNormalization(NamedTuple):
    transactions: list[NormalizedTransaction]
    skipped: int
    footer_row_index: int | None


def _cell(row: RawStatementRow, idx: int) -> Any:
    if 0 <= idx < len(row):
        return row[idx]
    return None


def excel_serial_to_date(serial: float | int | Decimal) -> date:
    """Convert a spreadsheet date serial to a calendar date (time of day dropped)."""

    return (_SPREADSHEET_EPOCH + timedelta(days=float(serial) - 2)).date()


def parse_row_date(value: Any, year: int) -> str | None:
    """Return the ISO date for a date cell, or ``None`` when it is unusable."""

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        try:
            return excel_serial_to_date(value).isoformat()
        except (OverflowError, ValueError):
            return None

    m = _DAY_MONTH.match(str(value).strip())
    if not m:
        return None
    day, month = int(m.group(1)), int(m.group(2))
    if not (1 <= day <= 31 and 1 <= month <= 12):
        return None
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        # e.g. 31/02
        return None


def is_footer_marker(row: RawStatementRow) -> bool:
    """True when the first cell opens the statement footer (balances/totals)."""

    if not row:
        return False
    first = cell_text(row[0])
    return any(marker in first for marker in FOOTER_MARKERS)


def _amounts(row: RawStatementRow, columns: ColumnMap) -> tuple[Decimal, Decimal]:
    debit = credit = Decimal(0)
    if columns.has_split_amounts:
        debit = parse_locale_number(cell_text(_cell(row, columns.debit)).strip())
        credit = parse_locale_number(cell_text(_cell(row, columns.credit)).strip())
    elif columns.has_combined_amount:
        amount_str = cell_text(_cell(row, columns.amount)).strip()
        indicator = cell_text(_cell(row, columns.amount + 1)).strip().upper()
        is_cr = indicator == "CR" or " CR" in amount_str
        is_db = indicator == "DB" or " DB" in amount_str
        amount = parse_locale_number(amount_str)
        if is_cr:
            credit = amount
        elif is_db or amount > 0:
            debit = amount
    return debit, credit


def _description(row: RawStatementRow, columns: ColumnMap) -> str:
    if columns.description < 0:
        return ""
    kind = cell_text(_cell(row, columns.description)).strip()
    detail = cell_text(_cell(row, columns.description + 1)).strip()
    return f"{kind}; {detail}" if detail else kind


def normalize_row(
    row: RawStatementRow,
    columns: ColumnMap,
    ctx: ParseContext,
    *,
    row_index: int | None = None,
) -> NormalizedTransaction | None:
    """Normalize one data row; ``None`` means the row is skipped.

    Footer detection is the caller's job (see :func:`normalize_rows`), since a
    footer ends the whole transaction section rather than a single row.
    """

    if not row:
        return None
    date_val = _cell(row, columns.date)
    if not date_val:
        return None
    iso_date = parse_row_date(date_val, ctx.statement_year)
    if iso_date is None:
        return None

    debit, credit = _amounts(row, columns)
    balance = Decimal(0)
    if columns.balance >= 0:
        balance = parse_locale_number(cell_text(_cell(row, columns.balance)).strip())
    reference = cell_text(_cell(row, columns.branch)).strip() if columns.branch >= 0 else ""

    return NormalizedTransaction(
        date=iso_date,
        description=_description(row, columns),
        reference=reference,
        debit=debit,
        credit=credit,
        balance=balance,
        currency=ctx.currency,
        source_row=row_index,
    )


def normalize_rows(
    rows: Sequence[RawStatementRow],
    columns: ColumnMap,
    ctx: ParseContext,
    *,
    start: int,
) -> RowNormalization:
    """Normalize ``rows[start:]`` until the first footer marker."""

    transactions: list[NormalizedTransaction] = []
    skipped = 0
    footer_idx: int | None = None

    for i in range(start, len(rows)):
        row = rows[i]
        if not row:
            skipped += 1
            continue
        if is_footer_marker(row):
            footer_idx = i
            logger.info("Stopped at footer row %d: %s", i, cell_text(row[0]))
            break

        tx = normalize_row(row, columns, ctx, row_index=i)
        if tx is None:
            skipped += 1
            if i < start + _TRACE_ROWS:
                logger.debug("Row %d skipped: unusable date %r", i, _cell(row, columns.date))
            continue
        if i < start + _TRACE_ROWS:
            logger.debug("Row %d parsed: %s", i, tx)
        if tx.has_both_sides:
            logger.warning(
                "Row %d has both debit (%s) and credit (%s); kept as-is", i, tx.debit, tx.credit
            )
        transactions.append(tx)

    return RowNormalization(transactions, skipped, footer_idx)


__all__ = [
    "FOOTER_MARKERS",
    "ParseContext",
    "RowNormalization",
    "excel_serial_to_date",
    "parse_row_date",
    "is_footer_marker",
    "normalize_row",
    "normalize_rows",
]
