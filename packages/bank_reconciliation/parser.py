"""Statement parsing pipeline: raw rows → transactions + metadata.

Control flow
------------
1. Period banner (first 10 rows). When found, its start year becomes the
   statement year for ``DD/MM`` dates, taking precedence over the caller's
   year.
2. Header row (first 20 rows). Not found → ``HEADER_NOT_FOUND``.
3. Column roles. No date column → ``DATE_COLUMN_MISSING``.
4. Data rows after the header until the first footer marker.
5. Footer figures (opening/closing balance, totals) from all rows.

Malformed data never raises; structurally unusable files come back with an
empty transaction list and :attr:`ParseResult.failure` set.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import date

from .columns import locate_header, map_columns
from .logging_setup import get_logger
from .metadata import extract_footer_totals, extract_period
from .models import ParseFailure, ParseResult, RawStatementRow, StatementMetadata
from .normalizers import ParseContext, normalize_rows

logger = get_logger("bank_reconciliation.parser")


def parse_statement(
    rows: Sequence[RawStatementRow],
    *,
    statement_year: int | None = None,
    currency: str = "IDR",
) -> ParseResult:
    """Parse raw statement rows (from CSV or a worksheet) into a :class:`ParseResult`.

    Parameters
    ----------
    rows:
        Raw rows as produced by :mod:`bank_reconciliation.ingest`.
    statement_year:
        Year applied to ``DD/MM`` dates when the file has no period banner.
        Defaults to the current calendar year.
    currency:
        Account currency stamped on every transaction.
    """

    metadata = StatementMetadata()
    year = statement_year if statement_year is not None else date.today().year

    banner = extract_period(rows)
    if banner is not None:
        year = banner.start_date.year
        metadata = replace(
            metadata,
            period=banner.label,
            start_date=banner.start_date.isoformat(),
            end_date=banner.end_date.isoformat(),
        )
        logger.info("Statement period %s (%s to %s)", banner.label, banner.start_date, banner.end_date)

    header_idx = locate_header(rows)
    if header_idx is None:
        return ParseResult(transactions=[], metadata=metadata, failure=ParseFailure.HEADER_NOT_FOUND)

    columns = map_columns(rows[header_idx])
    if columns.date < 0:
        logger.warning("Missing date column in header row: %s", list(rows[header_idx]))
        return ParseResult(
            transactions=[],
            metadata=metadata,
            failure=ParseFailure.DATE_COLUMN_MISSING,
            header_row_index=header_idx,
            columns=columns,
        )

    ctx = ParseContext(statement_year=year, currency=currency)
    outcome = normalize_rows(rows, columns, ctx, start=header_idx + 1)
    logger.info(
        "Parsing complete: %d transactions, %d rows skipped",
        len(outcome.transactions),
        outcome.skipped,
    )

    metadata = replace(metadata, **extract_footer_totals(rows))
    return ParseResult(
        transactions=outcome.transactions,
        metadata=metadata,
        header_row_index=header_idx,
        columns=columns,
        skipped_rows=outcome.skipped,
        footer_row_index=outcome.footer_row_index,
    )


__all__ = ["parse_statement"]
