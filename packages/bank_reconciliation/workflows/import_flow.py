# ruff: noqa: I001
"""Workflow orchestrator for the end-to-end statement import.

File → rows → parse → duplicate check → persist → auto-match, behind a
single importable function so the CLI and other hosts share one code path.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from os import PathLike

from db.client import session_scope
from ..duplicates import DuplicateDecision, OnDuplicates, find_duplicates, resolve_duplicates
from ..errors import NoTransactionsFound
from ..ingest.utils import load_statement_rows
from ..logging_setup import get_logger
from ..models import ImportSummary
from ..parser import parse_statement
from ..persistence import (
    build_upload_values,
    fetch_existing_fingerprints,
    get_account_currency,
    insert_statement_lines,
    insert_upload,
    run_auto_match,
)

logger = get_logger("bank_reconciliation.workflows.import_flow")


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
    """Import one CSV/Excel statement into ``bank_account_id``.

    Parameters
    ----------
    path:
        Statement file (``.csv``, ``.xls``, ``.xlsx`` or ``.xlsm``).
    statement_year:
        Year for ``DD/MM`` dates when the file has no period banner.
    on_duplicates / ask:
        Strategy for lines already stored for the account. ``ask`` is called
        with the duplicates when the strategy is ``"ask"``.
    database_url:
        Optional DB URL override. Falls back to ``DATABASE_URL`` when ``None``.
    date_range:
        Start/end dates recorded on the upload when the statement has none.
    auto_match:
        Run the server-side auto-match procedure after a successful insert.
    on_progress:
        Optional callable to receive short status lines (e.g., ``print``).

    Raises
    ------
    NoTransactionsFound
        Nothing parsed; nothing was written.
    LookupError
        Unknown bank account.
    """

    def progress(msg: str) -> None:
        logger.info(msg)
        if on_progress:
            on_progress(msg)

    loaded = load_statement_rows(path)

    # Short read transaction; the duplicate decision may block on the user.
    with session_scope(database_url=database_url) as session:
        currency = get_account_currency(session, bank_account_id)
        existing = fetch_existing_fingerprints(session, bank_account_id)

    result = parse_statement(loaded.rows, statement_year=statement_year, currency=currency)
    if not result.transactions:
        raise NoTransactionsFound(result.failure)

    summary = ImportSummary(parsed_count=len(result.transactions), metadata=result.metadata)
    partition = find_duplicates(result.transactions, existing)
    summary.duplicate_count = len(partition.duplicates)
    to_insert = resolve_duplicates(partition, on_duplicates, ask=ask)
    summary.duplicates_skipped = len(result.transactions) - len(to_insert)

    if not to_insert:
        progress("No new transactions to import (all were duplicates and skipped)")
        return summary

    with session_scope(database_url=database_url) as session:
        values = build_upload_values(
            result.metadata,
            result.transactions,
            bank_account_id=bank_account_id,
            currency=currency,
            date_range=date_range,
        )
        summary.upload_id = insert_upload(session, values)
        summary.inserted_count = insert_statement_lines(
            session,
            upload_id=summary.upload_id,
            bank_account_id=bank_account_id,
            transactions=to_insert,
            created_by=created_by,
        )

    progress(
        f"Import complete: {summary.parsed_count} processed, "
        f"{summary.inserted_count} added, {summary.duplicates_skipped} duplicate(s) skipped"
    )

    if auto_match and summary.inserted_count > 0:
        try:
            with session_scope(database_url=database_url) as session:
                summary.auto_match = run_auto_match(session)
        except Exception as e:
            # The lines are committed; a failed match run is reported, not raised.
            logger.error("Auto-match failed: %s", e)
            summary.auto_match_error = str(e)

    return summary


__all__ = ["import_statement"]
