# ruff: noqa: I001
"""CLI for the ``bank_reconciliation`` package.

This module exposes callable command handlers (``cmd_parse``,
``cmd_import``, ``cmd_auto_match``) and a Typer-based console interface.
Environment variables (notably ``DATABASE_URL``) are loaded from a local
``.env`` using ``python-dotenv`` before any command runs. Business logic
lives in ``bank_reconciliation.api`` and the workflow modules.
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from typer.models import ArgumentInfo

from .api import import_statement, parse_statement_file, validate_statement_year
from .duplicates import OnDuplicates
from .errors import NoTransactionsFound, StatementImportError
from .logging_setup import configure_logging
from .models import ParseFailure, ParseResult, StatementMetadata

console = Console()

_FAILURE_HINTS = {
    ParseFailure.HEADER_NOT_FOUND: (
        "Could not find a header row (expected a Tanggal/Date column in the first 20 rows)"
    ),
    ParseFailure.DATE_COLUMN_MISSING: "Header row found but it has no date column",
}


def _needs_year_prompt(path: Path, year: int | None) -> bool:
    # Excel files carry real dates; only text CSV rows are DD/MM.
    return year is None and path.suffix.lower() == ".csv"


def _prompt_statement_year() -> int:
    raw = typer.prompt("Statement year", default=str(date.today().year - 1))
    return validate_statement_year(raw)


def _render_metadata(meta: StatementMetadata) -> None:
    if meta.period:
        console.print(f"[cyan]Period:[/cyan] {meta.period}")
    figures = {
        "Opening balance": meta.opening_balance,
        "Total debits": meta.total_debits,
        "Total credits": meta.total_credits,
        "Closing balance": meta.closing_balance,
    }
    for label, value in figures.items():
        if value:
            console.print(f"[cyan]{label}:[/cyan] {value:,}")


def _render_transactions(result: ParseResult) -> None:
    table = Table(title="Statement lines")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Debit", justify="right")
    table.add_column("Credit", justify="right")
    table.add_column("Balance", justify="right")
    for tx in result.transactions:
        table.add_row(
            tx.date,
            tx.description,
            f"{tx.debit:,}" if tx.debit else "",
            f"{tx.credit:,}" if tx.credit else "",
            f"{tx.balance:,}",
        )
    console.print(table)


def cmd_parse(file_path: str, *, year: int | None = None, currency: str = "IDR") -> int:
    """Parse a statement and print its lines and metadata (no database access).

    Returns ``0`` on success and ``1`` when the file cannot be read or yields
    no transactions.
    """

    try:
        result = parse_statement_file(file_path, statement_year=year, currency=currency)
    except FileNotFoundError:
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1
    except StatementImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: Unexpected failure reading '{file_path}': {e}", file=sys.stderr)
        return 1

    if not result.transactions:
        hint = _FAILURE_HINTS.get(result.failure) if result.failure else None
        print(f"Error: {hint or 'No transactions found in the statement'}", file=sys.stderr)
        return 1

    _render_transactions(result)
    _render_metadata(result.metadata)
    typer.echo(
        f"Parsed {len(result.transactions)} transaction(s); skipped {result.skipped_rows} row(s)"
    )
    return 0


def cmd_import(
    file_path: str,
    *,
    bank_account_id: str,
    year: int | None = None,
    on_duplicates: OnDuplicates = OnDuplicates.ASK,
    database_url: str | None = None,
    auto_match: bool = True,
) -> int:
    """Import a statement into the database for ``bank_account_id``.

    Duplicates are skipped, included, or confirmed interactively depending on
    ``on_duplicates``. An auto-match failure is reported but does not change
    the exit code, since the lines are already stored.
    """

    ask = None
    if on_duplicates is OnDuplicates.ASK:
        from .term_ui import confirm_include_duplicates

        ask = confirm_include_duplicates

    try:
        summary = import_statement(
            file_path,
            bank_account_id=bank_account_id,
            statement_year=year,
            on_duplicates=on_duplicates,
            ask=ask,
            database_url=database_url,
            auto_match=auto_match,
            on_progress=typer.echo,
        )
    except FileNotFoundError:
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1
    except NoTransactionsFound as e:
        hint = _FAILURE_HINTS.get(e.reason) if e.reason else None
        print(f"Error: {hint or e}", file=sys.stderr)
        return 1
    except (StatementImportError, LookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: import failed: {e}", file=sys.stderr)
        return 1

    if summary.upload_id:
        typer.echo(f"Upload id: {summary.upload_id}")
    if summary.auto_match is not None:
        am = summary.auto_match
        typer.echo(
            f"Auto-match: {am.matched_count} matched, {am.suggested_count} suggested, "
            f"{am.skipped_count} skipped"
        )
    elif summary.auto_match_error:
        print(f"Warning: auto-match failed: {summary.auto_match_error}", file=sys.stderr)
    return 0


def cmd_auto_match(*, database_url: str | None = None) -> int:
    """Run the database auto-match procedure once and print its counts."""

    try:
        from db.client import session_scope
        from .persistence import run_auto_match

        with session_scope(database_url=database_url) as session:
            result = run_auto_match(session)
    except Exception as e:
        print(f"Error: auto-match failed: {e}", file=sys.stderr)
        return 1

    typer.echo(
        f"Auto-match: {result.matched_count} matched, {result.suggested_count} suggested, "
        f"{result.skipped_count} skipped"
    )
    return 0


app = typer.Typer(help="Bank statement import and reconciliation tools.")

# Module-level argument object to satisfy ruff B008 (no calls in parameter
# defaults).
FILE_ARGUMENT: ArgumentInfo = typer.Argument(
    ...,
    help="Path to a bank statement (.csv, .xls, .xlsx or .xlsm)",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)


@app.command("parse")
def parse_cmd(
    file_path: Annotated[Path, FILE_ARGUMENT],
    *,
    year: int | None = typer.Option(
        None, help="Year for DD/MM dates (prompted for CSV files when omitted)."
    ),
    currency: str = typer.Option("IDR", help="Currency code stamped on every line."),
) -> None:
    """Parse a statement and print the normalized lines."""

    try:
        if year is not None:
            year = validate_statement_year(year)
        elif _needs_year_prompt(file_path, year):
            year = _prompt_statement_year()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from e

    raise typer.Exit(cmd_parse(str(file_path), year=year, currency=currency))


@app.command("import")
def import_cmd(
    file_path: Annotated[Path, FILE_ARGUMENT],
    *,
    bank_account_id: str = typer.Option(..., help="Target bank account id."),
    year: int | None = typer.Option(
        None, help="Year for DD/MM dates (prompted for CSV files when omitted)."
    ),
    on_duplicates: OnDuplicates = typer.Option(
        OnDuplicates.ASK, help="What to do with lines that are already stored."
    ),
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
    auto_match: bool = typer.Option(
        True, help="Run auto-match against expenses/receipts/transfers after import."
    ),
) -> None:
    """Import a statement into the database."""

    try:
        if year is not None:
            year = validate_statement_year(year)
        elif _needs_year_prompt(file_path, year):
            year = _prompt_statement_year()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from e

    raise typer.Exit(
        cmd_import(
            str(file_path),
            bank_account_id=bank_account_id,
            year=year,
            on_duplicates=on_duplicates,
            database_url=database_url,
            auto_match=auto_match,
        )
    )


@app.command("auto-match")
def auto_match_cmd(
    *,
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
) -> None:
    """Run the auto-match procedure over all unmatched statement lines."""

    raise typer.Exit(cmd_auto_match(database_url=database_url))


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
