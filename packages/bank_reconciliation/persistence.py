# ruff: noqa: I001
"""Persistence integration for bank statement imports.

Functions here read and write the shared database owned by ``libs/db``. They
rely on SQLAlchemy ORM models defined in ``db.models.reconciliation`` and a
session provided by ``db.client``. None of them commit; the caller owns the
transaction (see :func:`db.client.session_scope`). Database errors propagate
unchanged.

Scope:
- Snapshot read of stored line fingerprints for one account (duplicates).
- Insert the upload record and its statement lines.
- Invoke the server-side ``auto_match_smart()`` procedure.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import insert, select, text
from sqlalchemy.orm import Session

from db.models.reconciliation import BankAccount, BankStatementLine, BankStatementUpload
from .duplicates import Fingerprint, fingerprint_from_values
from .logging_setup import get_logger
from .models import AutoMatchResult, NormalizedTransaction, StatementMetadata

logger = get_logger("bank_reconciliation.persistence")

_ZERO = Decimal(0)


def _to_date(raw: str | date | None) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, date):
        return raw
    return date.fromisoformat(raw)


def get_account_currency(session: Session, bank_account_id: str) -> str:
    """Return the account's currency code; ``LookupError`` for unknown accounts."""

    currency = session.execute(
        select(BankAccount.currency).where(BankAccount.id == bank_account_id)
    ).scalar_one_or_none()
    if currency is None:
        raise LookupError(f"Unknown bank account: {bank_account_id!r}")
    return currency.strip() or "IDR"


def fetch_existing_fingerprints(session: Session, bank_account_id: str) -> set[Fingerprint]:
    """Return fingerprints of every stored line for ``bank_account_id``.

    This is a plain snapshot read: a concurrent import committing after it
    is not seen.
    """

    stmt = select(
        BankStatementLine.transaction_date,
        BankStatementLine.description,
        BankStatementLine.debit_amount,
        BankStatementLine.credit_amount,
        BankStatementLine.running_balance,
    ).where(BankStatementLine.bank_account_id == bank_account_id)
    return {fingerprint_from_values(*row) for row in session.execute(stmt).all()}


def build_upload_values(
    metadata: StatementMetadata,
    transactions: Sequence[NormalizedTransaction],
    *,
    bank_account_id: str,
    currency: str,
    date_range: tuple[str | date | None, str | date | None] = (None, None),
    today: date | None = None,
) -> dict[str, Any]:
    """Column values for a ``bank_statement_uploads`` row.

    Statement figures win when present; zero or empty ones fall back:
    period → "<Month> <year>" of ``today``; start/end → ``date_range``;
    closing balance → last line's balance; totals → sums over the lines.
    """

    today = today or date.today()
    closing = metadata.closing_balance
    if closing == _ZERO and transactions:
        closing = transactions[-1].balance
    total_debits = metadata.total_debits or sum((t.debit for t in transactions), _ZERO)
    total_credits = metadata.total_credits or sum((t.credit for t in transactions), _ZERO)

    return {
        "bank_account_id": bank_account_id,
        "statement_period": metadata.period or today.strftime("%B %Y"),
        "statement_start_date": _to_date(metadata.start_date or date_range[0]),
        "statement_end_date": _to_date(metadata.end_date or date_range[1]),
        "currency": currency,
        "opening_balance": metadata.opening_balance,
        "closing_balance": closing,
        "total_debits": total_debits,
        "total_credits": total_credits,
        "transaction_count": len(transactions),
        "status": "completed",
    }


def insert_upload(session: Session, values: dict[str, Any]) -> str:
    """Insert one upload record and return its id."""

    upload = BankStatementUpload(**values)
    session.add(upload)
    session.flush()
    return upload.id


def insert_statement_lines(
    session: Session,
    *,
    upload_id: str | None,
    bank_account_id: str,
    transactions: Sequence[NormalizedTransaction],
    created_by: str | None = None,
) -> int:
    """Bulk-insert ``transactions`` as unmatched statement lines; return the count."""

    if not transactions:
        return 0
    # Ids come from the ORM-level default, which Core inserts still apply.
    payloads = [
        {
            "upload_id": upload_id,
            "bank_account_id": bank_account_id,
            "transaction_date": date.fromisoformat(tx.date),
            "description": tx.description,
            "reference": tx.reference,
            "debit_amount": tx.debit,
            "credit_amount": tx.credit,
            "running_balance": tx.balance,
            "statement_balance": tx.balance,
            "currency": tx.currency,
            "reconciliation_status": "unmatched",
            "created_by": created_by,
        }
        for tx in transactions
    ]
    session.execute(insert(BankStatementLine), payloads)
    logger.info("Inserted %d statement line(s) for account %s", len(payloads), bank_account_id)
    return len(payloads)


def run_auto_match(session: Session) -> AutoMatchResult:
    """Invoke ``auto_match_smart()`` and return its counts.

    The procedure lives in the database (Postgres); it reconciles unmatched
    lines against expenses, receipts and fund transfers within ±7 days.
    """

    row = session.execute(text("SELECT * FROM auto_match_smart()")).mappings().first()
    result = AutoMatchResult.model_validate(dict(row) if row is not None else {})
    logger.info(
        "Auto-match: matched=%d suggested=%d skipped=%d",
        result.matched_count,
        result.suggested_count,
        result.skipped_count,
    )
    return result


__all__ = [
    "get_account_currency",
    "fetch_existing_fingerprints",
    "build_upload_values",
    "insert_upload",
    "insert_statement_lines",
    "run_auto_match",
]
