from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    CHAR,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def _uuid_str() -> str:
    return str(uuid.uuid4())


# ---------------------------
# Reference: bank_accounts
# ---------------------------


class BankAccount(Base):
    __tablename__ = "bank_accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid_str)
    account_name: Mapped[str] = mapped_column(String, nullable=False)
    bank_name: Mapped[str] = mapped_column(String, nullable=False)
    account_number: Mapped[str | None] = mapped_column(String, nullable=True)
    # Statement lines inherit the account currency at import time.
    currency: Mapped[str] = mapped_column(CHAR(3), nullable=False, server_default=text("'IDR'"))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


# ---------------------------
# Core: bank_statement_uploads
# ---------------------------


class BankStatementUpload(Base):
    __tablename__ = "bank_statement_uploads"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid_str)
    bank_account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("bank_accounts.id"), nullable=False
    )
    statement_period: Mapped[str] = mapped_column(String, nullable=False)
    statement_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    statement_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    currency: Mapped[str] = mapped_column(CHAR(3), nullable=False, server_default=text("'IDR'"))
    opening_balance: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    closing_balance: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    total_debits: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    total_credits: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    transaction_count: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, server_default=text("'completed'")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


# ---------------------------
# Core: bank_statement_lines
# ---------------------------


class BankStatementLine(Base):
    __tablename__ = "bank_statement_lines"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid_str)
    upload_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("bank_statement_uploads.id"), nullable=True
    )
    bank_account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("bank_accounts.id"), nullable=False
    )
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    # Branch code as printed by the bank; empty when the statement has no branch column.
    reference: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    debit_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    credit_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    running_balance: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    statement_balance: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    currency: Mapped[str] = mapped_column(CHAR(3), nullable=False, server_default=text("'IDR'"))
    reconciliation_status: Mapped[str] = mapped_column(
        String, nullable=False, server_default=text("'unmatched'")
    )
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint(
            "reconciliation_status in ('matched','suggested','unmatched','recorded')",
            name="ck_bank_statement_lines_status",
        ),
        # Duplicate detection reads every line of one account.
        Index("ix_bank_statement_lines_account_date", "bank_account_id", "transaction_date"),
    )


__all__ = [
    "Base",
    "BankAccount",
    "BankStatementUpload",
    "BankStatementLine",
]
