# ruff: noqa: I001
"""Bank accounts, statement uploads and statement lines.

Revision ID: 0001_bank_statements
Revises: None
Create Date: 2026-02-24
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_bank_statements"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def upgrade() -> None:
    op.create_table(
        "bank_accounts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("account_name", sa.String(), nullable=False),
        sa.Column("bank_name", sa.String(), nullable=False),
        sa.Column("account_number", sa.String(), nullable=True),
        sa.Column("currency", sa.CHAR(3), nullable=False, server_default=sa.text("'IDR'")),
        _created_at(),
    )

    op.create_table(
        "bank_statement_uploads",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "bank_account_id", sa.String(36), sa.ForeignKey("bank_accounts.id"), nullable=False
        ),
        sa.Column("statement_period", sa.String(), nullable=False),
        sa.Column("statement_start_date", sa.Date(), nullable=True),
        sa.Column("statement_end_date", sa.Date(), nullable=True),
        sa.Column("currency", sa.CHAR(3), nullable=False, server_default=sa.text("'IDR'")),
        sa.Column("opening_balance", sa.Numeric(18, 2), nullable=False),
        sa.Column("closing_balance", sa.Numeric(18, 2), nullable=False),
        sa.Column("total_debits", sa.Numeric(18, 2), nullable=False),
        sa.Column("total_credits", sa.Numeric(18, 2), nullable=False),
        sa.Column("transaction_count", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default=sa.text("'completed'")),
        _created_at(),
    )

    op.create_table(
        "bank_statement_lines",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "upload_id",
            sa.String(36),
            sa.ForeignKey("bank_statement_uploads.id"),
            nullable=True,
        ),
        sa.Column(
            "bank_account_id", sa.String(36), sa.ForeignKey("bank_accounts.id"), nullable=False
        ),
        sa.Column("transaction_date", sa.Date(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("reference", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("debit_amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("credit_amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("running_balance", sa.Numeric(18, 2), nullable=False),
        sa.Column("statement_balance", sa.Numeric(18, 2), nullable=False),
        sa.Column("currency", sa.CHAR(3), nullable=False, server_default=sa.text("'IDR'")),
        sa.Column(
            "reconciliation_status",
            sa.String(),
            nullable=False,
            server_default=sa.text("'unmatched'"),
        ),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        sa.CheckConstraint(
            "reconciliation_status in ('matched','suggested','unmatched','recorded')",
            name="ck_bank_statement_lines_status",
        ),
    )
    op.create_index(
        "ix_bank_statement_lines_account_date",
        "bank_statement_lines",
        ["bank_account_id", "transaction_date"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_bank_statement_lines_account_date", table_name="bank_statement_lines")
    op.drop_table("bank_statement_lines")
    op.drop_table("bank_statement_uploads")
    op.drop_table("bank_accounts")
