from datetime import date
from decimal import Decimal

from bank_reconciliation.models import NormalizedTransaction, StatementMetadata
from bank_reconciliation.persistence import build_upload_values


def _tx(day: str, debit: str, credit: str, balance: str) -> NormalizedTransaction:
    return NormalizedTransaction(
        date=day,
        description="x",
        reference="",
        debit=Decimal(debit),
        credit=Decimal(credit),
        balance=Decimal(balance),
        currency="IDR",
    )


TXS = [
    _tx("2024-03-01", "0", "500000", "1500000"),
    _tx("2024-03-02", "250000", "0", "1250000"),
]


def test_statement_figures_take_precedence():
    md = StatementMetadata(
        period="MARET 2024",
        start_date="2024-03-01",
        end_date="2024-03-31",
        opening_balance=Decimal("1000000"),
        closing_balance=Decimal("1250000"),
        total_debits=Decimal("1"),
        total_credits=Decimal("2"),
    )
    values = build_upload_values(
        md,
        TXS,
        bank_account_id="acc",
        currency="IDR",
        date_range=("2024-01-01", "2024-01-31"),
    )
    assert values["statement_period"] == "MARET 2024"
    assert values["statement_start_date"] == date(2024, 3, 1)
    assert values["statement_end_date"] == date(2024, 3, 31)
    assert values["total_debits"] == Decimal("1")
    assert values["total_credits"] == Decimal("2")
    assert values["transaction_count"] == 2
    assert values["status"] == "completed"


def test_missing_figures_fall_back_to_lines_and_today():
    values = build_upload_values(
        StatementMetadata(),
        TXS,
        bank_account_id="acc",
        currency="USD",
        date_range=("2024-03-01", date(2024, 3, 31)),
        today=date(2024, 4, 5),
    )
    assert values["statement_period"] == "April 2024"
    assert values["statement_start_date"] == date(2024, 3, 1)
    assert values["statement_end_date"] == date(2024, 3, 31)
    assert values["opening_balance"] == Decimal(0)
    assert values["closing_balance"] == Decimal("1250000")
    assert values["total_debits"] == Decimal("250000")
    assert values["total_credits"] == Decimal("500000")
    assert values["currency"] == "USD"


def test_no_dates_anywhere_leaves_them_empty():
    values = build_upload_values(StatementMetadata(), TXS, bank_account_id="acc", currency="IDR")
    assert values["statement_start_date"] is None
    assert values["statement_end_date"] is None
