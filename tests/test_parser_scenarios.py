from decimal import Decimal

import pytest

import bank_reconciliation.parser as parser_mod
from bank_reconciliation.ingest.csv_text import read_csv_rows
from bank_reconciliation.models import ParseFailure, StatementMetadata
from bank_reconciliation.parser import parse_statement


def test_split_columns_csv_with_explicit_year():
    rows = read_csv_rows("Tanggal;Keterangan;Debet;Kredit;Saldo\n01/03;Transfer Masuk;;500000;1500000\n")
    result = parse_statement(rows, statement_year=2024)

    assert result.ok
    assert result.header_row_index == 0
    assert len(result.transactions) == 1
    tx = result.transactions[0]
    assert tx.date == "2024-03-01"
    assert tx.description == "Transfer Masuk"
    assert tx.reference == ""
    assert tx.debit == Decimal(0)
    assert tx.credit == Decimal("500000")
    assert tx.balance == Decimal("1500000")
    assert result.metadata == StatementMetadata()


def test_combined_mutasi_column_csv():
    rows = read_csv_rows("Tanggal;Keterangan;Mutasi;Saldo\n02/03;Withdrawal;250000 DB;1250000\n")
    result = parse_statement(rows, statement_year=2024, currency="USD")

    assert len(result.transactions) == 1
    tx = result.transactions[0]
    assert tx.date == "2024-03-02"
    assert tx.debit == Decimal("250000")
    assert tx.credit == Decimal(0)
    assert tx.currency == "USD"


def test_period_banner_overrides_year_and_fills_metadata():
    text = "\n".join(
        [
            "PT BANK CENTRAL ASIA",
            "Periode 01/12/2023 - 31/12/2023",
            "Tanggal;Keterangan;Cabang;Debet;Kredit;Saldo",
            "15/12;SETORAN TUNAI;;;2.000.000,00;3.000.000,00",
            "20/12;BIAYA ADM;;15.000,00;;2.985.000,00",
            "Saldo Awal;1.000.000,00",
            "Mutasi Debet;15.000,00",
            "Mutasi Kredit;2.000.000,00",
            "Saldo Akhir;2.985.000,00",
            "31/12;IGNORED;;1;;1",
        ]
    )
    result = parse_statement(read_csv_rows(text), statement_year=2024)

    assert [t.date for t in result.transactions] == ["2023-12-15", "2023-12-20"]
    assert result.footer_row_index == 5
    md = result.metadata
    assert md.period == "DESEMBER 2023"
    assert md.start_date == "2023-12-01"
    assert md.end_date == "2023-12-31"
    assert md.opening_balance == Decimal("1000000.00")
    assert md.total_debits == Decimal("15000.00")
    assert md.total_credits == Decimal("2000000.00")
    assert md.closing_balance == Decimal("2985000.00")


def test_english_comma_separated_export():
    text = (
        "Date,Description,Debit,Credit,Balance\n"
        '05/01,"Coffee, downtown",4.50,,995.50\n'
        "06/01,Salary,,2000.00,2995.50\n"
    )
    result = parse_statement(read_csv_rows(text), statement_year=2025)
    assert [t.description for t in result.transactions] == ["Coffee, downtown; 4.50", "Salary"]
    assert result.transactions[0].debit == Decimal("4.50")
    assert result.transactions[1].credit == Decimal("2000.00")


def test_spreadsheet_rows_with_serial_dates():
    rows = [
        ["Tanggal", "Keterangan", "Debet", "Kredit", "Saldo"],
        [45292, "Setoran", None, 1500000.0, 1500000.0],
        [None, None, None, None, None],
    ]
    result = parse_statement(rows, statement_year=1999)
    assert len(result.transactions) == 1
    tx = result.transactions[0]
    assert tx.date == "2024-01-01"
    assert tx.credit == Decimal("1500000")
    assert result.skipped_rows == 1


def test_no_header_is_a_terminal_failure():
    rows = [["just", "some"], ["01/03", "text", "100"]]
    result = parse_statement(rows, statement_year=2024)
    assert not result.ok
    assert result.transactions == []
    assert result.failure is ParseFailure.HEADER_NOT_FOUND
    assert result.header_row_index is None


def test_header_without_date_column_is_a_terminal_failure(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(parser_mod, "locate_header", lambda rows: 0)
    result = parse_statement([["Keterangan", "Saldo"], ["Setoran", "1"]], statement_year=2024)
    assert result.failure is ParseFailure.DATE_COLUMN_MISSING
    assert result.transactions == []
    assert result.header_row_index == 0
    assert result.columns is not None and result.columns.description == 0


def test_default_year_is_current_year():
    from datetime import date

    rows = [["Tanggal", "Keterangan", "Saldo"], ["01/01", "Setoran", "1"]]
    result = parse_statement(rows)
    assert result.transactions[0].date == f"{date.today().year}-01-01"
