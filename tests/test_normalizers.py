import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from bank_reconciliation.columns import map_columns
from bank_reconciliation.normalizers import (
    ParseContext,
    excel_serial_to_date,
    is_footer_marker,
    normalize_row,
    normalize_rows,
    parse_row_date,
)

CTX = ParseContext(statement_year=2024)


def test_excel_serial_uses_spreadsheet_epoch():
    assert excel_serial_to_date(1) == date(1899, 12, 31)
    assert excel_serial_to_date(45292) == date(2024, 1, 1)
    # Fractional serials carry a time of day, which is dropped.
    assert excel_serial_to_date(45292.75) == date(2024, 1, 1)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("01/03", "2024-03-01"),
        ("5/3", "2024-03-05"),
        (" 29/02 ", "2024-02-29"),
        ("31/02", None),
        ("32/01", None),
        ("01/13", None),
        ("01-03", None),
        ("01/03/2024", None),
        ("PEND", None),
        (45352, "2024-03-01"),
        (datetime(2024, 3, 9, 14, 30), "2024-03-09"),
        (date(2024, 3, 10), "2024-03-10"),
    ],
)
def test_parse_row_date(value, expected):
    assert parse_row_date(value, 2024) == expected


def test_is_footer_marker_checks_first_cell_only():
    assert is_footer_marker(["Saldo Akhir", "1.000.000,00"])
    assert is_footer_marker(["Mutasi Kredit : 3"])
    assert not is_footer_marker(["01/03", "Saldo Akhir"])
    assert not is_footer_marker([])


def test_split_columns_row_with_branch_reference():
    cols = map_columns(["Tanggal", "Keterangan", "Cabang", "Debet", "Kredit", "Saldo"])
    tx = normalize_row(
        ["04/03", "BIAYA ADM", "0998", "15.000,00", "", "1.485.000,00"], cols, CTX, row_index=7
    )
    assert tx is not None
    assert tx.date == "2024-03-04"
    assert tx.reference == "0998"
    # The cell right of the description is appended as detail.
    assert tx.description == "BIAYA ADM; 0998"
    assert tx.debit == Decimal("15000.00")
    assert tx.credit == Decimal(0)
    assert tx.balance == Decimal("1485000.00")
    assert tx.currency == "IDR"
    assert tx.source_row == 7


def test_combined_amount_with_indicator_cell():
    cols = map_columns(["Tanggal", "Keterangan", "", "Mutasi", "", "Saldo"])
    row = ["03/03", "TRSF E-BANKING", "KE 123", "1.000.000,00", "CR", "5.000.000,00"]
    tx = normalize_row(row, cols, CTX)
    assert tx is not None
    assert tx.description == "TRSF E-BANKING; KE 123"
    assert tx.credit == Decimal("1000000.00")
    assert tx.debit == Decimal(0)
    assert tx.balance == Decimal("5000000.00")


def test_combined_amount_with_inline_suffix():
    cols = map_columns(["Tanggal", "Keterangan", "Mutasi", "Saldo"])
    tx = normalize_row(["02/03", "Withdrawal", "250000 DB", "1250000"], cols, CTX)
    assert tx is not None
    assert tx.debit == Decimal("250000")
    assert tx.credit == Decimal(0)
    assert tx.balance == Decimal("1250000")

    credit = normalize_row(["02/03", "Refund", "99.500,00 CR", "1349500"], cols, CTX)
    assert credit is not None
    assert credit.credit == Decimal("99500.00")
    assert credit.debit == Decimal(0)


def test_combined_amount_without_indicator_counts_as_debit():
    cols = map_columns(["Tanggal", "Keterangan", "Mutasi", "Saldo"])
    tx = normalize_row(["06/03", "Transfer", "75000", "0"], cols, CTX)
    assert tx is not None
    assert tx.debit == Decimal("75000")
    assert tx.credit == Decimal(0)


def test_row_without_usable_date_is_skipped():
    cols = map_columns(["Tanggal", "Keterangan", "Debet", "Kredit", "Saldo"])
    assert normalize_row(["", "Saldo", "", "", "1"], cols, CTX) is None
    assert normalize_row(["PEND", "Pending", "1", "", "1"], cols, CTX) is None
    assert normalize_row([], cols, CTX) is None


def test_short_rows_read_missing_cells_as_empty():
    cols = map_columns(["Tanggal", "Keterangan", "Debet", "Kredit", "Saldo"])
    tx = normalize_row(["07/03", "Setoran"], cols, CTX)
    assert tx is not None
    assert (tx.debit, tx.credit, tx.balance) == (Decimal(0), Decimal(0), Decimal(0))


def test_normalize_rows_stops_at_footer_and_counts_skips():
    rows = [
        ["Tanggal", "Keterangan", "Debet", "Kredit", "Saldo"],
        ["01/03", "Setoran", "", "500000", "1500000"],
        ["bad", "row", "", "", ""],
        [],
        ["02/03", "Tarik", "100000", "", "1400000"],
        ["Saldo Akhir", "", "", "", "1400000"],
        ["03/03", "After footer", "1", "", "1"],
    ]
    cols = map_columns(rows[0])
    out = normalize_rows(rows, cols, CTX, start=1)
    assert [t.date for t in out.transactions] == ["2024-03-01", "2024-03-02"]
    assert out.skipped == 2
    assert out.footer_row_index == 5


def test_rows_with_both_sides_are_kept_and_logged(caplog: pytest.LogCaptureFixture):
    rows = [
        ["Tanggal", "Keterangan", "Debet", "Kredit", "Saldo"],
        ["01/03", "Koreksi", "10", "20", "30"],
    ]
    cols = map_columns(rows[0])
    with caplog.at_level(logging.WARNING, logger="bank_reconciliation"):
        out = normalize_rows(rows, cols, CTX, start=1)
    assert len(out.transactions) == 1
    assert out.transactions[0].has_both_sides
    assert any("both debit" in r.getMessage() for r in caplog.records)


def test_float_amount_cells_from_workbooks_keep_their_value():
    cols = map_columns(["Tanggal", "Keterangan", "Debet", "Kredit", "Saldo"])
    tx = normalize_row([45352, "Bunga", None, 5e-05, 1500000.25], cols, CTX)
    assert tx is not None
    assert tx.credit == Decimal("0.00005")
    assert tx.balance == Decimal("1500000.25")
