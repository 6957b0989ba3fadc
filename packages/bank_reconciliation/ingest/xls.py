"""Legacy spreadsheet loader: first worksheet of a BIFF ``.xls`` workbook as raw rows."""

from __future__ import annotations

from os import PathLike
from typing import Any

import xlrd

from ..logging_setup import get_logger

logger = get_logger("bank_reconciliation.ingest.xls")


def read_xls_rows(source: str | PathLike[str] | bytes) -> list[list[Any]]:
    """Return the cell values of the first worksheet, row by row.

    xlrd reports date cells as plain float serials, which the row normalizer
    converts like any other spreadsheet serial. Empty cells come back as
    ``""``; trailing ones are trimmed and an empty row becomes ``[]``.
    """

    if isinstance(source, bytes):
        book = xlrd.open_workbook(file_contents=source)
    else:
        book = xlrd.open_workbook(str(source))
    try:
        sheet = book.sheet_by_index(0)
        rows: list[list[Any]] = []
        for r in range(sheet.nrows):
            cells = list(sheet.row_values(r))
            while cells and (cells[-1] is None or cells[-1] == ""):
                cells.pop()
            rows.append(cells)
    finally:
        book.release_resources()

    logger.info("Spreadsheet rows read: %d (sheet %r)", len(rows), sheet.name)
    return rows


__all__ = ["read_xls_rows"]
