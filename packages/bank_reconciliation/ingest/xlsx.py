"""Spreadsheet loader: first worksheet of an ``.xlsx`` workbook as raw rows."""

from __future__ import annotations

import io
from os import PathLike
from typing import Any

from openpyxl import load_workbook

from ..logging_setup import get_logger

logger = get_logger("bank_reconciliation.ingest.xlsx")


def read_xlsx_rows(source: str | PathLike[str] | bytes) -> list[list[Any]]:
    """Return the cell values of the first worksheet, row by row.

    Numbers stay numeric so that date serials reach the row normalizer
    unchanged; cells openpyxl already typed as dates arrive as ``datetime``.
    Trailing empty cells are trimmed and an empty row becomes ``[]``.
    """

    handle: Any = io.BytesIO(source) if isinstance(source, bytes) else source
    wb = load_workbook(handle, read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        rows: list[list[Any]] = []
        for values in ws.iter_rows(values_only=True):
            cells = list(values)
            while cells and (cells[-1] is None or cells[-1] == ""):
                cells.pop()
            rows.append(cells)
    finally:
        wb.close()

    logger.info("Spreadsheet rows read: %d (sheet %r)", len(rows), ws.title)
    return rows


__all__ = ["read_xlsx_rows"]
