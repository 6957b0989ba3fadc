"""Ingest utilities shared by CLI commands and workflows.

Exposes :func:`load_statement_rows`, which picks a reader by file suffix and
returns raw rows ready for :func:`bank_reconciliation.parser.parse_statement`.
"""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any, Literal

from ..errors import UnsupportedStatementFormat
from .csv_text import read_csv_rows
from .xls import read_xls_rows
from .xlsx import read_xlsx_rows

_CSV_SUFFIXES = {".csv"}
_XLSX_SUFFIXES = {".xlsx", ".xlsm"}
_XLS_SUFFIXES = {".xls"}
# These need the remote PDF/OCR parsing service.
_REMOTE_SUFFIXES = {".pdf", ".png", ".jpg", ".jpeg"}


@dataclass(frozen=True, slots=True)
class LoadedStatement:
    """Raw rows from a statement file plus what the caller must still supply.

    ``needs_year`` is set for CSV exports, whose ``DD/MM`` dates carry no
    year; the caller should confirm one before parsing.
    """

    rows: list[list[Any]]
    source_format: Literal["csv", "xlsx", "xls"]
    needs_year: bool


def load_statement_rows(path: str | PathLike[str]) -> LoadedStatement:
    """Read a CSV or Excel statement into raw rows.

    Raises ``UnsupportedStatementFormat`` for PDF/image statements and any
    other unknown suffix, and ``OSError`` when the file cannot be read.
    """

    p = Path(path)
    suffix = p.suffix.lower()
    if suffix in _CSV_SUFFIXES:
        # utf-8-sig tolerates the BOM some spreadsheet tools prepend; bytes from
        # other code pages (Windows-1252 exports) become U+FFFD instead of failing.
        text = p.read_bytes().decode("utf-8-sig", errors="replace")
        return LoadedStatement(rows=read_csv_rows(text), source_format="csv", needs_year=True)
    if suffix in _XLSX_SUFFIXES:
        return LoadedStatement(rows=read_xlsx_rows(p), source_format="xlsx", needs_year=False)
    if suffix in _XLS_SUFFIXES:
        return LoadedStatement(rows=read_xls_rows(p), source_format="xls", needs_year=False)
    if suffix in _REMOTE_SUFFIXES:
        raise UnsupportedStatementFormat(
            f"{p.name}: PDF and image statements are parsed by the remote statement service"
        )
    raise UnsupportedStatementFormat(
        f"{p.name}: unsupported statement format {suffix or '(no suffix)'!r}; "
        "expected .csv, .xls, .xlsx or .xlsm"
    )


__all__ = ["LoadedStatement", "load_statement_rows"]
