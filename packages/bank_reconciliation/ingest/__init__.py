"""Statement file readers (CSV text and Excel workbooks, .xlsx and legacy .xls)."""

from .csv_text import detect_delimiter, read_csv_rows, split_rows, tokenize_line
from .utils import LoadedStatement, load_statement_rows
from .xls import read_xls_rows
from .xlsx import read_xlsx_rows

__all__ = [
    "detect_delimiter",
    "tokenize_line",
    "split_rows",
    "read_csv_rows",
    "read_xlsx_rows",
    "read_xls_rows",
    "LoadedStatement",
    "load_statement_rows",
]
