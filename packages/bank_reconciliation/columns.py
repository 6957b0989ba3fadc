"""Header row detection and header-cell → column-role mapping.

Both steps are keyword heuristics over lower-cased cell text and accept
Bahasa Indonesia and English headers.

Column mapping evaluates every rule in :data:`COLUMN_RULES` against every
header cell, without early exit:

- A cell can feed several roles. ``"Description"`` contains ``"cr"`` and
  therefore also matches the credit rule; a later ``"Credit"`` cell then
  overrides it.
- When several cells match a role, the right-most one wins.
- ``"mutasi"`` only marks the combined amount column when the cell does not
  also mention ``"debet"``/``"kredit"`` (``"Mutasi Debet"`` is a debit
  column).
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any, NamedTuple

from .logging_setup import get_logger
from .models import ColumnMap, RawStatementRow

logger = get_logger("bank_reconciliation.columns")

HEADER_SCAN_ROWS = 20

_DATE_KEYWORDS = ("tanggal", "date", "tgl")
_CONTENT_KEYWORDS = (
    "keterangan",
    "description",
    "desc",
    "mutasi",
    "amount",
    "saldo",
    "balance",
)


class ColumnRule(NamedTuple):
    role: str
    keywords: tuple[str, ...]
    excludes: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        return any(k in text for k in self.keywords) and not any(
            x in text for x in self.excludes
        )


COLUMN_RULES: tuple[ColumnRule, ...] = (
    ColumnRule("date", _DATE_KEYWORDS),
    ColumnRule("description", ("keterangan", "description", "desc")),
    ColumnRule("branch", ("cabang", "branch")),
    ColumnRule("amount", ("mutasi",), excludes=("debet", "kredit")),
    ColumnRule("debit", ("debet", "debit", "db")),
    ColumnRule("credit", ("kredit", "credit", "cr")),
    ColumnRule("balance", ("saldo", "balance")),
)


def cell_text(value: Any) -> str:
    """Render a cell as display text; empty cells, ``None`` and zero give ``""``."""

    if not value:
        return ""
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else format(Decimal(repr(value)), "f")
    return str(value)


def _row_key(row: RawStatementRow) -> str:
    return "|".join(cell_text(c).lower() for c in row)


def is_header_row(row: RawStatementRow) -> bool:
    """A header mentions a date keyword and a description/amount keyword."""

    if not row:
        return False
    key = _row_key(row)
    return any(k in key for k in _DATE_KEYWORDS) and any(k in key for k in _CONTENT_KEYWORDS)


def locate_header(
    rows: Sequence[RawStatementRow], window: int = HEADER_SCAN_ROWS
) -> int | None:
    """Return the index of the first header-like row within ``window`` rows, or ``None``."""

    for idx, row in enumerate(rows[:window]):
        if is_header_row(row):
            logger.info("Found header at row %d: %s", idx, list(row))
            return idx
    logger.warning("Could not find column headers in the first %d rows", window)
    for idx, row in enumerate(rows[:window]):
        logger.debug("  row %d: %s", idx, list(row))
    return None


def map_columns(header_row: RawStatementRow) -> ColumnMap:
    """Assign header cells to semantic roles using :data:`COLUMN_RULES`."""

    positions: dict[str, int] = {}
    for idx, cell in enumerate(header_row):
        text = cell_text(cell).lower()
        for rule in COLUMN_RULES:
            if rule.matches(text):
                positions[rule.role] = idx
    columns = ColumnMap(**positions)
    logger.info("Column positions: %s", columns)
    return columns


__all__ = [
    "HEADER_SCAN_ROWS",
    "ColumnRule",
    "COLUMN_RULES",
    "cell_text",
    "is_header_row",
    "locate_header",
    "map_columns",
]
