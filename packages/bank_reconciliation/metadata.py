"""Statement banner/footer scanning: period, balances and totals."""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from .columns import cell_text
from .logging_setup import get_logger
from .models import PeriodBanner, RawStatementRow
from .numbers import parse_locale_number

logger = get_logger("bank_reconciliation.metadata")

PERIOD_SCAN_ROWS = 10

_PERIOD_RE = re.compile(r"(\d{2})/(\d{2})/(\d{4})\s*-\s*(\d{2})/(\d{2})/(\d{4})")
_HAS_NUMBER = re.compile(r"[\d,.]")

MONTH_NAMES_ID: tuple[str, ...] = (
    "JANUARI",
    "FEBRUARI",
    "MARET",
    "APRIL",
    "MEI",
    "JUNI",
    "JULI",
    "AGUSTUS",
    "SEPTEMBER",
    "OKTOBER",
    "NOVEMBER",
    "DESEMBER",
)

# metadata field -> first-cell markers (spellings seen across bank exports)
FOOTER_FIELDS: dict[str, tuple[str, ...]] = {
    "opening_balance": ("Saldo Awal", "SALDO AWAL"),
    "total_debits": ("Mutasi Debet", "MUTASI DB", "Mutasi DB"),
    "total_credits": ("Mutasi Kredit", "MUTASI CR", "Mutasi CR"),
    "closing_balance": ("Saldo Akhir", "SALDO AKHIR"),
}


def period_label(month: int, year: int) -> str:
    """Return e.g. ``"MARET 2024"``."""

    return f"{MONTH_NAMES_ID[month - 1]} {year}"


def extract_period(
    rows: Sequence[RawStatementRow], window: int = PERIOD_SCAN_ROWS
) -> PeriodBanner | None:
    """Find a ``Periode DD/MM/YYYY - DD/MM/YYYY`` banner in the first rows.

    When several rows match, the last one wins. Banners naming impossible
    dates are ignored.
    """

    found: PeriodBanner | None = None
    for row in rows[:window]:
        if not row:
            continue
        first = cell_text(row[0])
        if "Periode" not in first:
            continue
        m = _PERIOD_RE.search(first)
        if not m:
            continue
        sd, sm, sy, ed, em, ey = (int(g) for g in m.groups())
        try:
            found = PeriodBanner(
                label=period_label(sm, sy),
                start_date=date(sy, sm, sd),
                end_date=date(ey, em, ed),
            )
        except (ValueError, IndexError):
            logger.warning("Ignoring malformed period banner: %r", first)
    return found


def _first_amount(row: RawStatementRow) -> Decimal | None:
    for cell in row:
        text = cell_text(cell)
        if text and _HAS_NUMBER.search(text):
            return parse_locale_number(text)
    return None


def extract_footer_totals(rows: Sequence[RawStatementRow]) -> dict[str, Decimal]:
    """Scan every row for balance/total footers.

    For each footer row, the first cell containing a digit, comma or dot
    supplies the value. A later footer of the same kind overrides an earlier
    one.
    """

    totals: dict[str, Decimal] = {}
    for row in rows:
        if not row:
            continue
        first = cell_text(row[0])
        for field_name, markers in FOOTER_FIELDS.items():
            if any(m in first for m in markers):
                value = _first_amount(row)
                if value is not None:
                    totals[field_name] = value
    return totals


__all__ = [
    "PERIOD_SCAN_ROWS",
    "MONTH_NAMES_ID",
    "FOOTER_FIELDS",
    "period_label",
    "extract_period",
    "extract_footer_totals",
]
