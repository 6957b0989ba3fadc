"""Locale-aware amount parsing for Indonesian/European and US number formats.

Bank exports disagree on separators: ``1.234.567,89`` and ``1,234,567.89``
denote the same amount. The rule applied here is positional and deliberately
simple so that the same text always yields the same value:

- Strip everything except digits, commas and dots.
- Both separators present: the one appearing last is the decimal point; the
  other is a thousands separator and is removed.
- Only commas: commas become decimal points.
- Otherwise the text is read as-is.

The resulting text is read like a lenient float reader would, keeping the
longest leading ``digits[.digits]`` prefix, so ``1.234.567`` reads as
``1.234``. Signs are discarded; direction comes from debit/credit columns.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

_NON_NUMERIC = re.compile(r"[^\d,.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def _leading_decimal(s: str) -> Decimal:
    m = _LEADING_NUMBER.match(s)
    if not m:
        return Decimal(0)
    return Decimal(m.group(0))


def parse_locale_number(value: Any) -> Decimal:
    """Return ``value`` as a non-negative ``Decimal``; ``0`` when unreadable.

    Accepts strings or numeric cells (numbers are read via their text form).
    Never raises.
    """

    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, float):
        # Fixed-point text so exponent notation (5e-05) keeps its digits apart.
        value = int(value) if value.is_integer() else format(Decimal(repr(value)), "f")
    cleaned = _NON_NUMERIC.sub("", str(value))
    if not cleaned:
        return Decimal(0)

    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        cleaned = cleaned.replace(",", ".")

    return _leading_decimal(cleaned)


__all__ = ["parse_locale_number"]
