"""Duplicate detection between a freshly parsed batch and stored statement lines.

Public surface:
- ``Fingerprint``: the ``(date, description, debit, credit, balance)`` key.
- ``fingerprint`` / ``fingerprint_from_values``: build keys from parsed
  transactions or from stored column values.
- ``find_duplicates``: partition a batch into duplicates and fresh lines.
- ``OnDuplicates`` + ``resolve_duplicates``: turn the partition into the
  rows to insert under an explicit skip/include/ask strategy.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Any, NamedTuple

from .logging_setup import get_logger
from .models import NormalizedTransaction

logger = get_logger("bank_reconciliation.duplicates")


class Fingerprint(NamedTuple):
    date: str
    description: str
    debit: Decimal
    credit: Decimal
    balance: Decimal


def _as_decimal(v: Any) -> Decimal:
    if v is None:
        return Decimal(0)
    if isinstance(v, Decimal):
        return v
    return Decimal(str(v))


def fingerprint_from_values(
    transaction_date: date | str,
    description: str | None,
    debit: Any,
    credit: Any,
    balance: Any,
) -> Fingerprint:
    """Build a key from stored column values (dates may be ``date`` objects)."""

    iso = transaction_date.isoformat() if isinstance(transaction_date, date) else transaction_date
    return Fingerprint(
        iso,
        description or "",
        _as_decimal(debit),
        _as_decimal(credit),
        _as_decimal(balance),
    )


def fingerprint(tx: NormalizedTransaction) -> Fingerprint:
    return Fingerprint(tx.date, tx.description, tx.debit, tx.credit, tx.balance)


@dataclass(frozen=True, slots=True)
class DuplicatePartition:
    """A parsed batch split by whether each line is already stored.

    ``batch`` keeps the whole input in source order.
    """

    batch: list[NormalizedTransaction]
    duplicates: list[NormalizedTransaction]
    fresh: list[NormalizedTransaction]

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicates)


def find_duplicates(
    new: Iterable[NormalizedTransaction], existing: Collection[Fingerprint]
) -> DuplicatePartition:
    """Partition ``new`` by exact fingerprint equality against ``existing``.

    Amounts compare as decimals, so ``500000`` equals a stored ``500000.00``.
    Lines repeated within ``new`` itself are not collapsed.
    """

    batch = list(new)
    known = existing if isinstance(existing, (set, frozenset)) else set(existing)
    duplicates: list[NormalizedTransaction] = []
    fresh: list[NormalizedTransaction] = []
    for tx in batch:
        (duplicates if fingerprint(tx) in known else fresh).append(tx)
    if duplicates:
        logger.info("Found %d potential duplicate transaction(s)", len(duplicates))
    return DuplicatePartition(batch=batch, duplicates=duplicates, fresh=fresh)


class OnDuplicates(StrEnum):
    """What to do with lines that are already stored."""

    SKIP = "skip"
    INCLUDE = "include"
    ASK = "ask"


type DuplicateDecision = Callable[[list[NormalizedTransaction]], bool]
"""Callback for ``ASK``: receives the duplicates, returns True to import them anyway."""


def resolve_duplicates(
    partition: DuplicatePartition,
    strategy: OnDuplicates | str,
    *,
    ask: DuplicateDecision | None = None,
) -> list[NormalizedTransaction]:
    """Return the lines to insert, in their original order.

    ``ASK`` is only consulted when duplicates exist and requires ``ask``.
    """

    strategy = OnDuplicates(strategy)
    if not partition.has_duplicates:
        return list(partition.fresh)

    include = strategy is OnDuplicates.INCLUDE
    if strategy is OnDuplicates.ASK:
        if ask is None:
            raise ValueError("on_duplicates='ask' requires an ask callback")
        include = bool(ask(list(partition.duplicates)))

    return list(partition.batch) if include else list(partition.fresh)


__all__ = [
    "Fingerprint",
    "fingerprint",
    "fingerprint_from_values",
    "DuplicatePartition",
    "find_duplicates",
    "OnDuplicates",
    "DuplicateDecision",
    "resolve_duplicates",
]
