"""Typed view of responses from the remote PDF/image statement parser.

PDF and scanned statements are parsed by an external HTTP service (file plus
bank account id in, JSON out). This package never calls that service.
:func:`classify_remote_response` is a host-facing helper, exported from the
package root: the host application that performs the upload hands it the
HTTP status flag and JSON body so it can report what happened:

- ``imported``: the service extracted and stored transactions.
- ``needs_ocr``: text extraction failed; the caller may retry with OCR.
- ``preview``: OCR output awaiting the user's confirmation.
- anything else is an error and raises :class:`RemoteParseError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import RemoteParseError


class RemoteTransaction(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    date: str
    description: str = ""
    debit: float = 0.0
    credit: float = 0.0
    balance: float = 0.0


class RemoteParseResponse(BaseModel):
    """JSON body returned by the remote parser (camelCase on the wire)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    error: str | None = None
    can_use_ocr: bool = Field(default=False, alias="canUseOCR")
    suggestions: list[str] = Field(default_factory=list)
    preview: bool = False
    period: str | None = None
    used_ocr: bool = Field(default=False, alias="usedOCR")
    inserted_count: int | None = Field(default=None, alias="insertedCount")
    transaction_count: int | None = Field(default=None, alias="transactionCount")
    duplicate_count: int = Field(default=0, alias="duplicateCount")
    transactions: list[RemoteTransaction] = Field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RemoteParseOutcome:
    kind: Literal["imported", "needs_ocr", "preview"]
    period: str | None = None
    imported_count: int = 0
    duplicate_count: int = 0
    used_ocr: bool = False
    message: str | None = None
    suggestions: tuple[str, ...] = ()
    transactions: tuple[RemoteTransaction, ...] = field(default_factory=tuple)


def classify_remote_response(ok: bool, body: dict[str, Any]) -> RemoteParseOutcome:
    """Interpret an HTTP status flag plus JSON body from the remote parser."""

    resp = RemoteParseResponse.model_validate(body)
    if not ok:
        if resp.can_use_ocr:
            return RemoteParseOutcome(
                kind="needs_ocr",
                message=resp.error,
                suggestions=tuple(resp.suggestions),
            )
        raise RemoteParseError(resp.error or "Failed to parse PDF")

    if resp.preview:
        return RemoteParseOutcome(
            kind="preview",
            period=resp.period,
            used_ocr=resp.used_ocr,
            transactions=tuple(resp.transactions),
        )

    # The service reports insertedCount, falling back to transactionCount.
    imported = resp.inserted_count or resp.transaction_count or 0
    return RemoteParseOutcome(
        kind="imported",
        period=resp.period,
        imported_count=imported,
        duplicate_count=resp.duplicate_count,
        used_ocr=resp.used_ocr,
    )


__all__ = [
    "RemoteTransaction",
    "RemoteParseResponse",
    "RemoteParseOutcome",
    "classify_remote_response",
]
