"""Tiny terminal UI helpers (prompt_toolkit-based).

Kept apart from the import workflow so the workflow stays non-interactive;
the CLI passes :func:`confirm_include_duplicates` as the duplicate-decision
callback.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.validation import ValidationError, Validator

from .models import NormalizedTransaction

_PREVIEW_LIMIT = 5
_YES = {"y", "yes"}
_NO = {"n", "no", ""}


def format_duplicate_summary(duplicates: Sequence[NormalizedTransaction]) -> str:
    """Short listing of the first few duplicates, one per line."""

    lines = [f"Found {len(duplicates)} potential duplicate transaction(s):", ""]
    for idx, tx in enumerate(duplicates[:_PREVIEW_LIMIT], start=1):
        shown_date = date.fromisoformat(tx.date).strftime("%d/%m/%Y")
        amount = tx.debit or tx.credit
        lines.append(f"{idx}. {shown_date} - {tx.description[:40]} - {tx.currency} {amount:,}")
    if len(duplicates) > _PREVIEW_LIMIT:
        lines.append(f"... and {len(duplicates) - _PREVIEW_LIMIT} more")
    return "\n".join(lines)


class _YesNoValidator(Validator):
    def validate(self, document) -> None:
        if document.text.strip().lower() not in _YES | _NO:
            raise ValidationError(message="Please answer y or n")


def confirm_include_duplicates(
    duplicates: Sequence[NormalizedTransaction],
    *,
    session: PromptSession | None = None,
) -> bool:
    """Show the duplicates and ask whether to import them anyway (default: no)."""

    sess: PromptSession = session or PromptSession()
    print_formatted_text(format_duplicate_summary(duplicates) + "\n", output=sess.output)
    answer = sess.prompt(
        "Add them anyway? [y/N]: ",
        validator=_YesNoValidator(),
        validate_while_typing=False,
    )
    return answer.strip().lower() in _YES


__all__ = ["format_duplicate_summary", "confirm_include_duplicates"]
