import contextlib
from decimal import Decimal

from prompt_toolkit import PromptSession
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from bank_reconciliation.models import NormalizedTransaction
from bank_reconciliation.term_ui import confirm_include_duplicates, format_duplicate_summary


def _tx(i: int) -> NormalizedTransaction:
    return NormalizedTransaction(
        date=f"2024-03-{i:02d}",
        description=f"TRSF E-BANKING CR {i} " + "X" * 50,
        reference="",
        debit=Decimal(0),
        credit=Decimal("500000"),
        balance=Decimal("1500000"),
        currency="IDR",
    )


@contextlib.contextmanager
def pipe_session():
    with create_pipe_input() as pipe:
        sess = PromptSession(input=pipe, output=DummyOutput())
        yield pipe, sess


def test_format_duplicate_summary_lists_first_five():
    text = format_duplicate_summary([_tx(i) for i in range(1, 8)])
    lines = text.splitlines()
    assert lines[0] == "Found 7 potential duplicate transaction(s):"
    assert lines[2].startswith("1. 01/03/2024 - TRSF E-BANKING CR 1 ")
    assert lines[2].endswith(" - IDR 500,000")
    assert len(lines[2].split(" - ")[1]) == 40
    assert lines[-1] == "... and 2 more"


def test_format_duplicate_summary_without_overflow_line():
    text = format_duplicate_summary([_tx(1)])
    assert "more" not in text


def test_confirm_yes():
    with pipe_session() as (pipe, sess):
        pipe.send_text("y\r")
        assert confirm_include_duplicates([_tx(1)], session=sess) is True


def test_confirm_defaults_to_no_on_enter():
    with pipe_session() as (pipe, sess):
        pipe.send_text("\r")
        assert confirm_include_duplicates([_tx(1)], session=sess) is False


def test_confirm_explicit_no():
    with pipe_session() as (pipe, sess):
        pipe.send_text("No\r")
        assert confirm_include_duplicates([_tx(1)], session=sess) is False
