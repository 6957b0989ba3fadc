"""Pytest configuration for test isolation.

The DB client keeps one process-wide engine bound to the first URL it sees,
and package logging is configured at most once per process. Tests that
bootstrap their own SQLite files or invoke the CLI would otherwise leak that
state into each other, so both are reset around every test.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

import bank_reconciliation.logging_setup as logging_setup
from db.client import dispose_engine


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop the shared engine and any CLI-installed log handler after each test."""

    monkeypatch.delenv("DATABASE_URL", raising=False)
    yield
    dispose_engine()
    pkg_logger = logging.getLogger("bank_reconciliation")
    for h in list(pkg_logger.handlers):
        pkg_logger.removeHandler(h)
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)
    logging_setup._CONFIGURED = False
