"""High-level workflows composing ingest, parsing and persistence."""

from .import_flow import import_statement

__all__ = ["import_statement"]
