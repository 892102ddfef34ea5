"""
Spreadsheet import/export and the atomic bulk import pipeline.
"""

from __future__ import annotations

from flask import Flask

from .cli import contacts_cli
from .pipeline import (
    BulkImportResult,
    bulk_import_candidates,
    bulk_import_rows,
    commit_candidates,
    extract_candidates,
    import_workbook,
)
from .tabular import contacts_to_rows, parse_workbook, row_to_candidate, serialize_workbook

__all__ = [
    "init_importer",
    "BulkImportResult",
    "bulk_import_rows",
    "bulk_import_candidates",
    "commit_candidates",
    "extract_candidates",
    "import_workbook",
    "contacts_to_rows",
    "parse_workbook",
    "row_to_candidate",
    "serialize_workbook",
]


def init_importer(app: Flask) -> None:
    """Register the ``flask contacts`` command group."""
    if "contacts" not in app.cli.commands:
        app.cli.add_command(contacts_cli)
