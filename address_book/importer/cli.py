"""
CLI commands for spreadsheet import and export.

Registered on the Flask CLI as ``flask contacts ...``.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from flask import current_app
from flask.cli import with_appcontext

from address_book.errors import AddressBookError
from address_book.services import list_contacts
from address_book.utils.importer import get_import_limits

from .pipeline import import_workbook
from .tabular import serialize_workbook


@click.group(name="contacts")
def contacts_cli():
    """Address book import/export commands."""


@contacts_cli.command("export")
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--bookmarked-only", is_flag=True, help="Export bookmarked contacts only.")
@with_appcontext
def export_command(destination: Path, bookmarked_only: bool):
    """Write every contact to an .xlsx workbook."""
    contacts = list_contacts(bookmarked_only=bookmarked_only)
    destination.write_bytes(serialize_workbook(contacts))
    current_app.logger.info(f"Exported {len(contacts)} contact(s) to {destination}")
    click.echo(json.dumps({"exported": len(contacts), "path": str(destination)}))


@contacts_cli.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@with_appcontext
def import_command(source: Path):
    """Create contacts from an .xlsx/.xls workbook as one batch."""
    max_bytes, max_rows = get_import_limits()
    try:
        result = import_workbook(
            source.read_bytes(), source.name, max_bytes=max_bytes, max_rows=max_rows
        )
    except AddressBookError as e:
        raise click.ClickException(e.message) from e
    click.echo(json.dumps(result.to_dict()))
