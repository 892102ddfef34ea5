"""
Utility helpers for importer limits and upload handling.
"""

from __future__ import annotations

from typing import Tuple

from flask import current_app
from werkzeug.datastructures import FileStorage

from address_book.errors import StructuralError


def _get_config(app=None):
    if app is not None:
        return app.config
    return current_app.config


def get_import_limits(app=None) -> Tuple[int, int]:
    """Return ``(max_bytes, max_rows)`` for spreadsheet uploads."""
    from address_book.importer.tabular import MAX_ROWS, MAX_UPLOAD_BYTES

    config = _get_config(app)
    max_bytes = int(config.get("IMPORT_MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES))
    max_rows = int(config.get("IMPORT_MAX_ROWS", MAX_ROWS))
    return max_bytes, max_rows


def read_upload(file_storage: FileStorage | None) -> tuple[bytes, str]:
    """
    Return the uploaded bytes and the client-supplied filename.

    The filename is only used for extension validation, never as a path.
    """
    if file_storage is None or not file_storage.filename:
        raise StructuralError("No file uploaded.")
    return file_storage.read(), file_storage.filename
