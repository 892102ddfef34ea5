"""Tabular mapping between stored contacts and flat spreadsheet rows.

Pure conversion only; nothing in this module touches the database.

Export writes one row per contact and packs the values of each method type
into a ``;``-delimited cell. Labels are not exported, so an export followed by
an import preserves ``(name, bookmarked, multiset of (type, value))`` but not
labels.
"""

from __future__ import annotations

import io
import logging
import math
from collections.abc import Mapping
from typing import Iterable

import pandas as pd

from address_book.errors import AddressBookError, ResourceLimitError, StructuralError
from address_book.services.payloads import ContactCandidate, MethodCandidate

from .contract import (
    BOOKMARKED_COLUMN,
    METHOD_COLUMNS,
    MULTI_VALUE_DELIMITER,
    NAME_COLUMN,
    get_headers,
    has_column,
    lookup,
)

logger = logging.getLogger(__name__)

SHEET_NAME = "Contacts"
EXPORT_FILENAME = "address_book.xlsx"
ALLOWED_EXTENSIONS: tuple[str, ...] = (".xlsx", ".xls")
MAX_UPLOAD_BYTES = 2 * 1024 * 1024
MAX_ROWS = 2000
TRUTHY_BOOKMARK_VALUES = frozenset({"true", "1"})


def cell_text(value: object | None) -> str:
    """Render a cell as trimmed text; blanks and NaN become ``""``."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def split_multi_value(cell: object | None) -> list[str]:
    pieces = cell_text(cell).split(MULTI_VALUE_DELIMITER)
    return [piece.strip() for piece in pieces if piece.strip()]


def row_to_candidate(row: object) -> ContactCandidate | None:
    """
    Convert one spreadsheet row into a candidate.

    Returns ``None`` for rows without a usable name; those rows are dropped
    without an error.
    """
    if not isinstance(row, Mapping):
        return None

    name = cell_text(lookup(row, NAME_COLUMN.header))
    if not name:
        return None

    bookmarked = cell_text(lookup(row, BOOKMARKED_COLUMN.header)).lower()

    methods: list[MethodCandidate] = []
    for column in METHOD_COLUMNS:
        for value in split_multi_value(lookup(row, column.header)):
            methods.append(MethodCandidate(type=column.method_type, value=value))

    return ContactCandidate(
        name=name,
        is_bookmarked=bookmarked in TRUTHY_BOOKMARK_VALUES,
        methods=tuple(methods),
    )


def contact_to_row(contact) -> dict[str, object]:
    row: dict[str, object] = {
        NAME_COLUMN.header: contact.name,
        BOOKMARKED_COLUMN.header: 1 if contact.is_bookmarked else 0,
    }
    for column in METHOD_COLUMNS:
        row[column.header] = MULTI_VALUE_DELIMITER.join(contact.values_of(column.method_type))
    return row


def contacts_to_rows(contacts: Iterable) -> list[dict[str, object]]:
    return [contact_to_row(contact) for contact in contacts]


def serialize_workbook(contacts: Iterable) -> bytes:
    """Write contacts to an ``.xlsx`` workbook and return its bytes."""
    frame = pd.DataFrame(contacts_to_rows(contacts))
    # reindex keeps the header row even when there are no contacts
    frame = frame.reindex(columns=list(get_headers()), fill_value="")

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name=SHEET_NAME, index=False)
    return buffer.getvalue()


def allowed_extension(filename: str | None) -> bool:
    lowered = (filename or "").strip().lower()
    return any(lowered.endswith(ext) for ext in ALLOWED_EXTENSIONS)


def _format_limit(max_bytes: int) -> str:
    return f"{max_bytes / (1024 * 1024):g}MB"


def _read_first_sheet(data: bytes) -> pd.DataFrame:
    try:
        with pd.ExcelFile(io.BytesIO(data)) as workbook:
            sheet_names = workbook.sheet_names
            if not sheet_names:
                raise StructuralError("No sheet found in the Excel file.")
            # Cell text is data; "NA", "None" or "null" are real names and values
            frame = workbook.parse(sheet_names[0], dtype=str, keep_default_na=False, na_filter=False)
    except AddressBookError:
        raise
    except Exception as e:
        logger.warning(f"Workbook could not be read: {str(e)}", exc_info=True)
        raise StructuralError("Import failed. Please check the file format.") from e

    # Fully blank rows are not data rows
    return frame.replace(r"^\s*$", pd.NA, regex=True).dropna(how="all")


def parse_workbook(
    data: bytes,
    filename: str | None,
    *,
    max_bytes: int = MAX_UPLOAD_BYTES,
    max_rows: int = MAX_ROWS,
) -> list[dict[str, object]]:
    """
    Validate an uploaded workbook and return the rows of its first sheet.

    Checks run in a fixed order and stop at the first failure: size,
    extension, sheet presence, row ceiling, row floor, then the Name header.
    """
    size = len(data)
    if size > max_bytes:
        raise ResourceLimitError(
            f"File too large. Please upload <= {_format_limit(max_bytes)} Excel.",
            details={"size": size, "limit": max_bytes},
        )

    if not allowed_extension(filename):
        raise StructuralError("Invalid file type. Please upload an .xlsx/.xls file.")

    frame = _read_first_sheet(data)

    row_count = len(frame.index)
    if row_count > max_rows:
        raise ResourceLimitError(
            f"Too many rows ({row_count}). Please limit to <= {max_rows}.",
            details={"rows": row_count, "limit": max_rows},
        )

    if row_count == 0:
        raise StructuralError("Excel is empty.")

    if not has_column(frame.columns, NAME_COLUMN.header):
        expected = ", ".join(get_headers())
        raise StructuralError(
            f"Invalid template. Missing 'Name' column. Expected: {expected}.",
            details={"expected": list(get_headers())},
        )

    return frame.fillna("").to_dict(orient="records")
