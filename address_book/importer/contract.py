"""Spreadsheet column contract shared by import and export.

One row per contact. Multi-valued columns pack the values of one method type
into a single ``;``-delimited cell.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Tuple

from address_book.models import MethodType

MULTI_VALUE_DELIMITER = ";"


@dataclass(frozen=True)
class ColumnSpec:
    """Metadata describing one spreadsheet column."""

    header: str
    method_type: MethodType | None = None


NAME_COLUMN = ColumnSpec(header="Name")
BOOKMARKED_COLUMN = ColumnSpec(header="Bookmarked")

METHOD_COLUMNS: Tuple[ColumnSpec, ...] = (
    ColumnSpec(header="Phones", method_type=MethodType.PHONE),
    ColumnSpec(header="Emails", method_type=MethodType.EMAIL),
    ColumnSpec(header="Socials", method_type=MethodType.SOCIAL),
    ColumnSpec(header="Addresses", method_type=MethodType.ADDRESS),
)

COLUMNS: Tuple[ColumnSpec, ...] = (NAME_COLUMN, BOOKMARKED_COLUMN, *METHOD_COLUMNS)


def get_headers() -> Tuple[str, ...]:
    return tuple(column.header for column in COLUMNS)


def normalize_header(header: object) -> str:
    token = str(header if header is not None else "").strip()
    return token.lstrip("\ufeff").lower()


def lookup(row: Mapping[object, object], header: str) -> object | None:
    """Case-insensitive cell lookup; exact key wins over other casings."""
    if header in row:
        return row[header]
    wanted = normalize_header(header)
    for key, value in row.items():
        if normalize_header(key) == wanted:
            return value
    return None


def has_column(keys, header: str) -> bool:
    wanted = normalize_header(header)
    return any(normalize_header(key) == wanted for key in keys)
