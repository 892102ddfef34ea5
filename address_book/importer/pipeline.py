"""Bulk import pipeline: candidate extraction and a single all-or-nothing commit."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from flask import current_app

from address_book.errors import StructuralError
from address_book.models import transaction
from address_book.services.contact_store import build_contact
from address_book.services.payloads import ContactCandidate, candidate_from_payload

from .tabular import parse_workbook, row_to_candidate

NO_VALID_ROWS_MESSAGE = "No valid rows to import."


@dataclass(frozen=True)
class BulkImportResult:
    """Aggregate outcome of one bulk import."""

    created_count: int
    rows_received: int
    rows_skipped: int

    def to_dict(self) -> dict[str, int]:
        # Individual identities and per-row diagnostics are not reported
        return {"createdCount": self.created_count}


def _require_sequence(rows: object, noun: str) -> Sequence[object]:
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Sequence):
        raise StructuralError(f"{noun} must be a list.")
    return rows


def extract_candidates(
    rows: Sequence[object],
    convert: Callable[[object], ContactCandidate | None] = row_to_candidate,
) -> list[ContactCandidate]:
    """Convert rows in order, dropping those without a usable name."""
    candidates = []
    for row in rows:
        candidate = convert(row)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def commit_candidates(candidates: Iterable[ContactCandidate]) -> int:
    """
    Create every candidate inside one transaction.

    A failure on any candidate rolls back the whole batch.
    """
    created = 0
    with transaction() as session:
        for candidate in candidates:
            session.add(build_contact(candidate))
            session.flush()
            created += 1
    return created


def _run(rows: Sequence[object], convert, source: str) -> BulkImportResult:
    candidates = extract_candidates(rows, convert)
    skipped = len(rows) - len(candidates)
    if not candidates:
        current_app.logger.info(f"Bulk import from {source} rejected: {len(rows)} row(s), none valid")
        raise StructuralError(NO_VALID_ROWS_MESSAGE, details={"rows": len(rows)})

    created = commit_candidates(candidates)
    current_app.logger.info(
        f"Bulk import from {source} committed {created} contact(s); {skipped} row(s) skipped"
    )
    return BulkImportResult(created_count=created, rows_received=len(rows), rows_skipped=skipped)


def bulk_import_rows(rows: object, *, source: str = "rows") -> BulkImportResult:
    """Import raw spreadsheet-shaped rows (``Name``, ``Bookmarked``, ``Phones`` ...)."""
    return _run(_require_sequence(rows, "Import rows"), row_to_candidate, source)


def bulk_import_candidates(contacts: object) -> BulkImportResult:
    """Import pre-normalized ``{name, isBookmarked, methods}`` payloads."""
    return _run(_require_sequence(contacts, "contacts"), candidate_from_payload, "contacts payload")


def import_workbook(
    data: bytes,
    filename: str | None,
    *,
    max_bytes: int | None = None,
    max_rows: int | None = None,
) -> BulkImportResult:
    """Parse an uploaded workbook and commit its rows as one batch."""
    limits = {}
    if max_bytes is not None:
        limits["max_bytes"] = max_bytes
    if max_rows is not None:
        limits["max_rows"] = max_rows

    rows = parse_workbook(data, filename, **limits)
    return bulk_import_rows(rows, source=filename or "workbook")
