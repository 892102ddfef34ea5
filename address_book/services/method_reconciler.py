# address_book/services/method_reconciler.py
"""
Method Reconciler - whole-set replacement of a contact's communication methods.
"""

from __future__ import annotations

from typing import Iterable

from flask import current_app
from sqlalchemy import delete, update

from address_book.errors import NotFoundError
from address_book.models import Contact, ContactMethod, transaction, utcnow

from .contact_store import build_method, get_contact
from .payloads import MethodCandidate, normalize_methods


def apply_method_set(session, contact_id: int, methods: Iterable[MethodCandidate]) -> int:
    """
    Swap the stored method set for ``methods`` inside the caller's transaction.

    The contact row is touched first: a zero rowcount means the contact does
    not exist, and the row lock it takes serializes concurrent replacements.
    Returns the number of methods inserted.
    """
    touched = session.execute(
        update(Contact)
        .where(Contact.id == contact_id)
        .values(updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    if touched.rowcount == 0:
        raise NotFoundError(f"Contact {contact_id} not found.")

    session.execute(
        delete(ContactMethod)
        .where(ContactMethod.contact_id == contact_id)
        .execution_options(synchronize_session=False)
    )
    new_methods = [build_method(method, contact_id=contact_id) for method in methods]
    session.add_all(new_methods)
    session.flush()
    return len(new_methods)


def replace_methods(contact_id: int, methods) -> Contact:
    """Atomically replace every method of ``contact_id`` with ``methods``."""
    normalized = normalize_methods(methods)

    with transaction() as session:
        inserted = apply_method_set(session, contact_id, normalized)

    current_app.logger.info(f"Replaced methods for contact {contact_id} ({inserted} stored)")
    return get_contact(contact_id)
