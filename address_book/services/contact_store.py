# address_book/services/contact_store.py
"""
Contact Store - CRUD and bookmark toggle over the Contact/ContactMethod relation.

Every mutation runs inside ``transaction()`` and every return value is a fresh
read of the stored row, never the object the caller handed in.
"""

from __future__ import annotations

from typing import Iterable

from flask import current_app
from sqlalchemy import not_, update
from sqlalchemy.orm import selectinload

from address_book.errors import NotFoundError
from address_book.models import Contact, ContactMethod, db, transaction, utcnow

from .payloads import ContactCandidate, MethodCandidate, normalize_methods, require_name

UNSET = object()


def build_contact(candidate: ContactCandidate) -> Contact:
    """Instantiate (unsaved) ORM objects for a normalized candidate."""
    return Contact(
        name=candidate.name,
        is_bookmarked=bool(candidate.is_bookmarked),
        methods=[build_method(method) for method in candidate.methods],
    )


def build_method(method: MethodCandidate, contact_id: int | None = None) -> ContactMethod:
    return ContactMethod(contact_id=contact_id, type=method.type, value=method.value, label=method.label)


def list_contacts(bookmarked_only: bool = False) -> list[Contact]:
    """Bookmarked first, then most recently updated"""
    query = Contact.query.options(selectinload(Contact.methods))
    if bookmarked_only:
        query = query.filter(Contact.is_bookmarked.is_(True))
    return query.order_by(
        Contact.is_bookmarked.desc(), Contact.updated_at.desc(), Contact.id.desc()
    ).all()


def sort_for_display(contacts: Iterable[Contact]) -> list[Contact]:
    """Presentation order: bookmarked first, then name ascending (case-insensitive)"""
    return sorted(contacts, key=lambda c: (not c.is_bookmarked, c.name.casefold(), c.name))


def get_contact(contact_id: int) -> Contact:
    contact = db.session.get(
        Contact,
        contact_id,
        options=[selectinload(Contact.methods)],
        populate_existing=True,
    )
    if contact is None:
        raise NotFoundError(f"Contact {contact_id} not found.")
    return contact


def create_contact(name, is_bookmarked=False, methods=()) -> Contact:
    candidate = ContactCandidate(
        name=require_name(name),
        is_bookmarked=bool(is_bookmarked),
        methods=normalize_methods(methods),
    )
    with transaction() as session:
        contact = build_contact(candidate)
        session.add(contact)
        session.flush()
        contact_id = contact.id

    current_app.logger.info(
        f"Created contact {contact_id} with {len(candidate.methods)} method(s)"
    )
    return get_contact(contact_id)


def apply_update(contact: Contact, name=UNSET, is_bookmarked=UNSET) -> None:
    """Assign only the supplied fields; caller owns the transaction."""
    if name is not UNSET:
        contact.name = require_name(name)
    if is_bookmarked is not UNSET:
        contact.is_bookmarked = bool(is_bookmarked)


def update_contact(contact_id: int, name=UNSET, is_bookmarked=UNSET) -> Contact:
    if name is not UNSET:
        name = require_name(name)

    with transaction() as session:
        contact = session.get(Contact, contact_id)
        if contact is None:
            raise NotFoundError(f"Contact {contact_id} not found.")
        apply_update(contact, name=name, is_bookmarked=is_bookmarked)

    current_app.logger.info(f"Updated contact {contact_id}")
    return get_contact(contact_id)


def delete_contact(contact_id: int) -> None:
    """Delete a contact and, by cascade, every method it owns."""
    with transaction() as session:
        contact = session.get(Contact, contact_id)
        if contact is None:
            raise NotFoundError(f"Contact {contact_id} not found.")
        session.delete(contact)

    current_app.logger.info(f"Deleted contact {contact_id}")


def toggle_bookmark(contact_id: int) -> Contact:
    """
    Flip ``is_bookmarked`` with one conditional UPDATE evaluated by the database.

    There is no read between deciding and writing the new value, so two
    concurrent toggles always net out to no change.
    """
    with transaction() as session:
        result = session.execute(
            update(Contact)
            .where(Contact.id == contact_id)
            .values(is_bookmarked=not_(Contact.is_bookmarked), updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError(f"Contact {contact_id} not found.")

    current_app.logger.info(f"Toggled bookmark for contact {contact_id}")
    return get_contact(contact_id)
