"""Request-scoped edit buffer for a single contact.

A draft is built from the last successful read of a contact (or from an
incoming request body), edited in isolation, and either saved as one unit of
work or discarded. It is never merged back into stored state piecemeal.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from address_book.errors import StructuralError
from address_book.models import Contact, MethodType, transaction

from .contact_store import UNSET, apply_update, create_contact, get_contact, update_contact
from .method_reconciler import apply_method_set
from .payloads import coerce_flag, normalize_methods, require_name


def blank_method_row() -> dict[str, Any]:
    return {"type": MethodType.PHONE.value, "value": "", "label": ""}


@dataclass
class ContactDraft:
    """Editable copy of a contact; ``contact_id`` is ``None`` for new contacts."""

    contact_id: int | None = None
    name: str = ""
    is_bookmarked: bool = False
    methods: list[dict[str, Any]] = field(default_factory=lambda: [blank_method_row()])

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactDraft":
        rows = [
            {"type": m.type.value, "value": m.value, "label": m.label or ""}
            for m in contact.methods
        ]
        return cls(
            contact_id=contact.id,
            name=contact.name or "",
            is_bookmarked=bool(contact.is_bookmarked),
            methods=rows or [blank_method_row()],
        )

    @classmethod
    def from_payload(cls, payload: object, contact_id: int | None = None) -> "ContactDraft":
        if not isinstance(payload, Mapping):
            raise StructuralError("Request body must be a JSON object.")
        methods = payload.get("methods")
        if methods is not None and not isinstance(methods, list):
            raise StructuralError("'methods' must be a list.")
        return cls(
            contact_id=contact_id,
            name=str(payload.get("name") or ""),
            is_bookmarked=coerce_flag(payload.get("isBookmarked", False)),
            methods=[dict(m) if isinstance(m, Mapping) else m for m in (methods or [])],
        )

    @property
    def is_new(self) -> bool:
        return self.contact_id is None


def save_draft(draft: ContactDraft) -> Contact:
    """
    Persist a draft and return the stored contact.

    New drafts become a single create. Existing drafts update the basic fields
    and replace the method set inside one transaction.
    """
    name = require_name(draft.name)
    methods = normalize_methods(draft.methods)

    if draft.is_new:
        return create_contact(name, is_bookmarked=draft.is_bookmarked, methods=methods)

    contact_id = draft.contact_id
    with transaction() as session:
        apply_method_set(session, contact_id, methods)
        contact = session.get(Contact, contact_id)
        apply_update(contact, name=name, is_bookmarked=draft.is_bookmarked)

    return get_contact(contact_id)


def save_changes(contact_id: int, payload: Mapping[str, Any]) -> Contact:
    """
    Apply a partial update from a request body.

    Only supplied fields change. When ``methods`` is present the method set is
    replaced in the same transaction as the field update.
    """
    name = payload["name"] if "name" in payload else UNSET
    is_bookmarked = coerce_flag(payload["isBookmarked"]) if "isBookmarked" in payload else UNSET
    if "methods" not in payload:
        return update_contact(contact_id, name=name, is_bookmarked=is_bookmarked)

    draft = ContactDraft.from_contact(get_contact(contact_id))
    if name is not UNSET:
        draft.name = name
    if is_bookmarked is not UNSET:
        draft.is_bookmarked = is_bookmarked
    draft.methods = ContactDraft.from_payload({"methods": payload["methods"]}).methods
    return save_draft(draft)
