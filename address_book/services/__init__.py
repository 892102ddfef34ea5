# address_book/services/__init__.py
"""
Contact services: store operations, method reconciliation and edit drafts.
"""

from .contact_store import (
    UNSET,
    create_contact,
    delete_contact,
    get_contact,
    list_contacts,
    sort_for_display,
    toggle_bookmark,
    update_contact,
)
from .drafts import ContactDraft, save_changes, save_draft
from .method_reconciler import replace_methods
from .payloads import ContactCandidate, MethodCandidate, normalize_methods

__all__ = [
    "UNSET",
    "list_contacts",
    "sort_for_display",
    "get_contact",
    "create_contact",
    "update_contact",
    "delete_contact",
    "toggle_bookmark",
    "replace_methods",
    "ContactDraft",
    "save_draft",
    "save_changes",
    "ContactCandidate",
    "MethodCandidate",
    "normalize_methods",
]
