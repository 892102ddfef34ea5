# address_book/routes/contacts.py

"""
Contact API routes (JSON)
"""

from flask import current_app, jsonify, request

from address_book.errors import StructuralError
from address_book.importer import bulk_import_candidates, bulk_import_rows
from address_book.services import (
    ContactDraft,
    delete_contact,
    get_contact,
    list_contacts,
    replace_methods,
    save_changes,
    save_draft,
    sort_for_display,
    toggle_bookmark,
)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise StructuralError("Request body must be a JSON object.")
    return data


def _query_flag(name):
    return request.args.get(name, "").strip().lower() in {"1", "true"}


def register_contact_routes(app):
    """Register contact routes"""

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"ok": True})

    @app.route("/contacts", methods=["GET"])
    def api_list_contacts():
        """
        List contacts, bookmarked first then most recently updated.
        ``?bookmarked=1`` limits to bookmarked contacts; ``?sort=name`` applies
        the display order (bookmarked first, then name).
        """
        contacts = list_contacts(bookmarked_only=_query_flag("bookmarked"))
        if request.args.get("sort") == "name":
            contacts = sort_for_display(contacts)
        current_app.logger.debug(f"Returning {len(contacts)} contacts")
        return jsonify([contact.to_dict() for contact in contacts])

    @app.route("/contacts", methods=["POST"])
    def api_create_contact():
        draft = ContactDraft.from_payload(_json_body())
        contact = save_draft(draft)
        return jsonify(contact.to_dict()), 201

    @app.route("/contacts/<int:contact_id>", methods=["GET"])
    def api_get_contact(contact_id):
        return jsonify(get_contact(contact_id).to_dict())

    @app.route("/contacts/<int:contact_id>", methods=["PUT"])
    def api_update_contact(contact_id):
        contact = save_changes(contact_id, _json_body())
        return jsonify(contact.to_dict())

    @app.route("/contacts/<int:contact_id>", methods=["DELETE"])
    def api_delete_contact(contact_id):
        delete_contact(contact_id)
        return jsonify({"ok": True})

    @app.route("/contacts/<int:contact_id>/bookmark", methods=["PATCH"])
    def api_toggle_bookmark(contact_id):
        return jsonify(toggle_bookmark(contact_id).to_dict())

    @app.route("/contacts/<int:contact_id>/methods", methods=["PUT"])
    def api_replace_methods(contact_id):
        data = _json_body()
        contact = replace_methods(contact_id, data.get("methods", []))
        return jsonify(contact.to_dict())

    @app.route("/contacts/bulk", methods=["POST"])
    def api_bulk_import():
        """
        Create many contacts in one transaction.
        Accepts ``{"contacts": [{name, isBookmarked, methods}]}`` or raw
        spreadsheet-shaped ``{"rows": [{Name, Bookmarked, Phones, ...}]}``.
        """
        data = _json_body()
        if "rows" in data:
            result = bulk_import_rows(data["rows"], source="json rows")
        else:
            result = bulk_import_candidates(data.get("contacts", []))
        return jsonify(result.to_dict())
