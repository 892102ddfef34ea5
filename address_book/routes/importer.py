# address_book/routes/importer.py

"""
Spreadsheet upload and download routes
"""

import io

from flask import current_app, jsonify, request, send_file

from address_book.importer import import_workbook, serialize_workbook
from address_book.importer.tabular import EXPORT_FILENAME
from address_book.services import list_contacts
from address_book.utils.importer import get_import_limits, read_upload

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register_importer_routes(app):
    """Register import/export routes"""

    @app.route("/contacts/export", methods=["GET"])
    def api_export_contacts():
        bookmarked_only = request.args.get("bookmarked", "").strip().lower() in {"1", "true"}
        contacts = list_contacts(bookmarked_only=bookmarked_only)
        payload = serialize_workbook(contacts)
        current_app.logger.info(f"Exported {len(contacts)} contacts")
        return send_file(
            io.BytesIO(payload),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=EXPORT_FILENAME,
        )

    @app.route("/contacts/import", methods=["POST"])
    def api_import_contacts():
        data, filename = read_upload(request.files.get("file"))
        max_bytes, max_rows = get_import_limits()
        result = import_workbook(data, filename, max_bytes=max_bytes, max_rows=max_rows)
        return jsonify(result.to_dict())
