# address_book/utils/error_handler.py
"""
JSON error responses. Each failure produces exactly one human-readable message.
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException

from address_book.errors import AddressBookError
from address_book.models import db

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


def init_error_handlers(app):
    """Register handlers for the address book error taxonomy"""

    @app.errorhandler(AddressBookError)
    def handle_address_book_error(error):
        if error.status_code >= 500:
            app.logger.error(f"{type(error).__name__}: {error.message}")
        else:
            app.logger.info(f"Rejected request ({error.category}): {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({"message": error.description, "category": "http"}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.error(f"Unhandled error: {str(error)}", exc_info=True)
        return jsonify({"message": GENERIC_ERROR_MESSAGE, "category": "system"}), 500
