import json
import logging

from sqlalchemy.exc import OperationalError

from address_book.errors import (
    AddressBookError,
    NotFoundError,
    PersistenceError,
    ResourceLimitError,
    StructuralError,
    ValidationError,
)
from address_book.utils.logging_config import JsonFormatter, setup_logging


class TestErrorTaxonomy:
    def test_status_codes(self):
        assert ValidationError("x").status_code == 400
        assert StructuralError("x").status_code == 400
        assert NotFoundError("x").status_code == 404
        assert ResourceLimitError("x").status_code == 413
        assert PersistenceError("x").status_code == 500

    def test_to_dict(self):
        error = ResourceLimitError("Too many rows (3).", details={"rows": 3})
        assert error.to_dict() == {
            "message": "Too many rows (3).",
            "category": "resource_limit",
            "details": {"rows": 3},
        }
        assert "details" not in NotFoundError("gone").to_dict()
        assert isinstance(error, AddressBookError)


class TestErrorResponses:
    def test_persistence_failure_is_single_message(self, client, monkeypatch):
        from address_book.routes import contacts as contact_routes

        def broken_list(*args, **kwargs):
            raise PersistenceError("The change could not be saved. Please try again.")

        monkeypatch.setattr(contact_routes, "list_contacts", broken_list)
        response = client.get("/contacts")
        assert response.status_code == 500
        assert response.get_json() == {
            "message": "The change could not be saved. Please try again.",
            "category": "system",
        }

    def test_unexpected_error_is_generic(self, client, monkeypatch):
        from address_book.routes import contacts as contact_routes

        def broken_list(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

        monkeypatch.setattr(contact_routes, "list_contacts", broken_list)
        response = client.get("/contacts")
        assert response.status_code == 500
        body = response.get_json()
        assert body["category"] == "system"
        assert "disk" not in body["message"]

    def test_method_not_allowed(self, client):
        response = client.patch("/contacts")
        assert response.status_code == 405
        assert response.get_json()["category"] == "http"


class TestLogging:
    def test_json_formatter(self):
        record = logging.LogRecord("address_book", logging.INFO, __file__, 10, "Created %s", ("x",), None)
        payload = json.loads(JsonFormatter().format(record))
        assert payload["level"] == "INFO"
        assert payload["message"] == "Created x"
        assert payload["logger"] == "address_book"

    def test_setup_logging_is_idempotent(self, app):
        app.config["ENABLE_FILE_LOGGING"] = False
        app.config["ENABLE_CONSOLE_LOGGING"] = True
        setup_logging(app)
        setup_logging(app)
        assert len(app.logger.handlers) == 1
        assert app.logger.level == logging.DEBUG

    def test_file_logging(self, app, tmp_path):
        app.config.update({"ENABLE_FILE_LOGGING": True, "LOG_DIR": str(tmp_path), "LOG_FORMAT": "json"})
        try:
            setup_logging(app)
            app.logger.info("hello")
            for handler in app.logger.handlers:
                handler.flush()
            line = (tmp_path / "address_book.log").read_text().strip().splitlines()[-1]
            assert json.loads(line)["message"] == "hello"
        finally:
            app.config.update({"ENABLE_FILE_LOGGING": False, "LOG_FORMAT": "text"})
            setup_logging(app)
