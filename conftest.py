# conftest.py

import io
import os
from datetime import datetime, timedelta, timezone

import pytest
from openpyxl import Workbook

# Set testing environment BEFORE importing app so app.py picks TestingConfig
os.environ["FLASK_ENV"] = "testing"

from app import app as flask_app
from address_book.models import Contact, ContactMethod, MethodType, db


@pytest.fixture(scope="function")
def app():
    """Flask application bound to a fresh in-memory database per test"""
    flask_app.config.update(
        {
            "TESTING": True,
            "IMPORT_MAX_UPLOAD_BYTES": 2 * 1024 * 1024,
            "IMPORT_MAX_ROWS": 2000,
            "ENABLE_FILE_LOGGING": False,
            "LOG_LEVEL": "DEBUG",
        }
    )

    with flask_app.app_context():
        db.drop_all()
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture(autouse=True)
def app_context(app):
    """Automatically provide app context for all tests"""
    with app.app_context():
        yield


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


def _stamp(minutes_ago):
    return datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)


@pytest.fixture
def sample_contacts(app):
    """
    Three contacts with known update times:
    Ann (bookmarked, oldest), bob (newest), Cara (middle, no methods).
    """
    ann = Contact(
        name="Ann",
        is_bookmarked=True,
        methods=[
            ContactMethod(type=MethodType.PHONE, value="555-1", label="home"),
            ContactMethod(type=MethodType.PHONE, value="555-2"),
            ContactMethod(type=MethodType.EMAIL, value="ann@example.org", label="work"),
        ],
    )
    bob = Contact(
        name="bob",
        is_bookmarked=False,
        methods=[
            ContactMethod(type=MethodType.SOCIAL, value="@bob"),
            ContactMethod(type=MethodType.ADDRESS, value="1 Main St"),
        ],
    )
    cara = Contact(name="Cara", is_bookmarked=False)
    db.session.add_all([ann, bob, cara])
    db.session.flush()
    ann.updated_at = _stamp(30)
    bob.updated_at = _stamp(1)
    cara.updated_at = _stamp(10)
    db.session.commit()
    return {"ann": ann.id, "bob": bob.id, "cara": cara.id}


def build_workbook_bytes(rows, headers=None, sheet_title="Contacts"):
    """Serialize ``rows`` (list of lists) under ``headers`` into .xlsx bytes."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title
    if headers is not None:
        sheet.append(list(headers))
    for row in rows:
        sheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_workbook():
    return build_workbook_bytes


def owned_method_count(contact_id):
    """Owner-key scan of the methods table"""
    return ContactMethod.query.filter_by(contact_id=contact_id).count()


@pytest.fixture
def method_count():
    return owned_method_count


def pytest_configure(config):
    """Register custom markers and make sure the testing environment is active"""
    os.environ["FLASK_ENV"] = "testing"

    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
