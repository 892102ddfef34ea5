"""Tests for the contact store service"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from address_book.errors import NotFoundError, PersistenceError, ValidationError
from address_book.models import Contact, ContactMethod, MethodType, db
from address_book.services import (
    create_contact,
    delete_contact,
    get_contact,
    list_contacts,
    sort_for_display,
    toggle_bookmark,
    update_contact,
)


class TestListContacts:
    def test_orders_bookmarked_then_recently_updated(self, app, sample_contacts):
        names = [c.name for c in list_contacts()]
        assert names == ["Ann", "bob", "Cara"]

    def test_bookmarked_only(self, app, sample_contacts):
        contacts = list_contacts(bookmarked_only=True)
        assert [c.name for c in contacts] == ["Ann"]

    def test_methods_are_loaded(self, app, sample_contacts):
        ann = list_contacts()[0]
        assert [m.value for m in ann.methods] == ["555-1", "555-2", "ann@example.org"]

    def test_display_sort_uses_name_within_bookmark_groups(self, app, sample_contacts):
        names = [c.name for c in sort_for_display(list_contacts())]
        assert names == ["Ann", "bob", "Cara"]

        update_contact(sample_contacts["cara"], is_bookmarked=True)
        names = [c.name for c in sort_for_display(list_contacts())]
        assert names == ["Ann", "Cara", "bob"]


class TestCreateContact:
    def test_creates_contact_with_methods(self, app):
        contact = create_contact(
            " Dana ",
            is_bookmarked=True,
            methods=[
                {"type": "email", "value": " d@example.org ", "label": "work"},
                {"type": "phone", "value": ""},
            ],
        )
        assert contact.id is not None
        assert contact.name == "Dana"
        assert contact.is_bookmarked is True
        assert [(m.type, m.value, m.label) for m in contact.methods] == [
            (MethodType.EMAIL, "d@example.org", "work")
        ]

    def test_blank_name_rejected_without_side_effects(self, app):
        with pytest.raises(ValidationError):
            create_contact("   ", methods=[{"type": "phone", "value": "1"}])
        assert Contact.query.count() == 0
        assert ContactMethod.query.count() == 0

    def test_unknown_method_type_rejected(self, app):
        with pytest.raises(ValidationError):
            create_contact("Dana", methods=[{"type": "pager", "value": "1"}])
        assert Contact.query.count() == 0

    def test_store_failure_is_rolled_back(self, app):
        with patch.object(db.session, "flush", side_effect=OperationalError("INSERT", {}, Exception("disk"))):
            with pytest.raises(PersistenceError):
                create_contact("Dana")
        assert Contact.query.count() == 0


class TestUpdateContact:
    def test_updates_only_supplied_fields(self, app, sample_contacts):
        contact = update_contact(sample_contacts["ann"], name="  Anne ")
        assert contact.name == "Anne"
        assert contact.is_bookmarked is True

        contact = update_contact(sample_contacts["ann"], is_bookmarked=False)
        assert contact.name == "Anne"
        assert contact.is_bookmarked is False

    def test_update_does_not_touch_methods(self, app, sample_contacts, method_count):
        update_contact(sample_contacts["ann"], name="Anne")
        assert method_count(sample_contacts["ann"]) == 3

    def test_update_refreshes_updated_at(self, app, sample_contacts):
        before = get_contact(sample_contacts["cara"]).updated_at
        after = update_contact(sample_contacts["cara"], name="Cara B").updated_at
        assert after > before

    def test_unknown_id(self, app):
        with pytest.raises(NotFoundError):
            update_contact(999, name="Nobody")

    def test_blank_name(self, app, sample_contacts):
        with pytest.raises(ValidationError):
            update_contact(sample_contacts["ann"], name=" ")
        assert get_contact(sample_contacts["ann"]).name == "Ann"


class TestDeleteContact:
    def test_delete_cascades_methods(self, app, sample_contacts, method_count):
        delete_contact(sample_contacts["ann"])
        assert db.session.get(Contact, sample_contacts["ann"]) is None
        assert method_count(sample_contacts["ann"]) == 0
        # Other contacts keep their methods
        assert method_count(sample_contacts["bob"]) == 2

    def test_no_orphans_after_deleting_everything(self, app, sample_contacts):
        for contact_id in sample_contacts.values():
            delete_contact(contact_id)
        assert ContactMethod.query.count() == 0

    def test_unknown_id_raises(self, app):
        with pytest.raises(NotFoundError):
            delete_contact(12345)

    def test_second_delete_raises(self, app, sample_contacts):
        delete_contact(sample_contacts["cara"])
        with pytest.raises(NotFoundError):
            delete_contact(sample_contacts["cara"])


class TestToggleBookmark:
    def test_flips_flag(self, app, sample_contacts):
        contact = toggle_bookmark(sample_contacts["bob"])
        assert contact.is_bookmarked is True
        assert [m.value for m in contact.methods] == ["@bob", "1 Main St"]

    def test_twice_restores_original(self, app, sample_contacts):
        toggle_bookmark(sample_contacts["ann"])
        contact = toggle_bookmark(sample_contacts["ann"])
        assert contact.is_bookmarked is True

    def test_uses_single_conditional_update(self, app, sample_contacts):
        """The new value is computed by the database, not from a prior read"""
        statements = []

        def record(conn, cursor, statement, parameters, context, executemany):
            statements.append(statement)

        from sqlalchemy import event

        engine = db.engine
        event.listen(engine, "before_cursor_execute", record)
        try:
            toggle_bookmark(sample_contacts["cara"])
        finally:
            event.remove(engine, "before_cursor_execute", record)

        updates = [s for s in statements if s.lstrip().upper().startswith("UPDATE CONTACTS")]
        assert len(updates) == 1
        first_update = statements.index(updates[0])
        assert not any(
            s.lstrip().upper().startswith("SELECT") for s in statements[:first_update]
        )

    def test_unknown_id(self, app):
        with pytest.raises(NotFoundError):
            toggle_bookmark(404)
