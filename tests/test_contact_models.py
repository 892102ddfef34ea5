import pytest
from sqlalchemy import delete

from address_book.models import Contact, ContactMethod, MethodType, db


class TestContactModel:
    """Tests for Contact"""

    def test_name_is_trimmed(self, app):
        contact = Contact(name="  Ann  ")
        db.session.add(contact)
        db.session.commit()
        assert contact.name == "Ann"

    def test_blank_name_rejected(self, app):
        with pytest.raises(ValueError):
            Contact(name="   ")

    def test_defaults(self, app):
        contact = Contact(name="Ann")
        db.session.add(contact)
        db.session.commit()
        assert contact.is_bookmarked is False
        assert contact.created_at is not None
        assert contact.updated_at is not None

    def test_to_dict_wire_shape(self, app, sample_contacts):
        contact = db.session.get(Contact, sample_contacts["ann"])
        data = contact.to_dict()
        assert data["name"] == "Ann"
        assert data["isBookmarked"] is True
        assert [m["value"] for m in data["methods"]] == ["555-1", "555-2", "ann@example.org"]
        assert data["methods"][0] == {
            "id": data["methods"][0]["id"],
            "contactId": contact.id,
            "type": "phone",
            "value": "555-1",
            "label": "home",
        }
        assert data["methods"][1]["label"] is None

    def test_values_of_keeps_store_order(self, app, sample_contacts):
        contact = db.session.get(Contact, sample_contacts["ann"])
        assert contact.values_of(MethodType.PHONE) == ["555-1", "555-2"]
        assert contact.values_of(MethodType.ADDRESS) == []


class TestContactMethodModel:
    """Tests for ContactMethod"""

    def test_value_trimmed_and_blank_label_nulled(self, app):
        method = ContactMethod(type=MethodType.EMAIL, value=" a@b.com ", label="  ")
        assert method.value == "a@b.com"
        assert method.label is None

    def test_empty_value_rejected(self, app):
        with pytest.raises(ValueError):
            ContactMethod(type=MethodType.PHONE, value="   ")

    def test_orm_delete_cascades_to_methods(self, app, sample_contacts, method_count):
        contact = db.session.get(Contact, sample_contacts["ann"])
        db.session.delete(contact)
        db.session.commit()
        assert method_count(sample_contacts["ann"]) == 0

    def test_database_delete_cascades_to_methods(self, app, sample_contacts, method_count):
        """ON DELETE CASCADE also covers deletes that bypass the ORM"""
        db.session.execute(delete(Contact).where(Contact.id == sample_contacts["bob"]))
        db.session.commit()
        assert method_count(sample_contacts["bob"]) == 0
        assert ContactMethod.query.count() == 3
