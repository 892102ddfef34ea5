# address_book/models/contact.py
"""
Contact and ContactMethod models.

A contact exclusively owns its methods; methods are never edited in place,
only created alongside a contact or by a full set replacement.
"""

from sqlalchemy import Enum, Index
from sqlalchemy.orm import validates

from .base import BaseModel, db
from .enums import MethodType


class Contact(BaseModel):
    """A named entry in the address book"""

    __tablename__ = "contacts"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    is_bookmarked = db.Column(db.Boolean, default=False, nullable=False)

    methods = db.relationship(
        "ContactMethod",
        back_populates="contact",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ContactMethod.id",
    )

    # Matches the default listing order
    __table_args__ = (Index("idx_contact_bookmark_updated", "is_bookmarked", "updated_at"),)

    def __repr__(self):
        return f"<Contact {self.name}>"

    @validates("name")
    def validate_name(self, key, value):
        """Store names trimmed; blank names are never persisted"""
        value = (value or "").strip()
        if not value:
            raise ValueError("Name is required.")
        return value

    def values_of(self, method_type):
        """Values of one method type, in store order"""
        return [m.value for m in self.methods if m.type == method_type]

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "isBookmarked": bool(self.is_bookmarked),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "methods": [method.to_dict() for method in self.methods],
        }


class ContactMethod(BaseModel):
    """One typed communication value owned by a contact"""

    __tablename__ = "contact_methods"

    id = db.Column(db.Integer, primary_key=True)
    contact_id = db.Column(
        db.Integer, db.ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = db.Column(Enum(MethodType, name="contact_method_type_enum"), nullable=False)
    value = db.Column(db.String(500), nullable=False)
    label = db.Column(db.String(100), nullable=True)

    # Relationships
    contact = db.relationship("Contact", back_populates="methods")

    __table_args__ = (Index("idx_contact_method_owner_type", "contact_id", "type"),)

    def __repr__(self):
        return f"<ContactMethod {self.value} ({self.type.value})>"

    @validates("value")
    def validate_value(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ValueError("Contact method value cannot be empty.")
        return value

    @validates("label")
    def validate_label(self, key, value):
        if value is None:
            return None
        return value.strip() or None

    def to_dict(self):
        return {
            "id": self.id,
            "contactId": self.contact_id,
            "type": self.type.value,
            "value": self.value,
            "label": self.label,
        }
