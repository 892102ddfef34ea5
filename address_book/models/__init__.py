# address_book/models/__init__.py
"""
Database models package
"""

from .base import BaseModel, db, transaction, utcnow
from .contact import Contact, ContactMethod
from .enums import MethodType

__all__ = [
    "db",
    "BaseModel",
    "transaction",
    "utcnow",
    "Contact",
    "ContactMethod",
    "MethodType",
]
