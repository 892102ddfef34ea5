# address_book/models/enums.py
"""
Enums for contact models.
"""

from enum import Enum as PyEnum


class MethodType(PyEnum):
    """Communication method type"""

    PHONE = "phone"
    EMAIL = "email"
    SOCIAL = "social"
    ADDRESS = "address"

    @classmethod
    def values(cls):
        return tuple(member.value for member in cls)
