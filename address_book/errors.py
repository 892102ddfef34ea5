# address_book/errors.py
"""
Error taxonomy shared by the store, the importer and the HTTP layer.

Every failure surfaces to the caller as exactly one human-readable message.
"""


class AddressBookError(Exception):
    """Base class for failures reported to API callers."""

    status_code = 500
    category = "system"

    def __init__(self, message, *, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self):
        payload = {"message": self.message, "category": self.category}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(AddressBookError):
    """A required field is missing or a value is not acceptable."""

    status_code = 400
    category = "validation"


class NotFoundError(AddressBookError):
    """The target of an operation does not exist."""

    status_code = 404
    category = "not_found"


class StructuralError(AddressBookError):
    """A batch payload or spreadsheet does not have the expected shape."""

    status_code = 400
    category = "structural"


class ResourceLimitError(AddressBookError):
    """An upload exceeds the configured size or row limits."""

    status_code = 413
    category = "resource_limit"


class PersistenceError(AddressBookError):
    """The store failed and the enclosing transaction was rolled back."""

    status_code = 500
    category = "system"
