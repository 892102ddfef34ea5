# address_book/__init__.py
"""
Personal address book: contacts with typed communication methods,
spreadsheet import/export and atomic bulk creation.
"""

__version__ = "1.0.0"
