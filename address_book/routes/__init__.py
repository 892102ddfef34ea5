# address_book/routes/__init__.py
"""
Application routes package
"""

from .contacts import register_contact_routes
from .importer import register_importer_routes


def init_routes(app):
    """Initialize all application routes"""
    register_importer_routes(app)
    register_contact_routes(app)
