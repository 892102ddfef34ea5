# scripts/init_database.py

"""
Database initialization script.
Creates the contacts and contact_methods tables for the configured database.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import app
from address_book.models import Contact, ContactMethod, db


def init_database():
    with app.app_context():
        print("Creating database tables...")
        db.create_all()
        print(f"Tables ready: {Contact.__tablename__}, {ContactMethod.__tablename__}")
        print(f"Existing contacts: {Contact.query.count()}")

        print("\nDatabase initialization complete!")
        print("\nNext steps:")
        print("  1. Seed sample contacts: python scripts/seed_database.py")
        print("  2. Or import a workbook: flask --app app contacts import contacts.xlsx")


if __name__ == "__main__":
    init_database()
