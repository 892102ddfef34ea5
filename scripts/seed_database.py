# scripts/seed_database.py
"""
Database seeding script.
Populates the address book with sample contacts for development.
"""

import argparse
import os
import random
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from faker import Faker

from app import app
from address_book.models import Contact, ContactMethod, MethodType, db, transaction

fake = Faker()

stats = {
    "contacts": 0,
    "methods": 0,
    "errors": [],
}


def clear_database():
    """Remove every contact; methods go with them by cascade"""
    print("Clearing existing contacts...")
    try:
        with transaction() as session:
            session.query(ContactMethod).delete()
            session.query(Contact).delete()
        print("✅ Database cleared")
    except Exception as e:
        print(f"❌ Error clearing database: {str(e)}")
        sys.exit(1)


def _fake_methods():
    methods = []
    for _ in range(random.randint(0, 2)):
        methods.append(ContactMethod(type=MethodType.PHONE, value=fake.phone_number(), label="mobile"))
    if random.random() < 0.8:
        methods.append(ContactMethod(type=MethodType.EMAIL, value=fake.email(), label="personal"))
    if random.random() < 0.4:
        methods.append(ContactMethod(type=MethodType.SOCIAL, value=f"@{fake.user_name()}"))
    if random.random() < 0.3:
        methods.append(ContactMethod(type=MethodType.ADDRESS, value=fake.address().replace("\n", ", ")))
    return methods


def seed_contacts(count, bookmark_ratio=0.2, dry_run=False):
    """Create ``count`` contacts with a random mix of contact methods"""
    print(f"\nSeeding {count} contacts...")
    contacts = []
    for _ in range(count):
        contact = Contact(
            name=fake.name(),
            is_bookmarked=random.random() < bookmark_ratio,
            methods=_fake_methods(),
        )
        contacts.append(contact)
        stats["contacts"] += 1
        stats["methods"] += len(contact.methods)

    if dry_run:
        print(f"  Would create {len(contacts)} contacts")
        return contacts

    try:
        with transaction() as session:
            session.add_all(contacts)
    except Exception as exc:  # noqa: BLE001 - surface commit issues during seeding
        stats["errors"].append(f"Commit failed: {exc}")
        print(f"  ❌ Commit failed: {exc}")
    return contacts


def seed_database(count=50, clear=False, seed=None, dry_run=False):
    """Main function to seed the database"""
    print("=" * 60)
    print("Database Seeding Script")
    print("=" * 60)

    if dry_run:
        print("\n⚠️  DRY RUN MODE - No changes will be made to the database\n")

    if seed is not None:
        random.seed(seed)
        Faker.seed(seed)

    with app.app_context():
        db.create_all()
        if clear and not dry_run:
            clear_database()

        seed_contacts(count, dry_run=dry_run)

        print("\n" + "=" * 60)
        print("Seeding Summary")
        print("=" * 60)
        print(f"Contacts: {stats['contacts']}")
        print(f"Contact methods: {stats['methods']}")

        if stats["errors"]:
            print(f"\n⚠️  Errors encountered: {len(stats['errors'])}")
            for error in stats["errors"]:
                print(f"  - {error}")
        else:
            print("\n✅ Seeding completed successfully!")


def main():
    """Command-line interface"""
    parser = argparse.ArgumentParser(description="Seed the address book with sample contacts")
    parser.add_argument("--count", type=int, default=50, help="Number of contacts (default: 50)")
    parser.add_argument("--clear", action="store_true", help="Clear existing contacts before seeding")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible data")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be created without actually creating",
    )

    args = parser.parse_args()
    seed_database(count=args.count, clear=args.clear, seed=args.seed, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
