#!/usr/bin/env python3
"""
Load the sample festivals, rituals and bhajans into the configured storage.

Usage: python seed_database.py [--with-demo-user]
"""
import sys

from spiritual_connect import create_app
from spiritual_connect.storage import seed_sample_data


def seed(with_demo_user=False):
    """Reset storage and insert sample data"""
    app = create_app()

    with app.app_context():
        storage = app.extensions['storage']
        if storage.name == 'memory':
            print("⚠️  STORAGE_BACKEND is 'memory'; seeded data disappears when this script exits.")
        storage.reset()
        counts = seed_sample_data(storage, with_demo_user=with_demo_user)
        print("✅ Database seeded successfully!")
        for table, count in counts.items():
            print(f"   {table}: {count}")


if __name__ == "__main__":
    args = sys.argv[1:]
    if args and args != ['--with-demo-user']:
        print("Usage: python seed_database.py [--with-demo-user]")
        sys.exit(1)

    seed(with_demo_user=bool(args))
