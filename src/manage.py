"""Warehouse database management CLI.

Creates and drops the database schema of the warehouse domain using the
setup_db/drop_db utilities in warehouse.utils.db.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create the warehouse schema."""
    from warehouse.domain import warehouse
    from warehouse.utils.db import setup_db

    print("Initializing warehouse domain...")
    warehouse.init()
    print("Creating warehouse database schema...")
    setup_db(warehouse)
    print("Done.")


def drop_database():
    """Drop the warehouse schema."""
    from warehouse.domain import warehouse
    from warehouse.utils.db import drop_db

    print("Initializing warehouse domain...")
    warehouse.init()
    print("Dropping warehouse database schema...")
    drop_db(warehouse)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Warehouse database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
