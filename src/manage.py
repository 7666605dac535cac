"""Stowage management CLI.

Creates and drops the database schema, and loads the sample hold.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load sample containers and items
"""

import argparse
import sys


def _domain():
    from stowage.domain import stowage

    print("Initializing stowage domain...")
    stowage.init()
    return stowage


def setup_database():
    from stowage.utils.db import setup_db

    domain = _domain()
    print("Creating stowage database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from stowage.utils.db import drop_db

    domain = _domain()
    print("Dropping stowage database schema...")
    drop_db(domain)
    print("Done.")


def seed_database():
    from stowage.utils.sample_data import seed

    domain = _domain()
    print("Loading sample hold...")
    with domain.domain_context():
        seed()
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Stowage management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load the sample containers and items")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
