"""Storefront management CLI.

Usage:
    storefront-manage setup-db                   # Create all tables
    storefront-manage drop-db                    # Drop all tables
    storefront-manage purge-carts --days 30      # Delete abandoned empty carts

Set PROTEAN_ENV (``sqlite``, ``production``) to pick the database.
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    """Create the database schema for the storefront."""
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    """Drop the storefront database schema."""
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def purge_carts(older_than_days):
    """Delete empty carts untouched for ``older_than_days`` days."""
    from storefront.cart.management import PurgeStaleCarts

    domain = _domain()
    with domain.domain_context():
        purged = domain.process(PurgeStaleCarts(older_than_days=older_than_days), asynchronous=False)
    print(f"Purged {purged} stale cart(s).")
    return purged


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    purge_parser = subparsers.add_parser("purge-carts", help="Delete empty carts older than a threshold")
    purge_parser.add_argument(
        "--days",
        type=int,
        default=30,
        help="Age in days after which an empty cart is purged (default: 30)",
    )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "purge-carts":
        if args.days < 1:
            parser.error("--days must be at least 1")
        purge_carts(args.days)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
