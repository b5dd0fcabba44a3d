"""Bhutan Fresh Market database management CLI.

Provides commands to create and drop database schemas for all domains,
and to create the built-in seed accounts.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Create missing seed accounts
"""

import argparse
import sys

DOMAIN_NAMES = ["identity", "catalogue", "ordering", "shops"]


def _domains(names=None):
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering
    from shared.store import configure_store
    from shops.domain import shops

    all_domains = {
        "identity": identity,
        "catalogue": catalogue,
        "ordering": ordering,
        "shops": shops,
    }
    targets = {name: all_domains[name] for name in names} if names else all_domains

    for name, domain in targets.items():
        print(f"Initializing {name} domain...")
        configure_store(domain)
        domain.init()
    return targets


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.store import setup_db

    for name, domain in _domains(domains).items():
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.store import drop_db

    for name, domain in _domains(domains).items():
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def seed_accounts():
    from identity.user.seed import ensure_seed_accounts

    _domains(["identity"])
    created = ensure_seed_accounts()
    print(f"Seed accounts created: {', '.join(created) if created else 'none'}")


def main():
    parser = argparse.ArgumentParser(description="Bhutan Fresh Market database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    subparsers.add_parser("seed", help="Create the built-in seed accounts")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed":
        seed_accounts()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
