"""Storefront management CLI.

Usage:
    python -m storefront.manage setup-db              # Create all tables
    python -m storefront.manage drop-db               # Drop all tables
    python -m storefront.manage expire-orders         # Cancel stale unpaid orders
    python -m storefront.manage purge-verifications   # Delete expired OTP records
"""

import argparse
import sys


def _initialized_domain():
    from storefront.domain import init_domain

    return init_domain()


def setup_databases():
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    domain = _initialized_domain()
    print("Creating database schema...")
    prepared = setup_db(domain)
    print(f"  schema ready for providers: {', '.join(prepared) or 'none (in-memory only)'}")


def drop_databases():
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    domain = _initialized_domain()
    print("Dropping database schema...")
    dropped = drop_db(domain)
    print(f"  schema dropped for providers: {', '.join(dropped) or 'none (in-memory only)'}")


def expire_orders(max_age_hours: int | None):
    from storefront.config import Settings
    from storefront.ordering.order.abandonment import ExpireAbandonedOrders

    domain = _initialized_domain()
    hours = max_age_hours or Settings.from_env().abandoned_order_hours
    with domain.domain_context():
        count = domain.process(ExpireAbandonedOrders(max_age_hours=hours), asynchronous=False)
    print(f"Cancelled {count or 0} abandoned order(s) older than {hours}h.")


def purge_verifications():
    from storefront.notifications.verification.purge import PurgeExpiredVerifications

    domain = _initialized_domain()
    with domain.domain_context():
        count = domain.process(PurgeExpiredVerifications(), asynchronous=False)
    print(f"Purged {count or 0} expired verification(s).")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    expire_parser = subparsers.add_parser("expire-orders", help="Cancel unpaid orders past the threshold")
    expire_parser.add_argument("--max-age-hours", type=int, default=None)
    subparsers.add_parser("purge-verifications", help="Delete expired verification codes")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    elif args.command == "expire-orders":
        expire_orders(args.max_age_hours)
    elif args.command == "purge-verifications":
        purge_verifications()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
