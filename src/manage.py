"""Dajow management CLI.

Usage:
    python src/manage.py setup-db        # Create tables for SQL providers
    python src/manage.py drop-db         # Drop them again
    python src/manage.py seed-products   # Add the starter catalogue
    python src/manage.py expire-orders   # Cancel stale pending orders
"""

import argparse
import sys

from shared.logging import configure_logging


def _domains():
    from catalogue.domain import catalogue
    from ordering.domain import ordering

    return {"catalogue": catalogue, "ordering": ordering}


def setup_databases(names=None):
    from shared.db import setup_db

    for name, domain in _domains().items():
        if names and name not in names:
            continue
        print(f"Initializing {name} domain...")
        domain.init()
        prepared = setup_db(domain)
        print(f"  {name} schema ready ({', '.join(prepared) or 'no SQL providers'}).")
    print("Done.")


def drop_databases(names=None):
    from shared.db import drop_db

    for name, domain in _domains().items():
        if names and name not in names:
            continue
        print(f"Initializing {name} domain...")
        domain.init()
        drop_db(domain)
        print(f"  {name} schema dropped.")
    print("Done.")


def seed():
    from catalogue.domain import catalogue
    from catalogue.product.seed import seed_products

    catalogue.init()
    with catalogue.domain_context():
        count = seed_products()
    print(f"Seeded {count} products.")


def expire_orders(older_than_hours=None):
    from ordering.domain import ordering
    from ordering.order.expiry import ExpireStaleOrders

    ordering.init()
    with ordering.domain_context():
        expired = ordering.process(ExpireStaleOrders(older_than_hours=older_than_hours), asynchronous=False)
    print(f"Expired {len(expired)} stale orders.")
    for order_id in expired:
        print(f"  {order_id}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Dajow management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--domain",
            choices=["catalogue", "ordering"],
            nargs="*",
            help="Specific domain(s) (default: all)",
        )

    subparsers.add_parser("seed-products", help="Add the starter product catalogue")

    expire_parser = subparsers.add_parser("expire-orders", help="Cancel stale pending orders")
    expire_parser.add_argument(
        "--older-than-hours",
        type=int,
        default=None,
        help="Age threshold (default: STALE_ORDER_HOURS or 48)",
    )

    args = parser.parse_args(argv)

    configure_logging()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed-products":
        seed()
    elif args.command == "expire-orders":
        expire_orders(args.older_than_hours)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
