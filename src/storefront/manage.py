"""Storefront management CLI.

Creates and drops the relational schema and changes account roles.

Usage:
    python -m storefront.manage setup-db
    python -m storefront.manage drop-db
    python -m storefront.manage grant-admin someone@example.com
    python -m storefront.manage revoke-admin someone@example.com
"""

import argparse
import sys

from protean.exceptions import ObjectNotFoundError, ValidationError


def _init_domain():
    from storefront.domain import storefront
    from storefront.settings import Settings
    from storefront.utils.db import apply_dependency_timeouts

    apply_dependency_timeouts(storefront, Settings.from_env().dependency_timeout_seconds)
    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront = _init_domain()
    touched = setup_db(storefront)
    if touched:
        print(f"Schema created on {touched} SQL provider(s).")
    else:
        print("No SQL providers configured; nothing to create.")


def drop_database():
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront = _init_domain()
    touched = drop_db(storefront)
    if touched:
        print(f"Schema dropped on {touched} SQL provider(s).")
    else:
        print("No SQL providers configured; nothing to drop.")


def change_role(email, role):
    """Set ``role`` on the account registered under ``email``. Returns the account id."""
    from storefront.identity.roles import ChangeRole

    storefront = _init_domain()
    with storefront.domain_context():
        return storefront.process(ChangeRole(email=email, role=role), asynchronous=False)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    grant_parser = subparsers.add_parser("grant-admin", help="Give an account administrative rights")
    grant_parser.add_argument("email")

    revoke_parser = subparsers.add_parser("revoke-admin", help="Return an account to the user role")
    revoke_parser.add_argument("email")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command in ("grant-admin", "revoke-admin"):
        role = "admin" if args.command == "grant-admin" else "user"
        try:
            account_id = change_role(args.email, role)
        except ObjectNotFoundError:
            print(f"No account is registered under {args.email}.", file=sys.stderr)
            sys.exit(1)
        except ValidationError as exc:
            print(f"Could not change role: {exc.messages}", file=sys.stderr)
            sys.exit(1)
        print(f"Account {account_id} now has role '{role}'.")
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
