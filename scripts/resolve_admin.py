#!/usr/bin/env python3
"""Diagnose admin contact resolution against the live directory.

Reads the database DSN from POSTGRES_* environment variables.

Usage:
    python scripts/resolve_admin.py --hotel-id H1
    python scripts/resolve_admin.py --admin-id U9 --fallback U1 --fallback U2
    python scripts/resolve_admin.py --lookup U9 --lookup U1
"""

import argparse
import sys

from notification_dispatch import (
    AdminContact,
    AdminContactNotResolvedError,
    AdminContactResolver,
    format_for_display,
)
from notification_dispatch.config import DispatchConfig, PostgresConfig
from notification_dispatch.db import create_postgres_engine, create_session_factory
from notification_dispatch.db.directory import SqlHotelDirectory, SqlUserDirectory
from notification_dispatch.log import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Resolve an admin contact")
    parser.add_argument("--hotel-id", help="Hotel whose administrator to resolve")
    parser.add_argument("--admin-id", help="Directory id to try first")
    parser.add_argument(
        "--fallback",
        action="append",
        default=None,
        help="Fallback directory id (repeatable, default: configured system fallbacks)",
    )
    parser.add_argument(
        "--lookup",
        action="append",
        help="Look up a directory id and exit (repeatable)",
    )
    args = parser.parse_args()

    setup_logging("WARNING")

    engine = create_postgres_engine(PostgresConfig())
    session_factory = create_session_factory(engine)
    resolver = AdminContactResolver(
        SqlUserDirectory(session_factory), SqlHotelDirectory(session_factory)
    )

    try:
        if args.lookup:
            failed = False
            for directory_id, result in resolver.lookup_many(args.lookup).items():
                if isinstance(result, AdminContact):
                    print(f"{directory_id}: {format_for_display(result.canonical_phone)}")
                else:
                    failed = True
                    found = "entry found" if result.entry_found else "no entry"
                    print(f"{directory_id}: {result.failure} ({found}): {result.detail}")
            if failed:
                sys.exit(1)
            return

        fallbacks = args.fallback
        if fallbacks is None:
            fallbacks = DispatchConfig().system_fallback_admin_ids

        try:
            contact = resolver.resolve(
                hotel_id=args.hotel_id,
                direct_admin_id=args.admin_id,
                fallback_ids=fallbacks,
            )
        except AdminContactNotResolvedError as exc:
            print("Could not resolve an admin contact:")
            for attempt in exc.attempts:
                print(f"  {attempt.strategy:8s}  {attempt.target_id:20s}  "
                      f"{attempt.failure}: {attempt.detail}")
            sys.exit(1)

        print(f"Resolved {contact.directory_id} ({contact.display_name or 'unnamed'})")
        print(f"  raw phone:       {contact.raw_phone}")
        print(f"  canonical phone: {contact.canonical_phone}")
        print(f"  display:         {format_for_display(contact.canonical_phone)}")
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
