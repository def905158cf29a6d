#!/usr/bin/env python3
"""Operator CLI for the Zoom webservice client.

Usage:
    uv run python scripts/zoom_report.py users
    uv run python scripts/zoom_report.py report USER_ID --from 2026-01-01 --to 2026-01-31
    uv run python scripts/zoom_report.py licenses

Reads ZOOM_API_KEY / ZOOM_API_SECRET (and the license settings) from the
environment or .env file. Exit code 0 on success, 1 on any Zoom error.
"""

from __future__ import annotations

import argparse
import json
import os
import sys

# Ensure project root is on sys.path so we can import src.zoom_webservice
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.zoom_webservice.config import get_settings  # noqa: E402
from src.zoom_webservice.core.exceptions import ZoomWebserviceError  # noqa: E402
from src.zoom_webservice.core.logging import configure_structlog  # noqa: E402
from src.zoom_webservice.webservice import ZoomWebservice  # noqa: E402


def print_users(client: ZoomWebservice) -> None:
    """Print a table of users with type and last login."""
    header = f"{'EMAIL':<40} {'TYPE':<6} {'LAST LOGIN'}"
    separator = "-" * 70
    print(separator)
    print(header)
    print(separator)
    for user in client.list_users():
        last_login = user.last_login_time.isoformat() if user.last_login_time else "never"
        print(f"{user.email:<40} {user.type:<6} {last_login}")
    print(separator)


def print_report(client: ZoomWebservice, user_id: str, from_: str, to: str) -> None:
    meetings = client.get_user_report(user_id, from_, to)
    print(json.dumps(meetings, indent=2, default=str))


def print_licenses(client: ZoomWebservice) -> None:
    """Print paid seats in use against the configured limit."""
    policy = client.license_policy
    paid = sum(1 for user in client.list_users() if user.is_paid)
    if policy is None:
        print(f"Paid users: {paid} (license recycling disabled)")
        return
    reached = "yes" if policy.paid_user_limit_reached() else "no"
    print(f"Paid users: {paid} / {policy.seat_limit} (limit reached: {reached})")


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect a Zoom account through the webservice client")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("users", help="List users with type and last login")

    report = subparsers.add_parser("report", help="Dump a user's ended meetings as JSON")
    report.add_argument("user_id", help="Zoom user id or email")
    report.add_argument("--from", dest="from_", required=True, help="Start date YYYY-MM-DD")
    report.add_argument("--to", required=True, help="End date YYYY-MM-DD")

    subparsers.add_parser("licenses", help="Show paid seats in use against the limit")

    args = parser.parse_args()

    settings = get_settings()
    configure_structlog(settings)

    try:
        with ZoomWebservice.from_settings(settings) as client:
            if args.command == "users":
                print_users(client)
            elif args.command == "report":
                print_report(client, args.user_id, args.from_, args.to)
            elif args.command == "licenses":
                print_licenses(client)
    except ZoomWebserviceError as exc:
        print(f"Zoom error: {exc}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
