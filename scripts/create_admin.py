#!/usr/bin/env python3
"""Create an admin account from the command line.

Usage:
    python scripts/create_admin.py --email admin@example.com --name "Site Admin"

The password is read from ``--password`` or prompted for.
"""

import argparse
import asyncio
import getpass
import sys

import logfire

from invitely.config import Settings
from invitely.domain.error import DomainError
from invitely.domain.service import AdminAuthService
from invitely.util.di.container import create_container
from invitely.util.observability import configure_logfire

MIN_PASSWORD_LENGTH = 8


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an Invitely admin account")
    parser.add_argument("--email", required=True, help="Admin email address")
    parser.add_argument("--name", required=True, help="Display name")
    parser.add_argument(
        "--password", help="Password (prompted for when omitted, min 8 characters)"
    )
    return parser.parse_args(argv)


async def create_admin(email: str, password: str, name: str) -> str:
    """Create the admin and commit; returns the new admin's ID."""
    container = create_container()
    try:
        async with container() as request_container:
            service = await request_container.get(AdminAuthService)
            admin = await service.create_admin(email=email, password=password, name=name)
            return str(admin.id)
    finally:
        await container.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings()
    configure_logfire(settings)

    password = args.password or getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return 1
    if len(args.name.strip()) < 2:
        print("Name must be at least 2 characters")
        return 1

    try:
        admin_id = asyncio.run(create_admin(args.email, password, args.name.strip()))
    except DomainError as e:
        logfire.error("Admin creation failed", email=args.email, error=str(e))
        print(f"Could not create admin: {e}")
        return 1

    print(f"Admin created: {admin_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
