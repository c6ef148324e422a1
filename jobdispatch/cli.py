"""CLI for the job dispatch service: create tables, provision accounts."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys

from jobdispatch.models.user import ROLES

MIN_PASSWORD_LENGTH = 8


async def cmd_init_db(args):
    """Create all tables."""
    from jobdispatch.db.engine import create_all, engine

    await create_all()
    await engine.dispose()
    print("Database initialised")


async def cmd_create_user(args):
    """Create a user account with a bcrypt-hashed password."""
    from jobdispatch.db.engine import async_session_factory, create_all, engine
    from jobdispatch.db import crud
    from jobdispatch.services.auth import hash_password

    role = args.role.upper()
    if role not in ROLES:
        print(f"Role must be one of: {', '.join(ROLES)}")
        sys.exit(1)

    # Get password interactively if not provided
    password = args.password
    if not password:
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match")
            sys.exit(1)

    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        sys.exit(1)

    await create_all()
    try:
        async with async_session_factory() as db:
            if await crud.get_user_by_email(db, args.email):
                print(f"User '{args.email}' already exists")
                sys.exit(1)

            user = await crud.create_user(
                db,
                name=args.name or args.email.split("@")[0],
                email=args.email,
                role=role,
                password_hash=hash_password(password),
            )
    finally:
        await engine.dispose()

    print(f"User created: {user.email} (id={user.id}, role={user.role})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Job dispatch CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init-db", help="Create database tables")

    cu = subparsers.add_parser("create-user", help="Provision a user account")
    cu.add_argument("--email", required=True, help="User email")
    cu.add_argument("--name", default="", help="Display name (defaults to the email local part)")
    cu.add_argument("--role", default="TECHNICIAN", help="ADMIN, SUPERVISOR or TECHNICIAN")
    cu.add_argument("--password", default="", help="Password (prompted if not given)")

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "create-user":
        asyncio.run(cmd_create_user(args))


if __name__ == "__main__":
    main()
