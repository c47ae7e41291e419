# ruff: noqa: T201

import argparse
import os
import sys
from getpass import getpass
from pathlib import Path

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from athenai import app, config, database as db, tenancy, validation, version
from athenai.models import Admin


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--version", action="version", version=version.get())

    subparsers = parser.add_subparsers(dest="subcommand")

    parser_config = subparsers.add_parser("config", help="create config")
    parser_config.set_defaults(func=create_config)
    parser_config.add_argument(
        "-d",
        dest="directory",
        type=Path,
        default=Path(),
        help="target directory for the to be created config file",
    )
    parser_config.add_argument(
        "--database",
        metavar="URL",
        default=f"sqlite:///{Path.home()}/.local/share/athenai/athenai.db",
        help="database URL",
    )

    parser_setup_db = subparsers.add_parser(
        "setup-db", help="create or upgrade the database and provision all gym schemas"
    )
    parser_setup_db.set_defaults(func=setup_db)

    parser_setup_superadmin = subparsers.add_parser(
        "setup-superadmin", help="create a platform administrator interactively"
    )
    parser_setup_superadmin.set_defaults(func=setup_superadmin)

    parser_cleanup_tenant = subparsers.add_parser(
        "cleanup-tenant", help="drop the schema of a gym interactively"
    )
    parser_cleanup_tenant.set_defaults(func=cleanup_tenant)

    parser_run = subparsers.add_parser("run", help="run app on local development server")
    parser_run.set_defaults(func=run)
    parser_run.add_argument(
        "--public",
        action="store_true",
        help="make the server publicly available (should only be used on a trusted network)",
    )
    parser_run.add_argument(
        "--port",
        metavar="NUMBER",
        type=int,
        help="port to bind to (default: PORT or 8080)",
    )

    args = parser.parse_args(sys.argv[1:])

    if not args.subcommand:
        parser.print_usage()
        return 2

    return args.func(args)


def create_config(args: argparse.Namespace) -> int:
    config_file = config.create_config_file(args.directory, args.database)
    print(f"Created {config_file}")
    return 0


def setup_db(_: argparse.Namespace) -> int:
    with app.app_context():
        config.check_config(os.environ.copy())
        schemas = db.setup()
    print(f"Database setup completed successfully ({len(schemas)} gym schemas provisioned)")
    return 0


def setup_superadmin(_: argparse.Namespace) -> int:  # noqa: PLR0911
    with app.app_context():
        config.check_config(os.environ.copy())
        session = db.get_session()

        count = session.execute(select(func.count()).select_from(Admin)).scalar_one()

        if count:
            print(f"Warning: {count} administrator(s) already exist.")
            if input("Create another administrator? [y/N] ").strip().lower() not in ("y", "yes"):
                print("Cancelled")
                return 2

        username = input("Username: ").strip()

        if len(username) < validation.MIN_USERNAME_LENGTH:
            print(
                f"Username must be at least {validation.MIN_USERNAME_LENGTH} characters long",
                file=sys.stderr,
            )
            return 2

        try:
            email = validation.email(input("Email: "))
        except ValueError as e:
            print(f"Email {e}", file=sys.stderr)
            return 2

        password = getpass("Password: ")

        if len(password) < validation.MIN_PASSWORD_LENGTH:
            print(
                f"Password must be at least {validation.MIN_PASSWORD_LENGTH} characters long",
                file=sys.stderr,
            )
            return 2

        if getpass("Confirm password: ") != password:
            print("Passwords do not match", file=sys.stderr)
            return 2

        session.add(
            Admin(username=username, email=email, password_hash=generate_password_hash(password))
        )

        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            print("Administrator with this username or email already exists", file=sys.stderr)
            return 1

        db.remove_sessions()

    print(f"Created administrator '{username}'")
    return 0


def cleanup_tenant(_: argparse.Namespace) -> int:
    with app.app_context():
        config.check_config(os.environ.copy())
        engine = db.get_engine()
        schemas = tenancy.list_schemas(engine)

        if not schemas:
            print("No gym schemas found")
            return 0

        print("Gym schemas:")
        for schema in schemas:
            print(f"  {schema}")

        name = input("Schema to delete (or 'quit' to cancel): ").strip()

        if name in ("", "quit"):
            print("Cancelled")
            return 2

        if name not in schemas:
            print(f"Schema '{name}' not found", file=sys.stderr)
            return 2

        if input(f"Type 'DELETE' to drop schema '{name}' and all its data: ").strip() != "DELETE":
            print("Cancelled")
            return 2

        tenancy.drop(engine, name)
        print(f"Dropped schema '{name}'")

        remaining = tenancy.list_schemas(engine)
        print("Remaining gym schemas:" if remaining else "No gym schemas left")
        for schema in remaining:
            print(f"  {schema}")

    return 0


def run(args: argparse.Namespace) -> int:
    with app.app_context():
        config.check_config(os.environ.copy())
        app.run("0.0.0.0" if args.public else "127.0.0.1", args.port or app.config["PORT"])
    return 0
