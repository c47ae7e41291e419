from __future__ import annotations

import os
from collections.abc import Mapping, MutableMapping
from pathlib import Path

from flask import current_app
from sqlalchemy import URL

PG_DEFAULTS = {
    "PG_HOSTNAME": "localhost",
    "PG_PORT": "5432",
    "PG_USERNAME": "postgres",
    "PG_PASSWORD": "",
    "PG_DATABASE": "athenai",
}


def check_app_config() -> None:
    for key in ["DATABASE", "SECRET_KEY"]:
        if key not in current_app.config:
            raise RuntimeError(f"'{key}' is not set in app config")


def check_config_file(environ: Mapping[str, str]) -> None:
    if "ATHENAI_CONFIG" not in environ:
        raise RuntimeError("environment variable 'ATHENAI_CONFIG' is not set")

    config_file = Path(environ["ATHENAI_CONFIG"])

    if not config_file.exists():
        raise RuntimeError(f"config file '{config_file}' not found")

    check_app_config()


def create_config_file(config_directory: Path, database_url: str) -> Path:
    config = config_directory / "config.py"
    config.write_text(
        f"DATABASE = {database_url!r}\nSECRET_KEY = {os.urandom(24)!r}\n",
        encoding="utf-8",
    )
    return config


def database_url(environ: Mapping[str, str]) -> str | None:
    """Derive the database URL from the environment.

    `DB_DSN` takes precedence. Otherwise a PostgreSQL URL is assembled from the `PG_*` variables
    if `DB_TYPE` is `postgres` or any `PG_*` variable is set. `None` means the URL of the config
    file is kept.
    """
    if environ.get("DB_DSN"):
        return environ["DB_DSN"]

    db_type = environ.get("DB_TYPE")

    if db_type not in (None, "postgres", "postgresql", "sqlite"):
        raise RuntimeError(f"unsupported database type '{db_type}'")

    if db_type == "sqlite":
        return None

    if db_type is None and not any(key in environ for key in PG_DEFAULTS):
        return None

    settings = {key: environ.get(key, default) for key, default in PG_DEFAULTS.items()}

    try:
        port = int(settings["PG_PORT"])
    except ValueError as e:
        raise RuntimeError(f"invalid port '{settings['PG_PORT']}'") from e

    return URL.create(
        "postgresql+psycopg2",
        username=settings["PG_USERNAME"],
        password=settings["PG_PASSWORD"] or None,
        host=settings["PG_HOSTNAME"],
        port=port,
        database=settings["PG_DATABASE"],
    ).render_as_string(hide_password=False)


def load_environment(app_config: MutableMapping[str, object], environ: Mapping[str, str]) -> None:
    url = database_url(environ)

    if url is not None:
        app_config["DATABASE"] = url

    for key in ["APP_ENV", "LOG_LEVEL", "SECRET_KEY"]:
        if environ.get(key):
            app_config[key] = environ[key]

    if environ.get("PORT"):
        try:
            app_config["PORT"] = int(environ["PORT"])
        except ValueError as e:
            raise RuntimeError(f"invalid port '{environ['PORT']}'") from e


def check_config(environ: Mapping[str, str]) -> None:
    """Check the config file if one is given, the app config otherwise."""
    if "ATHENAI_CONFIG" in environ:
        check_config_file(environ)
    else:
        check_app_config()
