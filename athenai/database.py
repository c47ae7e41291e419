from __future__ import annotations

import sqlite3
from functools import cache
from pathlib import Path

import structlog
from alembic import command, runtime, script
from alembic.config import Config
from flask import current_app, g, has_app_context
from sqlalchemy import Engine, create_engine, event, inspect, make_url, pool, select
from sqlalchemy.orm import Session, sessionmaker
from werkzeug.local import LocalProxy

from athenai import config, models, tenancy

logger = structlog.get_logger(__name__)

alembic_cfg = Config()
alembic_cfg.set_main_option("script_location", "athenai:migrations")

_engines: dict[str, Engine] = {}


def database_url() -> str:
    return str(current_app.config["DATABASE"])


def is_sqlite() -> bool:
    return make_url(database_url()).get_backend_name() == "sqlite"


def db_file() -> Path:
    return Path(database_url().removeprefix("sqlite:///"))


def db_dir() -> Path:
    return db_file().parent


def get_engine() -> Engine:
    config.check_app_config()
    url = database_url()
    if url not in _engines:
        if is_sqlite():
            db_dir().mkdir(parents=True, exist_ok=True)
        _engines[url] = create_engine(url)
    return _engines[url]


def get_session() -> Session:
    if "db_session" not in g:
        engine = get_engine()
        if not inspect(engine).get_table_names():
            init()
        else:
            _upgrade(engine)
        g.db_session = sessionmaker(autoflush=False, bind=engine)()

    return g.db_session


def get_tenant_session() -> Session:
    if "tenant_session" not in g:
        if "tenant_schema" not in g:
            raise RuntimeError("no tenant selected")
        g.tenant_session = sessionmaker(
            autoflush=False, bind=tenancy.bind(get_engine(), g.tenant_schema)
        )()

    return g.tenant_session


session: Session = LocalProxy(get_session)  # type: ignore[assignment]
tenant_session: Session = LocalProxy(get_tenant_session)  # type: ignore[assignment]


def rollback_sessions() -> None:
    for name in ["db_session", "tenant_session"]:
        if name in g:
            g.get(name).rollback()


def remove_sessions() -> None:
    for name in ["db_session", "tenant_session"]:
        s = g.pop(name, None)
        if s is not None:
            s.close()
    g.pop("tenant_schema", None)


def init() -> None:
    logger.info("creating database")

    models.Base.metadata.create_all(bind=get_engine())

    command.stamp(alembic_cfg, "head")


def upgrade() -> None:
    get_session()


def setup() -> list[str]:
    """Create or upgrade the public schema and provision the schemas of all gyms."""
    schemas = [
        tenancy.schema_name_for(gym_id)
        for gym_id in get_session()
        .execute(select(models.Gym.id).where(models.Gym.deleted_at.is_(None)))
        .scalars()
    ]

    for schema in schemas:
        tenancy.provision(get_engine(), schema)

    return schemas


@cache
def head_revision() -> str | None:
    return script.ScriptDirectory.from_config(alembic_cfg).get_current_head()


def _upgrade(engine: Engine) -> None:
    with engine.connect() as connection:
        current = runtime.migration.MigrationContext.configure(connection).get_current_revision()
    head = head_revision()

    if current != head:
        logger.info("upgrading database", current=current, head=head)
        command.upgrade(alembic_cfg, "head")


@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(
    dbapi_connection: sqlite3.Connection, _: pool.base._ConnectionRecord
) -> None:
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    if not has_app_context() or current_app.config.get("SQLITE_FOREIGN_KEY_SUPPORT", True):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
