"""Per-gym database schemas.

On PostgreSQL every gym owns a schema named `gym_<hex id>`. The tenant tables are declared
once in the placeholder schema `tenant` and bound to a gym's schema through SQLAlchemy's schema
translate map.

SQLite has no schemas. Each gym gets a separate database file in the `tenants` directory next to
the main database file instead, and the placeholder schema is translated to the default schema.
"""

from __future__ import annotations

import re
import uuid
from pathlib import Path

import structlog
from sqlalchemy import Engine, create_engine, text

from athenai.tenant_models import TENANT_SCHEMA, TenantBase

logger = structlog.get_logger(__name__)

SCHEMA_NAME = re.compile(r"^[a-z_][a-z0-9_]{0,62}$")
RESERVED_SCHEMAS = {"public", "information_schema"}

_sqlite_engines: dict[Path, Engine] = {}


def schema_name_for(gym_id: uuid.UUID) -> str:
    return f"gym_{gym_id.hex}"


def validate_schema_name(name: str) -> str:
    if not SCHEMA_NAME.match(name):
        raise ValueError(f"invalid schema name '{name}'")
    if name in RESERVED_SCHEMAS or name.startswith("pg_"):
        raise ValueError(f"reserved schema name '{name}'")
    return name


def is_sqlite(engine: Engine) -> bool:
    return engine.dialect.name == "sqlite"


def tenant_dir(engine: Engine) -> Path:
    assert engine.url.database
    return Path(engine.url.database).parent / "tenants"


def tenant_file(engine: Engine, schema: str) -> Path:
    return tenant_dir(engine) / f"{validate_schema_name(schema)}.db"


def bind(engine: Engine, schema: str) -> Engine:
    """Return an engine whose tenant tables refer to the given schema."""
    validate_schema_name(schema)

    if is_sqlite(engine):
        path = tenant_file(engine, schema)
        if path not in _sqlite_engines:
            path.parent.mkdir(parents=True, exist_ok=True)
            _sqlite_engines[path] = create_engine(f"sqlite:///{path}").execution_options(
                schema_translate_map={TENANT_SCHEMA: None}
            )
        return _sqlite_engines[path]

    return engine.execution_options(schema_translate_map={TENANT_SCHEMA: schema})


def provision(engine: Engine, schema: str) -> None:
    """Create the schema and all tenant tables, if they do not exist yet."""
    validate_schema_name(schema)

    if not is_sqlite(engine):
        with engine.begin() as connection:
            connection.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{schema}"'))

    TenantBase.metadata.create_all(bind=bind(engine, schema))

    logger.info("tenant schema provisioned", schema=schema)


def drop(engine: Engine, schema: str) -> None:
    validate_schema_name(schema)

    if is_sqlite(engine):
        path = tenant_file(engine, schema)
        cached = _sqlite_engines.pop(path, None)
        if cached is not None:
            cached.dispose()
        path.unlink(missing_ok=True)
    else:
        with engine.begin() as connection:
            connection.execute(text(f'DROP SCHEMA IF EXISTS "{schema}" CASCADE'))

    logger.info("tenant schema dropped", schema=schema)


def list_schemas(engine: Engine) -> list[str]:
    if is_sqlite(engine):
        directory = tenant_dir(engine)
        if not directory.exists():
            return []
        return sorted(p.stem for p in directory.glob("*.db") if SCHEMA_NAME.match(p.stem))

    with engine.connect() as connection:
        return list(
            connection.execute(
                text(
                    "SELECT schema_name FROM information_schema.schemata"
                    " WHERE schema_name NOT IN"
                    " ('information_schema', 'pg_catalog', 'pg_toast', 'public')"
                    " AND schema_name NOT LIKE 'pg\\_%'"
                    " ORDER BY schema_name"
                )
            ).scalars()
        )
