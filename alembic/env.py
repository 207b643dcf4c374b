"""
Alembic environment for the catalog SQLite database.

Target database, first match wins:
1. sqlalchemy.url set on the config (hawkeye.db.ensure_schema, tests)
2. DATABASE_PATH env var
3. hawkeye/data/catalog.db

Revisions are hand-written SQL, so there is no target metadata.
"""

import os
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import create_engine

DEFAULT_DB_PATH = Path(__file__).parent.parent / "hawkeye" / "data" / "catalog.db"

config = context.config


def _configure_logging() -> None:
    # Only the alembic CLI should install the ini's handlers
    if not config.attributes.get("configure_logger", True):
        return
    ini_path = config.config_file_name
    if ini_path is not None and Path(ini_path).exists():
        fileConfig(ini_path, disable_existing_loggers=False)


def database_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url
    return f"sqlite:///{os.getenv('DATABASE_PATH') or DEFAULT_DB_PATH}"


def run_offline() -> None:
    context.configure(
        url=database_url(),
        target_metadata=None,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_engine(database_url())
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=None)
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


_configure_logging()

if context.is_offline_mode():
    run_offline()
else:
    run_online()
