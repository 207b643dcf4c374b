"""
SQLite access for the catalog.

Two pieces live here:

- ``ensure_schema`` brings a database file to the newest Alembic revision.
  The app lifespan, the CLI scripts and the test fixtures all call it;
  no repository creates tables on its own.
- ``BaseRepository`` is the shared base for the record store and the
  import run table. The background import thread and the request
  handlers write to the same file, so each thread gets its own
  connection and the file runs in WAL mode with a busy timeout.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence

from alembic import command
from alembic.config import Config as AlembicConfig

logger = logging.getLogger(__name__)

PROJECT_DIR = Path(__file__).parent.parent

# SQLite INTEGER is a signed 64-bit value; larger ids can never match a row
SQLITE_MAX_INTEGER = 2 ** 63 - 1

BUSY_TIMEOUT_MS = 5000


def fits_sqlite_integer(value: int) -> bool:
    return -SQLITE_MAX_INTEGER - 1 <= value <= SQLITE_MAX_INTEGER


def ensure_schema(db_path: str) -> None:
    """
    Migrate ``db_path`` to head, creating the file and its directory if needed.

    Re-running is a no-op once the database is current.
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    alembic_cfg = AlembicConfig(str(PROJECT_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(PROJECT_DIR / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", f"sqlite:///{db_path}")
    # Leave the app's logging config alone when migrating in-process
    alembic_cfg.attributes["configure_logger"] = False
    logging.getLogger("alembic").setLevel(logging.WARNING)

    try:
        command.upgrade(alembic_cfg, "head")
    except Exception as e:
        logger.error(f"Catalog schema migration failed for {db_path}: {e}")
        raise
    logger.debug(f"Catalog schema current for {db_path}")


class BaseRepository:
    """Per-thread SQLite connections plus small query helpers."""

    def __init__(self, db_path: Optional[str] = None, use_wal: bool = True):
        """
        Args:
            db_path: SQLite file. Defaults to Config.database_path()
            use_wal: Let readers proceed while an import is writing
        """
        if db_path is None:
            from .config import Config
            db_path = Config.database_path()

        self.db_path = str(db_path)
        self._use_wal = use_wal
        self._local = threading.local()

    def _get_connection(self) -> sqlite3.Connection:
        conn = getattr(self._local, "connection", None)
        if conn is None:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute(f"PRAGMA busy_timeout = {BUSY_TIMEOUT_MS}")
            if self._use_wal:
                conn.execute("PRAGMA journal_mode = WAL")
            self._local.connection = conn
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Cursor]:
        """Commit on success, roll back and re-raise on error."""
        conn = self._get_connection()
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def _fetchone(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        return self._get_connection().execute(sql, params).fetchone()

    def _fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        return self._get_connection().execute(sql, params).fetchall()

    def close(self) -> None:
        """Close this thread's connection; the next query reopens it."""
        conn = getattr(self._local, "connection", None)
        if conn is not None:
            conn.close()
            self._local.connection = None
