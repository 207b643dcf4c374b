"""Tests for Alembic schema initialization."""

import sqlite3

from hawkeye.db import ensure_schema, fits_sqlite_integer

EXPECTED_TABLES = {"albums", "tracks", "blog_posts", "merch_items", "subscribers", "ingestion_runs"}


def _tables(db_path: str) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    finally:
        conn.close()
    return {row[0] for row in rows}


def test_creates_all_tables(tmp_path):
    db_path = str(tmp_path / "nested" / "catalog.db")
    ensure_schema(db_path)

    assert EXPECTED_TABLES <= _tables(db_path)


def test_idempotent(tmp_path):
    db_path = str(tmp_path / "catalog.db")
    ensure_schema(db_path)
    ensure_schema(db_path)

    conn = sqlite3.connect(db_path)
    version = conn.execute("SELECT version_num FROM alembic_version").fetchone()[0]
    conn.close()
    assert version == "002"


def test_integer_range_bounds():
    assert fits_sqlite_integer(2 ** 63 - 1)
    assert fits_sqlite_integer(-(2 ** 63))
    assert not fits_sqlite_integer(2 ** 63)
    assert not fits_sqlite_integer(-(2 ** 63) - 1)
