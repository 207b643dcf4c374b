"""Initial schema - catalog tables.

Revision ID: 001
Revises: None
Create Date: 2025-03-02

Creates core tables: albums, tracks, blog_posts, merch_items, subscribers.

Note: ingestion_runs is created in migration 002.
"""
from typing import Sequence, Union

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Complete schema SQL inlined for immutability.
SCHEMA_SQL = """
-- Albums (one per album type in the catalog export, plus the singles collection)
CREATE TABLE IF NOT EXISTS albums (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    dedicated_to TEXT NOT NULL,
    description TEXT NOT NULL,
    cover_image TEXT,
    back_image TEXT,
    side_image TEXT,
    disc_image TEXT,
    release_year TEXT NOT NULL,
    track_count INTEGER NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Tracks reference albums by id; the reference is not enforced
CREATE TABLE IF NOT EXISTS tracks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    album_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    duration TEXT NOT NULL,
    track_number INTEGER NOT NULL,
    lyrics TEXT,
    description TEXT,
    audio_url TEXT,
    video_url TEXT,
    image_url TEXT,
    sku TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS blog_posts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    excerpt TEXT NOT NULL,
    category TEXT NOT NULL,
    image_url TEXT,
    publish_date TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS merch_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    price REAL NOT NULL,
    sku TEXT,
    type TEXT NOT NULL,
    category TEXT,
    in_stock INTEGER NOT NULL DEFAULT 0,
    image_alt TEXT,
    image_back TEXT,
    image_front TEXT,
    image_side TEXT,
    audio_url TEXT,
    video_url TEXT,
    kunaki_url TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Newsletter subscriptions; email is the only unique field in the catalog
CREATE TABLE IF NOT EXISTS subscribers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT NOT NULL UNIQUE,
    subscribed_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_tracks_album_id ON tracks(album_id, track_number);
CREATE INDEX IF NOT EXISTS idx_merch_items_type ON merch_items(type);
CREATE INDEX IF NOT EXISTS idx_blog_posts_category ON blog_posts(category);
"""


def upgrade() -> None:
    # Use raw DBAPI connection for multi-statement SQL
    conn = op.get_bind()
    raw_conn = conn.connection.dbapi_connection
    raw_conn.executescript(SCHEMA_SQL)


def downgrade() -> None:
    conn = op.get_bind()
    raw_conn = conn.connection.dbapi_connection

    tables = [
        "subscribers",
        "merch_items",
        "blog_posts",
        "tracks",
        "albums",
    ]
    for table in tables:
        raw_conn.execute(f"DROP TABLE IF EXISTS {table}")
