"""Add ingestion_runs table for catalog import status.

Revision ID: 002
Revises: 001
Create Date: 2025-03-09

Catalog imports run in the background after the API has answered 202.
Each run gets a row here so its outcome can be looked up by run id.
"""
from typing import Sequence, Union

from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    conn = op.get_bind()
    raw_conn = conn.connection.dbapi_connection

    raw_conn.executescript("""
        CREATE TABLE IF NOT EXISTS ingestion_runs (
            run_id TEXT PRIMARY KEY,
            source_url TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'accepted',
            rows_read INTEGER NOT NULL DEFAULT 0,
            merch_created INTEGER NOT NULL DEFAULT 0,
            albums_created INTEGER NOT NULL DEFAULT 0,
            tracks_created INTEGER NOT NULL DEFAULT 0,
            rows_failed INTEGER NOT NULL DEFAULT 0,
            errors TEXT,
            message TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            started_at TIMESTAMP,
            finished_at TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_ingestion_runs_status ON ingestion_runs(status);
        CREATE INDEX IF NOT EXISTS idx_ingestion_runs_created_at ON ingestion_runs(created_at);
    """)


def downgrade() -> None:
    conn = op.get_bind()
    raw_conn = conn.connection.dbapi_connection
    raw_conn.execute("DROP TABLE IF EXISTS ingestion_runs")
