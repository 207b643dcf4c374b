"""
Catalog repository with SQLite backend.

The record store for albums, tracks, blog posts, merchandise and
newsletter subscribers. Every create returns the stored record with the
sequential id SQLite assigned. No upsert or dedup: re-importing the same
catalog appends new rows.
"""

import sqlite3
from typing import Optional, Type, TypeVar

from pydantic import BaseModel

from ..db import BaseRepository, fits_sqlite_integer
from ..models.catalog import (
    Album,
    AlbumCreate,
    BlogPost,
    BlogPostCreate,
    MerchItem,
    MerchItemCreate,
    Subscriber,
    SubscriberCreate,
    Track,
    TrackCreate,
)
from ..models.enums import RecordKind

RecordT = TypeVar("RecordT", bound=BaseModel)

# kind -> (table, stored model, default ordering)
_TABLES: dict[RecordKind, tuple[str, Type[BaseModel], str]] = {
    RecordKind.ALBUM: ("albums", Album, "id"),
    RecordKind.TRACK: ("tracks", Track, "album_id, track_number, id"),
    RecordKind.BLOG_POST: ("blog_posts", BlogPost, "id"),
    RecordKind.MERCH_ITEM: ("merch_items", MerchItem, "id"),
    RecordKind.SUBSCRIBER: ("subscribers", Subscriber, "id"),
}


class DuplicateRecordError(Exception):
    """A create violated a uniqueness constraint (subscriber email)."""


class CatalogRepository(BaseRepository):
    """
    Thread-safe SQLite repository for catalog records.

    Connections are thread-local, so the background import thread and
    request handlers each get their own.
    """

    # === Generic helpers ===

    def _insert(self, kind: RecordKind, data: BaseModel) -> BaseModel:
        """Insert a create-model and return the stored record."""
        table, model, _ = _TABLES[kind]
        values = data.model_dump(mode="json")
        columns = list(values.keys())
        placeholders = ", ".join("?" for _ in columns)

        try:
            with self._transaction() as cursor:
                cursor.execute(
                    f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                    [values[c] for c in columns],
                )
                record_id = cursor.lastrowid
        except sqlite3.IntegrityError as e:
            raise DuplicateRecordError(f"{kind.value} violates a unique constraint: {e}") from e

        return model(id=record_id, **values)

    def _get(self, kind: RecordKind, record_id: int) -> Optional[BaseModel]:
        table, model, _ = _TABLES[kind]
        if not fits_sqlite_integer(record_id):
            return None
        row = self._fetchone(f"SELECT * FROM {table} WHERE id = ?", (record_id,))
        return self._row_to_model(row, model) if row else None

    def _list(self, kind: RecordKind, where: str = "", params: tuple = ()) -> list:
        table, model, order_by = _TABLES[kind]
        rows = self._fetchall(f"SELECT * FROM {table} {where} ORDER BY {order_by}", params)
        return [self._row_to_model(row, model) for row in rows]

    @staticmethod
    def _row_to_model(row: sqlite3.Row, model: Type[RecordT]) -> RecordT:
        """Convert a database row to its model, ignoring bookkeeping columns."""
        fields = model.model_fields
        return model(**{key: row[key] for key in row.keys() if key in fields})

    def count(self, kind: RecordKind) -> int:
        """Number of stored records of a kind."""
        table = _TABLES[kind][0]
        return self._fetchone(f"SELECT COUNT(*) FROM {table}")[0]

    def counts(self) -> dict[str, int]:
        """Record counts for every kind, keyed by kind value."""
        return {kind.value: self.count(kind) for kind in RecordKind}

    # === Albums ===

    def create_album(self, album: AlbumCreate) -> Album:
        return self._insert(RecordKind.ALBUM, album)

    def get_album(self, album_id: int) -> Optional[Album]:
        return self._get(RecordKind.ALBUM, album_id)

    def list_albums(self) -> list[Album]:
        return self._list(RecordKind.ALBUM)

    # === Tracks ===

    def create_track(self, track: TrackCreate) -> Track:
        return self._insert(RecordKind.TRACK, track)

    def get_track(self, track_id: int) -> Optional[Track]:
        return self._get(RecordKind.TRACK, track_id)

    def list_tracks_by_album(self, album_id: int) -> list[Track]:
        """Tracks of one album ordered by track number."""
        if not fits_sqlite_integer(album_id):
            return []
        return self._list(RecordKind.TRACK, "WHERE album_id = ?", (album_id,))

    # === Blog posts ===

    def create_blog_post(self, post: BlogPostCreate) -> BlogPost:
        return self._insert(RecordKind.BLOG_POST, post)

    def get_blog_post(self, post_id: int) -> Optional[BlogPost]:
        return self._get(RecordKind.BLOG_POST, post_id)

    def list_blog_posts(self) -> list[BlogPost]:
        return self._list(RecordKind.BLOG_POST)

    # === Merchandise ===

    def create_merch_item(self, item: MerchItemCreate) -> MerchItem:
        return self._insert(RecordKind.MERCH_ITEM, item)

    def get_merch_item(self, item_id: int) -> Optional[MerchItem]:
        return self._get(RecordKind.MERCH_ITEM, item_id)

    def list_merch_items(self) -> list[MerchItem]:
        return self._list(RecordKind.MERCH_ITEM)

    # === Subscribers ===

    def create_subscriber(self, subscriber: SubscriberCreate) -> Subscriber:
        """Store a subscriber. Raises DuplicateRecordError if the email exists."""
        return self._insert(RecordKind.SUBSCRIBER, subscriber)

    def get_subscriber(self, subscriber_id: int) -> Optional[Subscriber]:
        return self._get(RecordKind.SUBSCRIBER, subscriber_id)

    def list_subscribers(self) -> list[Subscriber]:
        return self._list(RecordKind.SUBSCRIBER)


# Singleton repository instance
_catalog_repo: Optional[CatalogRepository] = None


def get_catalog_repository() -> CatalogRepository:
    """Get or create catalog repository singleton. Use FastAPI Depends() for injection."""
    global _catalog_repo
    if _catalog_repo is None:
        _catalog_repo = CatalogRepository()
    return _catalog_repo
