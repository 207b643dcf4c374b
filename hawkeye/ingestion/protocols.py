"""
Protocols and data classes for catalog ingestion.

Defines the narrow store interface the normalizer writes through and the
statistics an import run reports.
"""

from dataclasses import dataclass, field
from typing import Protocol

from ..models.catalog import Album, AlbumCreate, MerchItem, MerchItemCreate, Track, TrackCreate

# One parsed line of the catalog export, keyed by normalized header names.
RawRow = dict[str, str]


class CatalogStore(Protocol):
    """
    The create operations the normalizer needs from the record store.

    CatalogRepository satisfies this; tests substitute in-memory fakes.
    """

    def create_album(self, album: AlbumCreate) -> Album:
        ...

    def create_track(self, track: TrackCreate) -> Track:
        ...

    def create_merch_item(self, item: MerchItemCreate) -> MerchItem:
        ...


@dataclass
class IngestionStats:
    """Statistics from an ingestion run."""
    source: str = ""
    rows_read: int = 0
    merch_created: int = 0
    albums_created: int = 0
    tracks_created: int = 0
    # Rows that produced no record, including rows skipped because their album failed
    rows_failed: int = 0
    errors: list[str] = field(default_factory=list)

    def record_error(self, message: str, rows: int = 1) -> None:
        self.rows_failed += rows
        self.errors.append(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/storage."""
        return {
            "source": self.source,
            "rows_read": self.rows_read,
            "merch_created": self.merch_created,
            "albums_created": self.albums_created,
            "tracks_created": self.tracks_created,
            "rows_failed": self.rows_failed,
            "error_count": len(self.errors),
        }
