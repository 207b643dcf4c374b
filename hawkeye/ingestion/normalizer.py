"""
Catalog normalizer.

Turns raw catalog rows into albums, tracks and merchandise items and
writes them through the record store. Rows are routed by their ``Type``
column into three independent branches:

- A: merchandise rows -> one MerchItem each
- B: album rows -> grouped by type, one Album per type, one Track per row
- C: single rows -> one "Singles Collection" album, one Track per row

Ordering is first-seen throughout: album ordinals and track numbers
follow the order rows appear in the export. Nothing is deduplicated, so
running the same export twice doubles the catalog.

Failures are isolated per record: a bad row or a failed write is logged,
counted in the stats and skipped.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional, Sequence

from pydantic import ValidationError

from ..config import Config
from ..models.catalog import AlbumCreate, MerchItemCreate, TrackCreate
from .catalog_types import (
    ALBUM_PROFILES,
    ALBUM_TYPES,
    MERCH_TYPES,
    SINGLE_TYPE,
    SINGLES_COLLECTION,
    AlbumProfile,
    CsvColumn,
    album_description,
    profile_for,
)
from .errors import RowError
from .protocols import CatalogStore, IngestionStats, RawRow

logger = logging.getLogger(__name__)

# Row numbers match spreadsheet lines: the header is line 1
FIRST_ROW_NUMBER = 2


def _text(row: RawRow, column: str) -> Optional[str]:
    """Stripped cell value, or None when the cell is missing or blank."""
    value = row.get(column)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _row_type(row: RawRow) -> str:
    return (row.get(CsvColumn.TYPE) or "").strip()


def parse_price(value: Optional[str], row_number: int) -> float:
    """Parse ``Regular_price``. Blank or non-numeric text is a row error, never 0."""
    try:
        price = Decimal((value or "").strip())
    except InvalidOperation:
        raise RowError(row_number, f"invalid {CsvColumn.REGULAR_PRICE} {value!r}") from None
    if not price.is_finite():
        raise RowError(row_number, f"invalid {CsvColumn.REGULAR_PRICE} {value!r}")
    return float(price)


def parse_stock(value: Optional[str], row_number: int) -> int:
    """Parse ``In_stock`` as a whole number. Blank or non-numeric text is a row error."""
    text = (value or "").strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = Decimal(text)
    except InvalidOperation:
        raise RowError(row_number, f"invalid {CsvColumn.IN_STOCK} {value!r}") from None
    if not number.is_finite() or number != number.to_integral_value():
        raise RowError(row_number, f"invalid {CsvColumn.IN_STOCK} {value!r}")
    return int(number)


def track_from_row(album_id: int, track_number: int, row: RawRow, duration: str) -> TrackCreate:
    """Build a track; duration is a placeholder since the export has no duration column."""
    return TrackCreate(
        album_id=album_id,
        title=(row.get(CsvColumn.NAME) or "").strip(),
        duration=duration,
        track_number=track_number,
        description=_text(row, CsvColumn.DESCRIPTION),
        audio_url=_text(row, CsvColumn.AUDIO_URL),
        video_url=_text(row, CsvColumn.VIDEO_URL),
        image_url=_text(row, CsvColumn.IMAGE_FRONT),
        sku=_text(row, CsvColumn.SKU),
    )


@dataclass
class AlbumBuilder:
    """
    Accumulates the rows of one album type.

    Descriptive metadata is fixed by the first row seen; position is the
    album's 1-based first-seen order among album types.
    """
    title: str
    position: int
    profile: AlbumProfile
    cover_image: Optional[str] = None
    back_image: Optional[str] = None
    side_image: Optional[str] = None
    disc_image: Optional[str] = None
    rows: list[tuple[int, RawRow]] = field(default_factory=list)

    @classmethod
    def from_first_row(cls, title: str, position: int, row: RawRow, profile: AlbumProfile) -> "AlbumBuilder":
        return cls(
            title=title,
            position=position,
            profile=profile,
            cover_image=_text(row, CsvColumn.IMAGE_FRONT),
            back_image=_text(row, CsvColumn.ALBUM_BACK),
            side_image=_text(row, CsvColumn.ALBUM_SIDE),
            disc_image=_text(row, CsvColumn.ALBUM_DISC),
        )

    @property
    def description(self) -> str:
        return album_description(self.title, self.position)

    def to_album(self) -> AlbumCreate:
        return AlbumCreate(
            title=self.title,
            dedicated_to=self.profile.dedicated_to,
            description=self.description,
            cover_image=self.cover_image,
            back_image=self.back_image,
            side_image=self.side_image,
            disc_image=self.disc_image,
            release_year=self.profile.release_year,
            track_count=len(self.rows),
        )


class CatalogNormalizer:
    """
    Classifies catalog rows and writes the resulting records.

    Holds no state between calls; every ``normalize`` is an independent,
    additive import.
    """

    def __init__(
        self,
        store: CatalogStore,
        album_types: Sequence[str] = ALBUM_TYPES,
        merch_types: Sequence[str] = MERCH_TYPES,
        album_profiles: Mapping[str, AlbumProfile] = ALBUM_PROFILES,
    ):
        """
        Initialize normalizer.

        Args:
            store: Record store to write through
            album_types: Allow-list of Type values that form albums
            merch_types: Allow-list of Type values that are merchandise
            album_profiles: Album type -> dedication/release year
        """
        self.store = store
        self.album_types = tuple(album_types)
        self.merch_types = tuple(merch_types)
        self.album_profiles = album_profiles

    def normalize(self, rows: Sequence[RawRow], stats: Optional[IngestionStats] = None) -> IngestionStats:
        """
        Run all three branches over the rows, in order.

        Returns:
            IngestionStats with created counts and row-level errors
        """
        stats = stats if stats is not None else IngestionStats()
        stats.rows_read += len(rows)

        self.process_merch_items(rows, stats)
        self.process_albums(rows, stats)
        self.process_singles(rows, stats)

        return stats

    # === Branch A: merchandise ===

    def merch_item_from_row(self, row: RawRow, row_number: int) -> MerchItemCreate:
        """Map a merchandise row. Raises RowError on a bad price or stock value."""
        price = parse_price(row.get(CsvColumn.REGULAR_PRICE), row_number)
        in_stock = parse_stock(row.get(CsvColumn.IN_STOCK), row_number)
        try:
            return MerchItemCreate(
                name=(row.get(CsvColumn.NAME) or "").strip(),
                description=(row.get(CsvColumn.DESCRIPTION) or "").strip(),
                price=price,
                sku=_text(row, CsvColumn.SKU),
                type=_row_type(row),
                category=_text(row, CsvColumn.CATEGORIES),
                in_stock=in_stock,
                image_alt=_text(row, CsvColumn.IMAGE_ALT),
                image_back=_text(row, CsvColumn.IMAGE_BACK),
                image_front=_text(row, CsvColumn.IMAGE_FRONT),
                image_side=_text(row, CsvColumn.IMAGE_SIDE),
                audio_url=_text(row, CsvColumn.AUDIO_URL),
                video_url=_text(row, CsvColumn.VIDEO_URL),
                kunaki_url=_text(row, CsvColumn.KUNAKI_URL),
            )
        except ValidationError as e:
            raise RowError(row_number, f"invalid merchandise row: {e.error_count()} field error(s)") from e

    def process_merch_items(self, rows: Sequence[RawRow], stats: Optional[IngestionStats] = None) -> IngestionStats:
        """Create one merch item per allow-listed row."""
        stats = stats if stats is not None else IngestionStats()

        for row_number, row in enumerate(rows, start=FIRST_ROW_NUMBER):
            if _row_type(row) not in self.merch_types:
                continue
            name = row.get(CsvColumn.NAME, "")
            try:
                item = self.merch_item_from_row(row, row_number)
            except RowError as e:
                logger.error(f"Skipping merch item {name!r}: {e}")
                stats.record_error(str(e))
                continue

            try:
                self.store.create_merch_item(item)
                stats.merch_created += 1
            except Exception as e:
                logger.error(f"Error adding merch item {name!r} (row {row_number}): {e}")
                stats.record_error(f"Row {row_number}: failed to store merch item: {e}")

        return stats

    # === Branch B: albums and their tracks ===

    def group_albums(self, rows: Sequence[RawRow]) -> "OrderedDict[str, AlbumBuilder]":
        """
        Group album rows by type in first-seen order.

        The returned mapping iterates in insertion order; each builder's
        position is its index in that order, starting at 1.
        """
        albums: "OrderedDict[str, AlbumBuilder]" = OrderedDict()

        for row_number, row in enumerate(rows, start=FIRST_ROW_NUMBER):
            album_type = _row_type(row)
            if album_type not in self.album_types:
                continue
            builder = albums.get(album_type)
            if builder is None:
                builder = AlbumBuilder.from_first_row(
                    title=album_type,
                    position=len(albums) + 1,
                    row=row,
                    profile=profile_for(album_type, self.album_profiles),
                )
                albums[album_type] = builder
            builder.rows.append((row_number, row))

        return albums

    def process_albums(self, rows: Sequence[RawRow], stats: Optional[IngestionStats] = None) -> IngestionStats:
        """Create one album per album type, then its tracks in row order."""
        stats = stats if stats is not None else IngestionStats()

        for builder in self.group_albums(rows).values():
            try:
                album = self.store.create_album(builder.to_album())
                stats.albums_created += 1
            except Exception as e:
                logger.error(f"Error adding album {builder.title!r}: {e}")
                stats.record_error(
                    f"Album {builder.title!r}: failed to store album, "
                    f"skipped {len(builder.rows)} track(s): {e}",
                    rows=len(builder.rows),
                )
                continue

            self._write_tracks(album.id, builder.rows, Config.ALBUM_TRACK_DURATION, stats)

        return stats

    # === Branch C: singles ===

    def process_singles(self, rows: Sequence[RawRow], stats: Optional[IngestionStats] = None) -> IngestionStats:
        """Collect Single rows into the singles collection, created only if any exist."""
        stats = stats if stats is not None else IngestionStats()

        singles = [
            (row_number, row)
            for row_number, row in enumerate(rows, start=FIRST_ROW_NUMBER)
            if _row_type(row) == SINGLE_TYPE
        ]
        if not singles:
            return stats

        collection = AlbumCreate(
            title=SINGLES_COLLECTION.title,
            dedicated_to=SINGLES_COLLECTION.dedicated_to,
            description=SINGLES_COLLECTION.description,
            cover_image=_text(singles[0][1], CsvColumn.IMAGE_FRONT),
            release_year=SINGLES_COLLECTION.release_year,
            track_count=len(singles),
        )
        try:
            album = self.store.create_album(collection)
            stats.albums_created += 1
        except Exception as e:
            logger.error(f"Error adding singles collection: {e}")
            stats.record_error(
                f"Singles collection: failed to store album, skipped {len(singles)} track(s): {e}",
                rows=len(singles),
            )
            return stats

        self._write_tracks(album.id, singles, Config.SINGLE_TRACK_DURATION, stats)
        return stats

    def _write_tracks(
        self,
        album_id: int,
        rows: Sequence[tuple[int, RawRow]],
        duration: str,
        stats: IngestionStats,
    ) -> None:
        """Write tracks numbered 1..N in the given order; a failed track doesn't stop the rest."""
        for track_number, (row_number, row) in enumerate(rows, start=1):
            try:
                self.store.create_track(track_from_row(album_id, track_number, row, duration))
                stats.tracks_created += 1
            except Exception as e:
                logger.error(f"Error adding track {row.get(CsvColumn.NAME, '')!r} (row {row_number}): {e}")
                stats.record_error(f"Row {row_number}: failed to store track: {e}")
