"""
Catalog import pipeline.

Orchestrates the flow: fetcher -> normalizer -> repository
"""

import logging
from typing import Optional

from .catalog_types import CsvColumn, SINGLE_TYPE
from .fetcher import TabularSourceFetcher
from .normalizer import FIRST_ROW_NUMBER, CatalogNormalizer
from .protocols import CatalogStore, IngestionStats
from ..services.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


class CatalogImportPipeline:
    """
    Main import pipeline for the spreadsheet catalog.

    Coordinates:
    1. Downloading and parsing the export
    2. Classifying rows and writing albums, tracks and merchandise
    """

    def __init__(
        self,
        repository: Optional[CatalogStore] = None,
        fetcher: Optional[TabularSourceFetcher] = None,
    ):
        """
        Initialize pipeline.

        Args:
            repository: Record store (creates default CatalogRepository if None)
            fetcher: Source fetcher (creates default if None)
        """
        self.repository = repository if repository is not None else CatalogRepository()
        self.fetcher = fetcher or TabularSourceFetcher()
        self.normalizer = CatalogNormalizer(self.repository)

    def run(self, url: str) -> IngestionStats:
        """
        Import the catalog export at ``url``.

        Raises:
            SourceFetchError: if the export can't be fetched or parsed;
                nothing has been written in that case
        """
        rows = self.fetcher.fetch(url)
        stats = self.normalizer.normalize(rows, IngestionStats(source=url))

        logger.info(
            f"Catalog import from {url}: {stats.rows_read} rows, "
            f"{stats.albums_created} albums, {stats.tracks_created} tracks, "
            f"{stats.merch_created} merch items, {stats.rows_failed} failures"
        )
        return stats

    def preview(self, url: str, limit: int = 10) -> list[dict]:
        """
        Preview how rows would be classified, without writing.

        Args:
            url: Catalog export URL
            limit: Max rows to return

        Returns:
            List of dicts with row number, type, name and branch
        """
        normalizer = self.normalizer
        results = []
        for row_number, row in enumerate(self.fetcher.fetch(url)[:limit], start=FIRST_ROW_NUMBER):
            row_type = (row.get(CsvColumn.TYPE) or "").strip()
            if row_type in normalizer.merch_types:
                branch = "merch"
            elif row_type in normalizer.album_types:
                branch = "album"
            elif row_type == SINGLE_TYPE:
                branch = "single"
            else:
                branch = "ignored"

            results.append({
                "row": row_number,
                "type": row_type,
                "name": row.get(CsvColumn.NAME, ""),
                "branch": branch,
            })

        return results
