"""
Catalog ingestion package.

Imports the artist's spreadsheet export (albums, singles, merchandise)
into the catalog store.
"""

from .errors import RowError, SourceFetchError
from .protocols import CatalogStore, IngestionStats, RawRow
from .fetcher import TabularSourceFetcher
from .normalizer import AlbumBuilder, CatalogNormalizer
from .pipeline import CatalogImportPipeline

__all__ = [
    "RowError",
    "SourceFetchError",
    "CatalogStore",
    "IngestionStats",
    "RawRow",
    "TabularSourceFetcher",
    "AlbumBuilder",
    "CatalogNormalizer",
    "CatalogImportPipeline",
]
